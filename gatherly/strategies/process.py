from concurrent.futures import Executor
from contextlib import AbstractContextManager
from contextlib import nullcontext

from loky import get_reusable_executor

from gatherly.strategies.partitioned import PartitionedStrategy


class ProcessStrategy(PartitionedStrategy):
  """Execute partitions on a process pool.

  Uses 'loky' so that gatherers built from closures and lambdas can be sent
  to workers, and bypasses the GIL for CPU-bound callbacks. The gatherer,
  the elements and the partition states must be picklable. The executor is
  loky's reusable one and outlives the run.
  """

  def _open_executor(self) -> AbstractContextManager[Executor]:
    return nullcontext(get_reusable_executor(max_workers=self.max_workers))
