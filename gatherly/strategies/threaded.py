from concurrent.futures import Executor
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager

from gatherly.strategies.partitioned import PartitionedStrategy


class ThreadedStrategy(PartitionedStrategy):
  """Execute partitions on a thread pool.

  Effective when callbacks release the GIL (I/O, native code). A fresh
  pool is created per run and shut down when the run ends.
  """

  def _open_executor(self) -> AbstractContextManager[Executor]:
    return ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="gatherly")
