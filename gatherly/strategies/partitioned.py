"""Split/merge execution shared by the threaded and process strategies."""

from abc import abstractmethod
from collections import deque
from collections.abc import Iterable
from collections.abc import Iterator
from concurrent.futures import Executor
from concurrent.futures import Future
from concurrent.futures import wait
from contextlib import AbstractContextManager
from dataclasses import dataclass
import logging
from typing import Any
from typing import Literal

from gatherly.errors import GathererConfigurationError
from gatherly.helpers import build_partition_generator
from gatherly.helpers import require_positive
from gatherly.sinks import BufferSink
from gatherly.strategies.sequential import SequentialStrategy
from gatherly.types import ExecutionStrategy
from gatherly.types import Gatherer

logger = logging.getLogger(__name__)

DEFAULT_PARTITION_SIZE = 1000
DEFAULT_MAX_WORKERS = 4

type MergeMode = Literal["ordered", "tree"]


@dataclass(slots=True)
class PartitionResult[S, O]:
  """What one worker hands back after integrating a partition."""

  state: S
  outputs: list[O]
  stopped: bool


def integrate_partition[I, S, O](gatherer: Gatherer[I, S, O], partition: list[I]) -> PartitionResult[S, O]:
  """Run `initialize` and `integrate` over one partition.

  Top-level so that process pools can pickle it. Outputs pushed during
  integration are buffered and returned with the state.
  """
  sink: BufferSink[O] = BufferSink()
  state = gatherer.initialize()
  stopped = False
  for element in partition:
    if not gatherer.integrate(state, element, sink):
      stopped = True
      break
  return PartitionResult(state=state, outputs=sink.drain(), stopped=stopped)


class PartitionedStrategy(ExecutionStrategy):
  """Run a gatherer over contiguous partitions on a pool, then merge.

  Each partition gets its own state. Partition outputs are yielded in
  partition order, states are merged with `combine` preserving encounter
  order, and `finish` runs once on the calling thread. Gatherers without a
  combiner run sequentially instead.
  """

  def __init__(
    self,
    max_workers: int = DEFAULT_MAX_WORKERS,
    partition_size: int = DEFAULT_PARTITION_SIZE,
    merge: MergeMode = "ordered",
  ) -> None:
    """Initialize the strategy.

    Args:
        max_workers: Maximum number of concurrent workers.
        partition_size: Number of elements per partition.
        merge: "ordered" folds each finished partition into the running
               state while later ones are still integrating. "tree" waits
               for every partition and combines adjacent pairs level by level.
    """
    if merge not in ("ordered", "tree"):
      raise GathererConfigurationError(f"Unsupported merge mode: '{merge}'. Must be 'ordered' or 'tree'.")
    self.max_workers = require_positive("max_workers", max_workers)
    self.partition_size = require_positive("partition_size", partition_size)
    self.merge = merge
    self._partition_generator = build_partition_generator(partition_size)

  @abstractmethod
  def _open_executor(self) -> AbstractContextManager[Executor]:
    """Return a context manager yielding the executor to run partitions on."""
    ...

  def execute[I, S, O](self, gatherer: Gatherer[I, S, O], source: Iterable[I]) -> Iterator[O]:
    if not gatherer.is_parallelizable:
      logger.debug("Gatherer has no combiner, running sequentially")
      yield from SequentialStrategy().execute(gatherer, source)
      return

    with self._open_executor() as executor:
      yield from self._run(gatherer, source, executor)

  def _run[I, S, O](self, gatherer: Gatherer[I, S, O], source: Iterable[I], executor: Executor) -> Iterator[O]:
    partitions = self._partition_generator(source)
    futures: deque[Future[PartitionResult[S, O]]] = deque()

    def submit_next() -> bool:
      try:
        partition = next(partitions)
      except StopIteration:
        return False
      futures.append(executor.submit(integrate_partition, gatherer, partition))
      return True

    # Submit the initial batch of partitions
    for _ in range(self.max_workers + 1):
      if not submit_next():
        break

    # States not yet folded into another one; each is released exactly once.
    held: list[S] = []
    dropped: list[S] = []
    completed = 0
    try:
      while futures:
        result = futures.popleft().result()
        completed += 1
        if result.stopped:
          logger.debug("Partition %d stopped early, dropping %d pending partitions", completed, len(futures))
          dropped.extend(self._cancel(futures))
        else:
          submit_next()

        held.append(result.state)
        if self.merge == "ordered" and len(held) > 1:
          held[:] = [gatherer.combine(held[0], held[1])]  # type: ignore[misc]

        yield from result.outputs

      logger.debug("Merging %d partition states (%s)", completed, self.merge)
      if not held:
        held.append(gatherer.initialize())
      self._tree_combine(gatherer, held, executor)

      sink: BufferSink[O] = BufferSink()
      gatherer.finish(held[0], sink)
      outputs = sink.drain()
    finally:
      dropped.extend(self._cancel(futures))
      self._release(gatherer, held + dropped)
    yield from outputs

  def _tree_combine[S](self, gatherer: Gatherer[Any, S, Any], states: list[S], executor: Executor) -> None:
    """Combine adjacent states pairwise in place, each level concurrently, keeping left/right order."""
    while len(states) > 1:
      level = [executor.submit(gatherer.combine, states[i], states[i + 1]) for i in range(0, len(states) - 1, 2)]  # type: ignore[arg-type]
      wait(level)
      carried = [states[-1]] if len(states) % 2 else []
      states[:] = [future.result() for future in level] + carried

  @staticmethod
  def _release(gatherer: Gatherer[Any, Any, Any], states: list[Any]) -> None:
    if gatherer.release is None:
      return
    released: set[int] = set()
    for state in states:
      if id(state) not in released:
        released.add(id(state))
        gatherer.release(state)

  @staticmethod
  def _cancel[S](futures: deque[Future[PartitionResult[S, Any]]]) -> list[S]:
    """Cancel and await pending partitions, returning the states of those that had already finished."""
    for future in futures:
      future.cancel()
    if futures:
      wait(list(futures))
    finished = [future.result().state for future in futures if not future.cancelled() and future.exception() is None]
    futures.clear()
    return finished
