from collections import deque
from collections.abc import Callable
from concurrent.futures import Future
from concurrent.futures import ThreadPoolExecutor
import logging

from gatherly.helpers import require_positive
from gatherly.types import Gatherer
from gatherly.types import Sink

logger = logging.getLogger(__name__)


class InFlight[T, U]:
  """The tasks a `map_concurrent` run has submitted but not yet emitted.

  Owns its thread pool. `pending` is in submission order, which is input
  order.
  """

  def __init__(self, concurrency: int) -> None:
    self.executor = ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="gatherly-map")
    self.pending: deque[Future[U]] = deque()

  def submit(self, mapper: Callable[[T], U], element: T) -> None:
    self.pending.append(self.executor.submit(mapper, element))

  def emit_oldest(self, sink: Sink[U]) -> bool:
    """Wait for the oldest task and push its result.

    Raises whatever the mapper raised for that element.
    """
    return sink.push(self.pending.popleft().result())

  def shutdown(self) -> None:
    """Cancel what has not started, wait for what has, and stop the pool."""
    if self.pending:
      logger.debug("Cancelling %d in-flight mapper tasks", len(self.pending))
    for future in self.pending:
      future.cancel()
    self.pending.clear()
    self.executor.shutdown(wait=True, cancel_futures=True)


def map_concurrent[T, U](concurrency: int, mapper: Callable[[T], U]) -> Gatherer[T, InFlight[T, U], U]:
  """Apply `mapper` with up to `concurrency` invocations in flight.

  Results are emitted in input order regardless of completion order. Once
  `concurrency` invocations are outstanding, integrating the next element
  blocks until the oldest one completes. If an invocation raises, the error
  surfaces when that element's turn comes and the remaining tasks are
  cancelled.

  Args:
      concurrency: Maximum number of in-flight invocations. Must be positive.
      mapper: The function to apply. Runs on worker threads.

  Returns:
      A sequential-only gatherer.
  """
  require_positive("concurrency", concurrency)

  def initialize() -> InFlight[T, U]:
    return InFlight(concurrency)

  def integrate(state: InFlight[T, U], element: T, sink: Sink[U]) -> bool:
    while len(state.pending) >= concurrency:
      if not state.emit_oldest(sink):
        return False
    state.submit(mapper, element)
    return True

  def finish(state: InFlight[T, U], sink: Sink[U]) -> None:
    while state.pending and not sink.is_rejecting():
      if not state.emit_oldest(sink):
        break

  def release(state: InFlight[T, U]) -> None:
    state.shutdown()

  return Gatherer(integrate=integrate, initialize=initialize, finish=finish, release=release)
