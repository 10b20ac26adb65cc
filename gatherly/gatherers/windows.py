from collections import deque

from gatherly.helpers import require_positive
from gatherly.types import Gatherer
from gatherly.types import Sink


def window_fixed[T](size: int) -> Gatherer[T, list[list[T]], list[T]]:
  """Group consecutive elements into lists of exactly `size`.

  A non-empty trailing window shorter than `size` is emitted at the end.

  Args:
      size: The number of elements per window. Must be positive.

  Returns:
      A sequential-only gatherer emitting one list per window.
  """
  require_positive("size", size)

  # The state is a one-slot holder so integrate can swap in a fresh window.
  def initialize() -> list[list[T]]:
    return [[]]

  def integrate(state: list[list[T]], element: T, sink: Sink[list[T]]) -> bool:
    window = state[0]
    window.append(element)
    if len(window) < size:
      return True
    state[0] = []
    return sink.push(window)

  def finish(state: list[list[T]], sink: Sink[list[T]]) -> None:
    if state[0]:
      sink.push(state[0])

  return Gatherer.of_sequential(initialize, integrate, finish)


def window_sliding[T](size: int) -> Gatherer[T, deque[T], list[T]]:
  """Emit every run of `size` consecutive elements as it becomes complete.

  Nothing is emitted when fewer than `size` elements arrive in total.

  Args:
      size: The window length. Must be positive.

  Returns:
      A sequential-only gatherer emitting one list per element once `size`
      elements have been seen.
  """
  require_positive("size", size)

  def initialize() -> deque[T]:
    return deque(maxlen=size)

  def integrate(state: deque[T], element: T, sink: Sink[list[T]]) -> bool:
    state.append(element)
    if len(state) < size:
      return True
    return sink.push(list(state))

  return Gatherer.of_sequential(initialize, integrate)
