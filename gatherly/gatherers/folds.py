from collections.abc import Callable

from gatherly.types import Gatherer
from gatherly.types import Sink


class Accumulator[A]:
  """Mutable holder for the running value of a fold or scan."""

  __slots__ = ("value",)

  def __init__(self, value: A) -> None:
    self.value = value

  def __repr__(self) -> str:
    return f"Accumulator({self.value!r})"


def fold[T, A](seed: Callable[[], A], folder: Callable[[A, T], A]) -> Gatherer[T, Accumulator[A], A]:
  """Reduce the whole input to one value, emitted when the input ends.

  Args:
      seed: Supplies the initial value; it is the output for empty input.
      folder: Combines the running value with the next element.

  Returns:
      A sequential-only gatherer with exactly one output.
  """

  def initialize() -> Accumulator[A]:
    return Accumulator(seed())

  def integrate(state: Accumulator[A], element: T, _sink: Sink[A]) -> bool:
    state.value = folder(state.value, element)
    return True

  def finish(state: Accumulator[A], sink: Sink[A]) -> None:
    sink.push(state.value)

  return Gatherer.of_sequential(initialize, integrate, finish)


def scan[T, A](seed: Callable[[], A], folder: Callable[[A, T], A]) -> Gatherer[T, Accumulator[A], A]:
  """Like `fold`, but emit the running value after every element."""

  def initialize() -> Accumulator[A]:
    return Accumulator(seed())

  def integrate(state: Accumulator[A], element: T, sink: Sink[A]) -> bool:
    state.value = folder(state.value, element)
    return sink.push(state.value)

  return Gatherer.of_sequential(initialize, integrate)
