"""Element-wise gatherers backing Pipeline.map/filter/flatten/tap/limit."""

from collections.abc import Callable
from collections.abc import Iterable
from typing import Any

from gatherly.helpers import require_non_negative
from gatherly.types import Gatherer
from gatherly.types import Sink


def _keep_left(left: None, _right: None) -> None:
  return left


def mapping[T, U](function: Callable[[T], U]) -> Gatherer[T, None, U]:
  """Push `function(element)` for every element."""

  def integrate(_state: None, element: T, sink: Sink[U]) -> bool:
    return sink.push(function(element))

  return Gatherer(integrate=integrate, combine=_keep_left)


def filtering[T](predicate: Callable[[T], bool]) -> Gatherer[T, None, T]:
  """Push only the elements for which `predicate` is true."""

  def integrate(_state: None, element: T, sink: Sink[T]) -> bool:
    if predicate(element):
      return sink.push(element)
    return True

  return Gatherer(integrate=integrate, combine=_keep_left)


def flattening[T]() -> Gatherer[Iterable[T], None, T]:
  """Push every item of every nested collection."""

  def integrate(_state: None, element: Iterable[T], sink: Sink[T]) -> bool:
    for item in element:
      if not sink.push(item):
        return False
    return True

  return Gatherer(integrate=integrate, combine=_keep_left)


def peeking[T](function: Callable[[T], Any]) -> Gatherer[T, None, T]:
  """Call `function` for its side effect and pass the element through unchanged."""

  def integrate(_state: None, element: T, sink: Sink[T]) -> bool:
    function(element)
    return sink.push(element)

  return Gatherer(integrate=integrate, combine=_keep_left)


class _Counter:
  __slots__ = ("seen",)

  def __init__(self) -> None:
    self.seen = 0


def limiting[T](n: int) -> Gatherer[T, _Counter, T]:
  """Pass through the first `n` elements, then stop pulling.

  Sequential-only: the count depends on the position in the whole input.
  """
  require_non_negative("n", n)

  def integrate(state: _Counter, element: T, sink: Sink[T]) -> bool:
    if state.seen >= n:
      return False
    state.seen += 1
    return sink.push(element) and state.seen < n

  return Gatherer.of_sequential(_Counter, integrate)
