"""Sink implementations used by the execution strategies and by callers."""

from collections.abc import Callable

from gatherly.types import Sink


class BufferSink[Out](Sink[Out]):
  """
  A sink that collects outputs in memory until they are drained.

  Strategies hand one of these to `integrate` and `finish` and forward its
  contents downstream. Nothing pushed here is visible to the consumer until
  `drain` is called, so a buffered output is not irrevocably delivered.
  """

  def __init__(self) -> None:
    self._items: list[Out] = []
    self._closed = False

  def push(self, item: Out) -> bool:
    if self._closed:
      return False
    self._items.append(item)
    return True

  def is_rejecting(self) -> bool:
    return self._closed

  def close(self) -> None:
    """Reject every later push."""
    self._closed = True

  def drain(self) -> list[Out]:
    """Return everything buffered so far and empty the buffer."""
    items, self._items = self._items, []
    return items

  def __len__(self) -> int:
    return len(self._items)


class CallbackSink[Out](Sink[Out]):
  """
  A sink that hands every output to a callback.

  The callback may return False to stop the flow; any other return value,
  including None, means "keep going". An optional `limit` makes the sink
  reject after that many outputs.
  """

  def __init__(self, callback: Callable[[Out], bool | None], limit: int | None = None) -> None:
    self._callback = callback
    self._limit = limit
    self._accepted = 0
    self._rejecting = limit is not None and limit <= 0

  def push(self, item: Out) -> bool:
    if self._rejecting:
      return False
    self._accepted += 1
    if self._callback(item) is False:
      self._rejecting = True
    if self._limit is not None and self._accepted >= self._limit:
      self._rejecting = True
    return not self._rejecting

  def is_rejecting(self) -> bool:
    return self._rejecting

  @property
  def accepted(self) -> int:
    """The number of outputs handed to the callback."""
    return self._accepted
