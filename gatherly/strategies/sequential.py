from collections.abc import Iterable
from collections.abc import Iterator

from gatherly.sinks import BufferSink
from gatherly.types import ExecutionStrategy
from gatherly.types import Gatherer
from gatherly.types import Sink


class SequentialStrategy(ExecutionStrategy):
  """Drive a gatherer on the calling thread, one element at a time."""

  def execute[I, S, O](self, gatherer: Gatherer[I, S, O], source: Iterable[I]) -> Iterator[O]:
    """Run the gatherer lazily over the source.

    Outputs pushed while integrating an element are yielded before the next
    element is pulled. If the consumer stops iterating, no further element
    is pulled and `finish` is skipped; `release` still runs.

    Args:
        gatherer: The gatherer to run.
        source: The elements to feed it.

    Returns:
        Iterator of the outputs the gatherer pushed.
    """
    sink: BufferSink[O] = BufferSink()
    state = gatherer.initialize()
    try:
      for element in source:
        keep_going = gatherer.integrate(state, element, sink)
        yield from sink.drain()
        if not keep_going:
          break
      gatherer.finish(state, sink)
      yield from sink.drain()
    finally:
      if gatherer.release is not None:
        gatherer.release(state)

  def evaluate[I, S, O](self, gatherer: Gatherer[I, S, O], source: Iterable[I], sink: Sink[O]) -> bool:
    """Run the gatherer eagerly, pushing outputs straight into `sink`.

    Args:
        gatherer: The gatherer to run.
        source: The elements to feed it.
        sink: The consumer of the outputs.

    Returns:
        Whether the sink still accepted output when the run ended.
    """
    state = gatherer.initialize()
    try:
      for element in source:
        if not gatherer.integrate(state, element, sink) or sink.is_rejecting():
          break
      gatherer.finish(state, sink)
    finally:
      if gatherer.release is not None:
        gatherer.release(state)
    return not sink.is_rejecting()
