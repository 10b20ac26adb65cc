from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
import itertools
import logging
from typing import Any

from gatherly.gatherers.basic import filtering
from gatherly.gatherers.basic import flattening
from gatherly.gatherers.basic import limiting
from gatherly.gatherers.basic import mapping
from gatherly.gatherers.basic import peeking
from gatherly.strategies.sequential import SequentialStrategy
from gatherly.types import ExecutionStrategy
from gatherly.types import Gatherer
from gatherly.types import Sink

logger = logging.getLogger(__name__)

PipelineFunction = Callable[[Any], Any]


class Pipeline[T]:
  """Layers gatherers lazily over a data source.

  Each stage wraps the iterator of the previous one, so nothing runs until a
  terminal operation pulls. When a consumer stops pulling, every upstream
  stage stops too.

  Example:
      >>> result = (Pipeline([1, 2, 3, 4, 5])
      ...           .filter(lambda x: x % 2 == 0)
      ...           .gather(window_fixed(2))
      ...           .to_list())
      >>> result  # [[2, 4]]

  Note:
      A pipeline is consumed once; terminal operations on an exhausted
      pipeline see no data.
  """

  def __init__(self, *data: Iterable[T]) -> None:
    """Initialize a pipeline with one or more data sources.

    Args:
        *data: One or more iterable data sources. If multiple sources are
               provided, they will be chained together.

    Raises:
        ValueError: If no data sources are provided.
    """
    if len(data) == 0:
      raise ValueError("At least one data source must be provided to Pipeline.")
    self.data_source: Iterable[T] = itertools.chain.from_iterable(data) if len(data) > 1 else data[0]
    self.processed_data: Iterator = iter(self.data_source)
    self.stages = 0

  def gather[U](self, gatherer: Gatherer[T, Any, U], strategy: ExecutionStrategy | None = None) -> "Pipeline[U]":
    """Add a gatherer stage.

    Args:
        gatherer: The gatherer to run over the current stream.
        strategy: How to run it. Defaults to sequential execution on the
                  consuming thread.

    Returns:
        The pipeline instance for method chaining.
    """
    run = strategy or SequentialStrategy()
    self.stages += 1
    logger.debug("Stage %d: %s", self.stages, type(run).__name__)
    self.processed_data = run.execute(gatherer, self.processed_data)
    return self  # type: ignore

  def map[U](self, function: Callable[[T], U]) -> "Pipeline[U]":
    """Transform each element."""
    return self.gather(mapping(function))

  def filter(self, predicate: Callable[[T], bool]) -> "Pipeline[T]":
    """Keep the elements for which `predicate` is true."""
    return self.gather(filtering(predicate))

  def flatten(self) -> "Pipeline[Any]":
    """Flatten nested collections into individual elements."""
    return self.gather(flattening())

  def tap(self, function: PipelineFunction) -> "Pipeline[T]":
    """Apply a side-effect to each element without modifying the stream."""
    return self.gather(peeking(function))

  def limit(self, n: int) -> "Pipeline[T]":
    """Stop after `n` elements. Upstream stages are not pulled further."""
    return self.gather(limiting(n))

  def apply[U](self, transformer: Callable[[Iterable[T]], Iterator[U]]) -> "Pipeline[U]":
    """Apply a plain iterator-to-iterator function as a stage.

    Args:
        transformer: A callable that takes an iterable and returns an iterator.

    Returns:
        The pipeline instance for method chaining.

    Raises:
        TypeError: If the transformer is not callable.
    """
    if not callable(transformer):
      raise TypeError("Stage function must be callable")
    self.processed_data = transformer(self.processed_data)  # type: ignore
    return self  # type: ignore

  def __iter__(self) -> Iterator[T]:
    """Allow the pipeline to be iterated over.

    Note:
        This operation consumes the pipeline's iterator, making subsequent
        operations on the same pipeline return empty results.
    """
    yield from self.processed_data

  def to_list(self) -> list[T]:
    """Execute the pipeline and return the results as a list (terminal operation)."""
    return list(self.processed_data)

  def each(self, function: PipelineFunction) -> None:
    """Apply a function to each element for its side effects (terminal operation)."""
    for item in self.processed_data:
      function(item)

  def first(self, n: int = 1) -> list[T]:
    """Get the first n elements of the pipeline (terminal operation).

    Args:
        n: The number of elements to retrieve. Must be at least 1.

    Returns:
        A list containing the first n elements, or fewer if the pipeline
        contains fewer than n elements.

    Raises:
        AssertionError: If n is less than 1.
    """
    assert n >= 1, "n must be at least 1"
    items = list(itertools.islice(self.processed_data, n))
    self.close()
    return items

  def single(self, default: T | None = None) -> T | None:
    """Return the first element or `default` if there is none (terminal operation).

    Meant for gatherers that emit exactly one output at the end, such as
    `fold` or `popular_authors`.
    """
    item = next(iter(self.processed_data), default)
    self.close()
    return item

  def consume(self) -> None:
    """Consume the pipeline without returning results (terminal operation)."""
    for _ in self.processed_data:
      pass

  def drain(self, sink: Sink[T]) -> bool:
    """Push every element into `sink` until it stops accepting (terminal operation).

    Returns:
        Whether the sink still accepted output when the stream ended.
    """
    for item in self.processed_data:
      if not sink.push(item):
        self.close()
        return False
    return True

  def close(self) -> None:
    """Stop every stage. Pending concurrent work is cancelled and released."""
    close = getattr(self.processed_data, "close", None)
    if close is not None:
      close()
