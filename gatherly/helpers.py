from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
import itertools

from gatherly.errors import GathererConfigurationError


def build_partition_generator[T](partition_size: int) -> Callable[[Iterable[T]], Iterator[list[T]]]:
  """Return a function that breaks an iterable into contiguous partitions.

  Partitions preserve encounter order; only the last one may be shorter
  than `partition_size`.

  Args:
      partition_size: The number of elements per partition.

  Returns:
      A function that takes an iterable and returns an iterator of partitions.
  """
  require_positive("partition_size", partition_size)

  def partition_generator(data: Iterable[T]) -> Iterator[list[T]]:
    data_iter = iter(data)
    while partition := list(itertools.islice(data_iter, partition_size)):
      yield partition

  return partition_generator


def require_positive(name: str, value: int) -> int:
  """Validate that a size-like parameter is strictly positive."""
  if value <= 0:
    raise GathererConfigurationError(f"{name} must be positive, got {value}")
  return value


def require_non_negative(name: str, value: int) -> int:
  """Validate that a limit-like parameter is zero or positive."""
  if value < 0:
    raise GathererConfigurationError(f"{name} must not be negative, got {value}")
  return value
