from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


class Sink[Out](ABC):
  """
  The push-based boundary a gatherer writes its outputs into.

  A sink reports through `push` whether it still wants more output. Once it
  has returned False, further pushes are ignored.
  """

  @abstractmethod
  def push(self, item: Out) -> bool:
    """Hand one output downstream.

    Args:
        item: The output value.

    Returns:
        True if the sink wants more output, False otherwise.
    """
    raise NotImplementedError

  def is_rejecting(self) -> bool:
    """Return True once the sink no longer accepts output."""
    return False


type Initializer[S] = Callable[[], S]
type Integrator[S, In, Out] = Callable[[S, In, Sink[Out]], bool]
type Combiner[S] = Callable[[S, S], S]
type Finisher[S, Out] = Callable[[S, Sink[Out]], None]
type Releaser[S] = Callable[[S], None]


def _no_state() -> None:
  return None


def _no_finish(_state: Any, _sink: Sink[Any]) -> None:
  return None


@dataclass(frozen=True, slots=True)
class Gatherer[In, S, Out]:
  """
  An immutable description of a stateful sequence transformation.

  A gatherer is four functions over a private state:

  - `initialize` creates a fresh state, once per run or per partition,
    whether or not any element arrives.
  - `integrate` consumes one element, may push outputs into the sink, and
    returns whether it wants more elements.
  - `combine` merges the states of two contiguous partitions, the first
    argument preceding the second in encounter order. It must be
    associative. A gatherer without one can only run sequentially.
  - `finish` runs exactly once after the last `integrate` on the (merged)
    state and may push any number of outputs.

  `release` is an optional cleanup hook for states that own resources. The
  engine calls it once after every run, including abandoned or failed ones.

  The descriptor holds no state itself and can be reused across runs.
  """

  integrate: Integrator[S, In, Out]
  initialize: Initializer[S] = _no_state  # type: ignore[assignment]
  combine: Combiner[S] | None = None
  finish: Finisher[S, Out] = _no_finish
  release: Releaser[S] | None = None

  @classmethod
  def of(
    cls,
    initialize: Initializer[S],
    integrate: Integrator[S, In, Out],
    combine: Combiner[S],
    finish: Finisher[S, Out] = _no_finish,
  ) -> "Gatherer[In, S, Out]":
    """Create a gatherer that supports parallel execution."""
    return cls(integrate=integrate, initialize=initialize, combine=combine, finish=finish)

  @classmethod
  def of_sequential(
    cls,
    initialize: Initializer[S],
    integrate: Integrator[S, In, Out],
    finish: Finisher[S, Out] = _no_finish,
  ) -> "Gatherer[In, S, Out]":
    """Create a gatherer that can only run sequentially."""
    return cls(integrate=integrate, initialize=initialize, finish=finish)

  @property
  def is_parallelizable(self) -> bool:
    return self.combine is not None


class ExecutionStrategy(ABC):
  """Abstract base class for execution strategies.

  Strategies decide how a gatherer is driven over a source (on the calling
  thread, split across a thread pool, split across processes) but never
  change what it computes.
  """

  @abstractmethod
  def execute[I, S, O](self, gatherer: Gatherer[I, S, O], source: Iterable[I]) -> Iterator[O]:
    """Run a gatherer over a source lazily.

    Args:
        gatherer: The gatherer to run.
        source: The elements to feed it, in encounter order.

    Returns:
        Iterator of the outputs the gatherer pushed.
    """
    ...
