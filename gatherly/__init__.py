"""Gatherly - stateful, mergeable stream transformations for lazy Python pipelines.

A gatherer describes a transformation as four functions (initialize,
integrate, combine, finish). The same gatherer runs sequentially, on a
thread pool, or on a process pool, and produces the same result.
"""

import logging

from gatherly.errors import GathererConfigurationError
from gatherly.errors import GathererError
from gatherly.gatherers import filtering
from gatherly.gatherers import flattening
from gatherly.gatherers import fold
from gatherly.gatherers import limiting
from gatherly.gatherers import map_concurrent
from gatherly.gatherers import mapping
from gatherly.gatherers import peeking
from gatherly.gatherers import scan
from gatherly.gatherers import window_fixed
from gatherly.gatherers import window_sliding
from gatherly.pipeline import Pipeline
from gatherly.sinks import BufferSink
from gatherly.sinks import CallbackSink
from gatherly.strategies import ProcessStrategy
from gatherly.strategies import SequentialStrategy
from gatherly.strategies import ThreadedStrategy
from gatherly.types import ExecutionStrategy
from gatherly.types import Gatherer
from gatherly.types import Sink

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
  "BufferSink",
  "CallbackSink",
  "ExecutionStrategy",
  "Gatherer",
  "GathererConfigurationError",
  "GathererError",
  "Pipeline",
  "ProcessStrategy",
  "SequentialStrategy",
  "Sink",
  "ThreadedStrategy",
  "filtering",
  "flattening",
  "fold",
  "limiting",
  "map_concurrent",
  "mapping",
  "peeking",
  "scan",
  "window_fixed",
  "window_sliding",
]
