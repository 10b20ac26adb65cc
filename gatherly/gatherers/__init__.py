from gatherly.gatherers.basic import filtering
from gatherly.gatherers.basic import flattening
from gatherly.gatherers.basic import limiting
from gatherly.gatherers.basic import mapping
from gatherly.gatherers.basic import peeking
from gatherly.gatherers.concurrent import map_concurrent
from gatherly.gatherers.folds import fold
from gatherly.gatherers.folds import scan
from gatherly.gatherers.windows import window_fixed
from gatherly.gatherers.windows import window_sliding

__all__ = [
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
