from gatherly.strategies.partitioned import DEFAULT_MAX_WORKERS
from gatherly.strategies.partitioned import DEFAULT_PARTITION_SIZE
from gatherly.strategies.partitioned import PartitionedStrategy
from gatherly.strategies.process import ProcessStrategy
from gatherly.strategies.sequential import SequentialStrategy
from gatherly.strategies.threaded import ThreadedStrategy

__all__ = [
  "DEFAULT_MAX_WORKERS",
  "DEFAULT_PARTITION_SIZE",
  "PartitionedStrategy",
  "ProcessStrategy",
  "SequentialStrategy",
  "ThreadedStrategy",
]
