"""Exceptions raised by gatherly.

Errors raised by user callbacks (key extractors, folders, mappers, ...) are
never wrapped: they propagate to whoever drives the pipeline unchanged.
"""


class GathererError(Exception):
  """Base class for errors raised by gatherly itself."""


class GathererConfigurationError(GathererError, ValueError):
  """An operator or strategy was constructed with an invalid parameter.

  Raised eagerly at construction time, never on first use.
  """
