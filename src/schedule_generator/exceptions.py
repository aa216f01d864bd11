"""
Errors raised by the Electrical Schedule Generator.

Only conditions that make a request unusable are raised. Catalog misses,
exclusions and unparsable lines are reported on the Schedule instead.
"""


class ScheduleError(Exception):
    """Base class for schedule generation errors."""


class EmptyQuoteError(ScheduleError, ValueError):
    """The quote text is empty, so there is nothing to schedule."""


class CatalogLoadError(ScheduleError):
    """A catalog or voltage mapping file is missing or malformed."""


class HierarchyError(ScheduleError):
    """A catalog entry has more sub-components than item letters."""


class TextExtractionError(ScheduleError):
    """No text could be extracted from an input document."""
