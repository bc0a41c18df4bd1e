"""Exceptions raised by the access-count analyzer."""


class AnalysisError(Exception):
    """Base class for all analyzer errors."""
    pass


class NotAggregatedError(AnalysisError):
    """
    Raised when a statistic or report is requested before aggregate() ran.
    Zeroed counters would be indistinguishable from a log with no traffic.
    """
    pass


class AlreadyAggregatedError(AnalysisError):
    """Raised when aggregate() is called on an analyzer that already counted its source."""
    pass


class EmptyDatasetError(AnalysisError, ZeroDivisionError):
    """
    Raised when an average is requested over zero recorded periods
    (e.g. average accesses per month on an empty log).
    """
    pass
