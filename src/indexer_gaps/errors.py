"""
Exceptions raised by indexer_gaps.
"""


class GapsError(Exception):
    """
    Base class for all indexer_gaps errors.
    """


class InvalidParameters(GapsError, ValueError):
    """
    Raised when a bucket count, worker count or block interval is invalid.
    """


class SourceUnavailable(GapsError):
    """
    Raised when the block source or the latest-block oracle cannot answer.
    """
