"""
Utility functions for indexer gap reporting.
"""

from .chunking import bucketize, bucket_width, bucket_index
from .formatting import percentage_string

__all__ = [
    "bucketize",
    "bucket_width",
    "bucket_index",
    "percentage_string",
]
