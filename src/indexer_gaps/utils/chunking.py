"""
Utilities for splitting block intervals into contiguous buckets.
"""

from typing import List, Tuple

from ..errors import InvalidParameters


def _split(total: int, bucket_count: int) -> Tuple[int, int]:
    """
    Base width and number of one-block-wider buckets for [0, total].
    """
    if bucket_count < 1:
        raise InvalidParameters("bucket_count must be >= 1")
    if total < 0:
        raise InvalidParameters("total must be >= 0")

    return divmod(total + 1, bucket_count)


def bucket_width(total: int, bucket_count: int) -> int:
    """
    Width of the widest bucket when [0, total] is split into bucket_count buckets.

    Args:
        total: Inclusive upper bound of the interval
        bucket_count: Number of buckets requested

    Returns:
        ceil((total + 1) / bucket_count)

    Raises:
        InvalidParameters: If total < 0 or bucket_count < 1
    """
    base, extra = _split(total, bucket_count)
    return base + 1 if extra else base


def bucketize(total: int, bucket_count: int) -> List[Tuple[int, int]]:
    """
    Partition [0, total] into contiguous, inclusive (start, end) buckets.

    The (total + 1) % bucket_count leading buckets hold one extra block, so
    widths differ by at most one and the last bucket ends exactly at total.
    Exactly min(bucket_count, total + 1) buckets are returned: only an
    interval shorter than bucket_count yields fewer, one block each.

    Args:
        total: Inclusive upper bound of the interval (e.g. the latest block)
        bucket_count: Number of buckets requested

    Returns:
        List of (start, end) tuples covering [0, total] exactly once

    Raises:
        InvalidParameters: If total < 0 or bucket_count < 1
    """
    base, extra = _split(total, bucket_count)

    buckets: List[Tuple[int, int]] = []
    start = 0
    for i in range(min(bucket_count, total + 1)):
        size = base + 1 if i < extra else base
        buckets.append((start, start + size - 1))
        start += size

    return buckets


def bucket_index(block_number: int, total: int, bucket_count: int) -> int:
    """
    Index of the bucket of bucketize(total, bucket_count) containing block_number.
    """
    base, extra = _split(total, bucket_count)
    wide_end = extra * (base + 1)
    if block_number < wide_end:
        return block_number // (base + 1)
    return extra + (block_number - wide_end) // base
