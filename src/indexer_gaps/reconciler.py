"""
Gap reconciliation between the chain head and the set of indexed blocks.
"""

from typing import AsyncIterable, Iterable, Iterator, List, Tuple
from dataclasses import dataclass
import numpy as np
from pandas import DataFrame

from .errors import InvalidParameters
from .utils import bucketize, bucket_width, bucket_index


DEFAULT_BUCKET_COUNT = 120


@dataclass(frozen=True)
class BlockRange:
    """
    An inclusive block interval and the blocks in it that are not indexed.
    """

    start: int

    end: int

    missing: Tuple[int, ...] = ()

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def indexed_count(self) -> int:
        return self.size - len(self.missing)

    @property
    def percent_complete(self) -> float:
        return self.indexed_count / self.size * 100


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Point-in-time coverage of [0, latest], grouped into ranges.
    """

    ranges: Tuple[BlockRange, ...]

    bucket_width: int
    """Width of the widest range; the others are at most one block narrower."""

    total_missing: int

    latest: int

    indexed_count: int

    @property
    def percent_complete(self) -> float:
        return self.indexed_count / (self.latest + 1) * 100

    def missing_blocks(self) -> Iterator[int]:
        """
        Iterate every missing block number in ascending order.
        """
        for block_range in self.ranges:
            yield from block_range.missing

    def to_dataframe(self) -> DataFrame:
        """
        One row per range with its size, missing and indexed counts.
        """
        if not self.ranges:
            return DataFrame()

        df = DataFrame(
            {
                "start": [r.start for r in self.ranges],
                "end": [r.end for r in self.ranges],
                "missing": [r.missing_count for r in self.ranges],
            }
        )
        df["size"] = df["end"] - df["start"] + 1
        df["indexed"] = df["size"] - df["missing"]
        df["percent_complete"] = np.round(
            df["indexed"].to_numpy() / df["size"].to_numpy() * 100, 2
        )

        return df[["start", "end", "size", "missing", "indexed", "percent_complete"]]


class GapAccumulator:
    """
    Single forward pass over ascending indexed block numbers.

    Only missing blocks and bucket boundaries are retained, so the indexed
    stream can be arbitrarily long. The result is only meaningful once the
    whole stream has been fed.
    """

    def __init__(self, latest: int, bucket_count: int = DEFAULT_BUCKET_COUNT):
        if latest < 0:
            raise InvalidParameters("latest must be >= 0")

        self.latest = latest
        self.bucket_count = bucket_count
        self.width = bucket_width(latest, bucket_count)
        self.buckets = bucketize(latest, bucket_count)
        self.missing: List[List[int]] = [[] for _ in self.buckets]

        self.next_expected = 0
        self.indexed_count = 0
        # Duplicates and out-of-order blocks that were ignored.
        self.skipped = 0

    def _record_missing(self, start: int, stop: int) -> None:
        """
        Record [start, stop) as missing, split along bucket boundaries.
        """
        while start < stop:
            index = bucket_index(start, self.latest, self.bucket_count)
            bucket_end = self.buckets[index][1]
            chunk_stop = min(stop, bucket_end + 1)
            self.missing[index].extend(range(start, chunk_stop))
            start = chunk_stop

    def feed(self, block_number: int) -> None:
        """
        Consume one indexed block number.
        """
        block_number = int(block_number)

        if block_number < self.next_expected:
            self.skipped += 1
            return

        if block_number > self.latest:
            self._record_missing(self.next_expected, self.latest + 1)
            self.next_expected = self.latest + 1
            return

        self._record_missing(self.next_expected, block_number)
        self.indexed_count += 1
        self.next_expected = block_number + 1

    def result(self) -> ReconciliationResult:
        """
        Close the pass and build the result.
        """
        self._record_missing(self.next_expected, self.latest + 1)
        self.next_expected = self.latest + 1

        if self.skipped:
            print(
                f"Ignored {self.skipped} duplicate or out-of-order indexed blocks "
                f"(source should yield ascending block numbers)"
            )

        ranges = tuple(
            BlockRange(start=start, end=end, missing=tuple(missing))
            for (start, end), missing in zip(self.buckets, self.missing)
        )
        total_missing = sum(len(r.missing) for r in ranges)

        return ReconciliationResult(
            ranges=ranges,
            bucket_width=self.width,
            total_missing=total_missing,
            latest=self.latest,
            indexed_count=self.indexed_count,
        )


def reconcile(
    latest: int,
    indexed_blocks: Iterable[int],
    bucket_count: int = DEFAULT_BUCKET_COUNT,
) -> ReconciliationResult:
    """
    Compute the missing blocks of [0, latest] given the indexed ones.

    Args:
        latest: Latest block number on the chain (inclusive)
        indexed_blocks: Indexed block numbers in ascending order, pulled lazily
        bucket_count: Number of coverage ranges

    Returns:
        ReconciliationResult with per-range missing blocks

    Raises:
        InvalidParameters: If latest < 0 or bucket_count < 1
        Exception: Whatever the source raises while being iterated
    """
    accumulator = GapAccumulator(latest, bucket_count)
    for block_number in indexed_blocks:
        accumulator.feed(block_number)
    return accumulator.result()


async def areconcile(
    latest: int,
    indexed_blocks: AsyncIterable[int],
    bucket_count: int = DEFAULT_BUCKET_COUNT,
) -> ReconciliationResult:
    """
    Same as reconcile() for an asynchronous source, awaiting one page at a time.
    """
    accumulator = GapAccumulator(latest, bucket_count)
    async for block_number in indexed_blocks:
        accumulator.feed(block_number)
    return accumulator.result()
