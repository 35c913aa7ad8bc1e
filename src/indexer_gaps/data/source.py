"""
Paginated sources of indexed block numbers.
"""

from typing import Any, AsyncIterator, Iterable, Iterator, List, Optional, Tuple
from dataclasses import dataclass
from abc import ABC, abstractmethod

from ..errors import InvalidParameters


@dataclass(frozen=True)
class BlockPage:
    """
    One page of indexed block numbers and the cursor of the next page.
    """

    blocks: Tuple[int, ...]

    next_cursor: Optional[Any] = None


class BlockSource(ABC):
    """
    Ascending, paginated read of fully indexed block numbers.

    Implementations wrap storage errors in SourceUnavailable and must not
    return partial pages on failure.
    """

    @abstractmethod
    def fetch_page(self, cursor: Optional[Any] = None) -> BlockPage:
        pass

    def iter_blocks(self) -> Iterator[int]:
        """
        Pull pages one after the other until the source has no next cursor.
        """
        cursor = None
        while True:
            page = self.fetch_page(cursor)
            yield from page.blocks
            if page.next_cursor is None:
                break
            cursor = page.next_cursor


class AsyncBlockSource(ABC):
    """
    Asynchronous counterpart of BlockSource.
    """

    @abstractmethod
    async def fetch_page(self, cursor: Optional[Any] = None) -> BlockPage:
        pass

    async def iter_blocks(self) -> AsyncIterator[int]:
        cursor = None
        while True:
            page = await self.fetch_page(cursor)
            for block_number in page.blocks:
                yield block_number
            if page.next_cursor is None:
                break
            cursor = page.next_cursor


def _paginate(
    blocks: List[int], page_size: int, cursor: Optional[int]
) -> BlockPage:
    offset = cursor or 0
    chunk = tuple(blocks[offset : offset + page_size])
    next_offset = offset + page_size
    return BlockPage(
        blocks=chunk,
        next_cursor=next_offset if next_offset < len(blocks) else None,
    )


class InMemoryBlockSource(BlockSource):
    """
    Serves a fixed collection of block numbers in ascending pages.
    """

    def __init__(self, blocks: Iterable[int], page_size: int = 1000):
        if page_size < 1:
            raise InvalidParameters("page_size must be >= 1")
        self.blocks = sorted(int(b) for b in blocks)
        self.page_size = page_size
        self.pages_served = 0

    def fetch_page(self, cursor: Optional[int] = None) -> BlockPage:
        self.pages_served += 1
        return _paginate(self.blocks, self.page_size, cursor)


class AsyncInMemoryBlockSource(AsyncBlockSource):
    """
    Asynchronous InMemoryBlockSource.
    """

    def __init__(self, blocks: Iterable[int], page_size: int = 1000):
        if page_size < 1:
            raise InvalidParameters("page_size must be >= 1")
        self.blocks = sorted(int(b) for b in blocks)
        self.page_size = page_size
        self.pages_served = 0

    async def fetch_page(self, cursor: Optional[int] = None) -> BlockPage:
        self.pages_served += 1
        return _paginate(self.blocks, self.page_size, cursor)
