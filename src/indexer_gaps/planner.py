"""
Dispatch planning: split a block interval into indexer worker tasks.
"""

from typing import Dict, List
from dataclasses import dataclass

from .errors import InvalidParameters
from .utils import bucketize


@dataclass(frozen=True)
class WorkerTaskSpec:
    """
    One indexer worker assignment over an inclusive block interval.
    """

    from_block: int

    to_block: int

    force_mode: bool = False

    log_level: str = "info"

    @property
    def size(self) -> int:
        return self.to_block - self.from_block + 1

    def to_environment(self, rpc_provider: str) -> Dict[str, str]:
        """
        Container environment expected by the indexer worker image.
        """
        return {
            "RPC_PROVIDER": rpc_provider,
            "HEAD_OF_CHAIN": "false",
            "FROM_BLOCK": str(self.from_block),
            "TO_BLOCK": str(self.to_block),
            "RUST_LOG": self.log_level,
            "FORCE_MODE": "true" if self.force_mode else "false",
        }


def plan_tasks(
    from_block: int,
    to_block: int,
    worker_count: int,
    force_mode: bool = False,
    log_level: str = "info",
) -> List[WorkerTaskSpec]:
    """
    Split [from_block, to_block] into at most worker_count contiguous tasks.

    Boundaries are bucketize(to_block - from_block, worker_count) shifted by
    from_block: task sizes differ by at most one block, and asking for more
    workers than blocks yields one single-block task per block.

    Args:
        from_block: First block to index (inclusive)
        to_block: Last block to index (inclusive)
        worker_count: Number of workers requested
        force_mode: Re-index blocks even if already present
        log_level: Log level handed to the worker

    Returns:
        List of WorkerTaskSpec covering [from_block, to_block] exactly once

    Raises:
        InvalidParameters: If worker_count < 1, from_block < 0 or to_block < from_block
    """
    if worker_count < 1:
        raise InvalidParameters("worker_count must be >= 1")
    if from_block < 0:
        raise InvalidParameters("from_block must be >= 0")
    if to_block < from_block:
        raise InvalidParameters("to_block must be >= from_block")

    tasks: List[WorkerTaskSpec] = []
    for start, end in bucketize(to_block - from_block, worker_count):
        tasks.append(
            WorkerTaskSpec(
                from_block=from_block + start,
                to_block=from_block + end,
                force_mode=force_mode,
                log_level=log_level,
            )
        )

    return tasks
