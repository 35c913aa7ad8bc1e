"""
Indexer monitor: coverage overview and worker dispatch for one network.
"""

from typing import Iterable, List, Optional

from .config import MonitorConfig
from .data import (
    BlockSource,
    InMemoryBlockSource,
    LatestBlockOracle,
    StarknetRpcClient,
)
from .dispatcher import DispatchedTask, TaskSink, dispatch_tasks
from .planner import plan_tasks
from .reconciler import ReconciliationResult, reconcile
from .utils import percentage_string


class IndexerMonitor:
    """
    Combines the chain head, the indexed-block source and the task sink of
    one network into the two operator actions: inspect coverage and spawn
    workers over a block interval.
    """

    def __init__(
        self,
        config: MonitorConfig,
        source: BlockSource,
        oracle: Optional[LatestBlockOracle] = None,
        sink: Optional[TaskSink] = None,
    ):
        """
        Initialize the monitor. Without an oracle, a StarknetRpcClient on
        config.rpc_url is used.
        """
        self.config = config
        self.source = source
        self.oracle = oracle or StarknetRpcClient(
            config.rpc_url, timeout=config.request_timeout
        )
        self.sink = sink

        print(f"IndexerMonitor initialized for {config.network}")
        print(f"  - RPC provider: {config.rpc_url}")
        print(f"  - Coverage ranges: {config.bucket_count}")
        if sink is None:
            print("  - Task dispatch disabled")

    @classmethod
    def from_blocks(
        cls,
        config: MonitorConfig,
        blocks: Iterable[int],
        oracle: Optional[LatestBlockOracle] = None,
        sink: Optional[TaskSink] = None,
    ) -> "IndexerMonitor":
        """
        Monitor over an in-memory block list, paged by config.page_size.
        """
        return cls(config, InMemoryBlockSource(blocks, config.page_size), oracle, sink)

    def block_overview(self) -> ReconciliationResult:
        """
        Reconcile the indexed blocks against the current chain head.
        """
        latest = self.oracle.fetch_latest_block()
        result = reconcile(
            latest, self.source.iter_blocks(), self.config.bucket_count
        )

        print(
            f"Coverage for {self.config.network} up to #{latest:,}: "
            f"{result.total_missing:,} unindexed "
            f"({percentage_string(latest + 1, result.total_missing)}%)"
        )
        return result

    def spawn_tasks(
        self,
        from_block: int,
        to_block: int,
        number_of_tasks: int,
        force_mode: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> List[DispatchedTask]:
        """
        Split [from_block, to_block] into workers and start them.
        """
        if self.sink is None:
            raise RuntimeError("No task sink configured for this monitor")

        specs = plan_tasks(
            from_block,
            to_block,
            number_of_tasks,
            force_mode=self.config.force_mode if force_mode is None else force_mode,
            log_level=log_level or self.config.log_level,
        )
        return dispatch_tasks(specs, self.sink, self.config.network)
