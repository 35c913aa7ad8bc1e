"""
Example coverage report for an indexer, from a CSV export of indexed blocks.
"""

import os
import pandas as pd
from matplotlib import pyplot as plt

from src.indexer_gaps import DispatchConfig, MonitorConfig, plan_tasks, reconcile
from src.indexer_gaps.data import InMemoryBlockSource, StarknetRpcClient
from src.indexer_gaps.utils import percentage_string


def run_report():
    """
    Print per-range coverage, a dispatch plan for the worst range, and plot it.
    """

    blocks_csv = os.getenv("INDEXED_BLOCKS_CSV")

    if not blocks_csv:
        print("ERROR: INDEXED_BLOCKS_CSV environment variable not set!")
        print("\nExport indexed block numbers to a CSV with a 'block_number' column,")
        print("then run:")
        print("  export INDEXED_BLOCKS_CSV=indexed_blocks.csv")
        return

    config = MonitorConfig(
        network=os.getenv("NETWORK", "mainnet"),
        bucket_count=int(os.getenv("BUCKET_COUNT", "120")),
    )
    workers = int(os.getenv("WORKERS", "4"))

    indexed = pd.read_csv(blocks_csv, usecols=["block_number"])["block_number"]
    source = InMemoryBlockSource(indexed.astype(int).tolist(), config.page_size)
    print(f"Loaded {len(source.blocks):,} indexed blocks from {blocks_csv}")

    # Latest block: from the environment, else from the node
    latest_env = os.getenv("LATEST_BLOCK")
    if latest_env:
        latest = int(latest_env)
    else:
        latest = StarknetRpcClient(config.rpc_url, config.request_timeout).fetch_latest_block()

    result = reconcile(latest, source.iter_blocks(), config.bucket_count)
    df = result.to_dataframe()

    print("\n" + "=" * 60)
    print(f"COVERAGE ({config.network})")
    print("=" * 60)
    print(f"Latest block: #{latest:,}")
    print(f"Range width: up to {result.bucket_width:,} blocks")
    print(
        f"Unindexed: {result.total_missing:,} "
        f"({percentage_string(latest + 1, result.total_missing)}%)"
    )

    incomplete = df[df["missing"] > 0]
    if incomplete.empty:
        print("\nEvery block is indexed.")
        return

    print(f"\nIncomplete ranges: {len(incomplete)}/{len(df)}")
    print(incomplete.sort_values("missing", ascending=False).head(10).to_string(index=False))

    # Plan workers over the range with the most missing blocks
    worst = incomplete.loc[incomplete["missing"].idxmax()]
    tasks = plan_tasks(
        int(worst["start"]),
        int(worst["end"]),
        workers,
        force_mode=config.force_mode,
        log_level=config.log_level,
    )

    print(f"\nDispatch plan for [{int(worst['start'])}, {int(worst['end'])}]:")
    for task in tasks:
        print(f"  - blocks {task.from_block} to {task.to_block} ({task.size:,} blocks)")

    if os.getenv("ARN_ECS_INDEXER_CLUSTER"):
        dispatch_config = DispatchConfig.from_env()
        request = dispatch_config.to_run_task_request(tasks[0], config.network)
        print(f"\nFirst RunTask request: {request}")

    # Plot completion per range
    fig, ax = plt.subplots(figsize=(12, 4))
    ax.bar(range(len(df)), df["percent_complete"], width=1.0, color="tab:green")
    ax.set_xlabel("Range")
    ax.set_ylabel("Indexed (%)")
    ax.set_ylim(0, 100)
    ax.set_title(f"Indexing coverage up to #{latest:,} ({config.network})")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    run_report()
