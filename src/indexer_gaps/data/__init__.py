"""
Block sources and chain-head lookup.
"""

from .source import (
    BlockPage,
    BlockSource,
    AsyncBlockSource,
    InMemoryBlockSource,
    AsyncInMemoryBlockSource,
)
from .client import LatestBlockOracle, StarknetRpcClient, rpc_provider_for_network

__all__ = [
    "BlockPage",
    "BlockSource",
    "AsyncBlockSource",
    "InMemoryBlockSource",
    "AsyncInMemoryBlockSource",
    "LatestBlockOracle",
    "StarknetRpcClient",
    "rpc_provider_for_network",
]
