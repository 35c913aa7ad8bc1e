"""
JSON-RPC client used as the latest-block oracle.
"""

from typing import Any, Dict, Optional
from abc import ABC, abstractmethod
import requests

from ..errors import SourceUnavailable


MAINNET_RPC_URL = "https://juno.mainnet.arkproject.dev"
SEPOLIA_RPC_URL = "https://sepolia.arkproject.dev"


def rpc_provider_for_network(network: str) -> str:
    """
    Node URL for a network name such as "mainnet" or "staging-sepolia".
    """
    return MAINNET_RPC_URL if "mainnet" in network else SEPOLIA_RPC_URL


class LatestBlockOracle(ABC):
    """
    Returns the current chain head.
    """

    @abstractmethod
    def fetch_latest_block(self) -> int:
        pass


class StarknetRpcClient(LatestBlockOracle):
    """
    Client for a Starknet JSON-RPC node.
    """

    DEFAULT_TIMEOUT = 30

    def __init__(self, rpc_url: str, timeout: Optional[float] = None):
        """
        Initialize the RPC client.
        """
        self.rpc_url = rpc_url
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT

    def _call(self, method: str, params: Optional[list] = None) -> Any:
        payload: Dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params or [],
        }
        try:
            resp = requests.post(self.rpc_url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise SourceUnavailable(f"{method} failed on {self.rpc_url}: {e}") from e

        if not isinstance(data, dict):
            raise SourceUnavailable(f"{method} returned a non-object response")
        if data.get("error"):
            raise SourceUnavailable(f"{method} returned an error: {data['error']}")
        if "result" not in data:
            raise SourceUnavailable(f"{method} returned no result")

        return data["result"]

    def fetch_latest_block(self) -> int:
        """
        Fetch the current block number with starknet_blockNumber.
        """
        result = self._call("starknet_blockNumber")
        try:
            if isinstance(result, str):
                return int(result, 0)
            return int(result)
        except (TypeError, ValueError) as e:
            raise SourceUnavailable(f"Unparsable block number: {result!r}") from e
