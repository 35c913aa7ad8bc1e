"""
Configuration for IndexerMonitor and task dispatch.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .data.client import rpc_provider_for_network
from .planner import WorkerTaskSpec


@dataclass
class MonitorConfig:
    """
    Configuration for an IndexerMonitor.
    """

    network: str = "mainnet"

    rpc_url: Optional[str] = None
    """Node URL; derived from network when unset."""

    # Coverage overview
    bucket_count: int = 120

    page_size: int = 1000
    """Page size of sources built by IndexerMonitor.from_blocks."""

    request_timeout: float = 30.0
    """In seconds."""

    # Worker defaults
    log_level: str = "info"

    force_mode: bool = False

    def __post_init__(self):
        """
        Validate configuration.
        """
        if not self.network:
            raise ValueError("network must be set")
        if self.bucket_count <= 0:
            raise ValueError("bucket_count must be positive")
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if not self.log_level:
            raise ValueError("log_level must be set")
        if self.rpc_url is None:
            self.rpc_url = rpc_provider_for_network(self.network)


@dataclass
class DispatchConfig:
    """
    Where indexer workers are started.
    """

    cluster: str

    task_definition: str

    subnets: List[str] = field(default_factory=list)

    security_groups: List[str] = field(default_factory=list)

    container_name: str = "ark_indexer"

    def __post_init__(self):
        if not self.cluster:
            raise ValueError("cluster must be set")
        if not self.task_definition:
            raise ValueError("task_definition must be set")

    @classmethod
    def from_env(cls) -> "DispatchConfig":
        """
        Build from ARN_ECS_INDEXER_CLUSTER, INDEXER_TASK_DEFINITION,
        INDEXER_SUBNETS (comma separated) and INDEXER_SECURITY_GROUP.
        """
        subnets = os.getenv("INDEXER_SUBNETS", "")
        security_group = os.getenv("INDEXER_SECURITY_GROUP", "")
        return cls(
            cluster=os.getenv("ARN_ECS_INDEXER_CLUSTER", ""),
            task_definition=os.getenv("INDEXER_TASK_DEFINITION", ""),
            subnets=[s.strip() for s in subnets.split(",") if s.strip()],
            security_groups=[security_group] if security_group else [],
        )

    def to_run_task_request(
        self, spec: WorkerTaskSpec, network: str
    ) -> Dict[str, Any]:
        """
        Fargate RunTask request for one worker.
        """
        environment = spec.to_environment(rpc_provider_for_network(network))
        return {
            "cluster": self.cluster,
            "taskDefinition": self.task_definition,
            "launchType": "FARGATE",
            "networkConfiguration": {
                "awsvpcConfiguration": {
                    "subnets": list(self.subnets),
                    "securityGroups": list(self.security_groups),
                    "assignPublicIp": "ENABLED",
                }
            },
            "overrides": {
                "containerOverrides": [
                    {
                        "name": self.container_name,
                        "environment": [
                            {"name": name, "value": value}
                            for name, value in environment.items()
                        ],
                    }
                ]
            },
        }
