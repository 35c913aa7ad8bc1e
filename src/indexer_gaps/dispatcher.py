"""
Hand planned worker tasks to the orchestration layer.
"""

from typing import Iterable, List
from dataclasses import dataclass
from abc import ABC, abstractmethod

from .planner import WorkerTaskSpec


@dataclass(frozen=True)
class DispatchedTask:
    """
    A worker task that the orchestrator accepted.
    """

    task_id: str

    spec: WorkerTaskSpec

    network: str


class TaskSink(ABC):
    """
    Starts one indexer worker per task and returns an opaque task id.
    """

    @abstractmethod
    def spawn(self, spec: WorkerTaskSpec, network: str) -> str:
        pass


def task_id_from_arn(task_arn: str) -> str:
    """
    Trailing id segment of an ECS task ARN.
    """
    return task_arn.rsplit("/", 1)[-1]


def dispatch_tasks(
    specs: Iterable[WorkerTaskSpec], sink: TaskSink, network: str
) -> List[DispatchedTask]:
    """
    Spawn every task in order. A failing spawn stops the loop and propagates;
    workers already started keep running.
    """
    dispatched: List[DispatchedTask] = []
    for spec in specs:
        task_id = sink.spawn(spec, network)
        dispatched.append(DispatchedTask(task_id=task_id, spec=spec, network=network))
        print(
            f"Spawned task {task_id} on {network}: blocks {spec.from_block} to {spec.to_block}"
            f" (force: {spec.force_mode}, log: {spec.log_level})"
        )
    return dispatched
