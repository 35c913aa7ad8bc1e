"""
Unit tests for dispatch planning and task dispatch.
"""

import unittest
import random
import sys
from pathlib import Path

parent_dir = Path(__file__).resolve().parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

from src.indexer_gaps import (
    InvalidParameters,
    TaskSink,
    WorkerTaskSpec,
    bucketize,
    dispatch_tasks,
    plan_tasks,
)
from src.indexer_gaps.dispatcher import task_id_from_arn


class RecordingSink(TaskSink):
    """
    Sink that remembers every spawn and can fail on a given call.
    """

    def __init__(self, fail_on: int = -1):
        self.spawned = []
        self.fail_on = fail_on

    def spawn(self, spec, network):
        if len(self.spawned) == self.fail_on:
            raise RuntimeError("RunTask throttled")
        self.spawned.append((spec, network))
        return f"task{len(self.spawned)}"


class TestPlanTasks(unittest.TestCase):
    """
    Test splitting a block interval into worker tasks.
    """

    def bounds(self, tasks):
        return [(t.from_block, t.to_block) for t in tasks]

    def test_uneven_split(self):
        """
        Test 11 blocks over 3 workers.
        """
        self.assertEqual(
            self.bounds(plan_tasks(0, 10, 3)), [(0, 3), (4, 7), (8, 10)]
        )

    def test_more_workers_than_blocks(self):
        """
        Test degenerate workers are dropped.
        """
        self.assertEqual(self.bounds(plan_tasks(0, 2, 5)), [(0, 0), (1, 1), (2, 2)])

    def test_huge_worker_count_stops_at_last_block(self):
        """
        Test planning time depends on the block span, not the worker count.
        """
        tasks = plan_tasks(0, 2, 20_000_000)

        self.assertEqual(self.bounds(tasks), [(0, 0), (1, 1), (2, 2)])

    def test_every_requested_worker_is_used(self):
        """
        Test 100 blocks over 12 workers yields 12 tasks of 8 or 9 blocks.
        """
        tasks = plan_tasks(1_000, 1_099, 12)

        self.assertEqual(len(tasks), 12)
        self.assertEqual(tasks[-1].to_block, 1_099)
        self.assertEqual({t.size for t in tasks}, {8, 9})

    def test_single_worker_spans_everything(self):
        tasks = plan_tasks(120, 4_567, 1)

        self.assertEqual(self.bounds(tasks), [(120, 4_567)])

    def test_single_block(self):
        self.assertEqual(self.bounds(plan_tasks(7, 7, 4)), [(7, 7)])

    def test_options_are_carried(self):
        tasks = plan_tasks(0, 99, 4, force_mode=True, log_level="debug")

        self.assertEqual(len(tasks), 4)
        for task in tasks:
            self.assertTrue(task.force_mode)
            self.assertEqual(task.log_level, "debug")
            self.assertEqual(task.size, 25)

    def test_cover_and_match_bucketize(self):
        """
        Test tasks cover the interval and share bucketize boundaries.
        """
        rng = random.Random(3)
        for _ in range(300):
            from_block = rng.randint(0, 100_000)
            to_block = from_block + rng.randint(0, 20_000)
            workers = rng.randint(1, 64)

            tasks = plan_tasks(from_block, to_block, workers)

            self.assertEqual(len(tasks), min(workers, to_block - from_block + 1))
            self.assertEqual(tasks[0].from_block, from_block)
            self.assertEqual(tasks[-1].to_block, to_block)
            for task in tasks:
                self.assertGreaterEqual(task.to_block, task.from_block)
            for task, next_task in zip(tasks, tasks[1:]):
                self.assertEqual(task.to_block + 1, next_task.from_block)

            shifted = [
                (start + from_block, end + from_block)
                for start, end in bucketize(to_block - from_block, workers)
            ]
            self.assertEqual(self.bounds(tasks), shifted)

    def test_invalid_parameters(self):
        with self.assertRaises(InvalidParameters):
            plan_tasks(0, 10, 0)
        with self.assertRaises(InvalidParameters):
            plan_tasks(10, 9, 2)
        with self.assertRaises(InvalidParameters):
            plan_tasks(-1, 9, 2)


class TestWorkerTaskSpec(unittest.TestCase):
    """
    Test hydration of a task into the worker environment.
    """

    def test_environment(self):
        spec = WorkerTaskSpec(from_block=10, to_block=20, force_mode=True)
        env = spec.to_environment("https://node.example")

        self.assertEqual(
            env,
            {
                "RPC_PROVIDER": "https://node.example",
                "HEAD_OF_CHAIN": "false",
                "FROM_BLOCK": "10",
                "TO_BLOCK": "20",
                "RUST_LOG": "info",
                "FORCE_MODE": "true",
            },
        )


class TestDispatchTasks(unittest.TestCase):
    """
    Test handing specs to a sink.
    """

    def test_every_spec_is_spawned_in_order(self):
        sink = RecordingSink()
        specs = plan_tasks(0, 10, 3)

        dispatched = dispatch_tasks(specs, sink, "mainnet")

        self.assertEqual([d.task_id for d in dispatched], ["task1", "task2", "task3"])
        self.assertEqual([s for s, _ in sink.spawned], specs)
        self.assertTrue(all(d.network == "mainnet" for d in dispatched))

    def test_sink_failure_propagates(self):
        sink = RecordingSink(fail_on=1)

        with self.assertRaises(RuntimeError):
            dispatch_tasks(plan_tasks(0, 10, 3), sink, "sepolia")
        self.assertEqual(len(sink.spawned), 1)

    def test_task_id_from_arn(self):
        arn = "arn:aws:ecs:us-east-1:123456789012:task/ark-indexers/4f1c2a9b"

        self.assertEqual(task_id_from_arn(arn), "4f1c2a9b")
        self.assertEqual(task_id_from_arn("plain"), "plain")


if __name__ == "__main__":
    unittest.main()
