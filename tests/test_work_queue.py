from __future__ import annotations

import sys
import threading
import unittest
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from line_adjust.models import LineJob
from line_adjust.work_queue import QueueAborted, WorkQueue


def _job(index: int) -> LineJob:
    return LineJob.from_words(index, [f"w{index}"], 10)


class WorkQueueTests(unittest.TestCase):
    def test_fifo_then_none_after_close_and_drain(self) -> None:
        queue = WorkQueue()
        for index in range(3):
            queue.put(_job(index))
        queue.close()
        self.assertEqual([queue.get().index for _ in range(3)], [0, 1, 2])
        self.assertIsNone(queue.get())
        self.assertIsNone(queue.get())

    def test_get_blocks_until_a_job_arrives(self) -> None:
        queue = WorkQueue()
        received = []
        consumer = threading.Thread(target=lambda: received.append(queue.get()))
        consumer.start()
        consumer.join(0.05)
        self.assertTrue(consumer.is_alive())
        queue.put(_job(4))
        consumer.join(2)
        self.assertFalse(consumer.is_alive())
        self.assertEqual(received[0].index, 4)

    def test_close_releases_blocked_workers(self) -> None:
        queue = WorkQueue()
        received = []
        workers = [threading.Thread(target=lambda: received.append(queue.get())) for _ in range(3)]
        for worker in workers:
            worker.start()
        queue.close()
        for worker in workers:
            worker.join(2)
            self.assertFalse(worker.is_alive())
        self.assertEqual(received, [None, None, None])

    def test_abort_drops_pending_jobs(self) -> None:
        queue = WorkQueue()
        queue.put(_job(0))
        queue.abort()
        self.assertTrue(queue.aborted)
        self.assertEqual(len(queue), 0)
        self.assertIsNone(queue.get())

    def test_abort_releases_producer_blocked_on_full_queue(self) -> None:
        queue = WorkQueue(maxsize=1)
        queue.put(_job(0))
        errors = []

        def _produce() -> None:
            try:
                queue.put(_job(1))
            except QueueAborted as exc:
                errors.append(exc)

        producer = threading.Thread(target=_produce)
        producer.start()
        producer.join(0.05)
        self.assertTrue(producer.is_alive())
        queue.abort()
        producer.join(2)
        self.assertFalse(producer.is_alive())
        self.assertEqual(len(errors), 1)

    def test_bounded_queue_unblocks_when_worker_takes_a_job(self) -> None:
        queue = WorkQueue(maxsize=1)
        queue.put(_job(0))
        producer = threading.Thread(target=lambda: queue.put(_job(1)))
        producer.start()
        self.assertEqual(queue.get().index, 0)
        producer.join(2)
        self.assertFalse(producer.is_alive())
        self.assertEqual(queue.get().index, 1)

    def test_put_after_close_is_rejected(self) -> None:
        queue = WorkQueue()
        queue.close()
        with self.assertRaises(RuntimeError):
            queue.put(_job(0))


if __name__ == "__main__":
    unittest.main()
