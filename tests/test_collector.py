from __future__ import annotations

import sys
import threading
import unittest
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from line_adjust.collector import ResultCollector
from line_adjust.errors import LineAdjustError
from line_adjust.joiner import join_results
from line_adjust.models import JustifiedResult


class ResultCollectorTests(unittest.TestCase):
    def test_concurrent_writers_lose_nothing(self) -> None:
        collector = ResultCollector()

        def _write(start: int) -> None:
            for index in range(start, 400, 4):
                collector.add(JustifiedResult(index=index, text=str(index)))

        writers = [threading.Thread(target=_write, args=(start,)) for start in range(4)]
        for writer in writers:
            writer.start()
        self.assertTrue(collector.wait_for(400, timeout=5))
        for writer in writers:
            writer.join(2)
        self.assertEqual(len(collector), 400)
        self.assertEqual(sorted(result.index for result in collector.results()), list(range(400)))

    def test_duplicate_index_is_rejected(self) -> None:
        collector = ResultCollector()
        collector.add(JustifiedResult(index=0, text="a"))
        with self.assertRaises(LineAdjustError):
            collector.add(JustifiedResult(index=0, text="b"))
        self.assertEqual(len(collector), 1)
        self.assertEqual(collector.results()[0].text, "a")

    def test_failure_wakes_waiter_and_first_failure_wins(self) -> None:
        collector = ResultCollector()
        first = RuntimeError("first")
        timer = threading.Timer(0.05, collector.fail, args=(first,))
        timer.start()
        self.assertFalse(collector.wait_for(3, timeout=5))
        collector.fail(RuntimeError("second"))
        self.assertIs(collector.failure, first)

    def test_interrupt_wakes_waiter(self) -> None:
        collector = ResultCollector()
        timer = threading.Timer(0.05, collector.interrupt)
        timer.start()
        self.assertFalse(collector.wait_for(1, timeout=5))
        self.assertIsNone(collector.failure)

    def test_wait_times_out(self) -> None:
        collector = ResultCollector()
        self.assertFalse(collector.wait_for(1, timeout=0.05))

    def test_zero_expected_results_is_complete(self) -> None:
        self.assertTrue(ResultCollector().wait_for(0, timeout=0.01))


class JoinerTests(unittest.TestCase):
    def test_orders_by_index_without_trailing_separator(self) -> None:
        results = [JustifiedResult(2, "c"), JustifiedResult(0, "a"), JustifiedResult(1, "b")]
        self.assertEqual(join_results(results, "\n"), "a\nb\nc")

    def test_empty_collection_joins_to_empty_string(self) -> None:
        self.assertEqual(join_results([], "\n"), "")

    def test_gap_in_indices_is_rejected(self) -> None:
        with self.assertRaises(LineAdjustError):
            join_results([JustifiedResult(0, "a"), JustifiedResult(2, "c")], "\n")


if __name__ == "__main__":
    unittest.main()
