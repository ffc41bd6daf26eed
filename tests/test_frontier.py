from __future__ import annotations

import unittest

from site_archiver.classify import SiteScope
from site_archiver.frontier import Frontier

ROOT = "https://am.ndhu.edu.tw/"


class FrontierTest(unittest.TestCase):
    def setUp(self) -> None:
        self.frontier = Frontier(SiteScope("am.ndhu.edu.tw"))

    def test_fifo_order(self) -> None:
        urls = [ROOT + "a", ROOT + "b", ROOT + "c"]
        for url in urls:
            self.assertTrue(self.frontier.enqueue(url))
        self.assertEqual(
            [self.frontier.dequeue_next() for _ in urls],
            urls,
        )
        self.assertIsNone(self.frontier.dequeue_next())

    def test_rejects_other_hosts(self) -> None:
        for url in ("https://example.com/", "https://www.ndhu.edu.tw/", "ftp://am.ndhu.edu.tw/x"):
            with self.subTest(url=url):
                self.assertFalse(self.frontier.enqueue(url))
        self.assertEqual(len(self.frontier), 0)

    def test_rejects_pending_duplicates(self) -> None:
        self.assertTrue(self.frontier.enqueue(ROOT))
        self.assertFalse(self.frontier.enqueue(ROOT))
        self.assertEqual(self.frontier.pending, (ROOT,))

    def test_rejects_visited(self) -> None:
        self.frontier.mark_visited(ROOT)
        self.assertFalse(self.frontier.enqueue(ROOT))
        self.assertFalse(self.frontier)

    def test_requeue_after_dequeue_only_until_visited(self) -> None:
        self.frontier.enqueue(ROOT)
        url = self.frontier.dequeue_next()
        self.frontier.mark_visited(url)
        self.assertFalse(self.frontier.enqueue(ROOT))

    def test_mark_visited_is_idempotent(self) -> None:
        self.frontier.mark_visited(ROOT)
        self.frontier.mark_visited(ROOT)
        self.assertEqual(self.frontier.visited, frozenset({ROOT}))
        self.assertTrue(self.frontier.is_visited(ROOT))


if __name__ == "__main__":
    unittest.main()
