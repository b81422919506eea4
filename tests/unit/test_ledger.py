import threading
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from organize_by_type.ledger import DedupLedger
from organize_by_type.models import DedupKey


class TestDedupLedger(unittest.TestCase):
    def test_first_call_registers(self):
        ledger = DedupLedger()
        key = DedupKey("TXT", "abc")

        result = ledger.lookup_or_register(key, lambda: Path("/r/FILE_TYPE_TXT/a.txt"))

        self.assertTrue(result.first)
        self.assertEqual(result.destination, Path("/r/FILE_TYPE_TXT/a.txt"))
        self.assertIn(key, ledger)

    def test_entry_is_never_overwritten(self):
        ledger = DedupLedger()
        key = DedupKey("TXT", "abc")
        ledger.lookup_or_register(key, lambda: Path("/r/FILE_TYPE_TXT/a.txt"))
        propose = MagicMock(return_value=Path("/r/FILE_TYPE_TXT/b.txt"))

        again = ledger.lookup_or_register(key, propose)

        self.assertFalse(again.first)
        self.assertEqual(again.destination, Path("/r/FILE_TYPE_TXT/a.txt"))
        propose.assert_not_called()
        self.assertEqual(len(ledger), 1)

    def test_failed_proposal_registers_nothing(self):
        ledger = DedupLedger()
        key = DedupKey("TXT", "abc")

        with self.assertRaises(OSError):
            ledger.lookup_or_register(key, MagicMock(side_effect=OSError("read-only")))

        self.assertNotIn(key, ledger)
        self.assertTrue(ledger.lookup_or_register(key, lambda: Path("a.txt")).first)

    def test_same_digest_different_extension_are_different_keys(self):
        ledger = DedupLedger()
        self.assertTrue(ledger.lookup_or_register(DedupKey("TXT", "abc"), lambda: Path("a.txt")).first)
        self.assertTrue(ledger.lookup_or_register(DedupKey("MD", "abc"), lambda: Path("a.md")).first)
        self.assertEqual(len(ledger), 2)

    def test_concurrent_callers_get_one_winner(self):
        ledger = DedupLedger()
        key = DedupKey("JPG", "feed")
        results = []
        barrier = threading.Barrier(8)

        def worker(i):
            barrier.wait()
            results.append(ledger.lookup_or_register(key, lambda: Path(f"/r/FILE_TYPE_JPG/{i}.jpg")))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        winners = [r for r in results if r.first]
        self.assertEqual(len(winners), 1)
        self.assertEqual({r.destination for r in results}, {winners[0].destination})


if __name__ == '__main__':
    unittest.main()
