"""
Dedup ledger: which destination holds the canonical copy of each key.

Lives for exactly one run and is never persisted. Bucket folders are skipped
by the path filter, so a re-run rebuilds the ledger from files that are
still unorganized.
"""

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .models import DedupKey


@dataclass(frozen=True)
class LedgerResult:
    """first is True when the call registered the key; destination is the canonical path."""
    first: bool
    destination: Path


class DedupLedger:
    """
    Maps DedupKey -> destination of the first file seen with that key.

    Entries are created once and never overwritten. lookup_or_register is a
    compare-and-set so the ledger stays correct if hashing is ever spread
    across threads.
    """

    def __init__(self):
        self._entries: dict[DedupKey, Path] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: DedupKey) -> bool:
        return key in self._entries

    def lookup_or_register(self, key: DedupKey, propose: Callable[[], Path]) -> LedgerResult:
        """
        Return the canonical destination for key, registering one if the key is new.

        propose is only called, under the ledger lock, when the key is new. If
        it raises, nothing is registered and the error propagates.

        Args:
            key: Extension + content digest.
            propose: Returns the destination the first file with key will take.

        Returns:
            LedgerResult(first=True, proposed) on the first call for key,
            otherwise LedgerResult(first=False, existing_destination).
        """
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return LedgerResult(first=False, destination=existing)
            destination = propose()
            self._entries[key] = destination
            return LedgerResult(first=True, destination=destination)
