"""
In-memory bank/branch directory.

Maps the six digit prefix (bank + branch) to its `BankBranchRecord`. All access
goes through a re-entrant lock, so an ``insert`` is serialized against concurrent
``lookup``/``insert`` calls and readers never see a half-written entry.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional

from .records import BankBranchRecord


class BankDirectory:
    """Prefix-keyed directory of bank branches."""

    def __init__(self, records: Iterable[BankBranchRecord] = ()) -> None:
        self._records: Dict[str, BankBranchRecord] = {}
        self._lock = threading.RLock()
        for record in records:
            self.insert(record)

    def lookup(self, prefix: str) -> Optional[BankBranchRecord]:
        """Exact match on the six character prefix."""
        with self._lock:
            return self._records.get(prefix)

    def insert(self, record: BankBranchRecord) -> None:
        """
        Store ``record`` under its prefix.

        An existing entry for the same prefix is replaced; whether that is allowed
        is decided by the caller (see ``RegisterLoader``), not here.
        """
        with self._lock:
            self._records[record.prefix] = record

    def contains(self, prefix: str) -> bool:
        with self._lock:
            return prefix in self._records

    def prefixes(self) -> List[str]:
        with self._lock:
            return list(self._records)

    def records(self) -> List[BankBranchRecord]:
        """Snapshot of the stored records (records are immutable, so no copies)."""
        with self._lock:
            return list(self._records.values())

    def __contains__(self, prefix: object) -> bool:
        return isinstance(prefix, str) and self.contains(prefix)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __repr__(self) -> str:
        return f"<BankDirectory(records={len(self)})>"
