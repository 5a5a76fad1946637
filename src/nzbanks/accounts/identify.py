"""
Resolve an account number to the bank branch that holds it.

Identification only uses the first six digits (bank + branch). It is *not*
account validation; see ``checksum`` for that.
"""

from __future__ import annotations

from typing import Optional

from ..directory.records import BankBranchRecord
from .normalize import normalize

PREFIX_LENGTH = 6


class AccountIdentifier:
    """
    Look up account numbers in a directory.

    ``directory`` is anything with ``lookup(prefix) -> BankBranchRecord | None``,
    e.g. ``BankDirectory`` or ``SqlBankDirectory``.
    """

    def __init__(self, directory) -> None:
        self.directory = directory

    @staticmethod
    def prefix_of(raw: str) -> Optional[str]:
        """First six digits of the canonical form, or None if ``raw`` does not normalize."""
        canonical = normalize(raw)
        if canonical is None:
            return None
        digits = "".join(ch for ch in canonical if "0" <= ch <= "9")
        return digits[:PREFIX_LENGTH]

    def identify(self, raw: str) -> Optional[BankBranchRecord]:
        """
        Return the branch record for ``raw`` or None.

        Spaces, slashes and dashes in the input are all fine; only the four digit
        groups matter. None means either the format was not accepted or no branch
        is registered under the prefix.
        """
        prefix = self.prefix_of(raw)
        if prefix is None:
            return None
        record = self.directory.lookup(prefix)
        if record is None or record.prefix != prefix:
            return None
        return record

