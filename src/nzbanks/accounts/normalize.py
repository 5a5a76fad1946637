"""
Account number normalization.

A New Zealand account number has four parts:

    bank (2) - branch (4) - base account (8) - suffix (4)

People write them loosely: ``12-3140-0171323-50``, ``12 3140 171323 050``,
``01/0001/1/1``. Only the digit groups matter. The canonical form used for
storage and display zero-pads every group on the left to its full width, which
is also what Inland Revenue expects:

    01-0001-00000001-0001

Groups longer than their width are left as they are (never truncated), so such
input yields an over-length canonical string rather than being rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

# ASCII digits only; str.isdigit() / \d would also accept other scripts' digits
_SEPARATORS = re.compile(r"[^0-9]+")

# bank, branch, base account, suffix
WIDTHS: Tuple[int, int, int, int] = (2, 4, 8, 4)

DEFAULT_DELIMITER = "-"


def split_account(raw: str) -> Optional[Tuple[str, str, str, str]]:
    """
    Return the four zero-padded groups of ``raw``, or None.

    Any run of non-digit characters separates groups. Anything other than exactly
    four groups is rejected outright, and so is a separator at either end
    (``"-01-0001-1-1"`` splits into five groups, the first empty).
    """
    if not isinstance(raw, str):
        return None
    groups = _SEPARATORS.split(raw)
    if len(groups) != len(WIDTHS) or not all(groups):
        return None
    bank, branch, base, suffix = (g.zfill(w) for g, w in zip(groups, WIDTHS))
    return bank, branch, base, suffix


def normalize(raw: str, delimiter: str = DEFAULT_DELIMITER) -> Optional[str]:
    """
    Render ``raw`` in canonical form, or return None if it is not four digit groups.

        >>> normalize("1-1-1-1")
        '01-0001-00000001-0001'
        >>> normalize("12345") is None
        True
    """
    parts = split_account(raw)
    if parts is None:
        return None
    return delimiter.join(parts)


@dataclass(frozen=True)
class AccountNumber:
    """A parsed account number; every part is already zero-padded."""
    bank: str
    branch: str
    base: str
    suffix: str

    @classmethod
    def parse(cls, raw: str) -> Optional["AccountNumber"]:
        parts = split_account(raw)
        return cls(*parts) if parts else None

    @property
    def prefix(self) -> str:
        return self.bank + self.branch

    def parts(self) -> Tuple[str, str, str, str]:
        return self.bank, self.branch, self.base, self.suffix

    def format(self, delimiter: str = DEFAULT_DELIMITER) -> str:
        return delimiter.join(self.parts())

    def __str__(self) -> str:
        return self.format()
