"""
Checksum validation for New Zealand bank account numbers.

Why this file exists
--------------------
Identifying the bank from the first six digits only proves the branch exists.
Whether the *account* digits are plausible is a separate, per-bank arithmetic
check published by Inland Revenue ("Bank account number validation" in the
RWT/NRWT specification). The rules differ per bank, so checks are pluggable:
any callable ``(bank, branch, account, suffix) -> bool`` can be registered under
a name and selected from config.

The IRD check
-------------
1) The bank must be known and the branch must fall in one of its ranges.
2) Pick an algorithm from the bank number (and, for most banks, the account
   base number): see ``_algorithm_for``.
3) Lay the 18 digits out (bank 2, branch 4, base 8, suffix 4), multiply each by
   the algorithm's weight, sum the products and test ``sum % modulus == 0``.
   Algorithms E and G fold each product to a single digit first
   (e.g. 7 * 7 = 49 -> 13 -> 4).

Design principles
-----------------
- **Pure functions**: no I/O, no state.
- **Total**: malformed input gives False, never an exception.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple, Union

from .normalize import WIDTHS, split_account

ChecksumFn = Callable[[str, str, str, str], bool]


# ---- IRD tables ------------------------------------------------------------------------

# Valid branch ranges (inclusive) per bank number.
BRANCH_RANGES: Dict[str, Tuple[Tuple[int, int], ...]] = {
    "01": ((1, 999), (1100, 1199), (1800, 1899)),
    "02": ((1, 999), (1200, 1299)),
    "03": ((1, 999), (1300, 1399), (1500, 1599), (1700, 1799), (1900, 1999)),
    "04": ((2020, 2024),),
    "06": ((1, 999), (1400, 1499)),
    "08": ((6500, 6599),),
    "09": ((0, 0),),
    "10": ((5165, 5169),),
    "11": ((5000, 6499), (6600, 8999)),
    "12": ((3000, 3299), (3400, 3499), (3600, 3699)),
    "13": ((4900, 4999),),
    "14": ((4700, 4799),),
    "15": ((3900, 3999),),
    "16": ((4400, 4499),),
    "17": ((3300, 3399),),
    "18": ((3500, 3599),),
    "19": ((4600, 4649),),
    "20": ((4100, 4199),),
    "21": ((4800, 4899),),
    "22": ((4000, 4049),),
    "23": ((3700, 3799),),
    "24": ((4300, 4349),),
    "25": ((2500, 2599),),
    "26": ((2600, 2699),),
    "27": ((3800, 3849),),
    "28": ((2100, 2149),),
    "29": ((2150, 2299),),
    "30": ((2900, 2949),),
    "31": ((2800, 2849),),
    "33": ((6700, 6799),),
    "35": ((2400, 2499),),
    "38": ((9000, 9499),),
}

# (weights over the 18 padded digits, modulus, fold products to one digit)
ALGORITHMS: Dict[str, Tuple[Tuple[int, ...], int, bool]] = {
    #           bk    branch        base account                 suffix
    "A": ((0, 0, 6, 3, 7, 9, 0, 0, 10, 5, 8, 4, 2, 1, 0, 0, 0, 0), 11, False),
    "B": ((0, 0, 0, 0, 0, 0, 0, 0, 10, 5, 8, 4, 2, 1, 0, 0, 0, 0), 11, False),
    "C": ((3, 7, 0, 0, 0, 0, 9, 1, 10, 5, 3, 4, 2, 1, 0, 0, 0, 0), 11, False),
    "D": ((0, 0, 0, 0, 0, 0, 0, 7, 6, 5, 4, 3, 2, 1, 0, 0, 0, 0), 11, False),
    "E": ((0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 5, 4, 3, 2, 0, 0, 0, 1), 11, True),
    "F": ((0, 0, 0, 0, 0, 0, 0, 1, 7, 3, 1, 7, 3, 1, 0, 0, 0, 0), 10, False),
    "G": ((0, 0, 0, 0, 0, 0, 0, 1, 3, 7, 1, 3, 7, 1, 0, 3, 7, 1), 10, True),
    "X": ((0,) * 18, 1, False),
}

# Banks with their own algorithm regardless of account number.
_BANK_ALGORITHMS: Dict[str, str] = {
    "08": "D",
    "09": "E",
    "25": "F", "33": "F",
    "26": "G", "28": "G", "29": "G",
    "31": "X",
}

# Base account numbers below this use algorithm A, others B.
_ALGORITHM_B_FROM = 990000


def branch_ok(bank: str, branch: str) -> bool:
    """True if ``branch`` lies in one of the ranges published for ``bank``."""
    ranges = BRANCH_RANGES.get(bank)
    if not ranges:
        return False
    b = int(branch)
    return any(lo <= b <= hi for lo, hi in ranges)


def _algorithm_for(bank: str, account: str) -> str:
    algo = _BANK_ALGORITHMS.get(bank)
    if algo:
        return algo
    return "A" if int(account) < _ALGORITHM_B_FROM else "B"


def _fold(n: int) -> int:
    # repeated digit sum: 49 -> 13 -> 4
    while n > 9:
        n = sum(int(ch) for ch in str(n))
    return n


def weighted_sum_ok(digits: str, algorithm: str) -> bool:
    """Apply one IRD algorithm to an 18 digit string."""
    weights, modulus, fold = ALGORITHMS[algorithm]
    total = 0
    for ch, w in zip(digits, weights):
        product = int(ch) * w
        total += _fold(product) if fold else product
    return total % modulus == 0


def ird_ok(bank: str, branch: str, account: str, suffix: str) -> bool:
    """
    Inland Revenue bank account check over zero-padded components.

    Args:
        bank, branch, account, suffix: digit strings of width 2, 4, 8 and 4.

    Returns:
        True if the branch is valid for the bank and the checksum passes.
    """
    if not branch_ok(bank, branch):
        return False
    algorithm = _algorithm_for(bank, account)
    return weighted_sum_ok(bank + branch + account + suffix, algorithm)


# ---- Registry of named checksum strategies ---------------------------------------------

_CHECKSUMS: Dict[str, ChecksumFn] = {
    "ird": ird_ok,
}


def register_checksum(name: str, fn: ChecksumFn) -> None:
    """Make ``fn`` selectable by name (e.g. from ``accounts.checksum`` in config)."""
    _CHECKSUMS[name] = fn


def get_checksum(name: str) -> ChecksumFn:
    try:
        return _CHECKSUMS[name]
    except KeyError:
        known = ", ".join(sorted(_CHECKSUMS))
        raise ValueError(f"Unknown checksum strategy '{name}' (known: {known})") from None


def _pad(value: str, width: int) -> Optional[str]:
    """Zero-pad a component; None if it is not 1..width ASCII digits."""
    if not isinstance(value, str) or not value or len(value) > width:
        return None
    if not all("0" <= ch <= "9" for ch in value):
        return None
    return value.zfill(width)


class AccountValidator:
    """
    Check account numbers with a pluggable checksum strategy.

    Components are checked for shape (digits only, not wider than 2/4/8/4) and
    zero-padded before the strategy sees them, so strategies only ever receive
    well-formed input. Anything malformed is simply invalid.
    """

    def __init__(self, strategy: Union[str, ChecksumFn] = "ird") -> None:
        self.strategy: ChecksumFn = get_checksum(strategy) if isinstance(strategy, str) else strategy

    def validate(self, bank: str, branch: str, account: str, suffix: str) -> bool:
        padded = [_pad(v, w) for v, w in zip((bank, branch, account, suffix), WIDTHS)]
        if any(p is None for p in padded):
            return False
        return bool(self.strategy(*padded))

    def validate_account(self, raw: str) -> bool:
        """Validate a loosely formatted account string (see ``split_account``)."""
        parts = split_account(raw)
        if parts is None:
            return False
        return self.validate(*parts)


def validate(bank: str, branch: str, account: str, suffix: str) -> bool:
    """Module-level shortcut using the IRD strategy."""
    return AccountValidator().validate(bank, branch, account, suffix)
