"""
Composed account checks for input validation layers.

Format, bank identity and checksum are independent questions. A form that
rejects an account number should be able to say *every* reason at once, so
``check_account`` runs all three and collects the failures instead of stopping
at the first one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..directory.records import BankBranchRecord
from .checksum import AccountValidator
from .identify import AccountIdentifier
from .normalize import normalize, split_account


class AccountIssue(str, Enum):
    FORMAT = "format"
    UNKNOWN_BANK = "unknown_bank"
    CHECKSUM = "checksum"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    AccountIssue.FORMAT: "Bank account number format not accepted.",
    AccountIssue.UNKNOWN_BANK: "Invalid bank account: bank identity.",
    AccountIssue.CHECKSUM: "Invalid bank account: checksum failed.",
}


@dataclass
class AccountCheck:
    raw: str
    canonical: Optional[str] = None
    bank: Optional[BankBranchRecord] = None
    issues: List[AccountIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def messages(self) -> List[str]:
        return [i.message for i in self.issues]


def check_account(
    raw: str,
    identifier: AccountIdentifier,
    validator: Optional[AccountValidator] = None,
    delimiter: str = "-",
) -> AccountCheck:
    """Run format, identity and checksum checks on ``raw`` and report all failures."""
    validator = validator or AccountValidator()
    result = AccountCheck(raw=raw, canonical=normalize(raw, delimiter))

    if result.canonical is None:
        result.issues.append(AccountIssue.FORMAT)

    result.bank = identifier.identify(raw)
    if result.bank is None:
        result.issues.append(AccountIssue.UNKNOWN_BANK)

    parts = split_account(raw)
    if parts is None or not validator.validate(*parts):
        result.issues.append(AccountIssue.CHECKSUM)

    return result


# letters, digits, space, dash, slash; at most 12 characters
_REFERENCE_FIELD = re.compile(r"[a-zA-Z0-9\- /]{0,12}")


def validate_reference_field(value) -> bool:
    """
    Check a payment particulars/code/reference field.

    Banks technically allow a few more symbols, but this conservative set is
    accepted everywhere.
    """
    text = "" if value is None else str(value)
    return _REFERENCE_FIELD.fullmatch(text) is not None
