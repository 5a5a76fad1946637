"""Account number normalization, identification and validation."""

from .checks import AccountCheck, AccountIssue, check_account, validate_reference_field
from .checksum import AccountValidator, get_checksum, register_checksum
from .currency import cents_to_dollars, dollars_to_cents
from .identify import AccountIdentifier
from .normalize import AccountNumber, normalize, split_account

__all__ = [
    "AccountCheck",
    "AccountIdentifier",
    "AccountIssue",
    "AccountNumber",
    "AccountValidator",
    "cents_to_dollars",
    "check_account",
    "dollars_to_cents",
    "get_checksum",
    "normalize",
    "register_checksum",
    "split_account",
    "validate_reference_field",
]
