"""Bank branch records and the prefix directory.

The SQLAlchemy-backed store lives in ``nzbanks.directory.database`` and is not
imported here.
"""

from .memory import BankDirectory
from .records import BankBranchRecord

__all__ = [
    "BankBranchRecord",
    "BankDirectory",
]
