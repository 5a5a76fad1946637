"""
Exceptions raised by the persistence and ingestion glue.

The pure core (normalize / identify / checksum / parse_line) never raises on bad
input; it answers with ``None`` or ``False``. These errors exist for the layers
that *must* refuse to continue, e.g. saving an account that failed validation.
"""

from __future__ import annotations

from typing import Iterable, List


class NZBanksError(Exception):
    """Base class for every error raised by this package."""


class InvalidAccountError(NZBanksError):
    """
    An account number failed one or more checks.

    ``issues`` holds every failed check (see ``nzbanks.accounts.checks.AccountIssue``),
    not just the first one, so callers can show all reasons at once.
    """

    def __init__(self, raw: str, issues: Iterable) -> None:
        self.raw = raw
        self.issues: List = list(issues)
        reasons = " ".join(getattr(i, "message", str(i)) for i in self.issues)
        super().__init__(f"{raw!r}: {reasons}" if reasons else repr(raw))


class RegisterError(NZBanksError):
    """The register file could not be read."""

    def __init__(self, source: str, cause: str) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Could not read bank register '{source}': {cause}")
