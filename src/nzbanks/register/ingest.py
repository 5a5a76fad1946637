"""
Register ingestion: from raw text to directory entries.

Two layers live here:

1) ``ingest`` — a pure generator. Splits the register text into lines, drops the
   header, and parses each remaining line into named fields keyed by its prefix.
   It knows nothing about directories or duplicates.

2) ``RegisterLoader`` — the glue that feeds ``ingest`` output into a directory.
   It owns the storage policy (insert new prefixes only, or overwrite) and the
   "skip the bad line, keep going" rule for records that fail validation.

A single register file holds roughly 3000 records and is refreshed monthly, so
a load is one batch pass with no partial-failure recovery beyond skipping lines.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple

from pydantic import ValidationError

from ..directory.records import BankBranchRecord
from ..errors import RegisterError
from .parser import parse_line
from .schema import BANK_REGISTER_SCHEMA

logger = logging.getLogger(__name__)

# only \n and \r\n end a record; \x85, \x0c and friends are record data
_LINE_BREAK = re.compile(r"\r?\n")


def ingest(
    text: str,
    schema: Iterable[Tuple[str, int]] = BANK_REGISTER_SCHEMA,
    bank_field: str = "bank_number",
    branch_field: str = "branch_number",
) -> Iterator[Tuple[str, Dict[str, str]]]:
    """
    Yield ``(prefix, fields)`` for every data line of a register text blob.

    The first line is a header and is always discarded; blank lines are skipped.
    ``prefix`` is ``fields[bank_field] + fields[branch_field]`` (missing fields
    count as empty). Pairs come out in input order. Calling again on the same
    text gives the same sequence.
    """
    # materialize once; a one-shot iterator would make the generator non-restartable
    schema = list(schema)
    lines = _LINE_BREAK.split(text)
    for line in lines[1:]:
        if not line.strip():
            continue
        fields = parse_line(line, schema)
        prefix = fields.get(bank_field, "") + fields.get(branch_field, "")
        yield prefix, fields


def read_register(path: Path, encoding: str = "latin-1") -> str:
    """Read a register file from disk."""
    try:
        return Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise RegisterError(str(path), str(e)) from e


class IngestPolicy(str, Enum):
    """What to do when a register prefix is already in the directory."""
    INSERT_NEW = "insert_new"  # keep the stored record untouched
    OVERWRITE = "overwrite"    # replace it with the register's version


@dataclass
class LoadSummary:
    written: int = 0
    skipped: int = 0  # prefix already present under INSERT_NEW
    rejected: List[str] = field(default_factory=list)  # prefixes of lines that failed validation

    @property
    def total(self) -> int:
        return self.written + self.skipped + len(self.rejected)


class RegisterLoader:
    """
    Load register text into any directory exposing ``contains`` and ``insert``
    (``BankDirectory`` or ``SqlBankDirectory``).
    """

    def __init__(self, directory, policy: IngestPolicy = IngestPolicy.INSERT_NEW) -> None:
        self.directory = directory
        self.policy = IngestPolicy(policy)

    def load(self, text: str, schema: Iterable[Tuple[str, int]] = BANK_REGISTER_SCHEMA) -> LoadSummary:
        summary = LoadSummary()
        for prefix, fields in ingest(text, schema):
            try:
                record = BankBranchRecord.from_fields(fields)
            except ValidationError as e:
                logger.warning("Rejected register line for prefix %r: %s", prefix, e.errors()[0]["msg"])
                summary.rejected.append(prefix)
                continue

            if self.policy is IngestPolicy.INSERT_NEW and self.directory.contains(record.prefix):
                summary.skipped += 1
                continue

            self.directory.insert(record)
            summary.written += 1

        logger.info("%d records written", summary.written)
        return summary
