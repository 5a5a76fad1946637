"""
Split one fixed-width register line into named fields.
"""

from __future__ import annotations

from typing import Dict, Iterable, Tuple


def parse_line(line: str, schema: Iterable[Tuple[str, int]]) -> Dict[str, str]:
    """
    Consume ``line`` left to right, one schema entry at a time.

    Each entry takes the next ``width`` characters, trimmed of surrounding
    whitespace. A short line yields empty trailing fields; characters past the
    last entry are discarded. Never raises for any string input.

    Example:
        >>> parse_line("01ACME  tail", [("BankNumber", 2), ("BranchNumber", 4)])
        {'BankNumber': '01', 'BranchNumber': 'ACME'}
    """
    fields: Dict[str, str] = {}
    pos = 0
    for name, width in schema:
        # slicing past the end gives "", which is exactly the short-line behaviour
        fields[name] = line[pos : pos + width].strip()
        pos += width
    return fields
