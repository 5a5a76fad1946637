"""
Field-width layouts for fixed-width register records.

The Payments NZ Bank Branch Register is a spreadsheet masquerading as a text
file: every record is one line, and each "column" occupies an exact number of
characters. A layout is therefore nothing more than an ordered list of
(field name, width) pairs.

Layouts are declared statically here and passed explicitly to the parser; the
register layout is not inferred from any storage schema.

Field reference:
    https://www.paymentsnz.co.nz/documents/7/Bank-Branch-Definitions.docx
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class FieldWidth:
    """One column of a fixed-width record."""
    name: str
    width: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("field name must not be empty")
        # bool is an int subclass; reject it explicitly
        if isinstance(self.width, bool) or not isinstance(self.width, int) or self.width <= 0:
            raise ValueError(f"width of field '{self.name}' must be a positive integer, got {self.width!r}")


class FieldWidthSchema:
    """
    Ordered, immutable sequence of `FieldWidth` entries.

    Iterating yields ``(name, width)`` tuples so a schema can be used anywhere a
    plain list of pairs is accepted.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Iterable[FieldWidth]) -> None:
        fields = tuple(fields)
        seen = set()
        for f in fields:
            if f.name in seen:
                raise ValueError(f"duplicate field name '{f.name}'")
            seen.add(f.name)
        self._fields: Tuple[FieldWidth, ...] = fields

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, int]]) -> "FieldWidthSchema":
        return cls(FieldWidth(name, width) for name, width in pairs)

    @property
    def fields(self) -> Tuple[FieldWidth, ...]:
        return self._fields

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self._fields)

    @property
    def total_width(self) -> int:
        """Characters consumed by one full record."""
        return sum(f.width for f in self._fields)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        for f in self._fields:
            yield f.name, f.width

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldWidthSchema):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self._fields)

    def __repr__(self) -> str:
        return f"FieldWidthSchema({list(self)!r})"


# ---- Payments NZ Bank Branch Register --------------------------------------------------

BANK_REGISTER_SCHEMA = FieldWidthSchema.from_pairs([
    ("bank_number", 2),
    ("branch_number", 4),
    ("national_clearing_code", 6),  # bank + branch; required when bic_plus_indicator is Y
    ("bic", 11),                    # 8 or 11 character SWIFT BIC, otherwise blank
    ("bank_name", 70),
    ("branch_information", 70),
    ("city", 70),
    ("physical_address1", 35),
    ("physical_address2", 35),
    ("physical_address3", 35),
    ("physical_address4", 35),
    ("post_code", 15),
    ("location", 90),               # not used
    ("country_name", 70),
    ("pob_number", 35),
    ("pob_location1", 20),
    ("pob_location2", 35),
    ("pob_location3", 35),
    ("pob_post_code", 15),
    ("pob_country", 70),
    ("std", 4),                     # area code
    ("phone", 14),
    ("fax", 14),
    ("retail", 1),                  # R = retail branch; no longer in use
    ("bic_plus_indicator", 1),      # Y = include on BIC Plus file
    ("latest_status", 1),           # A = added, M = modified, U = unchanged, C = closed
])
