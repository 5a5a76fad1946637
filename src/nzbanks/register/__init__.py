"""Fixed-width bank register parsing and ingestion."""

from .ingest import IngestPolicy, LoadSummary, RegisterLoader, ingest, read_register
from .parser import parse_line
from .schema import BANK_REGISTER_SCHEMA, FieldWidth, FieldWidthSchema

__all__ = [
    "BANK_REGISTER_SCHEMA",
    "FieldWidth",
    "FieldWidthSchema",
    "IngestPolicy",
    "LoadSummary",
    "RegisterLoader",
    "ingest",
    "parse_line",
    "read_register",
]
