"""
Database models and stores for bank branches and bank accounts.

This module defines the persistence side using SQLAlchemy:
- ``Bank``: one row per register branch, unique on (bank_number, branch_number)
- ``BankAccount``: canonical account numbers, linked to the identifying branch
- ``SqlBankDirectory``: the directory contract (lookup/insert/contains) over ``banks``
- ``AccountStore``: find-or-create for account numbers, refusing invalid ones

Validation and identification stay in the pure ``accounts`` package; this layer
only calls them and then writes.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
    func,
    inspect,
    select,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, selectinload, sessionmaker

from ..accounts.checks import AccountIssue, check_account
from ..accounts.checksum import AccountValidator
from ..accounts.identify import AccountIdentifier
from ..accounts.normalize import normalize
from ..errors import InvalidAccountError
from ..register.schema import BANK_REGISTER_SCHEMA
from .records import BankBranchRecord

_FIELDS = BANK_REGISTER_SCHEMA.names


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class Bank(Base):
    """
    A bank branch from the Payments NZ register.

    Column sizes match the register's field widths.
    """
    __tablename__ = "banks"
    __table_args__ = (UniqueConstraint("bank_number", "branch_number", name="uq_bank_prefix"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    bank_number: Mapped[str] = mapped_column(String(2), nullable=False, index=True)
    branch_number: Mapped[str] = mapped_column(String(4), nullable=False, index=True)
    national_clearing_code: Mapped[str] = mapped_column(String(6), default="")
    bic: Mapped[str] = mapped_column(String(11), default="")
    bank_name: Mapped[str] = mapped_column(String(70), default="")
    branch_information: Mapped[str] = mapped_column(String(70), default="")
    city: Mapped[str] = mapped_column(String(70), default="")
    physical_address1: Mapped[str] = mapped_column(String(35), default="")
    physical_address2: Mapped[str] = mapped_column(String(35), default="")
    physical_address3: Mapped[str] = mapped_column(String(35), default="")
    physical_address4: Mapped[str] = mapped_column(String(35), default="")
    post_code: Mapped[str] = mapped_column(String(15), default="")
    location: Mapped[str] = mapped_column(String(90), default="")
    country_name: Mapped[str] = mapped_column(String(70), default="")
    pob_number: Mapped[str] = mapped_column(String(35), default="")
    pob_location1: Mapped[str] = mapped_column(String(20), default="")
    pob_location2: Mapped[str] = mapped_column(String(35), default="")
    pob_location3: Mapped[str] = mapped_column(String(35), default="")
    pob_post_code: Mapped[str] = mapped_column(String(15), default="")
    pob_country: Mapped[str] = mapped_column(String(70), default="")
    std: Mapped[str] = mapped_column(String(4), default="")
    phone: Mapped[str] = mapped_column(String(14), default="")
    fax: Mapped[str] = mapped_column(String(14), default="")
    retail: Mapped[str] = mapped_column(String(1), default="")
    bic_plus_indicator: Mapped[str] = mapped_column(String(1), default="")
    latest_status: Mapped[str] = mapped_column(String(1), default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    accounts: Mapped[List["BankAccount"]] = relationship(back_populates="bank")

    def __repr__(self) -> str:
        return f"<Bank(prefix='{self.prefix}', name='{self.bank_name}')>"

    @property
    def prefix(self) -> str:
        return self.bank_number + self.branch_number

    def to_record(self) -> BankBranchRecord:
        return BankBranchRecord.model_validate({name: getattr(self, name) or "" for name in _FIELDS})

    def update_from(self, record: BankBranchRecord) -> None:
        for name in _FIELDS:
            setattr(self, name, getattr(record, name))


class BankAccount(Base):
    """
    A New Zealand bank account number in canonical form (BB-BBBB-AAAAAAAA-SSSS).
    """
    __tablename__ = "bank_accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_number: Mapped[str] = mapped_column(String(21), unique=True, nullable=False, index=True)
    bank_id: Mapped[Optional[int]] = mapped_column(ForeignKey("banks.id"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    bank: Mapped[Optional[Bank]] = relationship(back_populates="accounts")

    def __repr__(self) -> str:
        return f"<BankAccount(account_number='{self.account_number}')>"


# Database configuration and session management
def create_database_engine(database_url: str, echo: bool = False):
    """Create SQLAlchemy engine with proper configuration."""
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_factory(engine):
    """Create session factory for database operations."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_database(engine):
    """Initialize database tables."""
    Base.metadata.create_all(bind=engine)


def database_ready(engine) -> bool:
    """
    True if the tables exist.

    A SQLite file that is not there yet counts as not ready; it is not created.
    """
    url = engine.url
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        if not Path(url.database).exists():
            return False
    return inspect(engine).has_table(Bank.__tablename__)


def attach_bank(account: BankAccount, bank: Optional[Bank]) -> BankAccount:
    """
    Link an account row to the branch that identified it.

    Explicit second step after identification, done by the store right before
    writing. Passing None clears the link.
    """
    account.bank = bank
    return account


class SqlBankDirectory:
    """
    Bank directory backed by the ``banks`` table.

    Same contract as ``BankDirectory``: ``lookup`` returns immutable
    ``BankBranchRecord`` values, never live ORM rows. Each call uses its own
    session; ``insert`` commits atomically, so readers see whole rows only.
    """

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _split(prefix: str):
        return prefix[:2], prefix[2:]

    def row_for(self, session, prefix: str) -> Optional[Bank]:
        """The ``Bank`` row for ``prefix`` inside an existing session."""
        if not isinstance(prefix, str) or len(prefix) != 6:
            return None
        bank_number, branch_number = self._split(prefix)
        stmt = select(Bank).where(Bank.bank_number == bank_number, Bank.branch_number == branch_number)
        return session.scalars(stmt).first()

    def lookup(self, prefix: str) -> Optional[BankBranchRecord]:
        with self.session_factory() as session:
            row = self.row_for(session, prefix)
            return row.to_record() if row else None

    def contains(self, prefix: str) -> bool:
        with self.session_factory() as session:
            return self.row_for(session, prefix) is not None

    def insert(self, record: BankBranchRecord) -> None:
        """Write ``record``; an existing row with the same prefix is updated in place."""
        with self.session_factory() as session, session.begin():
            row = self.row_for(session, record.prefix)
            if row is None:
                row = Bank()
                session.add(row)
            row.update_from(record)

    def prefixes(self) -> List[str]:
        with self.session_factory() as session:
            stmt = select(Bank).order_by(Bank.bank_number, Bank.branch_number)
            return [row.prefix for row in session.scalars(stmt)]

    def __contains__(self, prefix: object) -> bool:
        return isinstance(prefix, str) and self.contains(prefix)

    def __len__(self) -> int:
        with self.session_factory() as session:
            return session.scalar(select(func.count()).select_from(Bank)) or 0


class AccountStore:
    """
    Stored bank accounts.

    Accounts are found by their canonical string. New accounts must pass all
    checks (format, bank identity, checksum) before they are written; every
    failing check is reported in the raised ``InvalidAccountError``.

    Accounts are not owned by anyone: several people may share one (joint
    accounts), so the same number is only ever stored once.
    """

    def __init__(
        self,
        session_factory,
        directory: Optional[SqlBankDirectory] = None,
        validator: Optional[AccountValidator] = None,
    ) -> None:
        self.session_factory = session_factory
        self.directory = directory or SqlBankDirectory(session_factory)
        self.identifier = AccountIdentifier(self.directory)
        self.validator = validator or AccountValidator()

    def find(self, raw: str) -> Optional[BankAccount]:
        """The stored account for ``raw``, with its ``bank`` already loaded."""
        canonical = normalize(raw)
        if canonical is None:
            return None
        with self.session_factory() as session:
            stmt = (
                select(BankAccount)
                .options(selectinload(BankAccount.bank))
                .where(BankAccount.account_number == canonical)
            )
            return session.scalars(stmt).first()

    def find_or_make(self, raw: str) -> BankAccount:
        """Return the stored account for ``raw``, creating it if needed."""
        existing = self.find(raw)
        if existing is not None:
            return existing

        result = check_account(raw, self.identifier, self.validator)
        if not result.ok:
            raise InvalidAccountError(raw, result.issues)

        with self.session_factory() as session, session.begin():
            account = BankAccount(account_number=result.canonical)
            bank = self.directory.row_for(session, result.bank.prefix)
            if bank is None:
                # branch disappeared between identification and write
                raise InvalidAccountError(raw, [AccountIssue.UNKNOWN_BANK])
            attach_bank(account, bank)
            session.add(account)
        return account
