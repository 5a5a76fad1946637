from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---- Account number handling ----
class AccountsConfig(BaseModel):
    delimiter: str = "-"   # BB-BBBB-AAAAAAAA-SSSS
    checksum: str = "ird"  # name of a registered checksum strategy

    @field_validator("delimiter")
    @classmethod
    def _no_digits(cls, v: str) -> str:
        # a digit delimiter would merge into the groups on re-normalization
        if any(ch.isdigit() for ch in v):
            raise ValueError("delimiter must not contain digits")
        return v


# ---- Register ingestion ----
class RegisterConfig(BaseModel):
    encoding: str = "latin-1"  # the Payments NZ feed is not UTF-8 clean
    policy: Literal["insert_new", "overwrite"] = "insert_new"


# ---- Persistence ----
class DatabaseConfig(BaseModel):
    url: str = "sqlite:///./nzbanks.db"
    echo: bool = False


# ---- Root config ----
class NZBanksConfig(BaseModel):
    # "register" is a BaseModel attribute, so the section is only aliased to it
    model_config = ConfigDict(populate_by_name=True)

    accounts: AccountsConfig = Field(default_factory=AccountsConfig)
    bank_register: RegisterConfig = Field(default_factory=RegisterConfig, alias="register")
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)


# ---- Loader ----
def load_config(path: Optional[Path]) -> NZBanksConfig:
    if not path:
        return NZBanksConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return NZBanksConfig(**data)
