from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


class BankBranchRecord(BaseModel):
    """
    One bank branch as published in the Payments NZ register.

    Identity is the six digit prefix (bank number + branch number). This is *not*
    the same as ``national_clearing_code``, which may be blank.

    Records are immutable once built; register values are kept verbatim
    (already trimmed by the parser).
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    bank_number: str = Field(pattern=r"^[0-9]{2}$")
    branch_number: str = Field(pattern=r"^[0-9]{4}$")
    national_clearing_code: str = ""
    bic: str = ""
    bank_name: str = ""
    branch_information: str = ""
    city: str = ""
    physical_address1: str = ""
    physical_address2: str = ""
    physical_address3: str = ""
    physical_address4: str = ""
    post_code: str = ""
    location: str = ""
    country_name: str = ""
    pob_number: str = ""
    pob_location1: str = ""
    pob_location2: str = ""
    pob_location3: str = ""
    pob_post_code: str = ""
    pob_country: str = ""
    std: str = ""
    phone: str = ""
    fax: str = ""
    retail: str = ""
    bic_plus_indicator: str = ""
    latest_status: str = ""

    @property
    def prefix(self) -> str:
        """Six digit join key between an account number and its branch."""
        return self.bank_number + self.branch_number

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "BankBranchRecord":
        """Build from parsed register fields; unknown keys are ignored."""
        return cls.model_validate(dict(fields))
