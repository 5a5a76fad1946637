import pytest

from nzbanks.directory.records import BankBranchRecord
from nzbanks.register.schema import BANK_REGISTER_SCHEMA

HEADER = "Bank_Number Branch_Number National_Clearing_Code BIC Bank_Name Branch_Information City"


def register_line(**values) -> str:
    """Lay out one register record at the published field widths."""
    return "".join(str(values.get(name, "")).ljust(width)[:width] for name, width in BANK_REGISTER_SCHEMA)


@pytest.fixture
def anz_branch():
    return BankBranchRecord(
        bank_number="01",
        branch_number="0902",
        bank_name="ANZ Bank New Zealand",
        branch_information="Auckland Central",
        city="Auckland",
        latest_status="U",
    )


@pytest.fixture
def register_text():
    lines = [
        HEADER,
        register_line(bank_number="01", branch_number="0001", bank_name="ANZ Bank New Zealand",
                      branch_information="Te Aro", city="Wellington", latest_status="U"),
        register_line(bank_number="01", branch_number="0902", bank_name="ANZ Bank New Zealand",
                      branch_information="Auckland Central", city="Auckland", latest_status="U"),
        register_line(bank_number="08", branch_number="6523", bank_name="National Australia Bank",
                      branch_information="Wellington", city="Wellington", latest_status="A"),
    ]
    return "\n".join(lines) + "\n"
