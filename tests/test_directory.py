import threading

import pytest
from pydantic import ValidationError

from nzbanks.directory.memory import BankDirectory
from nzbanks.directory.records import BankBranchRecord


def _record(prefix: str, **extra) -> BankBranchRecord:
    return BankBranchRecord(bank_number=prefix[:2], branch_number=prefix[2:], **extra)


class TestBankBranchRecord:
    def test_prefix(self, anz_branch):
        assert anz_branch.prefix == "010902"

    @pytest.mark.parametrize("bank, branch", [("1", "0902"), ("01", "902"), ("AB", "0001"), ("01", "ACME")])
    def test_requires_digit_codes(self, bank, branch):
        with pytest.raises(ValidationError):
            BankBranchRecord(bank_number=bank, branch_number=branch)

    def test_is_immutable(self, anz_branch):
        with pytest.raises(ValidationError):
            anz_branch.bank_name = "Other"

    def test_from_fields_ignores_unknown_keys(self):
        record = BankBranchRecord.from_fields({"bank_number": "02", "branch_number": "0100", "Surprise": "x"})
        assert record.prefix == "020100"
        assert record.city == ""


class TestBankDirectory:
    def test_lookup_exact_prefix(self, anz_branch):
        directory = BankDirectory([anz_branch])
        assert directory.lookup("010902") is anz_branch
        assert directory.lookup("01090") is None
        assert directory.lookup("0109020") is None
        assert directory.lookup("999999") is None

    def test_insert_and_contains(self, anz_branch):
        directory = BankDirectory()
        assert not directory.contains("010902")
        directory.insert(anz_branch)
        assert directory.contains("010902")
        assert "010902" in directory
        assert 10902 not in directory
        assert len(directory) == 1

    def test_insert_replaces_same_prefix(self, anz_branch):
        directory = BankDirectory([anz_branch])
        newer = _record("010902", bank_name="Renamed")
        directory.insert(newer)
        assert len(directory) == 1
        assert directory.lookup("010902") is newer

    def test_snapshots(self):
        directory = BankDirectory([_record("010001"), _record("020001")])
        prefixes = directory.prefixes()
        directory.insert(_record("030001"))
        assert sorted(prefixes) == ["010001", "020001"]
        assert len(directory.records()) == 3

    def test_concurrent_insert_and_lookup(self):
        directory = BankDirectory()
        errors = []

        def writer(bank: int):
            for branch in range(200):
                directory.insert(_record(f"{bank:02d}{branch:04d}"))

        def reader():
            for _ in range(500):
                for prefix in directory.prefixes():
                    record = directory.lookup(prefix)
                    if record is None or record.prefix != prefix:
                        errors.append(prefix)

        threads = [threading.Thread(target=writer, args=(b,)) for b in range(1, 5)]
        threads += [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(directory) == 800
