import re

import pytest

from nzbanks.accounts.normalize import AccountNumber, normalize, split_account

CANONICAL = re.compile(r"^\d{2}-\d{4}-\d{8}-\d{4}$")


class TestNormalize:
    """Canonical rendering of loosely formatted account numbers."""

    def test_pads_every_group(self):
        assert normalize("1-1-1-1") == "01-0001-00000001-0001"

    @pytest.mark.parametrize("raw", [
        "12-3140-0171323-50",
        "12 3140 0171323 50",
        "12/3140/0171323/50",
        "12 - 3140 -- 0171323 / 050",
        "12.3140.0171323.50",
    ])
    def test_any_separator_run(self, raw):
        assert normalize(raw) == "12-3140-00171323-0050"

    @pytest.mark.parametrize("raw", ["12345", "", "no digits", "01-0001-1-1-1", "01-0001-1"])
    def test_rejects_wrong_group_count(self, raw):
        assert normalize(raw) is None

    @pytest.mark.parametrize("raw", [
        "01-0001-1-1-",
        "-01-0001-1-1",
        "  12-3140-0171323-50\n",
        "Account: 12.3140.0171323.50",
    ])
    def test_rejects_separator_at_either_end(self, raw):
        assert normalize(raw) is None
        assert split_account(raw) is None

    def test_custom_delimiter(self):
        assert normalize("1-1-1-1", delimiter=" ") == "01 0001 00000001 0001"
        assert normalize("1-1-1-1", delimiter="") == "010001000000010001"

    def test_oversized_group_is_kept(self):
        # permissive: longer groups are neither truncated nor rejected
        assert normalize("1-1-123456789-1") == "01-0001-123456789-0001"

    def test_canonical_shape(self):
        for raw in ["3-40-5-6", "12-3456-12345678-1234", "0-0-0-0"]:
            assert CANONICAL.match(normalize(raw))

    def test_idempotent(self):
        for raw in ["1-1-1-1", "12 3140 171323 50", "1-1-123456789-1"]:
            once = normalize(raw)
            assert normalize(once) == once

    def test_non_ascii_digits_are_separators(self):
        # Arabic-Indic digits are not account digits
        assert normalize("01-0001-١٢-1") is None

    def test_non_string_input(self):
        assert normalize(None) is None
        assert split_account(1234) is None


class TestAccountNumber:
    def test_parse_and_format(self):
        acc = AccountNumber.parse("1 902 68389 0")
        assert acc == AccountNumber("01", "0902", "00068389", "0000")
        assert acc.prefix == "010902"
        assert str(acc) == "01-0902-00068389-0000"
        assert acc.format("/") == "01/0902/00068389/0000"

    def test_parse_failure(self):
        assert AccountNumber.parse("01-0902") is None
