"""
Field coercion tests: money must be whole currency units, quantities may be fractional.
"""

import pytest

from stitchflow.validation import ValidationError, to_amount, to_number, to_int


class TestToAmount:

    @pytest.mark.parametrize(
        "value,expected",
        [(450, 450), (450.0, 450), ("1,200", 1200), ("₹2500", 2500), (" 15000 ", 15000)],
    )
    def test_whole_amounts(self, value, expected):
        result = to_amount(value, "amount")
        assert result == expected
        assert isinstance(result, int)

    @pytest.mark.parametrize("value", [99.5, "10.25", "0.5"])
    def test_fractional_amounts_rejected(self, value):
        with pytest.raises(ValidationError, match="whole amount"):
            to_amount(value, "amount")

    @pytest.mark.parametrize("value", [True, -1, "abc", float("nan"), float("inf"), [10]])
    def test_invalid_amounts(self, value):
        with pytest.raises(ValidationError):
            to_amount(value, "amount")

    def test_default(self):
        assert to_amount(None, "amount", default=0) == 0
        with pytest.raises(ValidationError):
            to_amount("", "amount")


class TestToNumber:

    def test_fractions_kept(self):
        assert to_number("2.5", "stock") == 2.5
        assert to_number(12.5, "tax_rate") == 12.5
        assert to_number(8.0, "stock") == 8


class TestToInt:

    @pytest.mark.parametrize("value", [1.5, "2.0", "1e3", False])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError):
            to_int(value, "quantity")
