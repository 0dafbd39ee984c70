"""Tests for fixed-point amount validation."""

import pytest

from tradecore.amounts import (
    MAX_AMOUNT,
    format_ledger_amount,
    parse_amount,
    to_chain_scale,
    to_ledger_scale,
    validate_amount,
)
from tradecore.constants import LEDGER_SCALE, MAX_CHAIN_AMOUNT, MIN_LEDGER_AMOUNT
from tradecore.errors import InvalidAmount, NotAGranularityMultiple


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize("raw", ["", "abc", "1,5", "0x10", "ten"])
    def test_unparseable_is_invalid(self, raw):
        """Non-decimal strings raise InvalidAmount."""
        with pytest.raises(InvalidAmount):
            parse_amount(raw)

    @pytest.mark.parametrize("raw", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_is_invalid(self, raw):
        """NaN and infinities raise InvalidAmount."""
        with pytest.raises(InvalidAmount):
            parse_amount(raw)

    def test_negative_is_invalid(self):
        """Negative amounts raise InvalidAmount."""
        with pytest.raises(InvalidAmount):
            parse_amount("-10")

    def test_too_many_decimals_is_invalid(self):
        """More than 18 fractional digits cannot be expressed on chain."""
        with pytest.raises(InvalidAmount):
            parse_amount("10." + "1" * 19)

    def test_surrounding_whitespace_is_ignored(self):
        """Leading and trailing spaces are stripped."""
        assert parse_amount(" 12.5 ") == parse_amount("12.5")

    @pytest.mark.parametrize("raw", ["1e1000000", "1e80", "1e60"])
    def test_too_large_is_invalid(self, raw):
        """Amounts whose chain form exceeds a uint256 raise InvalidAmount."""
        with pytest.raises(InvalidAmount):
            parse_amount(raw)

    def test_largest_uint256_amount_accepted(self):
        """The uint256 maximum at chain scale is still a valid amount."""
        assert to_chain_scale(MAX_AMOUNT) == MAX_CHAIN_AMOUNT
        assert parse_amount(str(MAX_AMOUNT)) == MAX_AMOUNT


class TestScaling:
    """Tests for the two fixed-point scales."""

    def test_ledger_scale(self):
        """10 becomes 10 * 10^10 ledger units."""
        assert to_ledger_scale(parse_amount("10")) == 100_000_000_000

    def test_ledger_scale_rounds_half_even(self):
        """Sub-unit digits are rounded, half to even."""
        assert to_ledger_scale(parse_amount("10.00000000005")) == 100_000_000_000
        assert to_ledger_scale(parse_amount("10.00000000015")) == 100_000_000_002

    def test_chain_scale_matches_zero_append_for_integers(self):
        """For integer amounts the chain leg equals appending 18 zeros."""
        for raw in ["10", "25", "1000000"]:
            assert to_chain_scale(parse_amount(raw)) == int(raw + "000000000000000000")

    def test_chain_scale_fractional_is_exact(self):
        """Fractional amounts shift exactly, without float loss."""
        assert to_chain_scale(parse_amount("10.123456789012345678")) == 10123456789012345678


class TestValidateAmount:
    """Tests for validate_amount."""

    def test_minimum_amount_accepted(self):
        """Exactly 10 units meets the floor."""
        amount = validate_amount("10")
        assert amount.ledger == MIN_LEDGER_AMOUNT
        assert amount.chain == 10 * 10**18
        assert amount.raw == "10"

    @pytest.mark.parametrize("raw", ["0", "1", "9.99", "9.999999999"])
    def test_below_minimum_is_invalid(self, raw):
        """Amounts scaling below 10^11 raise InvalidAmount."""
        with pytest.raises(InvalidAmount):
            validate_amount(raw)

    def test_granularity_violation(self):
        """A ledger amount not divisible by 10 raises NotAGranularityMultiple."""
        with pytest.raises(NotAGranularityMultiple):
            validate_amount("10.0000000001")

    def test_floor_checked_before_granularity(self):
        """Small amounts that also break granularity report InvalidAmount."""
        with pytest.raises(InvalidAmount):
            validate_amount("0.0000000001")

    def test_huge_exponent_is_invalid(self):
        """A huge exponent is rejected before scaling instead of overflowing."""
        with pytest.raises(InvalidAmount):
            validate_amount("1e1000000")

    def test_fractional_amount_accepted(self):
        """Fractional amounts on the granularity grid pass."""
        amount = validate_amount("12.5")
        assert amount.ledger == 125 * LEDGER_SCALE // 10
        assert amount.chain == 125 * 10**17


class TestFormatLedgerAmount:
    """Tests for format_ledger_amount."""

    def test_four_decimals(self):
        """Values print with exactly 4 fractional digits."""
        assert format_ledger_amount(100_000_000_000) == "10.0000"
        assert format_ledger_amount(500_000_000_000) == "50.0000"

    def test_small_value(self):
        """Sub-display precision rounds in the printed form."""
        assert format_ledger_amount(1_234_567_890) == "0.1235"
