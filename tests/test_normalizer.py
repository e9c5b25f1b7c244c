"""
Parameter normalizer tests.

Raw form text -> base-unit integers, with errors returned as data at the
normalize_field boundary.
"""

import pytest

from fairmint.core.economics import (
    ArithmeticOverflow,
    ErrorKind,
    InvalidNumberFormat,
    U32_MAX,
    U64_MAX,
    format_base_units,
    normalize_field,
    normalize_params,
    parse_integer,
    parse_scaled,
)


class TestParseInteger:

    def test_plain_digits(self):
        assert parse_integer("250") == 250

    def test_strips_non_digits(self):
        # Integer fields drop everything that is not a digit, decimal points included
        assert parse_integer(" 1,000 ") == 1000
        assert parse_integer("10.5") == 105
        assert parse_integer("-7") == 7

    def test_empty_is_zero(self):
        assert parse_integer("") == 0
        assert parse_integer("abc") == 0
        assert parse_integer(None) == 0

    def test_overflow_carries_saturated_value(self):
        with pytest.raises(ArithmeticOverflow) as exc:
            parse_integer(str(U32_MAX + 1), max_value=U32_MAX)
        assert exc.value.saturated_value == U32_MAX
        assert exc.value.kind == ErrorKind.ARITHMETIC_OVERFLOW

    def test_at_width_limit(self):
        assert parse_integer(str(U64_MAX)) == U64_MAX

    def test_very_long_input_overflows(self):
        with pytest.raises(ArithmeticOverflow):
            parse_integer("9" * 10_000)


class TestParseScaled:

    @pytest.mark.parametrize("raw,expected", [
        ("1", 1_000_000_000),
        ("1.5", 1_500_000_000),
        ("0.01", 10_000_000),
        (".5", 500_000_000),
        ("5.", 5_000_000_000),
        ("0.000000001", 1),
        ("123456.789012345", 123_456_789_012_345),
    ])
    def test_exact_scaling(self, raw, expected):
        assert parse_scaled(raw) == expected

    def test_truncates_beyond_nine_decimals(self):
        assert parse_scaled("0.0000000019") == 1
        assert parse_scaled("1.9999999999") == 1_999_999_999

    def test_no_float_drift(self):
        # 0.1 + 0.2 style values stay exact
        assert parse_scaled("0.3") == 300_000_000
        assert parse_scaled("4.35") == 4_350_000_000

    def test_strips_foreign_characters(self):
        assert parse_scaled("1,000.5 SOL") == 1_000_500_000_000

    def test_two_decimal_points(self):
        with pytest.raises(InvalidNumberFormat):
            parse_scaled("1.2.3")

    def test_empty_and_bare_point_are_zero(self):
        assert parse_scaled("") == 0
        assert parse_scaled(".") == 0
        assert parse_scaled("abc") == 0

    def test_overflow_u64(self):
        # 18446744073.709551615 tokens is exactly U64_MAX base units
        assert parse_scaled("18446744073.709551615") == U64_MAX
        with pytest.raises(ArithmeticOverflow) as exc:
            parse_scaled("18446744073.709551616")
        assert exc.value.saturated_value == U64_MAX
        with pytest.raises(ArithmeticOverflow):
            parse_scaled("1" + "0" * 40)

    def test_custom_decimals(self):
        assert parse_scaled("1.25", decimals=2) == 125
        assert parse_scaled("7.9", decimals=0) == 7

    def test_unbounded(self):
        assert parse_scaled("1" + "0" * 40, max_value=None) == 10 ** 49
        assert parse_scaled("0.0000000015", decimals=10, max_value=None) == 15


class TestScaleRoundTrip:

    @pytest.mark.parametrize("raw,formatted", [
        ("1", "1"),
        ("1.5", "1.5"),
        ("1.50", "1.5"),
        ("0.000000001", "0.000000001"),
        ("100.000000000", "100"),
        ("18446744073.709551615", "18446744073.709551615"),
        ("0012.340", "12.34"),
    ])
    def test_format_inverts_normalize(self, raw, formatted):
        assert format_base_units(parse_scaled(raw)) == formatted


class TestNormalizeField:

    def test_valid_field(self):
        field = normalize_field("initial_mint_size", "10")
        assert field.value == 10_000_000_000
        assert field.text == "10000000000"
        assert field.error is None
        assert not field.incomplete

    def test_form_name_is_accepted(self):
        assert normalize_field("initialMintSize", "10").name == "initial_mint_size"

    def test_empty_is_incomplete_not_error(self):
        field = normalize_field("target_eras", "")
        assert field.value == 0
        assert field.incomplete
        assert field.error is None

    def test_explicit_zero_is_not_incomplete(self):
        field = normalize_field("target_eras", "0")
        assert field.value == 0
        assert not field.incomplete

    def test_invalid_format_becomes_incomplete(self):
        field = normalize_field("fee_rate_base_units", "0.1.2")
        assert field.value == 0
        assert field.incomplete
        assert field.error == ErrorKind.INVALID_NUMBER_FORMAT
        assert "Fee rate" in field.message

    def test_overflow_saturates(self):
        field = normalize_field("target_eras", "99999999999")
        assert field.value == U32_MAX
        assert field.error == ErrorKind.ARITHMETIC_OVERFLOW
        assert not field.incomplete


class TestNormalizeParams:

    def test_builds_config_from_defaults(self, default_raw):
        params = normalize_params(default_raw)
        config = params.config
        assert config.target_eras == 1
        assert config.epoches_per_era == 10
        assert config.initial_mint_size == 10_000_000_000
        assert config.initial_target_mint_size_per_epoch == 100_000_000_000
        assert config.fee_rate_base_units == 10_000_000
        assert config.liquidity_tokens_ratio_percent == 10
        assert params.errors == []
        assert params.incomplete == []

    def test_camel_case_keys(self):
        params = normalize_params({
            "targetEras": "4",
            "reduceRatio": "80",
            "feeRate": "0.5",
            "liquidityTokensRatioPercent": "20",
        })
        assert params.config.target_eras == 4
        assert params.config.reduce_ratio_percent == 80
        assert params.config.fee_rate_base_units == 500_000_000
        assert params.config.liquidity_tokens_ratio_percent == 20

    def test_missing_fields_are_incomplete(self):
        params = normalize_params({"targetEras": "2"})
        assert "epoches_per_era" in params.incomplete
        assert "target_eras" not in params.incomplete
        assert params.config.epoches_per_era == 0

    def test_unknown_keys_ignored(self, default_raw):
        default_raw["symbol"] = "MEME"
        assert normalize_params(default_raw).errors == []

    def test_first_error(self, default_raw):
        default_raw["initial_mint_size"] = "99999999999999"
        params = normalize_params(default_raw)
        overflowed = params.first_error(ErrorKind.ARITHMETIC_OVERFLOW)
        assert overflowed.name == "initial_mint_size"
        assert params.first_error(ErrorKind.INVALID_NUMBER_FORMAT) is None
