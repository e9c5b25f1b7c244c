"""
Launch preview tests: raw form text in, submit guard and figures out.
"""

import pytest

from fairmint.core.economics import ErrorKind, U64_MAX, build_preview, normalize_params

from conftest import tokens


def preview_with(default_raw, **overrides):
    raw = dict(default_raw)
    raw.update(overrides)
    return build_preview(raw)


class TestScenarios:

    def test_defaults_can_submit(self, default_raw):
        preview = build_preview(default_raw)
        assert preview.can_submit
        assert preview.field_errors == []
        assert preview.params.incomplete == []
        assert preview.config.initial_mint_size == tokens(10)
        assert preview.config.fee_rate_base_units == 10_000_000
        assert preview.metrics.total_supply == tokens(1_000)

    def test_liquidity_ratio_too_high(self, default_raw):
        preview = preview_with(default_raw, liquidity_tokens_ratio_percent="60")
        assert not preview.can_submit
        assert preview.validation.kind == ErrorKind.INVALID_LIQUIDITY_TOKENS_RATIO

    def test_target_below_ten_times_mint_size(self, default_raw):
        preview = preview_with(
            default_raw, initial_mint_size="10000", initial_target_mint_size_per_epoch="1000",
        )
        assert preview.validation.kind == ErrorKind.INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL

    def test_reduce_ratio_of_100(self, default_raw):
        preview = preview_with(default_raw, reduce_ratio_percent="100")
        assert preview.validation.kind == ErrorKind.INVALID_REDUCE_RATIO
        # still previewed, an invalid launch is shown not hidden
        assert preview.estimates.max_supply is None
        assert len(preview.schedule) == 1

    def test_camel_case_form_names(self):
        preview = build_preview({
            "targetEras": "4", "epochesPerEra": "250", "targetSecondsPerEpoch": "10000",
            "reduceRatio": "75", "initialMintSize": "1000",
            "initialTargetMintSizePerEpoch": "1000000000", "feeRate": "0.01",
            "liquidityTokensRatio": "20",
        })
        assert preview.can_submit
        assert preview.metrics.total_duration_seconds == 4 * 250 * 10_000
        assert preview.schedule.target_mint_sizes() == [
            tokens(1_000_000_000), tokens(750_000_000), tokens(562_500_000), tokens(421_875_000),
        ]


class TestFieldErrors:

    def test_overflow_takes_precedence(self, default_raw):
        preview = preview_with(
            default_raw, initial_mint_size="20000000000", liquidity_tokens_ratio_percent="60",
        )
        assert preview.validation.kind == ErrorKind.ARITHMETIC_OVERFLOW
        assert preview.validation.message == "Initial mint size is too large"
        assert preview.config.initial_mint_size == U64_MAX
        assert [f.name for f in preview.field_errors] == ["initial_mint_size"]

    def test_invalid_number_is_incomplete_not_fatal(self, default_raw):
        preview = preview_with(default_raw, fee_rate_base_units="1.2.3")
        [field] = preview.field_errors
        assert field.name == "fee_rate_base_units"
        assert field.error == ErrorKind.INVALID_NUMBER_FORMAT
        assert "fee_rate_base_units" in preview.params.incomplete
        assert preview.config.fee_rate_base_units == 0
        # a zero fee is allowed, so the launch itself is still valid
        assert preview.can_submit

    def test_invalid_mint_size_blocks_submit(self, default_raw):
        preview = preview_with(default_raw, initial_mint_size="1..0")
        assert preview.validation.kind == ErrorKind.INVALID_INITIAL_MINT_SIZE

    def test_empty_field_is_incomplete(self, default_raw):
        preview = preview_with(default_raw, epoches_per_era="")
        assert preview.field_errors == []
        assert preview.params.incomplete == ["epoches_per_era"]
        assert preview.validation.kind == ErrorKind.INVALID_EPOCHES_PER_ERA

    def test_missing_fields_are_empty(self):
        preview = build_preview({})
        assert len(preview.params.incomplete) == 8
        assert preview.validation.kind == ErrorKind.INVALID_LIQUIDITY_TOKENS_RATIO
        assert preview.metrics.total_supply == 0

    def test_decay_exhausted(self, default_raw):
        preview = preview_with(
            default_raw, target_eras="40", reduce_ratio_percent="50",
            initial_mint_size="0.000000001", initial_target_mint_size_per_epoch="0.00000001",
        )
        assert preview.validation.kind == ErrorKind.DECAY_EXHAUSTED


class TestMintSizesAsTyped:

    def test_ratio_checked_before_truncation(self, default_raw):
        # 1 and 10 base units pass the 10x rule; 0.0000000015 x 10 > 0.00000001 does not
        preview = preview_with(
            default_raw, initial_mint_size="0.0000000015", initial_target_mint_size_per_epoch="0.00000001",
        )
        assert preview.config.initial_mint_size == 1
        assert preview.config.initial_target_mint_size_per_epoch == 10
        assert preview.validation.kind == ErrorKind.INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL

    def test_extra_digits_that_keep_the_ratio(self, default_raw):
        preview = preview_with(
            default_raw, initial_mint_size="0.0000000015", initial_target_mint_size_per_epoch="0.000000015",
        )
        assert preview.can_submit

    def test_truncated_to_zero_base_units(self, default_raw):
        preview = preview_with(default_raw, initial_mint_size="0.0000000001")
        assert preview.validation.kind == ErrorKind.INVALID_INITIAL_MINT_SIZE

    def test_exact_sizes(self, default_raw):
        params = normalize_params(dict(
            default_raw, initial_mint_size="1.5", initial_target_mint_size_per_epoch="0.0000000001",
        ))
        sizes = params.exact_sizes()
        assert sizes.initial_mint_size == 15 * 10 ** 9
        assert sizes.initial_target_mint_size_per_epoch == 1

    def test_no_exact_sizes_for_unparsed_fields(self, default_raw):
        params = normalize_params(dict(default_raw, initial_mint_size="1.2.3"))
        assert params.exact_sizes() is None


class TestToDict:

    def test_structure(self, default_raw):
        data = build_preview(default_raw).to_dict()
        assert set(data) == {
            "validation", "field_errors", "incomplete", "config", "metrics", "estimates", "schedule",
        }
        assert data["validation"]["valid"] is True
        assert data["config"]["initial_mint_size"] == "10000000000"
        assert data["metrics"]["total_supply"] == {"base_units": "1000000000000", "display": "1000"}
        assert data["metrics"]["total_fee_revenue"]["display"] == "0.1"
        assert data["metrics"]["total_duration"] == "0h"
        assert data["schedule"][0]["era_supply"]["display"] == "1000"
        assert data["estimates"]["max_supply"] == {"base_units": "4000000000000", "display": "4000"}
        assert data["estimates"]["min_total_fee"]["base_units"] == "1100000000"

    def test_without_schedule(self, default_raw):
        assert "schedule" not in build_preview(default_raw).to_dict(include_schedule=False)

    @pytest.mark.parametrize("ratio", ["0", "51", "60"])
    def test_invalid_carries_program_error_code(self, default_raw, ratio):
        data = preview_with(default_raw, liquidity_tokens_ratio_percent=ratio).to_dict()
        assert data["validation"]["error"] == "invalid_liquidity_tokens_ratio"
        assert data["validation"]["program_error_code"] == 6033
