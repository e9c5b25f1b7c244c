"""
Launch preview - the whole engine behind one call.

    raw form values -> normalize -> generate -> validate + report

Validation, metrics and estimates all come from the same schedule, so the
figures shown next to the form can never disagree with the submit guard.
Nothing raised inside the engine escapes build_preview.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from fairmint.core.economics.errors import ErrorKind
from fairmint.core.economics.metrics import (
    AggregateMetrics,
    LaunchEstimates,
    estimate_launch,
    format_amount,
    format_days,
    report,
)
from fairmint.core.economics.normalizer import NormalizedField, NormalizedParams, normalize_params
from fairmint.core.economics.schedule import EmissionConfig, EmissionSchedule, generate
from fairmint.core.economics.validation import ValidationResult, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmissionPreview:
    """Everything the launch page needs for one set of form values."""
    params: NormalizedParams
    schedule: EmissionSchedule
    validation: ValidationResult
    metrics: AggregateMetrics
    estimates: LaunchEstimates

    @property
    def config(self) -> EmissionConfig:
        return self.params.config

    @property
    def field_errors(self) -> List[NormalizedField]:
        return self.params.errors

    @property
    def can_submit(self) -> bool:
        return self.validation.is_valid

    def to_dict(self, include_schedule: bool = True) -> Dict[str, Any]:
        """JSON-ready view. Amounts are strings: base units and display units."""
        metrics = self.metrics
        data = {
            "validation": self.validation.to_dict(),
            "field_errors": [f.to_dict() for f in self.field_errors],
            "incomplete": self.params.incomplete,
            "config": {name: str(value) for name, value in self.config.to_dict().items()},
            "metrics": {
                "total_supply": format_amount(metrics.total_supply),
                "liquidity_supply": format_amount(metrics.liquidity_supply),
                "community_supply": format_amount(metrics.community_supply),
                "total_fee_revenue": format_amount(metrics.total_fee_revenue),
                "total_duration_seconds": metrics.total_duration_seconds,
                "total_duration": format_days(metrics.total_duration_seconds),
            },
            "estimates": self.estimates.to_dict(),
        }
        if include_schedule:
            data["schedule"] = [
                {
                    "era_index": record.era_index,
                    "target_mint_size_per_epoch": format_amount(record.target_mint_size_per_epoch),
                    "era_supply": format_amount(record.era_supply),
                    "cumulative_supply": format_amount(record.cumulative_supply),
                    "era_duration_seconds": record.era_duration_seconds,
                    "start_offset_seconds": record.start_offset_seconds,
                }
                for record in self.schedule
            ]
        return data


def _overflow_result(params: NormalizedParams) -> ValidationResult:
    overflowed = params.first_error(ErrorKind.ARITHMETIC_OVERFLOW)
    if overflowed is None:
        return ValidationResult.valid()
    return ValidationResult.invalid(ErrorKind.ARITHMETIC_OVERFLOW, overflowed.message)


def preview_config(params: NormalizedParams) -> EmissionPreview:
    """Run generation, validation and reporting for already normalized params."""
    schedule = generate(params.config)

    validation = _overflow_result(params)
    if validation.is_valid:
        validation = validate(params.config, schedule, params.exact_sizes())

    metrics = report(schedule)
    return EmissionPreview(
        params=params,
        schedule=schedule,
        validation=validation,
        metrics=metrics,
        estimates=estimate_launch(schedule, metrics),
    )


def build_preview(raw: Mapping[str, Any]) -> EmissionPreview:
    """
    Preview a launch from raw form values.

    Args:
        raw: field name (snake_case or form camelCase) -> text as typed

    Returns:
        EmissionPreview; check .validation before submitting
    """
    params = normalize_params(raw)
    preview = preview_config(params)
    if not preview.validation.is_valid:
        logger.debug(f"Preview blocked: {preview.validation.kind.value} ({preview.validation.message})")
    return preview
