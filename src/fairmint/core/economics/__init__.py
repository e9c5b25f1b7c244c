"""
Fair-mint emission engine.

- normalizer: raw form text -> base-unit integers
- schedule: EmissionConfig -> EmissionSchedule (per-era decay)
- validation: launch rules, first failure wins
- metrics: aggregates, launch estimates, progress, formatting
- preview: the whole pipeline behind build_preview()
"""

from fairmint.core.economics.constants import (
    BASE_UNIT_DECIMALS,
    BASE_UNIT_SCALE,
    DEFAULT_LAUNCH_PARAMS,
    U32_MAX,
    U64_MAX,
)
from fairmint.core.economics.errors import (
    ErrorKind,
    EmissionError,
    NormalizationError,
    InvalidNumberFormat,
    ArithmeticOverflow,
)
from fairmint.core.economics.schedule import EmissionConfig, EraRecord, EmissionSchedule, generate
from fairmint.core.economics.normalizer import (
    FIELD_SPECS,
    NormalizedField,
    NormalizedParams,
    normalize_field,
    normalize_params,
    parse_integer,
    parse_scaled,
)
from fairmint.core.economics.validation import ValidationResult, validate
from fairmint.core.economics.metrics import (
    AggregateMetrics,
    LaunchEstimates,
    ScheduleProgress,
    estimate_launch,
    format_amount,
    format_base_units,
    format_days,
    format_seconds,
    minted_progress_percent,
    progress_at,
    report,
)
from fairmint.core.economics.preview import EmissionPreview, build_preview, preview_config

__all__ = [
    "BASE_UNIT_DECIMALS",
    "BASE_UNIT_SCALE",
    "DEFAULT_LAUNCH_PARAMS",
    "U32_MAX",
    "U64_MAX",
    "ErrorKind",
    "EmissionError",
    "NormalizationError",
    "InvalidNumberFormat",
    "ArithmeticOverflow",
    "EmissionConfig",
    "EraRecord",
    "EmissionSchedule",
    "generate",
    "FIELD_SPECS",
    "NormalizedField",
    "NormalizedParams",
    "normalize_field",
    "normalize_params",
    "parse_integer",
    "parse_scaled",
    "ValidationResult",
    "validate",
    "AggregateMetrics",
    "LaunchEstimates",
    "ScheduleProgress",
    "estimate_launch",
    "format_amount",
    "format_base_units",
    "format_days",
    "format_seconds",
    "minted_progress_percent",
    "progress_at",
    "report",
    "EmissionPreview",
    "build_preview",
    "preview_config",
]
