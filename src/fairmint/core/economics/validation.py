"""
Launch Configuration Validator

Checks a config and its generated schedule against the rules the fair-mint
program enforces at launch. Rules run in a fixed order and the FIRST failing
rule is reported, so error precedence is stable:

    1. liquidity tokens ratio in (0, 50]
    2. reduce ratio in [50, 100)
    3. epoches per era > 0
    4. target eras > 0
    5. target seconds per epoch > 0
    6. initial mint size > 0
    7. initial target mint size per epoch > 0
    8. initial target mint size per epoch >= 10 x initial mint size
    9. no era of the schedule decays to a zero mint ceiling

Rules 6-8 run on the base-unit config and, when given, on the mint sizes
as typed (ExactSizes); both must pass.

The result is a value, never an exception.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from fairmint.core.economics.constants import (
    MAX_LIQUIDITY_TOKENS_RATIO,
    MAX_REDUCE_RATIO_EXCLUSIVE,
    MIN_LIQUIDITY_TOKENS_RATIO_EXCLUSIVE,
    MIN_REDUCE_RATIO,
    MIN_TARGET_TO_MINT_SIZE_MULTIPLE,
)
from fairmint.core.economics.errors import ErrorKind
from fairmint.core.economics.normalizer import ExactSizes
from fairmint.core.economics.schedule import EmissionConfig, EmissionSchedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Valid (kind is None) or Invalid(kind, message)."""
    kind: Optional[ErrorKind] = None
    message: str = ""

    @property
    def is_valid(self) -> bool:
        return self.kind is None

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def invalid(cls, kind: ErrorKind, message: str) -> "ValidationResult":
        return cls(kind=kind, message=message)

    def to_dict(self) -> dict:
        return {
            "valid": self.is_valid,
            "error": self.kind.value if self.kind else None,
            "message": self.message,
            "program_error_code": self.kind.program_error_code if self.kind else None,
        }


Rule = Tuple[ErrorKind, Callable[[EmissionConfig], bool], str]

# (kind, passes(config), message) in evaluation order
CONFIG_RULES: List[Rule] = [
    (
        ErrorKind.INVALID_LIQUIDITY_TOKENS_RATIO,
        lambda c: MIN_LIQUIDITY_TOKENS_RATIO_EXCLUSIVE < c.liquidity_tokens_ratio_percent <= MAX_LIQUIDITY_TOKENS_RATIO,
        f"Liquidity tokens ratio must be between {MIN_LIQUIDITY_TOKENS_RATIO_EXCLUSIVE} and {MAX_LIQUIDITY_TOKENS_RATIO}",
    ),
    (
        ErrorKind.INVALID_REDUCE_RATIO,
        lambda c: MIN_REDUCE_RATIO <= c.reduce_ratio_percent < MAX_REDUCE_RATIO_EXCLUSIVE,
        f"Reduce ratio must be between {MIN_REDUCE_RATIO} and {MAX_REDUCE_RATIO_EXCLUSIVE}",
    ),
    (
        ErrorKind.INVALID_EPOCHES_PER_ERA,
        lambda c: c.epoches_per_era > 0,
        "Epoches per era must be greater than 0",
    ),
    (
        ErrorKind.INVALID_TARGET_ERAS,
        lambda c: c.target_eras > 0,
        "Target eras must be greater than 0",
    ),
    (
        ErrorKind.INVALID_TARGET_SECONDS_PER_EPOCH,
        lambda c: c.target_seconds_per_epoch > 0,
        "Target seconds per epoch must be greater than 0",
    ),
    (
        ErrorKind.INVALID_INITIAL_MINT_SIZE,
        lambda c: c.initial_mint_size > 0,
        "Initial mint size must be greater than 0",
    ),
    (
        ErrorKind.INVALID_INITIAL_TARGET_MINT_SIZE_PER_EPOCH,
        lambda c: c.initial_target_mint_size_per_epoch > 0,
        "Initial target mint size per epoch must be greater than 0",
    ),
    (
        ErrorKind.INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL,
        lambda c: c.initial_target_mint_size_per_epoch >= MIN_TARGET_TO_MINT_SIZE_MULTIPLE * c.initial_mint_size,
        f"Initial target mint size per epoch must be at least {MIN_TARGET_TO_MINT_SIZE_MULTIPLE} "
        f"times the initial mint size",
    ),
]

# Rules that only read the two mint sizes
MINT_SIZE_RULES = frozenset({
    ErrorKind.INVALID_INITIAL_MINT_SIZE,
    ErrorKind.INVALID_INITIAL_TARGET_MINT_SIZE_PER_EPOCH,
    ErrorKind.INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL,
})


def _first_exhausted_era(schedule: EmissionSchedule) -> Optional[int]:
    for record in schedule:
        if record.target_mint_size_per_epoch == 0:
            return record.era_index
    return None


def validate(
    config: EmissionConfig,
    schedule: EmissionSchedule,
    exact_sizes: Optional[ExactSizes] = None,
) -> ValidationResult:
    """
    Validate a config and the schedule generated from it.

    Args:
        config: launch parameters in base units
        schedule: generate(config)
        exact_sizes: mint sizes without truncation, checked by the mint size rules too

    Returns:
        ValidationResult for the first failing rule, or a valid result
    """
    for kind, passes, message in CONFIG_RULES:
        failed = not passes(config)
        if not failed and exact_sizes is not None and kind in MINT_SIZE_RULES:
            failed = not passes(exact_sizes)
        if failed:
            logger.debug(f"Launch config rejected: {kind.value}")
            return ValidationResult.invalid(kind, message)

    exhausted = _first_exhausted_era(schedule)
    if exhausted is not None:
        logger.debug(f"Launch config rejected: mint ceiling reaches 0 in era {exhausted}")
        return ValidationResult.invalid(
            ErrorKind.DECAY_EXHAUSTED,
            f"Target mint size per epoch decays to 0 in era {exhausted}; "
            f"raise the initial target mint size or lower the target eras",
        )

    return ValidationResult.valid()
