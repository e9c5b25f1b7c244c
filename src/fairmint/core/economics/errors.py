"""
Emission engine error taxonomy.

Two kinds of failure exist:

1. Input shape failures, raised by the low-level parsers as exceptions
   (InvalidNumberFormat, ArithmeticOverflow) and turned into data at the
   normalizer boundary.
2. Range violations, produced by the validator as ErrorKind values. These
   are never raised, they are returned inside a ValidationResult.
"""

from enum import Enum
from typing import Optional

from fairmint.core.economics.constants import (
    PROGRAM_ERROR_INVALID_LIQUIDITY_TOKENS_RATIO,
    PROGRAM_ERROR_INVALID_REDUCE_RATIO,
    PROGRAM_ERROR_INVALID_EPOCHES_PER_ERA,
    PROGRAM_ERROR_INVALID_TARGET_SECONDS_PER_EPOCH,
    PROGRAM_ERROR_INVALID_TARGET_ERAS,
    PROGRAM_ERROR_INVALID_INITIAL_MINT_SIZE,
    PROGRAM_ERROR_INVALID_INITIAL_TARGET_MINT_SIZE_PER_EPOCH,
    PROGRAM_ERROR_INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL,
)


class ErrorKind(str, Enum):
    """Stable identifiers for every way a launch configuration can be rejected."""
    INVALID_NUMBER_FORMAT = "invalid_number_format"
    ARITHMETIC_OVERFLOW = "arithmetic_overflow"
    INVALID_LIQUIDITY_TOKENS_RATIO = "invalid_liquidity_tokens_ratio"
    INVALID_REDUCE_RATIO = "invalid_reduce_ratio"
    INVALID_EPOCHES_PER_ERA = "invalid_epoches_per_era"
    INVALID_TARGET_ERAS = "invalid_target_eras"
    INVALID_TARGET_SECONDS_PER_EPOCH = "invalid_target_seconds_per_epoch"
    INVALID_INITIAL_MINT_SIZE = "invalid_initial_mint_size"
    INVALID_INITIAL_TARGET_MINT_SIZE_PER_EPOCH = "invalid_initial_target_mint_size_per_epoch"
    INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL = "initial_mint_size_of_epoch_too_small"
    DECAY_EXHAUSTED = "decay_exhausted"

    @property
    def is_range_violation(self) -> bool:
        return self not in (ErrorKind.INVALID_NUMBER_FORMAT, ErrorKind.ARITHMETIC_OVERFLOW)

    @property
    def program_error_code(self) -> Optional[int]:
        """Custom error code the fair-mint program returns for the same check, if any."""
        return _PROGRAM_ERROR_CODES.get(self)


_PROGRAM_ERROR_CODES = {
    ErrorKind.INVALID_LIQUIDITY_TOKENS_RATIO: PROGRAM_ERROR_INVALID_LIQUIDITY_TOKENS_RATIO,
    ErrorKind.INVALID_REDUCE_RATIO: PROGRAM_ERROR_INVALID_REDUCE_RATIO,
    ErrorKind.INVALID_EPOCHES_PER_ERA: PROGRAM_ERROR_INVALID_EPOCHES_PER_ERA,
    ErrorKind.INVALID_TARGET_SECONDS_PER_EPOCH: PROGRAM_ERROR_INVALID_TARGET_SECONDS_PER_EPOCH,
    ErrorKind.INVALID_TARGET_ERAS: PROGRAM_ERROR_INVALID_TARGET_ERAS,
    ErrorKind.INVALID_INITIAL_MINT_SIZE: PROGRAM_ERROR_INVALID_INITIAL_MINT_SIZE,
    ErrorKind.INVALID_INITIAL_TARGET_MINT_SIZE_PER_EPOCH: PROGRAM_ERROR_INVALID_INITIAL_TARGET_MINT_SIZE_PER_EPOCH,
    ErrorKind.INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL: PROGRAM_ERROR_INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL,
}


class EmissionError(Exception):
    """Base class for emission engine exceptions."""


class NormalizationError(EmissionError):
    """Raw text could not be turned into a base-unit integer."""
    kind = ErrorKind.INVALID_NUMBER_FORMAT


class InvalidNumberFormat(NormalizationError):
    """Text does not have the expected numeric shape (e.g. two decimal points)."""
    kind = ErrorKind.INVALID_NUMBER_FORMAT


class ArithmeticOverflow(NormalizationError):
    """Scaled value does not fit the on-chain integer width of its field."""
    kind = ErrorKind.ARITHMETIC_OVERFLOW

    def __init__(self, message: str, saturated_value: int):
        super().__init__(message)
        self.saturated_value = saturated_value
