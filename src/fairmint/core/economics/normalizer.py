"""
Parameter Normalizer

Turns the free-text values of the launch form into base-unit integers.

Two field shapes exist:
- INTEGER fields (eras, epochs, seconds, ratios): every non-digit is dropped.
- SCALED fields (mint sizes, fee rate): digits and one decimal point are
  kept, the decimal value is multiplied by 10^9 and truncated.

Scaling works on the digit string with Python ints, so a value with up to
nine fractional digits converts exactly no matter how often it is edited.
Values wider than the on-chain field raise ArithmeticOverflow carrying the
saturated maximum.

The parse_* functions raise; normalize_field / normalize_params are the
engine boundary and return errors as data.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from fairmint.core.economics.constants import BASE_UNIT_DECIMALS, MAX_EXACT_DECIMALS, U32_MAX, U64_MAX
from fairmint.core.economics.errors import (
    ArithmeticOverflow,
    ErrorKind,
    InvalidNumberFormat,
    NormalizationError,
)
from fairmint.core.economics.schedule import EmissionConfig

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")
_NON_DECIMAL = re.compile(r"[^0-9.]")


@dataclass(frozen=True)
class FieldSpec:
    """How one launch parameter is parsed."""
    name: str
    form_name: str           # camelCase name used by the launch form
    label: str
    scaled: bool = False     # display units x10^9 -> base units
    max_value: int = U64_MAX


FIELD_SPECS: Dict[str, FieldSpec] = {
    spec.name: spec for spec in (
        FieldSpec("target_eras", "targetEras", "Target eras", max_value=U32_MAX),
        FieldSpec("epoches_per_era", "epochesPerEra", "Epoches per era"),
        FieldSpec("target_seconds_per_epoch", "targetSecondsPerEpoch", "Target seconds per epoch"),
        FieldSpec("reduce_ratio_percent", "reduceRatio", "Reduce ratio"),
        FieldSpec("initial_mint_size", "initialMintSize", "Initial mint size", scaled=True),
        FieldSpec(
            "initial_target_mint_size_per_epoch", "initialTargetMintSizePerEpoch",
            "Initial target mint size per epoch", scaled=True,
        ),
        FieldSpec("fee_rate_base_units", "feeRate", "Fee rate", scaled=True),
        FieldSpec("liquidity_tokens_ratio_percent", "liquidityTokensRatio", "Liquidity tokens ratio"),
    )
}

# Every accepted spelling of a field name -> canonical name
FIELD_ALIASES: Dict[str, str] = {}
for _spec in FIELD_SPECS.values():
    FIELD_ALIASES[_spec.name] = _spec.name
    FIELD_ALIASES[_spec.form_name] = _spec.name
FIELD_ALIASES.update({
    "reduceRatioPercent": "reduce_ratio_percent",
    "liquidityTokensRatioPercent": "liquidity_tokens_ratio_percent",
    "feeRateBaseUnits": "fee_rate_base_units",
})


def _check_width(value: int, max_value: int, raw: str) -> int:
    if value > max_value:
        raise ArithmeticOverflow(f"{raw!r} exceeds the maximum of {max_value}", saturated_value=max_value)
    return value


def _fits_width(digits: str, max_value: int) -> bool:
    # Avoids int() on absurdly long strings
    return len(digits.lstrip("0")) <= len(str(max_value))


def parse_integer(raw: Any, max_value: int = U64_MAX) -> int:
    """
    Parse an integer field.

    Non-digits are stripped; nothing left means 0.

    Raises:
        ArithmeticOverflow: value > max_value
    """
    text = "" if raw is None else str(raw)
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return 0
    if not _fits_width(digits, max_value):
        raise ArithmeticOverflow(f"{text!r} exceeds the maximum of {max_value}", saturated_value=max_value)
    return _check_width(int(digits), max_value, text)


def parse_scaled(raw: Any, decimals: int = BASE_UNIT_DECIMALS, max_value: Optional[int] = U64_MAX) -> int:
    """
    Parse a decimal display value into base units (x10^decimals, truncated).

    Examples:
        >>> parse_scaled("1.5")
        1500000000
        >>> parse_scaled("0.0000000019")   # 10th fractional digit dropped
        1

    Raises:
        InvalidNumberFormat: more than one decimal point
        ArithmeticOverflow: scaled value > max_value (None means no limit)
    """
    text = "" if raw is None else str(raw)
    cleaned = _NON_DECIMAL.sub("", text)
    if cleaned.count(".") > 1:
        raise InvalidNumberFormat(f"{text!r} has more than one decimal point")

    whole, _, fraction = cleaned.partition(".")
    if not whole and not fraction:
        return 0

    if max_value is not None and not _fits_width(whole, max_value // 10 ** decimals + 1):
        raise ArithmeticOverflow(f"{text!r} exceeds the maximum of {max_value}", saturated_value=max_value)

    fraction = fraction[:decimals].ljust(decimals, "0")
    value = int(whole or "0") * 10 ** decimals + int(fraction or "0")
    if max_value is None:
        return value
    return _check_width(value, max_value, text)


@dataclass(frozen=True)
class NormalizedField:
    """One launch parameter after normalization."""
    name: str
    raw: str
    value: int
    incomplete: bool = False
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def text(self) -> str:
        """Canonical base-unit integer string."""
        return str(self.value)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "raw": self.raw,
            "value": self.text,
            "incomplete": self.incomplete,
            "error": self.error.value if self.error else None,
            "message": self.message,
        }


def resolve_field_name(key: str) -> Optional[str]:
    return FIELD_ALIASES.get(key)


def normalize_field(name: str, raw: Any) -> NormalizedField:
    """
    Normalize one field, returning errors as data.

    - InvalidNumberFormat -> value 0, incomplete
    - ArithmeticOverflow  -> value saturated at the field maximum
    - no digits at all    -> value 0, incomplete (not an error)
    """
    spec = FIELD_SPECS[resolve_field_name(name) or name]
    text = "" if raw is None else str(raw)

    try:
        if spec.scaled:
            value = parse_scaled(text, max_value=spec.max_value)
        else:
            value = parse_integer(text, max_value=spec.max_value)
    except ArithmeticOverflow as e:
        logger.debug(f"{spec.name}: {e}")
        return NormalizedField(
            name=spec.name, raw=text, value=e.saturated_value,
            error=e.kind, message=f"{spec.label} is too large",
        )
    except NormalizationError as e:
        logger.debug(f"{spec.name}: {e}")
        return NormalizedField(
            name=spec.name, raw=text, value=0, incomplete=True,
            error=e.kind, message=f"{spec.label} is not a valid number",
        )

    incomplete = not any(ch.isdigit() for ch in text)
    return NormalizedField(name=spec.name, raw=text, value=value, incomplete=incomplete)


@dataclass(frozen=True)
class ExactSizes:
    """Both mint sizes as typed, at one common scale wide enough to drop no digit."""
    initial_mint_size: int
    initial_target_mint_size_per_epoch: int


def _fraction_digits(text: str) -> int:
    return min(len(_NON_DECIMAL.sub("", text).partition(".")[2]), MAX_EXACT_DECIMALS)


@dataclass(frozen=True)
class NormalizedParams:
    """All launch parameters after normalization plus the config built from them."""
    fields: Dict[str, NormalizedField]
    config: EmissionConfig

    @property
    def errors(self) -> List[NormalizedField]:
        return [f for f in self.fields.values() if f.error is not None]

    @property
    def incomplete(self) -> List[str]:
        return [f.name for f in self.fields.values() if f.incomplete]

    def first_error(self, kind: ErrorKind) -> Optional[NormalizedField]:
        for f in self.fields.values():
            if f.error == kind:
                return f
        return None

    def exact_sizes(self) -> Optional[ExactSizes]:
        """
        The mint sizes without base-unit truncation.

        "0.0000000015" truncates to 1 base unit; here it keeps its 10th
        fractional digit. None when either field did not parse.
        """
        mint = self.fields["initial_mint_size"]
        target = self.fields["initial_target_mint_size_per_epoch"]
        if mint.error is not None or target.error is not None:
            return None

        decimals = max(BASE_UNIT_DECIMALS, _fraction_digits(mint.raw), _fraction_digits(target.raw))
        return ExactSizes(
            initial_mint_size=parse_scaled(mint.raw, decimals=decimals, max_value=None),
            initial_target_mint_size_per_epoch=parse_scaled(target.raw, decimals=decimals, max_value=None),
        )


def normalize_params(raw: Mapping[str, Any]) -> NormalizedParams:
    """
    Normalize a full set of raw launch values.

    Keys may be snake_case or the launch form's camelCase names. Missing
    fields are treated as empty input; unknown keys are ignored.
    """
    canonical: Dict[str, Any] = {}
    for key, value in raw.items():
        name = resolve_field_name(key)
        if name is None:
            logger.debug(f"Ignoring unknown launch parameter {key!r}")
            continue
        canonical[name] = value

    fields = {name: normalize_field(name, canonical.get(name, "")) for name in FIELD_SPECS}
    config = EmissionConfig(**{name: f.value for name, f in fields.items()})
    return NormalizedParams(fields=fields, config=config)
