"""
Emission Schedule Generator

Expands an EmissionConfig into the ordered per-era minting curve.

DECAY RULE:
===========
    target[0] = initial_target_mint_size_per_epoch
    target[i] = target[i-1] * reduce_ratio_percent // 100

Floor division is mandatory: the fair-mint program computes the next era's
ceiling with integer arithmetic, so any other rounding makes the preview
disagree with what the program enforces.

The generator is total over any EmissionConfig. A decay that reaches zero
before the last era still yields the remaining (zero-supply) eras; flagging
that is the validator's job.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterator, List, Tuple

from fairmint.core.economics.constants import PERCENT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmissionConfig:
    """
    Canonical launch parameters, all integers.

    Token amounts are base units (10^-9 token), the fee rate is lamports.
    Range rules are NOT checked here - a zero value means "incomplete" and
    is reported by the validator. Only the shape is enforced: every field
    must be a non-negative int.
    """
    target_eras: int
    epoches_per_era: int
    target_seconds_per_epoch: int
    reduce_ratio_percent: int
    initial_mint_size: int
    initial_target_mint_size_per_epoch: int
    fee_rate_base_units: int
    liquidity_tokens_ratio_percent: int

    def __post_init__(self):
        for name, value in asdict(self).items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @property
    def total_epochs(self) -> int:
        return self.target_eras * self.epoches_per_era

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class EraRecord:
    """Minting parameters of one era."""
    era_index: int
    target_mint_size_per_epoch: int
    era_duration_seconds: int
    era_supply: int
    start_offset_seconds: int = 0
    cumulative_supply: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class EmissionSchedule:
    """Ordered era records derived from one EmissionConfig."""
    config: EmissionConfig
    eras: Tuple[EraRecord, ...]

    def __len__(self) -> int:
        return len(self.eras)

    def __iter__(self) -> Iterator[EraRecord]:
        return iter(self.eras)

    def era(self, index: int) -> EraRecord:
        return self.eras[index]

    def target_mint_sizes(self) -> List[int]:
        return [record.target_mint_size_per_epoch for record in self.eras]

    @property
    def total_supply(self) -> int:
        return self.eras[-1].cumulative_supply if self.eras else 0

    def to_rows(self) -> List[Dict[str, int]]:
        """Rows for preview tables and JSON output."""
        return [record.to_dict() for record in self.eras]


def next_target_mint_size(previous: int, reduce_ratio_percent: int) -> int:
    """Ceiling of the next era, truncated the way the program truncates it."""
    return previous * reduce_ratio_percent // PERCENT


def generate(config: EmissionConfig) -> EmissionSchedule:
    """
    Expand a config into its full emission schedule.

    Never fails for a well-formed config. target_eras == 0 yields an
    empty schedule.
    """
    era_duration = config.epoches_per_era * config.target_seconds_per_epoch

    records = []
    target = config.initial_target_mint_size_per_epoch
    cumulative = 0
    for era_index in range(config.target_eras):
        if era_index > 0:
            target = next_target_mint_size(target, config.reduce_ratio_percent)
        era_supply = target * config.epoches_per_era
        cumulative += era_supply
        records.append(EraRecord(
            era_index=era_index,
            target_mint_size_per_epoch=target,
            era_duration_seconds=era_duration,
            era_supply=era_supply,
            start_offset_seconds=era_index * era_duration,
            cumulative_supply=cumulative,
        ))

    logger.debug(
        f"Generated {len(records)} eras, supply={cumulative}, "
        f"last target={records[-1].target_mint_size_per_epoch if records else 0}"
    )
    return EmissionSchedule(config=config, eras=tuple(records))
