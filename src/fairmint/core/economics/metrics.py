"""
Metrics Reporter

Aggregate figures for a generated schedule, the launch-page estimates
(max supply, fee bounds, launch price) and the display formatters.

Every amount is an int in base units or lamports. Ratios shown to the user
are Decimals rounded DOWN to a fixed number of places, computed with
decimal arithmetic - never binary floats.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN, MAX_EMAX, MIN_EMIN, Overflow, localcontext
from typing import Dict, Optional

from fairmint.core.economics.constants import (
    BASE_UNIT_DECIMALS,
    DIFFICULTY_GROWTH_DENOMINATOR,
    DIFFICULTY_GROWTH_NUMERATOR,
    ESTIMATE_PRECISION,
    FEE_WARNING_THRESHOLD,
    LAUNCH_PRICE_WARNING_THRESHOLD,
    MAX_REDUCE_RATIO_EXCLUSIVE,
    MAX_FEE_ESTIMATE,
    PERCENT,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from fairmint.core.economics.schedule import EmissionSchedule

logger = logging.getLogger(__name__)

_PERCENT_PLACES = Decimal("0.01")
_PRICE_PLACES = Decimal(1).scaleb(-BASE_UNIT_DECIMALS)
_HUNDRED = Decimal(PERCENT)


# =============================================================================
# AGGREGATES
# =============================================================================

@dataclass(frozen=True)
class AggregateMetrics:
    """Totals over a whole schedule."""
    total_supply: int
    total_duration_seconds: int
    liquidity_supply: int
    community_supply: int
    total_fee_revenue: int

    def to_dict(self) -> dict:
        return {
            "total_supply": self.total_supply,
            "total_duration_seconds": self.total_duration_seconds,
            "liquidity_supply": self.liquidity_supply,
            "community_supply": self.community_supply,
            "total_fee_revenue": self.total_fee_revenue,
        }


def report(schedule: EmissionSchedule) -> AggregateMetrics:
    """
    Aggregate a schedule.

    liquidity_supply is floored, community_supply takes the remainder, so
    the two always add up to total_supply exactly.
    """
    config = schedule.config
    total_supply = sum(record.era_supply for record in schedule)
    liquidity_supply = total_supply * config.liquidity_tokens_ratio_percent // PERCENT

    return AggregateMetrics(
        total_supply=total_supply,
        total_duration_seconds=config.total_epochs * config.target_seconds_per_epoch,
        liquidity_supply=liquidity_supply,
        community_supply=total_supply - liquidity_supply,
        total_fee_revenue=config.total_epochs * config.fee_rate_base_units,
    )


def percent_of(part: int, whole: int) -> Decimal:
    """part / whole x 100, rounded down to 2 places; 0 when whole is 0."""
    if whole <= 0:
        return Decimal("0.00")
    with localcontext() as ctx:
        ctx.prec = ESTIMATE_PRECISION
        return (Decimal(part) * _HUNDRED / Decimal(whole)).quantize(_PERCENT_PLACES, rounding=ROUND_DOWN)


# =============================================================================
# LAUNCH ESTIMATES
# =============================================================================

@dataclass(frozen=True)
class LaunchEstimates:
    """
    Figures shown on the launch page next to the parameters.

    max_supply: limit of the infinite decay series (None if it diverges)
    liquidity_percent_of_max_supply: liquidity tokens of the target eras / max_supply
    min_total_fee / max_total_fee: lamports collected if every epoch fills
        with initial-size mints, without / with 1% per-epoch difficulty growth
    min_launch_price / max_launch_price: total fee / liquidity tokens, SOL per token
    """
    max_supply: Optional[int]
    percent_of_max_supply: Decimal
    liquidity_percent_of_max_supply: Decimal
    min_total_fee: Optional[int]
    max_total_fee: Optional[int]
    fee_too_high: bool
    min_launch_price: Optional[Decimal]
    max_launch_price: Optional[Decimal]
    launch_price_too_high: bool

    def to_dict(self) -> dict:
        """JSON-ready view; supply and fee amounts as {base_units, display} strings."""
        def _s(value):
            return None if value is None else str(value)

        return {
            "max_supply": format_amount(self.max_supply),
            "percent_of_max_supply": str(self.percent_of_max_supply),
            "liquidity_percent_of_max_supply": str(self.liquidity_percent_of_max_supply),
            "min_total_fee": format_amount(self.min_total_fee),
            "max_total_fee": format_amount(self.max_total_fee),
            "fee_too_high": self.fee_too_high,
            "min_launch_price": _s(self.min_launch_price),
            "max_launch_price": _s(self.max_launch_price),
            "launch_price_too_high": self.launch_price_too_high,
        }


def _max_supply(schedule: EmissionSchedule) -> Optional[int]:
    config = schedule.config
    if config.reduce_ratio_percent >= MAX_REDUCE_RATIO_EXCLUSIVE:
        return None
    first_era = config.epoches_per_era * config.initial_target_mint_size_per_epoch
    return first_era * PERCENT // (PERCENT - config.reduce_ratio_percent)


def _max_total_fee(mints_per_epoch_fee: Decimal, total_epochs: int) -> Optional[int]:
    """fee x 100 x (1.01^(n+1) - 1); None when the result is beyond MAX_FEE_ESTIMATE."""
    if mints_per_epoch_fee == 0:
        return 0
    with localcontext() as ctx:
        ctx.prec = ESTIMATE_PRECISION
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.traps[Overflow] = False
        growth = Decimal(DIFFICULTY_GROWTH_NUMERATOR) / Decimal(DIFFICULTY_GROWTH_DENOMINATOR)
        result = mints_per_epoch_fee * _HUNDRED * (growth ** (total_epochs + 1) - 1)
        if not result.is_finite() or result > MAX_FEE_ESTIMATE:
            return None
        return int(result.to_integral_value(rounding=ROUND_DOWN))


def _launch_price(total_fee: Optional[int], liquidity_supply: int) -> Optional[Decimal]:
    # lamports / base units == SOL / token, both sides are scaled by 10^9
    if total_fee is None or liquidity_supply <= 0:
        return None
    with localcontext() as ctx:
        ctx.prec = ESTIMATE_PRECISION
        return (Decimal(total_fee) / Decimal(liquidity_supply)).quantize(_PRICE_PLACES, rounding=ROUND_DOWN)


def estimate_launch(schedule: EmissionSchedule, metrics: Optional[AggregateMetrics] = None) -> LaunchEstimates:
    """Compute the launch-page estimates for a schedule."""
    config = schedule.config
    if metrics is None:
        metrics = report(schedule)

    max_supply = _max_supply(schedule)

    min_total_fee = None
    max_total_fee = None
    if config.initial_mint_size > 0:
        min_total_fee = (
            config.initial_target_mint_size_per_epoch * config.fee_rate_base_units
            * (config.total_epochs + 1) // config.initial_mint_size
        )
        with localcontext() as ctx:
            ctx.prec = ESTIMATE_PRECISION
            per_epoch_fee = (
                Decimal(config.initial_target_mint_size_per_epoch) * Decimal(config.fee_rate_base_units)
                / Decimal(config.initial_mint_size)
            )
        max_total_fee = _max_total_fee(per_epoch_fee, config.total_epochs)

    # No max fee despite a mint size means the estimate ran past MAX_FEE_ESTIMATE
    if max_total_fee is None:
        fee_too_high = config.initial_mint_size > 0
    else:
        fee_too_high = max_total_fee > FEE_WARNING_THRESHOLD

    min_launch_price = _launch_price(min_total_fee, metrics.liquidity_supply)
    max_launch_price = _launch_price(max_total_fee, metrics.liquidity_supply)

    estimates = LaunchEstimates(
        max_supply=max_supply,
        percent_of_max_supply=percent_of(metrics.total_supply, max_supply or 0),
        liquidity_percent_of_max_supply=percent_of(metrics.liquidity_supply, max_supply or 0),
        min_total_fee=min_total_fee,
        max_total_fee=max_total_fee,
        fee_too_high=fee_too_high,
        min_launch_price=min_launch_price,
        max_launch_price=max_launch_price,
        launch_price_too_high=(
            max_launch_price is not None and max_launch_price > Decimal(LAUNCH_PRICE_WARNING_THRESHOLD)
        ),
    )
    if estimates.fee_too_high or estimates.launch_price_too_high:
        logger.debug(f"Launch estimates flagged: fee_too_high={fee_too_high}, "
                     f"launch_price_too_high={estimates.launch_price_too_high}")
    return estimates


# =============================================================================
# PROGRESS
# =============================================================================

@dataclass(frozen=True)
class ScheduleProgress:
    """Where a launch stands after elapsed_seconds, assuming every epoch runs on target."""
    elapsed_seconds: int
    era_index: int
    epoch_index: int
    expected_minted: int
    percent_complete: Decimal
    finished: bool

    def to_dict(self) -> dict:
        return {
            "elapsed_seconds": self.elapsed_seconds,
            "era_index": self.era_index,
            "epoch_index": self.epoch_index,
            "expected_minted": str(self.expected_minted),
            "percent_complete": str(self.percent_complete),
            "finished": self.finished,
        }


def progress_at(schedule: EmissionSchedule, elapsed_seconds: int) -> ScheduleProgress:
    """
    Expected position in the schedule after elapsed_seconds of real time.

    The current epoch is pro-rated (floor). Negative elapsed time counts as 0.
    """
    config = schedule.config
    elapsed = max(0, elapsed_seconds)
    total_supply = schedule.total_supply

    # Nothing to mint over time: an empty schedule, or epochs without length
    if len(schedule) == 0 or config.epoches_per_era == 0 or config.target_seconds_per_epoch == 0:
        return ScheduleProgress(elapsed, 0, 0, 0, Decimal("0.00"), finished=False)

    completed_epochs, into_epoch = divmod(elapsed, config.target_seconds_per_epoch)
    if completed_epochs >= config.total_epochs:
        return ScheduleProgress(
            elapsed_seconds=elapsed,
            era_index=len(schedule) - 1,
            epoch_index=config.epoches_per_era - 1,
            expected_minted=total_supply,
            percent_complete=Decimal("100.00"),
            finished=True,
        )

    era_index, epoch_index = divmod(completed_epochs, config.epoches_per_era)
    record = schedule.era(era_index)
    minted_before_era = record.cumulative_supply - record.era_supply
    expected = (
        minted_before_era
        + epoch_index * record.target_mint_size_per_epoch
        + record.target_mint_size_per_epoch * into_epoch // config.target_seconds_per_epoch
    )
    return ScheduleProgress(
        elapsed_seconds=elapsed,
        era_index=era_index,
        epoch_index=epoch_index,
        expected_minted=expected,
        percent_complete=percent_of(expected, total_supply),
        finished=False,
    )


def minted_progress_percent(minted_supply: int, schedule: EmissionSchedule) -> Decimal:
    """
    Share of the community supply already minted.

    minted_supply is the token's on-chain supply, which includes the
    liquidity tokens held by the vault; those are taken out first.
    """
    ratio = schedule.config.liquidity_tokens_ratio_percent
    community_minted = minted_supply - minted_supply * ratio // PERCENT
    community_supply = report(schedule).community_supply
    return min(percent_of(community_minted, community_supply), _HUNDRED.quantize(_PERCENT_PLACES))


# =============================================================================
# FORMATTING
# =============================================================================

def format_base_units(value: int, decimals: int = BASE_UNIT_DECIMALS) -> str:
    """
    Render a base-unit integer in display units, exactly.

    Examples:
        >>> format_base_units(1_500_000_000)
        '1.5'
        >>> format_base_units(10_000_000_000)
        '10'
        >>> format_base_units(1)
        '0.000000001'
    """
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10 ** decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0") if decimals else ""
    if fraction_text:
        return f"{sign}{whole}.{fraction_text}"
    return f"{sign}{whole}"


def format_amount(value: Optional[int]) -> Optional[Dict[str, str]]:
    """Base-unit (or lamport) amount as {"base_units", "display"} strings; None stays None."""
    if value is None:
        return None
    return {"base_units": str(value), "display": format_base_units(value)}


def format_seconds(seconds: int) -> str:
    """3725 -> '1h 2m 5s'."""
    total = max(0, int(seconds))
    hours = total // SECONDS_PER_HOUR
    minutes = (total % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    remaining = total % SECONDS_PER_MINUTE

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if remaining > 0 or not parts:
        parts.append(f"{remaining}s")
    return " ".join(parts)


def format_days(seconds: int) -> str:
    """Whole days and hours: 2_500_000 -> '28d 22h'."""
    if seconds <= 0:
        return "0d"
    days = seconds // SECONDS_PER_DAY
    hours = (seconds % SECONDS_PER_DAY) // SECONDS_PER_HOUR

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0 or days == 0:
        parts.append(f"{hours}h")
    return " ".join(parts)
