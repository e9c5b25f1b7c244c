"""
Fair-Mint Token Economics - Centralized Configuration

This module defines ALL economic constants used by the emission engine.
All values are documented and should be referenced from here, not hardcoded elsewhere.

=============================================================================
DESIGN PRINCIPLES
=============================================================================

1. INTEGERS ONLY: Token and fee amounts are integers in base units, exactly
   as the on-chain program stores them. Floats never touch an amount.

2. FLOOR DIVISION: Every division that the program performs truncates
   toward zero, so does every division here.

3. SAME LIMITS AS THE PROGRAM: Field widths and ratio bounds mirror the
   launch instruction of the fair-mint program.

=============================================================================
"""

from typing import Dict

# =============================================================================
# UNITS
# =============================================================================

BASE_UNIT_DECIMALS = 9              # Token decimals (display -> base units x10^9)
BASE_UNIT_SCALE = 10 ** BASE_UNIT_DECIMALS
LAMPORTS_PER_SOL = 10 ** 9          # Fee rate is entered in SOL, stored in lamports
MAX_EXACT_DECIMALS = 1000           # Fractional digits kept when comparing mint sizes as typed

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3_600
SECONDS_PER_DAY = 86_400

# On-chain integer widths of the launch instruction fields
U32_MAX = 2 ** 32 - 1
U64_MAX = 2 ** 64 - 1

# =============================================================================
# PARAMETER BOUNDS
# =============================================================================

# Liquidity share of the minted supply: 0 < ratio <= 50
MIN_LIQUIDITY_TOKENS_RATIO_EXCLUSIVE = 0
MAX_LIQUIDITY_TOKENS_RATIO = 50

# Share of the previous era's mint ceiling kept in the next era: 50 <= r < 100
MIN_REDUCE_RATIO = 50
MAX_REDUCE_RATIO_EXCLUSIVE = 100

# Epoch 0 ceiling must cover at least this many initial-size mints
MIN_TARGET_TO_MINT_SIZE_MULTIPLE = 10

PERCENT = 100

# =============================================================================
# FEE ESTIMATES
# =============================================================================

# Difficulty adjustment may grow the mint size per epoch by 1% each epoch.
# Upper fee bound assumes it happens every epoch: growth factor 101/100.
DIFFICULTY_GROWTH_NUMERATOR = 101
DIFFICULTY_GROWTH_DENOMINATOR = 100

# Significant digits used for the compounding in the max fee estimate
ESTIMATE_PRECISION = 50

# Fee estimates above this (lamports) are reported as unbounded
MAX_FEE_ESTIMATE = 2 ** 128 - 1

FEE_WARNING_THRESHOLD_SOL = 1_000            # Max total fee above this is flagged
FEE_WARNING_THRESHOLD = FEE_WARNING_THRESHOLD_SOL * LAMPORTS_PER_SOL
LAUNCH_PRICE_WARNING_THRESHOLD = "0.1"       # SOL per token, flagged above this

# =============================================================================
# PROGRAM ERROR CODES
# =============================================================================

# Custom error codes returned by the fair-mint program for the same checks
PROGRAM_ERROR_INVALID_LIQUIDITY_TOKENS_RATIO = 6033
PROGRAM_ERROR_INVALID_REDUCE_RATIO = 6034
PROGRAM_ERROR_INVALID_EPOCHES_PER_ERA = 6035
PROGRAM_ERROR_INVALID_TARGET_SECONDS_PER_EPOCH = 6036
PROGRAM_ERROR_INVALID_TARGET_ERAS = 6037
PROGRAM_ERROR_INVALID_INITIAL_MINT_SIZE = 6038
PROGRAM_ERROR_INVALID_INITIAL_TARGET_MINT_SIZE_PER_EPOCH = 6039
PROGRAM_ERROR_INITIAL_MINT_SIZE_OF_EPOCH_TOO_SMALL = 6040

# =============================================================================
# LAUNCH FORM DEFAULTS
# =============================================================================

# Raw values the launch form starts with (display units for scaled fields)
DEFAULT_LAUNCH_PARAMS: Dict[str, str] = {
    "target_eras": "1",
    "epoches_per_era": "10",
    "target_seconds_per_epoch": "100",
    "reduce_ratio_percent": "75",
    "initial_mint_size": "10",
    "initial_target_mint_size_per_epoch": "100",
    "fee_rate_base_units": "0.01",
    "liquidity_tokens_ratio_percent": "10",
}


# =============================================================================
# SUMMARY TABLE (for reference)
# =============================================================================
"""
╔═══════════════════════════════════════════════════════════════════════════════╗
║                         FAIR-MINT EMISSION SUMMARY                            ║
╠═══════════════════════════════════════════════════════════════════════════════╣
║ Parameter            │ Range                  │ Unit                          ║
║──────────────────────┼────────────────────────┼───────────────────────────────║
║ Target eras          │ 1 .. 2^32-1            │ eras                          ║
║ Epoches per era      │ 1 .. 2^64-1            │ epochs                        ║
║ Seconds per epoch    │ 1 .. 2^64-1            │ seconds                       ║
║ Reduce ratio         │ 50 .. 99               │ % kept per era                ║
║ Initial mint size    │ > 0                    │ tokens (x10^9 base units)     ║
║ Target per epoch     │ >= 10 x mint size      │ tokens (x10^9 base units)     ║
║ Fee rate             │ >= 0                   │ SOL (x10^9 lamports)          ║
║ Liquidity ratio      │ 1 .. 50                │ % of minted supply            ║
╠═══════════════════════════════════════════════════════════════════════════════╣
║ Era i target = floor(era i-1 target x reduce ratio / 100)                     ║
║ Era supply   = era target x epoches per era                                   ║
╚═══════════════════════════════════════════════════════════════════════════════╝
"""
