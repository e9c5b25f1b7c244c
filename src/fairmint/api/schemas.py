from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from typing import Annotated, Optional, List, Dict, Any, Union

from fairmint.core.economics.constants import DEFAULT_LAUNCH_PARAMS


# =============================================================================
# LAUNCH PARAMETER SCHEMAS
# =============================================================================

# Text as typed, or a whole JSON number. JSON floats are rejected (422):
# str(float) can come out as "1e-05", which the digit filter would misread.
LaunchValue = Union[StrictStr, Annotated[StrictInt, Field(ge=0)]]


class LaunchParams(BaseModel):
    """Raw launch form values, exactly as typed."""
    model_config = ConfigDict(populate_by_name=True)

    target_eras: LaunchValue = Field(DEFAULT_LAUNCH_PARAMS["target_eras"], alias="targetEras")
    epoches_per_era: LaunchValue = Field(DEFAULT_LAUNCH_PARAMS["epoches_per_era"], alias="epochesPerEra")
    target_seconds_per_epoch: LaunchValue = Field(
        DEFAULT_LAUNCH_PARAMS["target_seconds_per_epoch"], alias="targetSecondsPerEpoch"
    )
    reduce_ratio_percent: LaunchValue = Field(DEFAULT_LAUNCH_PARAMS["reduce_ratio_percent"], alias="reduceRatio")
    initial_mint_size: LaunchValue = Field(
        DEFAULT_LAUNCH_PARAMS["initial_mint_size"], alias="initialMintSize",
        description="Display units (tokens)",
    )
    initial_target_mint_size_per_epoch: LaunchValue = Field(
        DEFAULT_LAUNCH_PARAMS["initial_target_mint_size_per_epoch"], alias="initialTargetMintSizePerEpoch",
        description="Display units (tokens)",
    )
    fee_rate_base_units: LaunchValue = Field(
        DEFAULT_LAUNCH_PARAMS["fee_rate_base_units"], alias="feeRate",
        description="SOL per mint (display units)",
    )
    liquidity_tokens_ratio_percent: LaunchValue = Field(
        DEFAULT_LAUNCH_PARAMS["liquidity_tokens_ratio_percent"], alias="liquidityTokensRatio"
    )

    def raw_values(self) -> Dict[str, str]:
        values = self.model_dump(by_alias=False, include=set(LaunchParams.model_fields))
        return {name: str(value) for name, value in values.items()}


class ProgressRequest(LaunchParams):
    """Launch values plus the time since launch (and optionally the on-chain supply)."""
    elapsed_seconds: int = Field(..., ge=0, alias="elapsedSeconds")
    minted_supply: Optional[StrictStr] = Field(
        None, pattern=r"^[0-9]+$", alias="mintedSupply",
        description="Base units, as a digit string",
    )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ValidationResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    message: str = ""
    program_error_code: Optional[int] = None
    field_errors: List[Dict[str, Any]] = []


class ProgressResponse(BaseModel):
    elapsed_seconds: int
    era_index: int
    epoch_index: int
    expected_minted: str  # base units
    percent_complete: str
    finished: bool
    minted_percent: Optional[str] = None


class PreviewResponse(BaseModel):
    """Full launch preview; amounts are {base_units, display} string pairs."""
    validation: Dict[str, Any]
    field_errors: List[Dict[str, Any]]
    incomplete: List[str]
    config: Dict[str, str]
    metrics: Dict[str, Any]
    estimates: Dict[str, Any]
    schedule: List[Dict[str, Any]] = []
