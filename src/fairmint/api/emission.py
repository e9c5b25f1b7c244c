"""
Emission Preview API Endpoints

Thin HTTP adapter over fairmint.core.economics for the launch page: the page
posts the raw form values on every edit and renders whatever comes back.
"""
from fastapi import APIRouter, HTTPException
from typing import Dict
import logging

from fairmint import config as settings
from fairmint.core.economics import (
    DEFAULT_LAUNCH_PARAMS,
    NormalizedParams,
    generate,
    minted_progress_percent,
    normalize_params,
    preview_config,
    progress_at,
)
from fairmint.core.economics.normalizer import FIELD_SPECS
from .schemas import (
    LaunchParams,
    PreviewResponse,
    ProgressRequest,
    ProgressResponse,
    ValidationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/emission", tags=["emission"])


def _normalize(params: LaunchParams) -> NormalizedParams:
    """Normalize and enforce the preview length cap."""
    normalized = normalize_params(params.raw_values())
    if normalized.config.target_eras > settings.MAX_PREVIEW_ERAS:
        raise HTTPException(
            status_code=422,
            detail=f"Target eras above {settings.MAX_PREVIEW_ERAS} cannot be previewed",
        )
    return normalized


@router.get("/defaults")
async def get_defaults() -> Dict[str, str]:
    """Launch form defaults, keyed by the form's field names."""
    return {FIELD_SPECS[name].form_name: value for name, value in DEFAULT_LAUNCH_PARAMS.items()}


@router.post("/preview", response_model=PreviewResponse)
async def preview_launch(params: LaunchParams):
    """
    Full preview: validation, field errors, metrics, estimates and schedule.

    Always 200 for well-formed bodies - an invalid launch is reported in
    the "validation" member, not as an HTTP error.
    """
    preview = preview_config(_normalize(params))
    return preview.to_dict()


@router.post("/validate", response_model=ValidationResponse)
async def validate_launch(params: LaunchParams):
    """Submit guard only."""
    normalized = _normalize(params)
    result = preview_config(normalized).validation.to_dict()
    result["field_errors"] = [f.to_dict() for f in normalized.errors]
    return result


@router.post("/progress", response_model=ProgressResponse)
async def launch_progress(request: ProgressRequest):
    """Expected position in the schedule after elapsedSeconds."""
    normalized = _normalize(request)
    schedule = generate(normalized.config)
    progress = progress_at(schedule, request.elapsed_seconds)

    minted_percent = None
    if request.minted_supply is not None:
        minted_percent = str(minted_progress_percent(int(request.minted_supply), schedule))

    return ProgressResponse(
        elapsed_seconds=progress.elapsed_seconds,
        era_index=progress.era_index,
        epoch_index=progress.epoch_index,
        expected_minted=str(progress.expected_minted),
        percent_complete=str(progress.percent_complete),
        finished=progress.finished,
        minted_percent=minted_percent,
    )
