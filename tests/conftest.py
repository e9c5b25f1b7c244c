"""
Shared pytest fixtures for test suite.

Provides:
- Launch form defaults (raw text, as typed)
- EmissionConfig factory in base units
- Preview API test client
"""

import os
import sys
from typing import Dict

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fairmint.core.economics import BASE_UNIT_SCALE, DEFAULT_LAUNCH_PARAMS, EmissionConfig


def tokens(amount) -> int:
    """Whole tokens -> base units."""
    return int(amount * BASE_UNIT_SCALE)


@pytest.fixture
def default_raw() -> Dict[str, str]:
    """Launch form defaults (snake_case keys)."""
    return dict(DEFAULT_LAUNCH_PARAMS)


@pytest.fixture
def make_config():
    """Factory for EmissionConfig with sane base-unit defaults."""
    def _make(**overrides) -> EmissionConfig:
        values = dict(
            target_eras=3,
            epoches_per_era=10,
            target_seconds_per_epoch=100,
            reduce_ratio_percent=75,
            initial_mint_size=tokens(10),
            initial_target_mint_size_per_epoch=tokens(100),
            fee_rate_base_units=10_000_000,  # 0.01 SOL
            liquidity_tokens_ratio_percent=10,
        )
        values.update(overrides)
        return EmissionConfig(**values)
    return _make


@pytest.fixture
def api_client():
    """FastAPI test client for the preview API."""
    from fastapi.testclient import TestClient
    from fairmint.api.main import app

    with TestClient(app) as client:
        yield client
