"""
Global pytest fixtures for Media Planner tests.
"""
import pytest

from media_planner.config.schema import (
    PlanConfig, GlobalConfig, ChannelConfig, CalculationMode, PacingMode
)


# =============================================================================
# Sample Configurations
# =============================================================================

@pytest.fixture
def fixed_settings() -> GlobalConfig:
    """Default plan: 10k onboards over 12 months at a fixed 5.36 CPI."""
    return GlobalConfig(
        target_onboard=10000,
        timeframe_months=12,
        mode=CalculationMode.FIXED_CPI,
        fixed_cpi=5.36,
        installs_per_onboard=10,
    )


@pytest.fixture
def derive_settings() -> GlobalConfig:
    """Derived-CPI plan over 6 months."""
    return GlobalConfig(
        target_onboard=6000,
        timeframe_months=6,
        mode=CalculationMode.DERIVE_CPI,
        installs_per_onboard=4,
    )


@pytest.fixture
def single_channel() -> ChannelConfig:
    """One channel taking all spend."""
    return ChannelConfig(
        id="paid-social",
        name="Paid Social",
        allocation=1.0,
        ctr=0.02,
        install_rate=0.1,
        cpm=10.0,
    )


@pytest.fixture
def two_channels() -> list[ChannelConfig]:
    """Two channels with different unit costs (CPI 5.0 and 10.0)."""
    return [
        ChannelConfig(
            id="social",
            name="Social",
            allocation=0.5,
            ctr=0.02,
            install_rate=0.1,
            cpm=10.0,   # CPC 0.5, CPI 5.0
        ),
        ChannelConfig(
            id="search",
            name="Search",
            allocation=0.5,
            ctr=0.05,
            install_rate=0.2,
            cpm=100.0,  # CPC 2.0, CPI 10.0
        ),
    ]


@pytest.fixture
def basic_plan(fixed_settings, single_channel) -> PlanConfig:
    """Minimal single-channel plan."""
    return PlanConfig(
        name="test_plan",
        settings=fixed_settings,
        channels=[single_channel],
    )


@pytest.fixture
def derived_plan(derive_settings, two_channels) -> PlanConfig:
    """Two-channel derived-CPI plan."""
    return PlanConfig(
        name="derived_plan",
        description="Two channels, derived CPI",
        settings=derive_settings,
        channels=two_channels,
    )


@pytest.fixture
def growth_plan(two_channels) -> PlanConfig:
    """Growth-paced plan with efficiency gains and monthly overrides."""
    return PlanConfig(
        name="growth_plan",
        settings=GlobalConfig(
            target_onboard=12000,
            timeframe_months=6,
            mode=CalculationMode.DERIVE_CPI,
            installs_per_onboard=5,
            pacing_mode=PacingMode.GROWTH,
            monthly_growth_rate=10,
            efficiency_rate=5,
            enable_monthly_allocation=True,
        ),
        channels=[
            two_channels[0].model_copy(update={"monthly_allocations": {0: 1.0, 1: 3.0}}),
            two_channels[1].model_copy(update={"monthly_allocations": {0: 3.0, 1: 1.0}}),
        ],
    )
