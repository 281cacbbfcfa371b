"""
Per-channel unit economics: cost-per-click and cost-per-install.
"""

from dataclasses import dataclass

from media_planner.config.schema import ChannelConfig, GlobalConfig


@dataclass(frozen=True)
class UnitMetrics:
    """Baseline (month 1) unit costs for a channel."""
    cpc: float
    cpi: float


def cost_per_click(cpm: float, ctr: float) -> float:
    """
    Cost per click from cost per thousand impressions and click-through rate.

    Returns 0 when ctr <= 0.
    """
    if ctr <= 0:
        return 0.0
    return cpm / (1000.0 * ctr)


def cost_per_install(cpc: float, install_rate: float) -> float:
    """
    Cost per install from cost per click and install rate.

    Returns 0 when install_rate <= 0.
    """
    if install_rate <= 0:
        return 0.0
    return cpc / install_rate


def channel_unit_metrics(channel: ChannelConfig, settings: GlobalConfig) -> UnitMetrics:
    """
    Unit costs for one channel under the plan's calculation mode.

    In fixed mode CPC is not computable and reported as 0, and every
    channel shares the fixed CPI.
    """
    if settings.uses_derived_cpi:
        cpc = cost_per_click(channel.cpm, channel.ctr)
        return UnitMetrics(cpc=cpc, cpi=cost_per_install(cpc, channel.install_rate))
    return UnitMetrics(cpc=0.0, cpi=settings.fixed_cpi)
