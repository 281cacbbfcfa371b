"""
Media plan calculation engine.

Turns global settings and a channel list into a month-indexed spend and
funnel plan with summary metrics. The calculation is a pure function of
its inputs: nothing is cached and the configs are never mutated.
"""

from typing import Sequence
import numpy as np
import logging

from media_planner.config.schema import ChannelConfig, GlobalConfig, sum_default_allocations
from media_planner.planning.allocation import resolve_allocations
from media_planner.planning.efficiency import efficiency_multipliers, effective_cpi_matrix
from media_planner.planning.pacing import PacingGenerator, validate_pacing
from media_planner.planning.results import (
    ChannelMetrics,
    ChannelMonthResult,
    ModelResult,
    MonthlyData,
    PlanTotals,
)
from media_planner.planning.solver import derive_funnel, solve_monthly_spend
from media_planner.planning.unit_economics import channel_unit_metrics

logger = logging.getLogger(__name__)


def month_label(month: int) -> str:
    """Label for a 1-based month number."""
    return f"Mo {month}"


def calculate_media_plan(
    settings: GlobalConfig,
    channels: Sequence[ChannelConfig],
) -> ModelResult:
    """
    Compute the monthly media plan.

    Parameters
    ----------
    settings : GlobalConfig
        Plan-wide parameters.
    channels : Sequence[ChannelConfig]
        Channels in plan order, each with a unique id.

    Returns
    -------
    ModelResult
        Monthly rows, totals, per-channel metrics and overall CPI.

    Raises
    ------
    ValueError
        If timeframe_months < 1.
    """
    channels = list(channels)
    num_months = settings.timeframe_months
    channel_ids = [ch.id for ch in channels]

    logger.info(
        f"Calculating media plan: target={settings.target_onboard:,.0f} onboards, "
        f"{num_months} months, {len(channels)} channels, mode={settings.mode.value}, "
        f"pacing={settings.pacing_mode.value}"
    )

    total_alloc = sum_default_allocations(channels)
    if not settings.enable_monthly_allocation and not np.isclose(total_alloc, 1.0):
        logger.info(f"Channel allocations sum to {total_alloc:.2f}; normalizing per month")

    # 1. Unit economics (once per plan)
    unit_metrics = {ch.id: channel_unit_metrics(ch, settings) for ch in channels}

    # 2. Pacing
    onboard_targets = PacingGenerator.from_settings(settings)
    is_valid, msg = validate_pacing(onboard_targets, settings.target_onboard, num_months)
    if not is_valid:
        logger.warning(f"Degenerate pacing: {msg}")
    installs_required = onboard_targets * settings.installs_per_onboard

    # 3. Allocation, efficiency decay, spend
    weights = resolve_allocations(
        channels, num_months, settings.enable_monthly_allocation
    ).values
    base_cpi = np.array([unit_metrics[cid].cpi for cid in channel_ids], dtype=float)
    effective_cpi = effective_cpi_matrix(
        base_cpi, efficiency_multipliers(settings.efficiency_rate, num_months)
    )
    monthly_spend = solve_monthly_spend(installs_required, weights, effective_cpi)

    unsolvable = np.flatnonzero((monthly_spend == 0) & (installs_required > 0))
    if len(unsolvable) > 0:
        logger.warning(
            f"No channel can absorb spend in month(s) {[int(m) + 1 for m in unsolvable]}"
        )

    # 4. Funnel per channel
    # inf spend (overflowed solve) times a zero weight is nan; keep it 0
    with np.errstate(invalid="ignore"):
        channel_spend = np.where(weights > 0, monthly_spend[:, np.newaxis] * weights, 0.0)
    funnel = derive_funnel(
        channel_spend,
        effective_cpi,
        install_rates=np.array([ch.install_rate for ch in channels], dtype=float),
        ctrs=np.array([ch.ctr for ch in channels], dtype=float),
        installs_per_onboard=settings.installs_per_onboard,
    )

    # 5. Aggregate
    cumulative_onboard = np.cumsum(funnel.onboard.sum(axis=1))
    cumulative_installs = np.cumsum(funnel.installs.sum(axis=1))
    cumulative_spend = np.cumsum(monthly_spend)

    monthly_data = []
    for i in range(num_months):
        monthly_data.append(MonthlyData(
            month=i + 1,
            month_label=month_label(i + 1),
            onboard_target=float(onboard_targets[i]),
            installs_required=float(installs_required[i]),
            monthly_spend=float(monthly_spend[i]),
            cumulative_onboard=float(cumulative_onboard[i]),
            cumulative_installs=float(cumulative_installs[i]),
            cumulative_spend=float(cumulative_spend[i]),
            channels={
                cid: ChannelMonthResult(
                    spend=float(channel_spend[i, j]),
                    installs=float(funnel.installs[i, j]),
                    onboard=float(funnel.onboard[i, j]),
                    clicks=float(funnel.clicks[i, j]),
                    impressions=float(funnel.impressions[i, j]),
                    cpi=float(effective_cpi[i, j]),
                )
                for j, cid in enumerate(channel_ids)
            },
        ))
        logger.debug(
            f"{month_label(i + 1)}: onboard={onboard_targets[i]:,.1f}, "
            f"installs={installs_required[i]:,.1f}, spend=${monthly_spend[i]:,.2f}"
        )

    total_spend = float(cumulative_spend[-1])
    total_installs = float(cumulative_installs[-1])
    totals = PlanTotals(
        spend=total_spend,
        installs=total_installs,
        onboarded=float(cumulative_onboard[-1]),
        impressions=float(funnel.impressions.sum()),
        clicks=float(funnel.clicks.sum()),
        avg_cpi=total_spend / total_installs if total_installs > 0 else 0.0,
    )

    spend_by_channel = channel_spend.sum(axis=0)
    derived_metrics = {
        cid: ChannelMetrics(
            cpc=unit_metrics[cid].cpc,
            cpi=unit_metrics[cid].cpi,
            effective_allocation=float(spend_by_channel[j]) / total_spend if total_spend > 0 else 0.0,
        )
        for j, cid in enumerate(channel_ids)
    }

    overall_weighted_cpi = totals.avg_cpi if settings.uses_derived_cpi else settings.fixed_cpi

    logger.info(
        f"Plan complete: spend=${totals.spend:,.2f}, installs={totals.installs:,.0f}, "
        f"avg CPI=${totals.avg_cpi:,.2f}"
    )

    return ModelResult(
        monthly_data=tuple(monthly_data),
        totals=totals,
        derived_metrics=derived_metrics,
        overall_weighted_cpi=overall_weighted_cpi,
        channel_names={ch.id: ch.get_display_name() for ch in channels},
    )
