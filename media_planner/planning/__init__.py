"""
Planning engine for Media Planner.

Turns plan settings and channel configurations into a monthly spend and
funnel plan.

Key components:
- calculate_media_plan: Main entry point
- PacingGenerator: Monthly onboarding target sequences
- resolve_allocations: Per-month normalized channel mix
- solve_monthly_spend / derive_funnel: Spend solving and funnel inversion
- ModelResult: Result dataclass with summary helpers

Usage:
    from media_planner.planning import calculate_media_plan

    result = calculate_media_plan(plan.settings, plan.channels)
    print(result.totals.spend)

Scenario comparison:
    from media_planner.planning import run_scenarios, compare_scenarios

    runs = run_scenarios(plan, {"fast_growth": {"pacing_mode": "growth", "monthly_growth_rate": 15}})
    print(compare_scenarios(runs))
"""

from media_planner.planning.results import (
    ModelResult,
    MonthlyData,
    ChannelMonthResult,
    ChannelMetrics,
    PlanTotals,
)
from media_planner.planning.unit_economics import (
    UnitMetrics,
    cost_per_click,
    cost_per_install,
    channel_unit_metrics,
)
from media_planner.planning.pacing import PacingGenerator, validate_pacing
from media_planner.planning.allocation import (
    raw_allocation_weights,
    normalize_allocations,
    resolve_allocations,
)
from media_planner.planning.efficiency import efficiency_multiplier, efficiency_multipliers
from media_planner.planning.solver import FunnelVolumes, solve_monthly_spend, derive_funnel
from media_planner.planning.engine import calculate_media_plan
from media_planner.planning.scenarios import (
    ScenarioResult,
    run_scenarios,
    compare_scenarios,
    sweep_parameter,
)

__all__ = [
    # Main entry point
    "calculate_media_plan",
    # Components
    "PacingGenerator",
    "cost_per_click",
    "cost_per_install",
    "channel_unit_metrics",
    "raw_allocation_weights",
    "normalize_allocations",
    "resolve_allocations",
    "efficiency_multiplier",
    "efficiency_multipliers",
    "solve_monthly_spend",
    "derive_funnel",
    "validate_pacing",
    # Scenarios
    "run_scenarios",
    "compare_scenarios",
    "sweep_parameter",
    # Result types
    "ModelResult",
    "MonthlyData",
    "ChannelMonthResult",
    "ChannelMetrics",
    "PlanTotals",
    "UnitMetrics",
    "FunnelVolumes",
    "ScenarioResult",
]
