"""
Scenario analysis for media plans.

This module provides what-if evaluation on top of the planning engine:
- Running a plan under several named settings overrides
- Comparing scenario totals side by side
- Sweeping a single setting across a range of values
"""

from dataclasses import dataclass, field
from typing import Any, Iterable
import pandas as pd
import logging

from pydantic import ValidationError

from media_planner.config.schema import GlobalConfig, PlanConfig
from media_planner.planning.engine import calculate_media_plan
from media_planner.planning.results import ModelResult

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """A plan evaluated under one set of settings overrides."""

    name: str
    overrides: dict[str, Any]
    settings: GlobalConfig
    result: ModelResult = field(repr=False)

    def to_row(self) -> dict:
        """Flatten headline metrics into a single comparison row."""
        totals = self.result.totals
        return {
            "scenario": self.name,
            "total_spend": totals.spend,
            "total_installs": totals.installs,
            "total_onboarded": totals.onboarded,
            "total_clicks": totals.clicks,
            "total_impressions": totals.impressions,
            "avg_cpi": totals.avg_cpi,
            "overall_weighted_cpi": self.result.overall_weighted_cpi,
            "peak_monthly_spend": max(
                (row.monthly_spend for row in self.result.monthly_data), default=0.0
            ),
        }


def apply_overrides(settings: GlobalConfig, overrides: dict[str, Any]) -> GlobalConfig:
    """
    Return new settings with overrides applied and re-validated.

    Raises
    ------
    ValueError
        If an override names an unknown setting or fails validation.
    """
    unknown = set(overrides) - set(GlobalConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown settings in overrides: {sorted(unknown)}")

    try:
        return GlobalConfig(**{**settings.model_dump(), **overrides})
    except ValidationError as e:
        raise ValueError(f"Invalid scenario overrides {overrides}: {e}") from e


def run_scenarios(
    plan: PlanConfig,
    scenarios: dict[str, dict[str, Any]],
    include_baseline: bool = True,
) -> list[ScenarioResult]:
    """
    Evaluate a plan under several named overrides.

    Parameters
    ----------
    plan : PlanConfig
        Base plan.
    scenarios : dict
        {scenario_name: {setting_name: value}}.
    include_baseline : bool
        Prepend the unmodified plan as 'baseline'.

    Returns
    -------
    list[ScenarioResult]
        One result per scenario, baseline first if included.
    """
    runs = {}
    if include_baseline:
        runs["baseline"] = {}
    runs.update(scenarios)

    logger.info(f"Running {len(runs)} scenarios for plan '{plan.name}'")

    results = []
    for name, overrides in runs.items():
        settings = apply_overrides(plan.settings, overrides)
        results.append(ScenarioResult(
            name=name,
            overrides=dict(overrides),
            settings=settings,
            result=calculate_media_plan(settings, plan.channels),
        ))
    return results


def compare_scenarios(results: Iterable[ScenarioResult]) -> pd.DataFrame:
    """
    Side-by-side totals for evaluated scenarios.

    Adds spend_vs_first / avg_cpi_vs_first as percentage change against
    the first scenario (0 when the first value is 0).
    """
    df = pd.DataFrame([r.to_row() for r in results])
    if df.empty:
        return df

    for col in ("total_spend", "avg_cpi"):
        base = df[col].iloc[0]
        label = col.replace("total_", "") + "_vs_first"
        df[label] = (df[col] - base) / base * 100 if base != 0 else 0.0

    return df


def sweep_parameter(
    plan: PlanConfig,
    parameter: str,
    values: Iterable[Any],
) -> pd.DataFrame:
    """
    Evaluate the plan across values of one setting.

    Parameters
    ----------
    plan : PlanConfig
        Base plan.
    parameter : str
        GlobalConfig field name (e.g., 'efficiency_rate').
    values : Iterable
        Values to try. Repeats are evaluated once.

    Returns
    -------
    pd.DataFrame
        compare_scenarios output with an extra column named after the parameter.
    """
    # Repeated values would collapse into one scenario
    values = list(dict.fromkeys(values))
    scenarios = {f"{parameter}={v}": {parameter: v} for v in values}
    results = run_scenarios(plan, scenarios, include_baseline=False)

    df = compare_scenarios(results)
    if not df.empty:
        df.insert(1, parameter, values)
    return df
