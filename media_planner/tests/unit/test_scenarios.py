"""
Tests for planning/scenarios.py - what-if evaluation.
"""

import pytest

from media_planner.config.schema import PacingMode
from media_planner.planning.scenarios import (
    ScenarioResult,
    apply_overrides,
    run_scenarios,
    compare_scenarios,
    sweep_parameter,
)


class TestApplyOverrides:

    def test_returns_new_settings(self, derived_plan):
        updated = apply_overrides(derived_plan.settings, {"efficiency_rate": 5})

        assert updated.efficiency_rate == 5
        assert derived_plan.settings.efficiency_rate == 0

    def test_string_enum_override(self, derived_plan):
        updated = apply_overrides(derived_plan.settings, {"pacing_mode": "growth"})
        assert updated.pacing_mode == PacingMode.GROWTH

    def test_unknown_setting(self, derived_plan):
        with pytest.raises(ValueError, match="Unknown settings"):
            apply_overrides(derived_plan.settings, {"budget": 10})

    def test_invalid_value(self, derived_plan):
        with pytest.raises(ValueError, match="Invalid scenario overrides"):
            apply_overrides(derived_plan.settings, {"timeframe_months": 0})


class TestRunScenarios:

    def test_baseline_first(self, derived_plan):
        results = run_scenarios(derived_plan, {"efficient": {"efficiency_rate": 10}})

        assert [r.name for r in results] == ["baseline", "efficient"]
        assert all(isinstance(r, ScenarioResult) for r in results)
        assert results[0].overrides == {}

    def test_without_baseline(self, derived_plan):
        results = run_scenarios(derived_plan, {"a": {}}, include_baseline=False)
        assert [r.name for r in results] == ["a"]

    def test_efficiency_lowers_spend(self, derived_plan):
        baseline, efficient = run_scenarios(derived_plan, {"efficient": {"efficiency_rate": 10}})
        assert efficient.result.totals.spend < baseline.result.totals.spend
        assert efficient.result.totals.installs == pytest.approx(baseline.result.totals.installs)


class TestCompareScenarios:

    def test_columns(self, derived_plan):
        df = compare_scenarios(run_scenarios(derived_plan, {"double": {"target_onboard": 12000}}))

        assert list(df["scenario"]) == ["baseline", "double"]
        assert df["spend_vs_first"].iloc[0] == 0
        assert df["spend_vs_first"].iloc[1] == pytest.approx(100)
        assert df["avg_cpi_vs_first"].iloc[1] == pytest.approx(0)

    def test_peak_monthly_spend(self, derived_plan):
        df = compare_scenarios(run_scenarios(derived_plan, {}))
        assert df["peak_monthly_spend"].iloc[0] == pytest.approx(26666.666667)

    def test_empty(self):
        assert compare_scenarios([]).empty


class TestSweepParameter:

    def test_sweep(self, derived_plan):
        df = sweep_parameter(derived_plan, "installs_per_onboard", [2, 4, 8])

        assert list(df["installs_per_onboard"]) == [2, 4, 8]
        assert df["total_installs"].tolist() == pytest.approx([12000, 24000, 48000])

    def test_repeated_values_evaluated_once(self, derived_plan):
        df = sweep_parameter(derived_plan, "installs_per_onboard", [4, 4, 8])

        assert list(df["installs_per_onboard"]) == [4, 8]
        assert list(df["scenario"]) == ["installs_per_onboard=4", "installs_per_onboard=8"]

    def test_unknown_parameter(self, derived_plan):
        with pytest.raises(ValueError):
            sweep_parameter(derived_plan, "nope", [1])
