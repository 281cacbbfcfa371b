"""
Tests for analysis/reporting.py and result serialization.

Ensures that report output is JSON-serializable and doesn't contain
numpy types.
"""

import json

import numpy as np
import pandas as pd
import pytest

from media_planner.analysis.reporting import ReportGenerator


def find_non_serializable(obj, path: str = "") -> list:
    """
    Recursively find numpy scalars or other non-JSON values in a nested structure.

    Returns list of (path, type name) tuples.
    """
    issues = []
    if isinstance(obj, dict):
        for key, value in obj.items():
            issues.extend(find_non_serializable(value, f"{path}.{key}" if path else str(key)))
    elif isinstance(obj, (list, tuple)):
        for i, value in enumerate(obj):
            issues.extend(find_non_serializable(value, f"{path}[{i}]"))
    elif isinstance(obj, (np.bool_, np.integer, np.floating)):
        issues.append((path, type(obj).__name__))
    elif obj is not None and not isinstance(obj, (str, int, float, bool)):
        issues.append((path, type(obj).__name__))
    return issues


@pytest.fixture
def generator(derived_plan):
    return ReportGenerator(derived_plan)


class TestSummary:

    def test_result_summary_native_types(self, derived_plan):
        summary = derived_plan.compute().get_summary_dict()
        assert find_non_serializable(summary) == []

    def test_generator_summary_native_types(self, generator):
        assert find_non_serializable(generator.generate_summary()) == []

    def test_summary_contents(self, generator):
        summary = generator.generate_summary()

        assert summary["metadata"]["plan_name"] == "derived_plan"
        assert summary["settings"]["mode"] == "derive_cpi"
        assert summary["num_months"] == 6
        assert len(summary["monthly"]) == 6
        assert [c["id"] for c in summary["channels"]] == ["social", "search"]
        assert summary["totals"]["spend"] == pytest.approx(160000)

    def test_uses_supplied_result(self, derived_plan):
        result = derived_plan.compute()
        assert ReportGenerator(derived_plan, result).result is result


class TestJsonReport:

    def test_json_string(self, generator):
        parsed = json.loads(generator.generate_json_report())
        assert parsed["totals"]["installs"] == pytest.approx(24000)

    def test_writes_file(self, generator, tmp_path):
        path = tmp_path / "reports" / "plan.json"
        generator.generate_json_report(path)
        assert json.loads(path.read_text())["metadata"]["plan_name"] == "derived_plan"


class TestCsvExports:

    def test_report_csv(self, generator, tmp_path):
        path = tmp_path / "report.csv"
        content = generator.export_report_csv(path)

        assert path.read_text(encoding="utf-8") == content
        assert "MONTHLY BREAKDOWN" in content

    def test_monthly_csv(self, generator, tmp_path):
        path = generator.export_monthly_csv(tmp_path / "monthly.csv")
        df = pd.read_csv(path)

        assert len(df) == 6
        assert "monthly_spend" in df.columns
        assert "Social spend" in df.columns
        assert "Search installs" in df.columns
        assert df["Social installs"].iloc[0] == pytest.approx(2666.666667)


class TestResultFrames:

    def test_to_dataframe(self, derived_plan):
        df = derived_plan.compute().to_dataframe()
        assert list(df["month"]) == [1, 2, 3, 4, 5, 6]
        assert df["cumulative_spend"].iloc[-1] == pytest.approx(160000)

    def test_channel_dataframe(self, derived_plan):
        df = derived_plan.compute().channel_dataframe()
        assert len(df) == 12
        assert set(df["channel"]) == {"Social", "Search"}
        assert df.groupby("channel_id")["spend"].sum()["social"] == pytest.approx(80000)
