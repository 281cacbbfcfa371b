"""
Integration tests for the full planning pipeline.

YAML plan -> engine -> reports, and the CLI wrapping them.
"""

import json

import pytest

from cli import main
from media_planner.config.loader import ConfigLoader
from media_planner.analysis.reporting import ReportGenerator


@pytest.fixture
def plan_file(tmp_path, growth_plan):
    path = tmp_path / "plan.yaml"
    ConfigLoader.to_yaml(growth_plan, path)
    return path


class TestPipeline:

    def test_yaml_to_report(self, plan_file, tmp_path):
        plan = ConfigLoader.from_yaml(plan_file)
        generator = ReportGenerator(plan)

        csv_text = generator.export_report_csv(tmp_path / "report.csv")
        summary = json.loads(generator.generate_json_report(tmp_path / "report.json"))

        assert "Monthly Allocation Mode,Enabled" in csv_text
        assert summary["totals"]["onboarded"] == pytest.approx(12000)
        assert summary["totals"]["installs"] == pytest.approx(60000)

    def test_loaded_plan_matches_original(self, plan_file, growth_plan):
        loaded = ConfigLoader.from_yaml(plan_file)
        assert loaded.compute() == growth_plan.compute()


class TestCli:

    def test_plan_command(self, plan_file, tmp_path):
        out = tmp_path / "out"
        main(["plan", "--config", str(plan_file), "--output", str(out)])

        assert len(list(out.glob("media_plan_report_*.csv"))) == 1
        assert len(list(out.glob("monthly_*.csv"))) == 1
        assert len(list(out.glob("report_*.json"))) == 1

    def test_plan_json_only(self, plan_file, tmp_path):
        out = tmp_path / "out"
        main(["plan", "--config", str(plan_file), "--output", str(out), "--format", "json"])

        assert list(out.glob("*.csv")) == []
        assert len(list(out.glob("report_*.json"))) == 1

    def test_template_command(self, tmp_path):
        path = tmp_path / "template.yaml"
        main(["template", "--output", str(path)])

        assert ConfigLoader.from_yaml(path).name == "my_media_plan"

    def test_sweep_command(self, plan_file, tmp_path, capsys):
        out = tmp_path / "sweep.csv"
        main([
            "sweep", "--config", str(plan_file),
            "--parameter", "efficiency_rate", "--values", "0", "5", "10",
            "--output", str(out),
        ])

        assert out.exists()
        assert "efficiency_rate=5.0" in capsys.readouterr().out

    def test_missing_config_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["plan", "--config", str(tmp_path / "missing.yaml")])
        assert exc.value.code == 1

    def test_no_command_exits(self):
        with pytest.raises(SystemExit):
            main([])
