"""
Report generation for media plan results.
"""

import json
from typing import Optional
from datetime import datetime
from pathlib import Path
import logging

from media_planner.config.schema import PlanConfig
from media_planner.planning.results import ModelResult
from .export import generate_plan_report

logger = logging.getLogger(__name__)


class ReportGenerator:
    """
    Generate reports from a computed media plan.

    Supports:
    - JSON reports for programmatic access
    - The sectioned CSV report for spreadsheets
    - A flat monthly CSV table
    - Summary dictionaries for UI display
    """

    def __init__(self, plan: PlanConfig, result: Optional[ModelResult] = None):
        """
        Initialize ReportGenerator.

        Parameters
        ----------
        plan : PlanConfig
            Plan the result was computed from.
        result : ModelResult, optional
            Computed plan; calculated from `plan` when omitted.
        """
        self.plan = plan
        self.result = result if result is not None else plan.compute()

    def generate_summary(self) -> dict:
        """
        Generate a summary dictionary suitable for UI display.

        Returns
        -------
        dict
            Plan metadata, settings and the result summary.
        """
        summary = self.result.get_summary_dict()
        return {
            "metadata": {
                "plan_name": self.plan.name,
                "description": self.plan.description,
                "generated_at": datetime.now().isoformat(),
            },
            "settings": self.plan.settings.model_dump(mode="json"),
            **summary,
        }

    def generate_json_report(self, output_path: Optional[Path] = None) -> str:
        """
        Generate a JSON report.

        Parameters
        ----------
        output_path : Path, optional
            Path to save the report.

        Returns
        -------
        str
            JSON string.
        """
        json_str = json.dumps(self.generate_summary(), indent=2, default=str)

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(json_str)
            logger.info(f"Report saved to {output_path}")

        return json_str

    def export_report_csv(self, output_path: Optional[Path] = None) -> str:
        """
        Generate the sectioned CSV report.

        Parameters
        ----------
        output_path : Path, optional
            Path to save the report.

        Returns
        -------
        str
            CSV text.
        """
        content = generate_plan_report(self.plan.settings, self.plan.channels, self.result)

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            logger.info(f"Report saved to {output_path}")

        return content

    def export_monthly_csv(self, output_path: Path) -> Path:
        """
        Export a flat month-by-month table with per-channel spend and installs.

        Parameters
        ----------
        output_path : Path
            Path to save the CSV.

        Returns
        -------
        Path
            The written file.
        """
        df = self.result.to_dataframe()
        channels = self.result.channel_dataframe()

        if not channels.empty:
            wide = channels.pivot(index="month", columns="channel", values=["spend", "installs"])
            wide.columns = [f"{channel} {metric}" for metric, channel in wide.columns]
            df = df.merge(wide.reset_index(), on="month", how="left")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False)
        logger.info(f"Monthly table saved to {output_path}")
        return output_path
