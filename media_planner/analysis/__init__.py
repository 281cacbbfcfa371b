"""Reporting and export for Media Planner."""

from .export import (
    generate_channel_table,
    generate_monthly_breakdown,
    generate_plan_report,
    write_plan_report,
)
from .reporting import ReportGenerator

__all__ = [
    "generate_channel_table",
    "generate_monthly_breakdown",
    "generate_plan_report",
    "write_plan_report",
    "ReportGenerator",
]
