"""
Export functions for generating the media plan CSV report.

The report has four sections (title, global settings, channel
configuration, monthly breakdown) separated by blank lines.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from media_planner.config.schema import ChannelConfig, GlobalConfig, PlanConfig
from media_planner.planning.results import ChannelMetrics, ModelResult

logger = logging.getLogger(__name__)

REPORT_TITLE = "MEDIA PLAN MODELER REPORT"


def _money(value: float) -> str:
    return f"${value:.2f}"


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _pct(value: float, decimals: int) -> str:
    return f"{value * 100:.{decimals}f}%"


def generate_channel_table(
    settings: GlobalConfig,
    channels: Sequence[ChannelConfig],
    result: ModelResult,
) -> pd.DataFrame:
    """
    Channel configuration section as a DataFrame.

    Parameters
    ----------
    settings : GlobalConfig
        Plan settings (fixed CPI is the fallback for channels missing from the result).
    channels : Sequence[ChannelConfig]
        Channels in plan order.
    result : ModelResult
        Computed plan.

    Returns
    -------
    pd.DataFrame
        Columns: Channel, Allocation (Effective Avg), CTR, Install Rate, CPM, Derived CPI
    """
    rows = []
    for ch in channels:
        metrics = result.derived_metrics.get(
            ch.id, ChannelMetrics(cpc=0.0, cpi=settings.fixed_cpi, effective_allocation=0.0)
        )
        rows.append({
            "Channel": ch.get_display_name(),
            "Allocation (Effective Avg)": _pct(metrics.effective_allocation, 1),
            "CTR": _pct(ch.ctr, 2),
            "Install Rate": _pct(ch.install_rate, 1),
            "CPM": _money(ch.cpm),
            "Derived CPI": _money(metrics.cpi),
        })
    return pd.DataFrame(
        rows,
        columns=["Channel", "Allocation (Effective Avg)", "CTR", "Install Rate", "CPM", "Derived CPI"],
    )


def generate_monthly_breakdown(
    channels: Sequence[ChannelConfig],
    result: ModelResult,
) -> pd.DataFrame:
    """
    Monthly breakdown section as a DataFrame of formatted strings.

    Currency columns use 2 decimals and counts 0 decimals. Per-channel
    columns are '<name> Spend', '<name> CPI', '<name> Installs'.
    """
    columns = ["Month", "Total Spend", "Total Installs", "Total Onboard"]
    for ch in channels:
        name = ch.get_display_name()
        columns += [f"{name} Spend", f"{name} CPI", f"{name} Installs"]

    rows = []
    for row in result.monthly_data:
        values = [
            row.month_label,
            f"{row.monthly_spend:.2f}",
            f"{row.installs_required:.0f}",
            f"{row.onboard_target:.0f}",
        ]
        for ch in channels:
            res = row.channels.get(ch.id)
            spend, cpi, installs = (res.spend, res.cpi, res.installs) if res else (0.0, 0.0, 0.0)
            values += [f"{spend:.2f}", f"{cpi:.2f}", f"{installs:.0f}"]
        rows.append(values)

    return pd.DataFrame(rows, columns=columns)


def generate_plan_report(
    settings: GlobalConfig,
    channels: Sequence[ChannelConfig],
    result: ModelResult,
) -> str:
    """
    Build the full CSV report text.

    Parameters
    ----------
    settings : GlobalConfig
        Plan settings.
    channels : Sequence[ChannelConfig]
        Channels in plan order (display names are taken from here).
    result : ModelResult
        Computed plan.

    Returns
    -------
    str
        CSV text with standard quoting.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow([REPORT_TITLE])
    writer.writerow([])

    writer.writerow(["GLOBAL SETTINGS"])
    writer.writerow(["Target Onboard", _number(settings.target_onboard)])
    writer.writerow(["Timeframe (Months)", settings.timeframe_months])
    writer.writerow(["Mode", settings.mode.value])
    writer.writerow([
        "Monthly Allocation Mode",
        "Enabled" if settings.enable_monthly_allocation else "Disabled",
    ])
    writer.writerow([])

    writer.writerow(["CHANNEL CONFIGURATION (Global Metrics)"])
    buffer.write(generate_channel_table(settings, channels, result).to_csv(index=False, lineterminator="\n"))
    writer.writerow([])

    writer.writerow(["MONTHLY BREAKDOWN"])
    buffer.write(generate_monthly_breakdown(channels, result).to_csv(index=False, lineterminator="\n"))

    return buffer.getvalue()


def write_plan_report(
    plan: PlanConfig,
    result: ModelResult,
    output_path: Union[str, Path],
) -> Path:
    """
    Write the CSV report for a plan to disk.

    Returns
    -------
    Path
        The written file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    content = generate_plan_report(plan.settings, plan.channels, result)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(content)

    logger.info(f"Report saved to {output_path}")
    return output_path
