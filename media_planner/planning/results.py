"""
Result dataclasses for media plan calculations.

This module defines the data structures returned by the planning engine:
per-month rows, per-channel monthly results, plan totals and the
derived per-channel metrics.
"""

from dataclasses import dataclass, field
import pandas as pd


@dataclass(frozen=True)
class ChannelMonthResult:
    """One channel's outcome in one month."""
    spend: float
    installs: float
    onboard: float
    clicks: float
    impressions: float
    cpi: float  # Effective CPI after efficiency decay


@dataclass(frozen=True)
class MonthlyData:
    """One row of the plan."""
    month: int  # 1-based
    month_label: str
    onboard_target: float
    installs_required: float
    monthly_spend: float
    cumulative_onboard: float
    cumulative_installs: float
    cumulative_spend: float
    channels: dict[str, ChannelMonthResult] = field(default_factory=dict)  # {channel_id: result}


@dataclass(frozen=True)
class PlanTotals:
    """Whole-plan totals."""
    spend: float
    installs: float
    onboarded: float
    impressions: float
    clicks: float
    avg_cpi: float


@dataclass(frozen=True)
class ChannelMetrics:
    """Baseline unit costs and realized share of plan spend for a channel."""
    cpc: float
    cpi: float
    effective_allocation: float  # Share of total plan spend (0-1)


@dataclass(frozen=True)
class ModelResult:
    """
    Complete result of a media plan calculation.

    Channel-level maps are keyed by channel id; ``channel_names`` holds the
    display names as they were when the plan was computed.
    """

    monthly_data: tuple[MonthlyData, ...]
    totals: PlanTotals
    derived_metrics: dict[str, ChannelMetrics]  # {channel_id: metrics}
    overall_weighted_cpi: float
    channel_names: dict[str, str] = field(default_factory=dict)  # {channel_id: display name}

    @property
    def num_months(self) -> int:
        return len(self.monthly_data)

    @property
    def channel_ids(self) -> list[str]:
        return list(self.derived_metrics.keys())

    def channel_name(self, channel_id: str) -> str:
        return self.channel_names.get(channel_id, channel_id)

    def channel_total(self, channel_id: str, metric: str = "spend") -> float:
        """Sum of a per-channel metric ('spend', 'installs', ...) across months."""
        return sum(getattr(row.channels[channel_id], metric) for row in self.monthly_data)

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per month with plan-level columns.

        Returns:
            DataFrame with columns: month, month_label, onboard_target,
            installs_required, monthly_spend, cumulative_onboard,
            cumulative_installs, cumulative_spend
        """
        return pd.DataFrame([
            {
                "month": row.month,
                "month_label": row.month_label,
                "onboard_target": row.onboard_target,
                "installs_required": row.installs_required,
                "monthly_spend": row.monthly_spend,
                "cumulative_onboard": row.cumulative_onboard,
                "cumulative_installs": row.cumulative_installs,
                "cumulative_spend": row.cumulative_spend,
            }
            for row in self.monthly_data
        ])

    def channel_dataframe(self) -> pd.DataFrame:
        """
        Long-format per-channel results (one row per month and channel).

        Returns:
            DataFrame with columns: month, channel_id, channel, spend,
            installs, onboard, clicks, impressions, cpi
        """
        records = []
        for row in self.monthly_data:
            for channel_id, res in row.channels.items():
                records.append({
                    "month": row.month,
                    "channel_id": channel_id,
                    "channel": self.channel_name(channel_id),
                    "spend": res.spend,
                    "installs": res.installs,
                    "onboard": res.onboard,
                    "clicks": res.clicks,
                    "impressions": res.impressions,
                    "cpi": res.cpi,
                })
        return pd.DataFrame(
            records,
            columns=["month", "channel_id", "channel", "spend", "installs",
                     "onboard", "clicks", "impressions", "cpi"],
        )

    def get_summary_dict(self) -> dict:
        """
        Get a JSON-serializable summary dictionary.

        Returns:
            Dictionary with totals, per-channel metrics and monthly rows.
        """
        return {
            "num_months": self.num_months,
            "overall_weighted_cpi": self.overall_weighted_cpi,
            "totals": {
                "spend": self.totals.spend,
                "installs": self.totals.installs,
                "onboarded": self.totals.onboarded,
                "impressions": self.totals.impressions,
                "clicks": self.totals.clicks,
                "avg_cpi": self.totals.avg_cpi,
            },
            "channels": [
                {
                    "id": channel_id,
                    "name": self.channel_name(channel_id),
                    "cpc": metrics.cpc,
                    "cpi": metrics.cpi,
                    "effective_allocation": metrics.effective_allocation,
                    "total_spend": self.channel_total(channel_id, "spend"),
                    "total_installs": self.channel_total(channel_id, "installs"),
                }
                for channel_id, metrics in self.derived_metrics.items()
            ],
            "monthly": [
                {
                    "month": row.month,
                    "month_label": row.month_label,
                    "onboard_target": row.onboard_target,
                    "installs_required": row.installs_required,
                    "monthly_spend": row.monthly_spend,
                    "cumulative_onboard": row.cumulative_onboard,
                    "cumulative_installs": row.cumulative_installs,
                    "cumulative_spend": row.cumulative_spend,
                    "channels": {
                        channel_id: {
                            "spend": res.spend,
                            "installs": res.installs,
                            "onboard": res.onboard,
                            "clicks": res.clicks,
                            "impressions": res.impressions,
                            "cpi": res.cpi,
                        }
                        for channel_id, res in row.channels.items()
                    },
                }
                for row in self.monthly_data
            ],
        }
