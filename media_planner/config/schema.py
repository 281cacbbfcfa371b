"""
Pydantic schemas for media plan configuration.

These schemas define the structure and validation rules for the
plan-wide settings and the per-channel performance inputs consumed
by the planning engine.
"""

import re
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from enum import Enum


# =============================================================================
# Helper Functions
# =============================================================================

def slugify_channel_name(name: str) -> str:
    """
    Build a stable channel id from a display name.

    Parameters
    ----------
    name : str
        Channel display name (e.g., 'Google UAC').

    Returns
    -------
    str
        Lowercase id with non-alphanumerics collapsed to '-' (e.g., 'google-uac').
    """
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")
    return slug or "channel"



def sum_default_allocations(channels) -> float:
    """Sum of the channels' default allocations (need not be 1)."""
    return sum(ch.allocation for ch in channels)


# =============================================================================
# Enums
# =============================================================================

class CalculationMode(str, Enum):
    """How cost-per-install is obtained for each channel."""
    FIXED_CPI = "fixed_cpi"    # One externally supplied CPI for every channel
    DERIVE_CPI = "derive_cpi"  # CPI derived from cpm / ctr / install_rate


class PacingMode(str, Enum):
    """Temporal law used to spread the onboarding target across months."""
    LINEAR = "linear"
    GROWTH = "growth"


class ChannelConfig(BaseModel):
    """Configuration for a single marketing channel."""
    model_config = ConfigDict(frozen=True)

    id: str = Field("", description="Stable identifier (defaults to a slug of the name)")
    name: str = Field(..., min_length=1, description="Display name, unique within a plan")
    allocation: float = Field(0.0, ge=0, le=1, description="Default share of spend when no monthly override applies")
    monthly_allocations: dict[int, float] = Field(
        default_factory=dict,
        description="Override weights keyed by 0-based month index; missing months use allocation",
    )
    ctr: float = Field(0.01, ge=0, description="Click-through rate (0.013 = 1.3%)")
    install_rate: float = Field(0.1, ge=0, description="Share of clicks that install (0.20 = 20%)")
    cpm: float = Field(10.0, ge=0, description="Cost per thousand impressions")

    @model_validator(mode="before")
    @classmethod
    def default_id_from_name(cls, data: Any) -> Any:
        """Derive the id from the name when none is given."""
        if isinstance(data, dict) and not data.get("id") and data.get("name"):
            data = dict(data)
            data["id"] = slugify_channel_name(data["name"])
        return data

    @field_validator("monthly_allocations", mode="before")
    @classmethod
    def migrate_list_allocations(cls, v):
        """Accept the array form (with null holes) and convert it to a mapping."""
        if v is None:
            return {}
        if isinstance(v, (list, tuple)):
            return {i: w for i, w in enumerate(v) if w is not None}
        return v

    @field_validator("monthly_allocations")
    @classmethod
    def non_negative_overrides(cls, v):
        for month_index, weight in v.items():
            if month_index < 0:
                raise ValueError(f"Monthly allocation month index must be >= 0, got {month_index}")
            if weight < 0:
                raise ValueError(f"Monthly allocation for month {month_index} must be >= 0, got {weight}")
        return v

    def get_display_name(self) -> str:
        """Return the name shown in reports and tables."""
        return self.name

    def get_allocation(self, month_index: int, use_monthly: bool = True) -> float:
        """
        Raw (un-normalized) allocation weight for a month.

        Parameters
        ----------
        month_index : int
            0-based month index.
        use_monthly : bool
            Whether monthly overrides are enabled for the plan.

        Returns
        -------
        float
            The override for that month if enabled and present, else the default allocation.
        """
        if use_monthly and month_index in self.monthly_allocations:
            return self.monthly_allocations[month_index]
        return self.allocation


class GlobalConfig(BaseModel):
    """Plan-wide parameters."""
    model_config = ConfigDict(frozen=True)

    target_onboard: float = Field(10000, ge=0, description="Total onboarded users desired over the timeframe")
    timeframe_months: int = Field(12, ge=1, description="Number of months in the plan")
    mode: CalculationMode = Field(CalculationMode.FIXED_CPI, description="Fixed or derived cost-per-install")
    fixed_cpi: float = Field(5.36, ge=0, description="Cost-per-install used in fixed_cpi mode")
    installs_per_onboard: float = Field(10, ge=0, description="Installs required per onboarded user")
    pacing_mode: PacingMode = Field(PacingMode.LINEAR, description="How the target is paced across months")
    monthly_growth_rate: float = Field(0.0, gt=-100, description="Month-over-month growth of the target, in percent")
    efficiency_rate: float = Field(0.0, description="Monthly compounding CPI reduction, in percent (not clamped)")
    enable_monthly_allocation: bool = Field(False, description="Use per-channel monthly allocation overrides")

    @property
    def uses_derived_cpi(self) -> bool:
        return self.mode == CalculationMode.DERIVE_CPI


class PlanConfig(BaseModel):
    """A named media plan: global settings plus an ordered channel list."""
    name: str = Field("media_plan", description="Plan name")
    description: Optional[str] = Field(None, description="Optional description")
    settings: GlobalConfig = Field(default_factory=GlobalConfig)
    channels: list[ChannelConfig] = Field(..., min_length=1, description="Channels, in display order")

    @model_validator(mode="before")
    @classmethod
    def assign_default_ids(cls, data: Any) -> Any:
        """
        Slug ids for channels given without one.

        A slug already taken by another channel gets a numeric suffix
        ('google-uac', 'google-uac-2', ...) so distinct names never clash.
        """
        if not isinstance(data, dict) or not isinstance(data.get("channels"), list):
            return data

        taken = set()
        for ch in data["channels"]:
            if isinstance(ch, ChannelConfig):
                taken.add(ch.id)
            elif isinstance(ch, dict) and ch.get("id"):
                taken.add(ch["id"])

        channels = []
        for ch in data["channels"]:
            if isinstance(ch, dict) and not ch.get("id") and ch.get("name"):
                base = slugify_channel_name(ch["name"])
                channel_id, suffix = base, 2
                while channel_id in taken:
                    channel_id = f"{base}-{suffix}"
                    suffix += 1
                taken.add(channel_id)
                ch = {**ch, "id": channel_id}
            channels.append(ch)
        return {**data, "channels": channels}

    @model_validator(mode="after")
    def unique_channels(self) -> "PlanConfig":
        """Channel ids and display names must both be unique."""
        ids = [ch.id for ch in self.channels]
        names = [ch.name for ch in self.channels]
        dup_ids = sorted({i for i in ids if ids.count(i) > 1})
        dup_names = sorted({n for n in names if names.count(n) > 1})
        if dup_ids:
            raise ValueError(
                f"Duplicate channel ids: {dup_ids} (ids default to a slug of the name; set explicit ids)"
            )
        if dup_names:
            raise ValueError(f"Duplicate channel names: {dup_names}")
        return self

    @property
    def total_allocation(self) -> float:
        """Sum of default allocations (need not be 1; the engine normalizes)."""
        return sum_default_allocations(self.channels)

    def compute(self):
        """Run the planning engine on this plan."""
        from media_planner.planning.engine import calculate_media_plan
        return calculate_media_plan(self.settings, self.channels)
