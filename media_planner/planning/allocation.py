"""
Per-month channel allocation resolution.

Resolves each channel's raw spend weight for every month (global mix or
monthly override) and normalizes the weights within each month.
"""

from typing import Sequence
import numpy as np
import xarray as xr
import logging

from media_planner.config.schema import ChannelConfig

logger = logging.getLogger(__name__)


def raw_allocation_weights(
    channels: Sequence[ChannelConfig],
    num_months: int,
    use_monthly: bool,
) -> np.ndarray:
    """
    Un-normalized allocation weights.

    Parameters
    ----------
    channels : Sequence[ChannelConfig]
        Channels in plan order.
    num_months : int
        Number of months.
    use_monthly : bool
        Whether monthly overrides replace the default allocation.

    Returns
    -------
    np.ndarray
        Array of shape (num_months, num_channels).
    """
    values = np.zeros((num_months, len(channels)))
    for j, ch in enumerate(channels):
        for i in range(num_months):
            values[i, j] = ch.get_allocation(i, use_monthly)
    return values


def normalize_allocations(raw: np.ndarray) -> np.ndarray:
    """
    Normalize weights so each month sums to 1.

    A month whose raw weights sum to 0 gets all-zero weights (no spend
    is attributable anywhere that month).

    Parameters
    ----------
    raw : np.ndarray
        Raw weights of shape (num_months, num_channels).

    Returns
    -------
    np.ndarray
        Normalized weights, same shape.
    """
    raw = np.asarray(raw, dtype=float)
    totals = raw.sum(axis=1, keepdims=True)
    safe_totals = np.where(totals > 0, totals, 1.0)
    return np.where(totals > 0, raw / safe_totals, 0.0)


def resolve_allocations(
    channels: Sequence[ChannelConfig],
    num_months: int,
    use_monthly: bool = False,
) -> xr.DataArray:
    """
    Effective per-month allocation matrix.

    Parameters
    ----------
    channels : Sequence[ChannelConfig]
        Channels in plan order.
    num_months : int
        Number of months.
    use_monthly : bool
        Whether monthly overrides are enabled.

    Returns
    -------
    xr.DataArray
        Normalized weights with dims (month, channel); the channel
        coordinate holds channel ids and month is 0-based.
    """
    raw = raw_allocation_weights(channels, num_months, use_monthly)
    weights = normalize_allocations(raw)

    empty_months = np.flatnonzero(raw.sum(axis=1) <= 0)
    if len(empty_months) > 0:
        logger.warning(
            f"No allocation in month(s) {[int(m) + 1 for m in empty_months]}; spend will be 0"
        )

    return xr.DataArray(
        weights,
        dims=["month", "channel"],
        coords={
            "month": np.arange(num_months),
            "channel": [ch.id for ch in channels],
        },
    )
