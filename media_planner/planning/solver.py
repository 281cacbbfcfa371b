"""
Spend solving and funnel reverse-derivation.

Given a month's install target, its channel mix and the channels'
effective cost-per-install, find the spend that delivers the target and
walk the funnel back from installs to clicks and impressions.
"""

from dataclasses import dataclass
import numpy as np


def safe_divide(numerator: np.ndarray, denominator: np.ndarray) -> np.ndarray:
    """Elementwise numerator / denominator, 0 wherever denominator <= 0."""
    numerator = np.asarray(numerator, dtype=float)
    denominator = np.asarray(denominator, dtype=float)
    valid = denominator > 0
    safe = np.where(valid, denominator, 1.0)
    with np.errstate(over="ignore"):
        return np.where(valid, numerator / safe, 0.0)


def solve_monthly_spend(
    installs_required: np.ndarray,
    weights: np.ndarray,
    effective_cpi: np.ndarray,
) -> np.ndarray:
    """
    Total spend per month meeting each month's install target.

    Installs = Spend * sum_i(w_i / c_i), hence Spend = I / sum_i(w_i / c_i).
    Only channels with c_i > 0 and w_i > 0 enter the sum; a month with an
    empty sum gets zero spend.

    Parameters
    ----------
    installs_required : np.ndarray
        Install target per month, shape (num_months,).
    weights : np.ndarray
        Normalized allocation, shape (num_months, num_channels).
    effective_cpi : np.ndarray
        Effective CPI, shape (num_months, num_channels).

    Returns
    -------
    np.ndarray
        Spend per month, shape (num_months,).
    """
    weights = np.asarray(weights, dtype=float)
    effective_cpi = np.asarray(effective_cpi, dtype=float)

    contributes = (effective_cpi > 0) & (weights > 0)
    safe_cpi = np.where(contributes, effective_cpi, 1.0)
    capacity = np.where(contributes, weights / safe_cpi, 0.0).sum(axis=1)

    return safe_divide(installs_required, capacity)


@dataclass(frozen=True)
class FunnelVolumes:
    """Funnel volumes per month and channel, each of shape (num_months, num_channels)."""
    installs: np.ndarray
    onboard: np.ndarray
    clicks: np.ndarray
    impressions: np.ndarray


def derive_funnel(
    channel_spend: np.ndarray,
    effective_cpi: np.ndarray,
    install_rates: np.ndarray,
    ctrs: np.ndarray,
    installs_per_onboard: float,
) -> FunnelVolumes:
    """
    Reverse the funnel from spend down to impressions.

    installs = spend / cpi, onboard = installs / installs_per_onboard,
    clicks = installs / install_rate, impressions = clicks / ctr. Each
    step yields 0 when its denominator is not positive, so degenerate
    channels contribute nothing.

    Parameters
    ----------
    channel_spend : np.ndarray
        Spend per month and channel.
    effective_cpi : np.ndarray
        Effective CPI per month and channel.
    install_rates : np.ndarray
        Install rate per channel, shape (num_channels,).
    ctrs : np.ndarray
        Click-through rate per channel, shape (num_channels,).
    installs_per_onboard : float
        Installs needed per onboarded user.

    Returns
    -------
    FunnelVolumes
    """
    channel_spend = np.asarray(channel_spend, dtype=float)
    install_rates = np.broadcast_to(np.asarray(install_rates, dtype=float), channel_spend.shape)
    ctrs = np.broadcast_to(np.asarray(ctrs, dtype=float), channel_spend.shape)

    installs = safe_divide(channel_spend, effective_cpi)
    onboard = safe_divide(installs, np.full(channel_spend.shape, installs_per_onboard, dtype=float))
    clicks = safe_divide(installs, install_rates)
    impressions = safe_divide(clicks, ctrs)

    return FunnelVolumes(
        installs=installs,
        onboard=onboard,
        clicks=clicks,
        impressions=impressions,
    )
