"""
Compounding monthly efficiency gains on cost-per-install.
"""

import numpy as np


def efficiency_multiplier(efficiency_rate: float, month_index: int) -> float:
    """
    CPI multiplier for a 0-based month index.

    (1 - rate/100) ** month_index, so month 1 is always 1.0. Rates of
    100 or more are not clamped and give zero or negative multipliers.
    Magnitudes past the float range become +/-inf.
    """
    return float(efficiency_multipliers(efficiency_rate, month_index + 1)[month_index])


def efficiency_multipliers(efficiency_rate: float, num_months: int) -> np.ndarray:
    """Multipliers for months 0..num_months-1."""
    with np.errstate(over="ignore"):
        return np.power(1 - efficiency_rate / 100, np.arange(num_months, dtype=float))


def effective_cpi_matrix(base_cpi: np.ndarray, multipliers: np.ndarray) -> np.ndarray:
    """
    Effective CPI per month and channel.

    A zero base CPI stays zero even when its multiplier overflowed to inf.

    Parameters
    ----------
    base_cpi : np.ndarray
        Baseline CPI per channel, shape (num_channels,).
    multipliers : np.ndarray
        Efficiency multiplier per month, shape (num_months,).

    Returns
    -------
    np.ndarray
        Shape (num_months, num_channels).
    """
    base_cpi = np.asarray(base_cpi, dtype=float)
    with np.errstate(invalid="ignore", over="ignore"):
        cpi = np.outer(multipliers, base_cpi)
    return np.where(base_cpi == 0, 0.0, cpi)
