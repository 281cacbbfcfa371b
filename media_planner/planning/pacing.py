"""
Pacing laws for spreading the onboarding target across months.

This module provides factory methods that turn a cumulative onboarding
target into one target per month.
"""

import numpy as np
import logging

from media_planner.config.schema import GlobalConfig, PacingMode

logger = logging.getLogger(__name__)


class PacingGenerator:
    """
    Factory for monthly onboarding target sequences.

    Every sequence has one value per month and sums to the overall
    target (within floating point tolerance).

    Examples
    --------
    >>> # Equal target every month
    >>> targets = PacingGenerator.linear(12000, 12)
    >>>
    >>> # 10% month-over-month growth
    >>> targets = PacingGenerator.growth(12000, 12, growth_rate=10)
    """

    @staticmethod
    def linear(target_onboard: float, num_months: int) -> np.ndarray:
        """
        Create a flat pacing (equal target per month).

        Parameters
        ----------
        target_onboard : float
            Total onboarded users over the plan.
        num_months : int
            Number of months.

        Returns
        -------
        np.ndarray
            Array of length num_months.
        """
        _check_months(num_months)
        return np.full(num_months, target_onboard / num_months, dtype=float)

    @staticmethod
    def growth(
        target_onboard: float,
        num_months: int,
        growth_rate: float,
    ) -> np.ndarray:
        """
        Create a geometric pacing (compounding month-over-month growth).

        Solves the geometric series sum for its first term,
        a = S * (1 - r) / (1 - r^n), then emits a, a*r, a*r^2, ...

        Parameters
        ----------
        target_onboard : float
            Total onboarded users over the plan (series sum S).
        num_months : int
            Number of months (n).
        growth_rate : float
            Monthly growth in percent (10 = +10% per month). A rate too
            small to move the ratio off 1.0 is identical to linear pacing.

        Returns
        -------
        np.ndarray
            Array of length num_months.
        """
        _check_months(num_months)
        ratio = 1 + growth_rate / 100
        if ratio == 1:
            # r == 1 makes the closed form 0/0
            return PacingGenerator.linear(target_onboard, num_months)

        # r^n may overflow to inf, which drives every target to 0
        with np.errstate(over="ignore"):
            series_factor = 1 - np.power(ratio, num_months, dtype=float)
        first_month = target_onboard * (1 - ratio) / series_factor

        # Repeated multiplication, one term per month
        factors = np.full(num_months, ratio, dtype=float)
        factors[0] = first_month
        return np.cumprod(factors)

    @staticmethod
    def from_settings(settings: GlobalConfig) -> np.ndarray:
        """Pacing for a plan's global settings."""
        if settings.pacing_mode == PacingMode.GROWTH:
            return PacingGenerator.growth(
                settings.target_onboard,
                settings.timeframe_months,
                settings.monthly_growth_rate,
            )
        return PacingGenerator.linear(settings.target_onboard, settings.timeframe_months)


def _check_months(num_months: int) -> None:
    if num_months < 1:
        raise ValueError(f"num_months must be >= 1, got {num_months}")


def validate_pacing(
    targets: np.ndarray,
    target_onboard: float,
    num_months: int,
) -> tuple[bool, str]:
    """
    Validate a monthly target sequence.

    Parameters
    ----------
    targets : np.ndarray
        Monthly targets to validate.
    target_onboard : float
        Expected sum.
    num_months : int
        Expected length.

    Returns
    -------
    tuple[bool, str]
        (is_valid, error_message)
    """
    if len(targets) != num_months:
        return False, f"Pacing length ({len(targets)}) doesn't match num_months ({num_months})"

    total = float(np.sum(targets))
    if not np.isclose(total, target_onboard, rtol=1e-9, atol=1e-6):
        return False, f"Pacing sums to {total:,.4f}, expected {target_onboard:,.4f}"

    return True, ""
