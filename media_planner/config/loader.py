"""
Configuration loader for YAML plan files.
"""

import yaml
from pathlib import Path
from typing import Union
import logging

from pydantic import ValidationError

from .schema import PlanConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load and save media plan configurations."""

    @staticmethod
    def from_yaml(path: Union[str, Path]) -> PlanConfig:
        """
        Load a plan from a YAML file.

        Parameters
        ----------
        path : Union[str, Path]
            Path to the YAML plan file.

        Returns
        -------
        PlanConfig
            Validated plan configuration.

        Raises
        ------
        FileNotFoundError
            If the plan file doesn't exist.
        ValueError
            If the plan is invalid.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Plan file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

        try:
            config = PlanConfig(**config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid plan in {path}: {e}") from e

        logger.info(f"Loaded plan '{config.name}' from {path} ({len(config.channels)} channels)")
        return config

    @staticmethod
    def to_yaml(config: PlanConfig, path: Union[str, Path]) -> None:
        """
        Save a plan to a YAML file.

        Parameters
        ----------
        config : PlanConfig
            Plan configuration to save.
        path : Union[str, Path]
            Path to save the YAML file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = config.model_dump(mode="json")

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Saved plan '{config.name}' to {path}")

    @staticmethod
    def from_dict(config_dict: dict) -> PlanConfig:
        """Load a plan from a dictionary."""
        return PlanConfig(**config_dict)

    @staticmethod
    def get_template() -> dict:
        """
        Get a template plan dictionary with all options documented.

        Returns
        -------
        dict
            Template plan with default values.
        """
        return {
            "name": "my_media_plan",
            "description": "User acquisition budget plan",
            "settings": {
                "target_onboard": 10000,
                "timeframe_months": 12,
                "mode": "fixed_cpi",
                "fixed_cpi": 5.36,
                "installs_per_onboard": 10,
                "pacing_mode": "linear",
                "monthly_growth_rate": 0.0,
                "efficiency_rate": 0.0,
                "enable_monthly_allocation": False,
            },
            "channels": [
                {
                    "id": "paid-social",
                    "name": "Paid Social",
                    "allocation": 0.6,
                    "ctr": 0.013,
                    "install_rate": 0.2,
                    "cpm": 12.0,
                },
                {
                    "id": "search",
                    "name": "Search",
                    "allocation": 0.4,
                    "monthly_allocations": {0: 0.5, 1: 0.5},
                    "ctr": 0.04,
                    "install_rate": 0.1,
                    "cpm": 25.0,
                },
            ],
        }
