"""
Configuration loader for the fieldtrack change detection engine.

This module provides the ConfigLoader class that loads named tracker
configuration profiles from a JSON file, so that every update handler of an
application can build its ChangesTracker from the same settings.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional, List
from functools import lru_cache

from pydantic import ValidationError

from ..change_detection.change_detection_models import TrackerConfig
from ..exceptions import TrackerConfigurationError
from ..utils import get_logger

CONFIG_FILE_NAME = "tracker_config.json"
ERASED_COMPARE_ENV_VAR = "FIELDTRACK_ERASED_COMPARE"


class ConfigLoader:
    """
    Loader and validator for tracker configuration profiles.

    The configuration file holds a ``shared`` section applied to every
    profile and a ``profiles`` section of named overrides:

        {
            "shared": {"trimToCompare": true},
            "profiles": {
                "default": {},
                "invoices": {"erasedCompare": "ignore", "defaultValues": {"Numeric": -1}}
            }
        }
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the configuration loader.

        Args:
            config_dir: Directory containing tracker_config.json (defaults to 'config/')
        """
        self.logger = get_logger(__name__)
        self.config_dir = Path(config_dir) if config_dir else Path("config")

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @lru_cache(maxsize=1)
    def load_config_file(self) -> Dict[str, Any]:
        """
        Load and structurally validate the tracker configuration file.

        Returns:
            Dictionary with ``shared`` and ``profiles`` sections

        Raises:
            TrackerConfigurationError: If the file is missing or malformed
        """
        if not self.config_path.exists():
            raise TrackerConfigurationError(
                "Tracker configuration file not found",
                {"path": str(self.config_path)}
            )

        try:
            with open(self.config_path, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise TrackerConfigurationError(
                f"Invalid JSON in tracker configuration: {str(e)}",
                {"path": str(self.config_path)}
            ) from e

        self._validate_config_file(config_data)
        self.logger.info("Loaded tracker configuration from %s", self.config_path)
        return config_data

    def list_profiles(self) -> List[str]:
        return sorted(self.load_config_file()["profiles"])

    @lru_cache(maxsize=16)
    def load_tracker_config(self, profile: str = "default") -> TrackerConfig:
        """
        Build the TrackerConfig for a named profile.

        The ``shared`` section is applied first and the profile's values win;
        ``defaultValues`` are merged per field type. The erased-compare policy
        can be overridden through the FIELDTRACK_ERASED_COMPARE environment
        variable.

        Args:
            profile: Profile name from the ``profiles`` section

        Returns:
            Validated TrackerConfig

        Raises:
            TrackerConfigurationError: If the profile is unknown or invalid
        """
        config_data = self.load_config_file()
        profiles = config_data["profiles"]

        if profile not in profiles:
            raise TrackerConfigurationError(
                f"Tracker profile '{profile}' not found",
                {"available": sorted(profiles)}
            )

        shared = dict(config_data.get("shared", {}))
        profile_config = dict(profiles[profile])

        merged = {**shared, **profile_config}
        if "defaultValues" in shared or "defaultValues" in profile_config:
            merged["defaultValues"] = {
                **shared.get("defaultValues", {}),
                **profile_config.get("defaultValues", {})
            }

        env_policy = os.getenv(ERASED_COMPARE_ENV_VAR)
        if env_policy:
            merged.pop("erased_compare", None)
            merged["erasedCompare"] = env_policy
            self.logger.info("Erased compare policy overridden by %s=%s",
                             ERASED_COMPARE_ENV_VAR, env_policy)

        try:
            tracker_config = TrackerConfig.model_validate(merged)
        except ValidationError as e:
            raise TrackerConfigurationError(
                f"Invalid tracker profile '{profile}': {e.error_count()} validation error(s)",
                {"errors": "; ".join(error["msg"] for error in e.errors())}
            ) from e

        self.logger.info("Loaded tracker profile '%s' (erased_compare=%s)",
                         profile, tracker_config.erased_compare.value)
        return tracker_config

    def _validate_config_file(self, config_data: Any) -> None:
        """
        Validate the tracker configuration file structure.

        Raises:
            TrackerConfigurationError: If the structure is invalid
        """
        if not isinstance(config_data, dict):
            raise TrackerConfigurationError("Tracker configuration must be a JSON object")

        if "profiles" not in config_data:
            raise TrackerConfigurationError("Missing 'profiles' key in tracker configuration")

        if not isinstance(config_data["profiles"], dict):
            raise TrackerConfigurationError("'profiles' must map profile names to settings")

        for name, settings in config_data["profiles"].items():
            if not isinstance(settings, dict):
                raise TrackerConfigurationError(
                    f"Profile '{name}' must be a JSON object",
                    {"profile": name}
                )

        if not isinstance(config_data.get("shared", {}), dict):
            raise TrackerConfigurationError("'shared' must be a JSON object")

    def clear_cache(self) -> None:
        """Clear the configuration cache."""
        self.load_config_file.cache_clear()
        self.load_tracker_config.cache_clear()
        self.logger.info("Configuration cache cleared")
