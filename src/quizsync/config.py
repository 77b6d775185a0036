"""
Centralized configuration for the quiz sync agent.

Settings come from a JSON file laid over the defaults in constants.py, so a
settings file only needs the values it changes. Command line flags are
applied on top with apply_overrides().
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from quizsync.constants import DEFAULT_SETTINGS, MISSING_ID_POLICIES


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class AgentConfig:
    """
    Loaded settings with typed accessors.

    Sections: sync, scraper, browser, logging. See config/settings.json.
    """

    def __init__(self, settings_file: Optional[str] = None):
        """
        Initialize the configuration.

        Args:
            settings_file: Path to a JSON settings file; None uses the defaults only

        Raises:
            FileNotFoundError: If settings_file is given but does not exist
            json.JSONDecodeError: If settings_file is invalid JSON
            ValueError: If a setting has an unsupported value
        """
        self.logger = logging.getLogger(__name__)
        self.settings_file = settings_file
        self.settings = _merge(DEFAULT_SETTINGS, self._load_file())
        self.validate()

    def _load_file(self) -> Dict[str, Any]:
        if self.settings_file is None:
            return {}

        path = Path(self.settings_file)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {self.settings_file}")

        with open(path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
        self.logger.debug(f"Loaded settings from {self.settings_file}")
        return loaded

    @classmethod
    def from_dict(cls, settings: Dict[str, Any]) -> "AgentConfig":
        config = cls()
        config.settings = _merge(config.settings, settings)
        config.validate()
        return config

    def apply_overrides(self, overrides: Dict[str, Dict[str, Any]]) -> None:
        """Lay non-None values from {section: {key: value}} over the settings."""
        cleaned = {
            section: {key: value for key, value in values.items() if value is not None}
            for section, values in overrides.items()
        }
        self.settings = _merge(self.settings, cleaned)
        self.validate()

    def validate(self) -> None:
        policy = self.missing_id_policy
        if policy not in MISSING_ID_POLICIES:
            raise ValueError(
                f"scraper.missing_id_policy must be one of {MISSING_ID_POLICIES}, got {policy!r}"
            )

    def section(self, name: str) -> Dict[str, Any]:
        return self.settings[name]

    @property
    def base_url(self) -> str:
        return self.settings['sync']['base_url']

    @property
    def api_key(self) -> str:
        return self.settings['sync']['api_key']

    @property
    def timeout(self) -> Optional[float]:
        return self.settings['sync']['timeout']

    @property
    def missing_id_policy(self) -> str:
        return self.settings['scraper']['missing_id_policy']

    @property
    def verbose(self) -> bool:
        return bool(self.settings['scraper']['verbose'])

    @property
    def seed(self) -> Optional[int]:
        return self.settings['scraper']['seed']

    @property
    def token(self) -> Optional[str]:
        return self.settings['sync']['token']
