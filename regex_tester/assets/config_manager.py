# pyright: reportMissingImports=false
# mypy: disable_error_code=import

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.config_utils import DEFAULT_CONFIG_PATH, TesterConfig, load_tester_config


class ConfigManager:
    """Manages loading and saving the add-on configuration.

    Inside Anki the add-on manager owns the stored config; without it
    (tests, scripts) the JSON file at `path` is read and written instead.
    """

    def __init__(self, addon_name: str, mw_ref=None, path: Optional[Path] = None):
        self.addon_name = addon_name
        self.mw = mw_ref
        self.path = Path(path) if path else DEFAULT_CONFIG_PATH
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """Load the current raw configuration."""
        if self.mw is not None:
            return self.mw.addonManager.getConfig(self.addon_name) or {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    def save_config(self, new_config: Dict[str, Any]) -> None:
        """Save new configuration settings."""
        if self.mw is not None:
            self.mw.addonManager.writeConfig(self.addon_name, new_config)
        else:
            self.path.write_text(json.dumps(new_config, indent=4), encoding="utf-8")
        self.config = new_config

    def get(self, key, default=None):
        return self.config.get(key, default)

    def set(self, key, value) -> None:
        """Set a configuration value and save it."""
        self.config[key] = value
        self.save_config(self.config)

    def tester_config(self) -> TesterConfig:
        """Normalized view used by the dialog."""
        return load_tester_config(self.config)
