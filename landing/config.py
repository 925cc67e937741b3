"""
Landing CMS - Configuration Manager
=====================================
Loads server settings from three layers, later layers winning:

1. DEFAULTS      - compiled-in values below
2. config.yaml   - optional file in the project root
3. PORT env var  - single port override (may come from .env)

Command-line flags in app.py override all of these.

Usage:
    config = ConfigManager(project_dir="/path/to/landing-cms")
    settings = config.load()
    data_dir = config.data_dir(settings)
"""

import copy
import os

import yaml


# Default configuration values used when config.yaml is missing or incomplete.
DEFAULTS = {
    "web": {
        "port": 3000,
        "host": "0.0.0.0",
    },
    "storage": {
        "data_dir": "data",
        "public_dir": "public",
    },
}

PORT_ENV_VAR = "PORT"


class ConfigManager:
    """
    Read-only configuration for the server process.

    Attributes:
        project_dir: Root directory of the project.
        config_path: Full path to config.yaml.
        env_path:    Full path to .env (loaded by app.py at startup).
    """

    def __init__(self, project_dir: str):
        self.project_dir = project_dir
        self.config_path = os.path.join(project_dir, "config.yaml")
        self.env_path = os.path.join(project_dir, ".env")

    def load(self) -> dict:
        """
        Load configuration merged over DEFAULTS.

        A corrupt config.yaml falls back to defaults; the error text is kept
        under "_config_error" for the caller to report.

        Returns:
            A dictionary containing the full configuration.
        """
        config = copy.deepcopy(DEFAULTS)

        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    user_config = yaml.safe_load(f) or {}
                if not isinstance(user_config, dict):
                    raise yaml.YAMLError("config.yaml must contain a mapping")
                _deep_merge(config, user_config)
            except (yaml.YAMLError, OSError) as e:
                config = copy.deepcopy(DEFAULTS)
                config["_config_error"] = str(e)

        port = os.environ.get(PORT_ENV_VAR)
        if port:
            try:
                config["web"]["port"] = int(port)
            except ValueError:
                config["_config_error"] = f"Ignoring non-numeric {PORT_ENV_VAR}={port!r}"

        return config

    def data_dir(self, config: dict | None = None) -> str:
        """Absolute path of the directory holding site.json, auth.json and the avatar."""
        config = config or self.load()
        return self._resolve(config["storage"]["data_dir"])

    def public_dir(self, config: dict | None = None) -> str:
        """Absolute path of the optional static site directory."""
        config = config or self.load()
        return self._resolve(config["storage"]["public_dir"])

    def _resolve(self, path: str) -> str:
        if os.path.isabs(path):
            return path
        return os.path.join(self.project_dir, path)


def _deep_merge(base: dict, override: dict) -> None:
    """
    Recursively merge 'override' into 'base' (in-place).

    For nested dicts, values are merged recursively.
    For all other types, override replaces base.
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
