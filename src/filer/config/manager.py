"""Configuration management - loading, validation, and persistence."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import FilerConfig


class ConfigManager:
    """Manages loading and saving configuration."""

    DEFAULT_CONFIG_LOCATIONS = [
        Path.home() / ".config" / "filer" / "config.yaml",
        Path.home() / ".filer" / "config.yaml",
    ]

    def __init__(self, config_path: Path | None = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Explicit path to config file. If None, searches default locations.
        """
        self.config_path = config_path
        self._config: FilerConfig | None = None

    def load(self, overrides: dict[str, Any] | None = None) -> FilerConfig:
        """
        Load configuration from file and apply overrides.

        Missing config files are not an error: defaults are used instead.

        Args:
            overrides: Values (typically command line options) that replace
                file values. Keys whose value is None are ignored.

        Returns:
            Loaded and validated configuration.

        Raises:
            FileNotFoundError: If an explicit config path does not exist.
            ValueError: If the config file or an override is invalid.
        """
        config_dict: dict[str, Any] = {}

        config_file = self._find_config_file()
        if config_file is not None:
            try:
                with open(config_file, encoding="utf-8") as f:
                    config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in config file {config_file}: {e}") from e

            if not isinstance(config_dict, dict):
                raise ValueError(f"Config file {config_file} must contain a mapping")

            self.config_path = config_file

        if overrides:
            config_dict.update({k: v for k, v in overrides.items() if v is not None})

        try:
            self._config = FilerConfig(**config_dict)
        except ValidationError as e:
            source = config_file or "command line options"
            raise ValueError(f"Invalid configuration in {source}: {e}") from e

        return self._config

    def save(self, config: FilerConfig | None = None, path: Path | None = None):
        """
        Save configuration to file.

        Args:
            config: Configuration to save. Uses current config if None.
            path: Path to save to. Uses current config_path if None.
        """
        config_to_save = config or self._config
        if config_to_save is None:
            raise ValueError("No configuration to save")

        save_path = path or self.config_path
        if save_path is None:
            save_path = self.DEFAULT_CONFIG_LOCATIONS[0]

        save_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self._paths_to_strings(config_to_save.model_dump(mode="python"))

        with open(save_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                config_dict,
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )

        self.config_path = save_path
        self._config = config_to_save

    def _find_config_file(self) -> Path | None:
        """Find the explicit config file or the first existing default location."""
        if self.config_path is not None:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Config file not found: {self.config_path}")
            return self.config_path

        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if location.exists():
                return location

        return None

    @staticmethod
    def _paths_to_strings(obj):
        """Recursively convert Path objects to strings in a nested dict/list structure."""
        if isinstance(obj, Path):
            return str(obj)
        elif isinstance(obj, dict):
            return {key: ConfigManager._paths_to_strings(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [ConfigManager._paths_to_strings(item) for item in obj]
        else:
            return obj

    @property
    def config(self) -> FilerConfig:
        """Get current configuration."""
        if self._config is None:
            self._config = self.load()
        return self._config
