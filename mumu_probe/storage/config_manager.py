"""
Manages loading and saving of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mumu_probe.exceptions import ConfigurationError
from mumu_probe.models.config import SearchConfig

log = logging.getLogger(__name__)

_INT_KEYS = {"concurrency"}
_FLOAT_KEYS = {"probe_timeout", "search_timeout", "download_timeout"}


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser()

    def load_config(
        self,
        version_major: str,
        version_minor: str,
        cli_options: dict[str, Any] | None = None,
    ) -> SearchConfig:
        """
        Loads settings from the INI file if it exists, applies CLI overrides,
        and validates the result.

        Args:
            version_major: Installer version from the command line.
            version_minor: Build date prefix from the command line.
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated SearchConfig object.

        Raises:
            ConfigurationError: If the config file is invalid or validation fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
            config_from_file = self._get_config_as_dict()
            log.debug(f"Loaded settings from {self.config_file_path}")

        # Override with CLI options
        if cli_options:
            config_from_file.update(
                {k: v for k, v in cli_options.items() if v is not None}
            )

        try:
            return SearchConfig(
                version_major=version_major,
                version_minor=version_minor,
                **config_from_file,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_config(self, settings: dict[str, Any]) -> None:
        """
        Writes a complete configuration file, filling unset keys with defaults.
        """
        config = configparser.ConfigParser()
        config["DEFAULT"] = {}
        defaults = SearchConfig.model_construct()

        for key in sorted(SearchConfig.get_ini_keys()):
            value = settings.get(key, getattr(defaults, key, None))
            if value is not None:
                config["DEFAULT"][key] = str(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the known keys of the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        values: dict[str, Any] = {}
        for key in SearchConfig.get_ini_keys():
            if key not in section:
                continue
            try:
                if key in _INT_KEYS:
                    values[key] = section.getint(key)
                elif key in _FLOAT_KEYS:
                    values[key] = section.getfloat(key)
                else:
                    values[key] = section.get(key)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for '{key}' in {self.config_file_path}: {e}"
                ) from e

        unknown = set(section) - SearchConfig.get_ini_keys()
        if unknown:
            log.warning(
                f"[yellow]Ignoring unknown config keys: {', '.join(sorted(unknown))}"
                "[/yellow]"
            )
        return values
