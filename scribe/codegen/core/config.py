"""
Configuration management for source emission.

Handles loading and merging configuration from JSON files,
providing defaults and validation for emitter settings.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from ...logging_config import get_logger
from .errors import ScribeError
from .naming import is_valid_name

logger = get_logger(__name__)


class ConfigError(ScribeError):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class EmitterConfig:
    """Settings shared by the collect and render passes."""

    # Layout
    indent: str = "  "
    column_limit: int = 100
    line_ending: str = "\n"

    # Imports
    skip_java_lang_imports: bool = True
    always_qualify: Set[str] = field(default_factory=set)

    # File envelope
    file_comment: str = ""
    package_name: str = ""

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


DEFAULTS: Dict[str, Any] = {
    "indent": "  ",
    "column_limit": 100,
    "line_ending": "\n",
    "skip_java_lang_imports": True,
    "always_qualify": [],
    "file_comment": "",
    "package_name": "",
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._defaults: Dict[str, Any] = dict(DEFAULTS)

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> EmitterConfig:
        """
        Get the complete emitter configuration.

        Args:
            custom_config: Configuration overrides, applied last
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)
            logger.debug("Loaded %d settings from %s", len(file_config), config_file)

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> EmitterConfig:
        """Convert dictionary to EmitterConfig instance."""
        known_fields = set(EmitterConfig.__dataclass_fields__)

        config_args: Dict[str, Any] = {}
        custom_args: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        config_args["always_qualify"] = set(config_args.get("always_qualify") or ())
        return EmitterConfig(**config_args)

    def save_config(self, config: EmitterConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        config_dict["always_qualify"] = sorted(config.always_qualify)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: EmitterConfig) -> List[str]:
        """
        Validate an emitter configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent.strip(" \t"):
            warnings.append(f"Indent must be spaces or tabs: {config.indent!r}")

        if config.column_limit < 20:
            warnings.append(f"Column limit is very small: {config.column_limit}")

        if config.line_ending not in {"\n", "\r\n"}:
            warnings.append(f"Invalid line_ending: {config.line_ending!r}")

        if config.package_name and not is_valid_name(config.package_name):
            warnings.append(f"Invalid Java package name: {config.package_name}")

        for name in sorted(config.always_qualify):
            if not is_valid_name(name) or "." in name:
                warnings.append(f"Invalid simple name in always_qualify: {name}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> EmitterConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)


EXAMPLE_CONFIG = {
    "indent": "    ",
    "column_limit": 120,
    "skip_java_lang_imports": True,
    "always_qualify": ["List"],
    "file_comment": "Generated by scribe. Do not edit.",
}
