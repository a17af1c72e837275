"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import datetime
import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...utils import resolve_type


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


DEFAULT_HEADER = "/* Do not change, this code is generated from Python types */"

# Settings kept in `custom` that generators read themselves
GENERATOR_SETTINGS = {"type_overrides"}


@dataclass
class GeneratorConfig:
    """Configuration for the TypeScript generator."""

    # Naming
    prefix: str = ""
    suffix: str = ""

    # Code style settings
    indent: str = "    "

    # Output form
    create_from_method: bool = True
    export_classes: bool = True
    use_interface: bool = False

    # Types treated as opaque dates (classes or "module:Name" strings)
    date_types: List[Any] = field(
        default_factory=lambda: [datetime.datetime, datetime.date]
    )

    # Output settings
    output_file: Optional[str] = None
    backup_extension: str = "backup"  # Empty disables backups
    header: str = DEFAULT_HEADER

    # Custom settings (unknown keys from config files)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete generator configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Defaults merged with the file and the overrides, in that order
        """
        base_config: Dict[str, Any] = {}

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
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

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        config = GeneratorConfig(**config_args)
        config.date_types = [_resolve_date_type(t) for t in config.date_types]
        return config

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {
            "prefix": config.prefix,
            "suffix": config.suffix,
            "indent": config.indent,
            "create_from_method": config.create_from_method,
            "export_classes": config.export_classes,
            "use_interface": config.use_interface,
            "date_types": [_type_spec(t) for t in config.date_types],
            "output_file": config.output_file,
            "backup_extension": config.backup_extension,
            "header": config.header,
        }

        config_dict.update(config.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent.strip():
            warnings.append(f"Indent contains non-whitespace: {config.indent!r}")

        for label, value in (("prefix", config.prefix), ("suffix", config.suffix)):
            if value and not value.replace("$", "_").isidentifier():
                warnings.append(f"Invalid TypeScript identifier in {label}: {value!r}")

        if config.use_interface and config.create_from_method:
            warnings.append("createFrom methods are not generated for interfaces")

        unknown = sorted(set(config.custom) - GENERATOR_SETTINGS)
        if unknown:
            warnings.append(f"Unknown settings: {', '.join(unknown)}")

        return warnings


def _resolve_date_type(value: Any) -> Any:
    """Accept date types as classes or as 'module:Name' strings."""
    if isinstance(value, str):
        try:
            return resolve_type(value)
        except (ImportError, AttributeError, ValueError) as e:
            raise ConfigError(f"Cannot resolve date type {value!r}: {e}") from e
    return value


def _type_spec(value: Any) -> str:
    if isinstance(value, str):
        return value
    return f"{value.__module__}:{value.__qualname__}"


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
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
