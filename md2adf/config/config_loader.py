"""YAML and environment configuration loading.

Conversion options can be kept in a YAML file next to the markdown sources
or supplied through MD2ADF_* environment variables (optionally from a .env
file). Both produce a ConversionOptions that resolve_options() then merges
with the chosen preset.

Configuration file structure:
    preset: comment
    use_headings: false
    max_heading_level: 3
    preserve_line_breaks: true
    strict_mode: false
    default_code_language: python
    warn_on_risky_nodes: true
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from ..errors import ConfigError, FilesystemError
from .presets import ConversionOptions

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles configuration file loading, validation, and saving."""

    # Environment variable -> option field
    ENV_VARS = {
        'MD2ADF_PRESET': 'preset',
        'MD2ADF_USE_HEADINGS': 'use_headings',
        'MD2ADF_MAX_HEADING_LEVEL': 'max_heading_level',
        'MD2ADF_PRESERVE_LINE_BREAKS': 'preserve_line_breaks',
        'MD2ADF_STRICT_MODE': 'strict_mode',
        'MD2ADF_DEFAULT_CODE_LANGUAGE': 'default_code_language',
        'MD2ADF_WARN_ON_RISKY_NODES': 'warn_on_risky_nodes',
    }

    BOOL_FIELDS = {'use_headings', 'preserve_line_breaks', 'strict_mode', 'warn_on_risky_nodes'}

    TRUE_VALUES = {'1', 'true', 'yes', 'on'}
    FALSE_VALUES = {'0', 'false', 'no', 'off'}

    @classmethod
    def load(cls, config_path: str) -> ConversionOptions:
        """Load and parse conversion options from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ConversionOptions with the fields present in the file

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        # Empty file means "no overrides"
        if config_dict is None:
            return ConversionOptions()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        options = ConversionOptions.from_mapping(config_dict)
        logger.debug(f"Loaded conversion options from {config_path}: {options.to_mapping()}")
        return options

    @classmethod
    def save(cls, config_path: str, options: ConversionOptions) -> None:
        """Save explicitly set options to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            options: Options to persist (unset fields are omitted)

        Raises:
            FilesystemError: If file cannot be written
        """
        yaml_str = yaml.safe_dump(
            options.to_mapping(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ConversionOptions:
        """Read conversion options from MD2ADF_* environment variables.

        Values from a .env file are loaded first (existing environment
        variables win, as python-dotenv does by default).

        Args:
            dotenv_path: Optional explicit .env path (default: search upwards)
            environ: Mapping to read instead of os.environ

        Returns:
            ConversionOptions with the variables that are set

        Raises:
            ConfigError: If a variable has an unparseable value
        """
        if environ is None:
            load_dotenv(dotenv_path)
            environ = os.environ

        values: Dict[str, Any] = {}
        for var, field_name in cls.ENV_VARS.items():
            raw = environ.get(var)
            if raw is None or not raw.strip():
                continue
            values[field_name] = cls._parse_env_value(var, field_name, raw.strip())

        return ConversionOptions(**values)

    @classmethod
    def _parse_env_value(cls, var: str, field_name: str, raw: str) -> Any:
        if field_name in cls.BOOL_FIELDS:
            lowered = raw.lower()
            if lowered in cls.TRUE_VALUES:
                return True
            if lowered in cls.FALSE_VALUES:
                return False
            raise ConfigError(f"{var} must be a boolean, got {raw!r}", field_name)

        if field_name == 'max_heading_level':
            try:
                return int(raw)
            except ValueError:
                raise ConfigError(f"{var} must be an integer, got {raw!r}", field_name)

        return raw
