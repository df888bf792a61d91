"""Configuration loader with YAML parsing and environment variable substitution."""

import yaml
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional
from .models import ExporterConfig


class ConfigLoader:
    """Load and validate exporter configuration."""

    @staticmethod
    def load_from_file(config_path: str, overrides: Optional[Dict[str, Any]] = None) -> ExporterConfig:
        """
        Load configuration from YAML file with environment variable substitution.

        Args:
            config_path: Path to YAML configuration file
            overrides: Values that win over the file (e.g. from CLI flags)

        Returns:
            ExporterConfig: Validated configuration object

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            pydantic.ValidationError: If configuration validation fails
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        if not isinstance(raw_config, dict):
            raise yaml.YAMLError(f"Configuration root must be a mapping: {config_path}")

        raw_config = ConfigLoader._substitute_env_vars(raw_config)

        return ConfigLoader.build(raw_config, overrides)

    @staticmethod
    def build(raw_config: Optional[Dict[str, Any]] = None, overrides: Optional[Dict[str, Any]] = None) -> ExporterConfig:
        """
        Merge overrides onto raw values and validate.

        None-valued overrides are ignored so unset CLI flags fall through.
        """
        merged = dict(raw_config or {})
        merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
        return ExporterConfig(**merged)

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """
        Recursively substitute ${ENV_VAR} placeholders with environment values.

        ${ENV_VAR:-fallback} uses fallback when the variable is unset or
        empty; an unset bare ${ENV_VAR} becomes "".

        Args:
            obj: Object to process (str, dict, list, or primitive)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, str):
            pattern = r'\$\{(\w+)(?::-([^}]*))?\}'
            return re.sub(pattern, lambda m: os.getenv(m.group(1)) or (m.group(2) or ''), obj)

        elif isinstance(obj, dict):
            return {k: ConfigLoader._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [ConfigLoader._substitute_env_vars(item) for item in obj]

        return obj
