"""Environment settings used as command-line defaults."""

import os
from typing import Optional


class Settings:
    """Application settings from environment variables."""

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> str:
        """
        Get environment variable value.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            str: Environment variable value, "" if unset with no default
        """
        return os.getenv(key, default) or ""

    @staticmethod
    def config_path() -> Optional[str]:
        """Config file from PUPPET_EXPORTER_CONFIG, or None."""
        return Settings.get("PUPPET_EXPORTER_CONFIG") or None

    @staticmethod
    def log_level() -> str:
        return Settings.get("LOG_LEVEL", "INFO").upper()
