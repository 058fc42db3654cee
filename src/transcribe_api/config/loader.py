"""Configuration loader combining a TOML file with environment variables.

Values present in the TOML file win; environment variables (and `.env`)
supply anything the file leaves out, then the built-in defaults apply.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .settings import APIConfig, OpenAIConfig, RetryConfig, Settings

SECTIONS = {
    "api": APIConfig,
    "openai": OpenAIConfig,
    "retry": RetryConfig,
}


class ConfigLoader:
    """Load configuration from a TOML file, falling back to the environment."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to TOML configuration file
        """
        self.config_path = config_path or self._get_default_config_path()

    def _get_default_config_path(self) -> Path:
        """Get default configuration file path."""
        config_env = os.getenv("TRANSCRIBE_API_CONFIG_FILE")
        if config_env:
            return Path(config_env)

        config_locations = [
            Path("config.toml"),
            Path("/etc/transcribe-api/config.toml"),
            Path.home() / ".config" / "transcribe-api" / "config.toml",
        ]

        for path in config_locations:
            if path.exists():
                return path

        return Path("config.toml")

    def load_toml(self) -> Dict[str, Any]:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            return {}

        with open(self.config_path, "rb") as f:
            return tomllib.load(f)

    def load(self) -> Settings:
        """Load complete configuration.

        TOML values are passed as explicit values and so take precedence
        over environment variables. Each nested section is built through its
        own settings class so keys missing from the file still come from the
        environment.
        """
        config = self.load_toml()
        for key, section_cls in SECTIONS.items():
            if isinstance(config.get(key), dict):
                config[key] = section_cls(**config[key])
        return Settings(**config)


def load_config(config_path: Optional[Path] = None) -> Settings:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Loaded configuration settings
    """
    loader = ConfigLoader(config_path)
    return loader.load()
