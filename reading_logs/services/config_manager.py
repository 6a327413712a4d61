"""Configuration loading: optional YAML file with ${VAR} and .env substitution."""

import os
from pathlib import Path
from string import Template
from typing import Optional

import structlog
import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from reading_logs.models.config import AppConfig

logger = structlog.get_logger()

DEFAULT_CONFIG_PATH = "reading_logs.yaml"


class ConfigValidationError(Exception):
    """Configuration validation failed"""

    pass


class ConfigManager:
    """Loads application settings from an optional YAML file.

    The default config file is optional: when it doesn't exist the built-in
    defaults apply. A path the user named explicitly must exist.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        load_env: bool = True,
    ):
        self.explicit = config_path is not None
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH)
        self.load_env = load_env
        self._config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """Load and validate configuration"""
        if self._config:
            return self._config

        # 1. Load environment (.env supplies ANTHROPIC_API_KEY)
        if self.load_env:
            load_dotenv(find_dotenv(usecwd=True))

        # 2. Check file existence
        if not self.config_path.exists():
            if self.explicit:
                raise ConfigValidationError(
                    f"Configuration file not found: {self.config_path}"
                )
            logger.debug("config_defaults_used", path=str(self.config_path))
            self._config = AppConfig()
            return self._config

        # 3. Read YAML
        try:
            raw_content = self.config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigValidationError(f"Failed to read config file: {e}")

        # 4. Substitute env vars
        try:
            template = Template(raw_content)
            substituted_content = template.safe_substitute(os.environ)
            config_data = yaml.safe_load(substituted_content) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Failed to parse YAML or substitute variables: {e}"
            )

        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                f"Invalid configuration: expected a mapping in {self.config_path}"
            )

        # 5. Validate with Pydantic
        try:
            self._config = AppConfig(**config_data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid configuration: {e}")

        logger.info("config_loaded", path=str(self.config_path))
        return self._config
