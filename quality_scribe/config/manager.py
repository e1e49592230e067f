"""
This module provides the `ConfigManager` class, responsible for loading
`config.yaml` and building the components the pipeline needs from it.
"""

import yaml
from typing import Dict, Any, Optional

from quality_scribe.components.runners import DbtTestRunner
from quality_scribe.core.exceptions import ConfigError
from quality_scribe.core.factory import get_llm_client
from quality_scribe.core.interfaces import BaseLLMClient
from quality_scribe.utils.config import Settings, settings as default_settings
from quality_scribe.utils.utils import load_config
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)

_OPENAI_COMPATIBLE = {"openai", "nim"}


class ConfigManager:
    """
    Loads the YAML configuration and turns profiles into component instances.

    This is the only place that reads environment-derived settings; the
    objects it returns carry their configuration explicitly.
    """

    def __init__(self, config_path: str, settings: Optional[Settings] = None):
        self.config_path = config_path
        self.settings = settings or default_settings
        try:
            logger.info(f"Loading configuration from '{config_path}'...")
            self.config: Dict[str, Any] = load_config(config_path)
        except FileNotFoundError as e:
            raise ConfigError(
                f"Configuration file not found at '{config_path}'."
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML file: {e}") from e
        logger.info("Configuration loaded successfully.")

    def _get_profile_name(
        self, profile: Optional[str], default_key: str
    ) -> str:
        """Returns `profile`, or the default from the config's `default` section."""
        profile_name = profile or self.config.get("default", {}).get(
            default_key
        )
        if not profile_name:
            raise ConfigError(
                f"Missing {default_key} profile. Specify one explicitly or set "
                f"'default.{default_key}' in {self.config_path}"
            )
        return profile_name

    def get_llm_client(
        self, profile: Optional[str] = None
    ) -> tuple[BaseLLMClient, str]:
        """Returns an LLM client for `profile` (or the default profile)."""
        profile_name = self._get_profile_name(profile, "llm")
        try:
            llm_params = self.config["llm_providers"][profile_name].copy()
        except KeyError as e:
            raise ConfigError(
                f"LLM profile '{profile_name}' not found in {self.config_path}."
            ) from e

        provider = llm_params.pop("provider", None)
        if not provider:
            raise ConfigError(
                f"LLM profile '{profile_name}' does not define a 'provider'."
            )
        if provider.lower() in _OPENAI_COMPATIBLE and not llm_params.get(
            "api_key"
        ):
            llm_params["api_key"] = (
                self.settings.nim_api_key or self.settings.openai_api_key
            )
        return get_llm_client(provider, llm_params), profile_name

    def get_test_runner(self) -> DbtTestRunner:
        """Returns the test runner described by the `test_runner` section."""
        runner_params = self.config.get("test_runner") or {}
        return DbtTestRunner(
            command=runner_params.get("command"),
            pass_project_dir=runner_params.get("pass_project_dir", True),
        )
