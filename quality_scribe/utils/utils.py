"""
Low-level helpers for loading the YAML configuration file.

Secrets such as database passwords or LLM API keys are referenced in
`config.yaml` as `${VAR}` placeholders and injected from the environment at
load time, so the file itself can be committed safely.
"""

import os
import re
import yaml
from typing import Dict, Any

from quality_scribe.core.exceptions import ConfigError

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z0-9_]+)\}")


def expand_env_vars(content: str) -> str:
    """
    Replaces every `${VAR}` placeholder in `content` with its environment value.

    Example:
        With `NIM_API_KEY=abc` set, `"api_key: ${NIM_API_KEY}"` becomes
        `"api_key: abc"`.

    Raises:
        ConfigError: If a referenced environment variable is not set.
    """

    def replacer(match):
        var_name = match.group(1)
        var_value = os.getenv(var_name)
        if var_value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is referenced in the "
                "config file but is not set."
            )
        return var_value

    return _ENV_VAR_PATTERN.sub(replacer, content)


def load_config(config_file: str) -> Dict[str, Any]:
    """
    Reads a YAML config file, expanding environment variables before parsing.

    An empty file yields an empty dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the expanded content is not valid YAML.
        ConfigError: If a referenced environment variable is not set.
    """
    with open(config_file, "r", encoding="utf-8") as file:
        raw_content = file.read()

    config = yaml.safe_load(expand_env_vars(raw_content))
    return config or {}
