"""
Process-level settings read from the environment.

`python-dotenv` loads a local `.env` file first, so developers can keep API
keys out of their shell profile. Only the configuration edge
(`ConfigManager`, the CLI and the server) reads this object; pipeline classes
receive explicit values through their constructors.
"""

import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Typed access to the environment variables Quality Scribe understands."""

    def __init__(self):
        # API key for NVIDIA NIM's OpenAI-compatible endpoint.
        self.nim_api_key: str | None = os.getenv("NIM_API_KEY")

        self.openai_api_key: str | None = os.getenv("OPENAI_API_KEY")

        # Path of the YAML config file used by the server and the CLI.
        self.config_path: str = os.getenv(
            "QUALITY_SCRIBE_CONFIG", "config.yaml"
        )


settings = Settings()
