"""
This module provides `OllamaClient`, a `BaseLLMClient` for locally hosted
models served by Ollama.

Running locally keeps schema details and sample rows on the user's machine,
which matters when the sampled tables hold production data. The model is
pulled on initialization so the first real request does not stall on a
download.
"""

import ollama

from quality_scribe.core.interfaces import BaseLLMClient
from quality_scribe.core.exceptions import CompletionError, ConfigError
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class OllamaClient(BaseLLMClient):
    """A completion client for a local Ollama API."""

    def __init__(
        self,
        model: str = "llama3",
        host: str = "http://localhost:11434",
        temperature: float = 0.0,
        max_tokens: int = 2048,
    ):
        """
        Creates the client and pulls `model`.

        Raises:
            ConfigError: If the host is unreachable or the pull fails.
        """
        try:
            logger.info(
                f"Initializing Ollama client with model: {model} and host: {host}"
            )
            self.client = ollama.Client(host=host)
            self.model = model
            self.temperature = temperature
            self.max_tokens = max_tokens
            logger.info(f"Pulling model '{model}' to ensure it is available...")
            self.client.pull(model)
        except Exception as e:
            logger.error(
                f"Failed to initialize Ollama client: {e}", exc_info=True
            )
            raise ConfigError(f"Failed to initialize Ollama client: {e}") from e
        logger.info("Ollama client initialized successfully.")

    def complete(self, prompt: str) -> str:
        """
        Raises:
            CompletionError: If the chat call fails or returns no content.
        """
        try:
            logger.info(f"Sending prompt to Ollama model '{self.model}'...")
            response = self.client.chat(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                options={
                    "temperature": self.temperature,
                    "num_predict": self.max_tokens,
                },
            )
            content = response["message"]["content"]
        except Exception as e:
            logger.error(f"Ollama chat call failed: {e}", exc_info=True)
            raise CompletionError(f"Ollama API call failed: {e}") from e

        if not content or not content.strip():
            raise CompletionError(
                f"Ollama model '{self.model}' returned an empty completion."
            )
        return content.strip()
