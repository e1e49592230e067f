"""
This module provides `OpenAIClient`, a `BaseLLMClient` for any service that
speaks the OpenAI chat-completions protocol.

Besides OpenAI itself this covers NVIDIA NIM
(`base_url="https://integrate.api.nvidia.com/v1"`) and other compatible
gateways. All settings arrive through the constructor; the client never looks
at process-wide configuration.
"""

from typing import Optional

from openai import OpenAI

from quality_scribe.core.interfaces import BaseLLMClient
from quality_scribe.core.exceptions import CompletionError, ConfigError
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)


class OpenAIClient(BaseLLMClient):
    """
    A completion client backed by the `openai` SDK.

    The prompt is sent as a single user message. A temperature of 0 (the
    default) keeps generations deterministic.
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 2048,
    ):
        """
        Args:
            model: The model identifier, e.g. "meta/llama-3.1-70b-instruct".
            api_key: The API key for the service.
            base_url: An alternative endpoint for OpenAI-compatible services.
            temperature: Sampling temperature passed with every request.
            max_tokens: Upper bound on the generated tokens per request.

        Raises:
            ConfigError: If no API key is provided.
        """
        if not api_key:
            raise ConfigError(
                "An API key is required for the OpenAI-compatible client. "
                "Set NIM_API_KEY or OPENAI_API_KEY, or add 'api_key' to the profile."
            )
        logger.info(f"Initializing OpenAI-compatible client with model: {model}")
        self.client = OpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def complete(self, prompt: str) -> str:
        """
        Sends `prompt` and returns the stripped text of the first choice.

        Raises:
            CompletionError: If the request fails or the response has no text.
        """
        try:
            logger.info(f"Sending prompt to model '{self.model}'...")
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error(f"Completion request failed: {e}", exc_info=True)
            raise CompletionError(f"OpenAI API call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise CompletionError(
                f"Model '{self.model}' returned an empty completion."
            )
        logger.info("Successfully received completion.")
        return content.strip()
