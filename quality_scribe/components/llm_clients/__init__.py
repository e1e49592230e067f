from .openai_client import OpenAIClient
from .ollama_client import OllamaClient

__all__ = ["OpenAIClient", "OllamaClient"]
