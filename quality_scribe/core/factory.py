"""
Factory functions that turn a type name from configuration or a request into
a concrete component instance.

Imports of concrete components happen here and nowhere else in the pipeline,
so workflows and services depend only on the interfaces in
`quality_scribe.core.interfaces`.
"""

from typing import Dict, Any, Type

from quality_scribe.core.interfaces import BaseConnector, BaseLLMClient
from quality_scribe.core.exceptions import ConfigError
from quality_scribe.components.db_connectors import (
    MariaDBConnector,
    PostgresConnector,
    SQLiteConnector,
)
from quality_scribe.components.llm_clients import OpenAIClient, OllamaClient
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)

DB_CONNECTOR_MAP: Dict[str, Type[BaseConnector]] = {
    "mysql": MariaDBConnector,
    "mariadb": MariaDBConnector,
    "postgres": PostgresConnector,
    "postgresql": PostgresConnector,
    "sqlite": SQLiteConnector,
}

LLM_CLIENT_MAP: Dict[str, Type[BaseLLMClient]] = {
    "openai": OpenAIClient,
    "nim": OpenAIClient,
    "ollama": OllamaClient,
}


def create_db_connector(db_type: str) -> BaseConnector:
    """
    Returns a new, unconnected connector for `db_type`.

    Raises:
        ConfigError: If `db_type` is not supported.
    """
    connector_class = DB_CONNECTOR_MAP.get(db_type.lower())
    if connector_class is None:
        raise ConfigError(
            f"Unsupported database type: '{db_type}'. "
            f"Supported types: {', '.join(sorted(DB_CONNECTOR_MAP))}"
        )
    return connector_class()


def get_llm_client(provider: str, llm_params: Dict[str, Any]) -> BaseLLMClient:
    """
    Instantiates the LLM client registered for `provider`.

    Args:
        provider: A key of `LLM_CLIENT_MAP`, e.g. "openai" or "ollama".
        llm_params: Keyword arguments for the client constructor.

    Raises:
        ConfigError: If the provider is unknown or the parameters do not fit
                     the client constructor.
    """
    client_class = LLM_CLIENT_MAP.get(provider.lower())
    if client_class is None:
        raise ConfigError(
            f"Unsupported LLM provider: '{provider}'. "
            f"Supported providers: {', '.join(sorted(LLM_CLIENT_MAP))}"
        )
    logger.info(f"Instantiating LLM client for provider: {provider}")
    try:
        return client_class(**llm_params)
    except TypeError as e:
        raise ConfigError(
            f"Invalid parameters for LLM provider '{provider}': {e}"
        ) from e
