"""
This module defines the abstract interfaces for the pluggable components of
Quality Scribe.

Design Rationale:
The pipeline classes (`SchemaReader`, `DbtTestGenerator`, `AnomalyDetector`,
`SuiteWorkflow`) only ever talk to these interfaces. Concrete database drivers
and LLM providers are chosen at the configuration edge by the factory, so the
pipeline can be tested with mocks and extended with new backends without
touching orchestration code.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any


class BaseConnector(ABC):
    """
    The contract every database connector must fulfil.

    A connector owns exactly one live connection between `connect()` and
    `close()`. It is not shared across requests.
    """

    @abstractmethod
    def connect(self, db_params: Dict[str, Any]):
        """
        Opens a connection to the database.

        Raises:
            ConnectorError: If the connection cannot be established.
        """
        raise NotImplementedError

    @abstractmethod
    def get_tables(self) -> List[str]:
        """
        Returns table names in the order the catalog lists them.

        Raises:
            QueryError: If the catalog query fails.
        """
        raise NotImplementedError

    @abstractmethod
    def get_columns(self, table_name: str) -> List[Dict[str, Any]]:
        """
        Returns column metadata ordered by declared column position.

        Each dictionary has the keys `name`, `data_type`, `is_nullable` and
        `default_value`.

        Raises:
            QueryError: If the catalog query fails.
        """
        raise NotImplementedError

    @abstractmethod
    def get_sample_rows(
        self, table_name: str, limit: int
    ) -> List[Dict[str, Any]]:
        """
        Returns up to `limit` rows of the table as column-name mappings.

        Raises:
            SampleFetchError: If the rows cannot be read.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self):
        """Closes the connection. Must be safe to call when not connected."""
        raise NotImplementedError


class BaseLLMClient(ABC):
    """
    The contract for a text-completion service: a prompt in, generated text out.

    Implementations receive all of their settings (model, credentials,
    temperature) through the constructor.
    """

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Sends a rendered prompt and returns the generated text.

        Raises:
            CompletionError: If the service is unreachable, rejects the request,
                             or returns no usable content.
        """
        raise NotImplementedError
