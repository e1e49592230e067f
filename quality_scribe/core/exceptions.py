"""
Custom exception types for the Quality Scribe application.

Every error raised by the application derives from `QualityScribeError`, so the
transport layers (FastAPI server and Typer CLI) can tell expected, domain-level
failures apart from unexpected bugs. Each subclass maps to one failure mode of
the quality pipeline.
"""


class QualityScribeError(Exception):
    """Base class for all application-specific errors."""


class ConfigError(QualityScribeError):
    """Raised when configuration is missing, malformed, or references unset variables."""


class ConnectorError(QualityScribeError):
    """
    Raised when a database connection cannot be established or authenticated.

    Fatal to the whole schema read.
    """


class QueryError(QualityScribeError):
    """
    Raised when a catalog query (listing tables or columns) fails.

    Fatal to the whole schema read.
    """


class SampleFetchError(QualityScribeError):
    """
    Raised when sample rows cannot be fetched for a table.

    The `SchemaReader` recovers from this locally by using an empty sample.
    """


class CompletionError(QualityScribeError):
    """Raised when the text-generation service fails or returns nothing usable."""


class ValidationError(QualityScribeError):
    """Raised when required input is missing, before any I/O takes place."""


class LaunchError(QualityScribeError):
    """Raised when the external test runner process cannot be started."""
