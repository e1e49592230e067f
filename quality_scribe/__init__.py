"""Quality Scribe: AI-assisted data-quality tests and SQL anomaly analysis."""

__version__ = "0.1.0"
