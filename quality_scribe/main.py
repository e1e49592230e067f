"""
Entry point for running the CLI as a module: `python -m quality_scribe.main`.

The console script declared in `pyproject.toml` points at the same Typer
`app` object.
"""

from quality_scribe.app import app

if __name__ == "__main__":
    app()
