from .dbt_runner import DbtTestRunner

__all__ = ["DbtTestRunner"]
