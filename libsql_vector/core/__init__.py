"""
Core module: Configuration, Database, Logging, Exceptions
"""

from libsql_vector.core.config import settings
from libsql_vector.core.db import create_engine, dispose_engine

__all__ = ["settings", "create_engine", "dispose_engine"]
