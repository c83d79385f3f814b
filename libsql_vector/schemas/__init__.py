"""
Pydantic schemas: index configuration, options and results
"""

from libsql_vector.schemas.index import (
    ColumnDefinition,
    IndexOptions,
    ListItem,
    ListOptions,
    ListPage,
    QueryOptions,
    QueryResult,
    RecordId,
    RetrieveOptions,
    RetrieveResult,
    VectorRecord,
)

__all__ = [
    "ColumnDefinition",
    "IndexOptions",
    "ListItem",
    "ListOptions",
    "ListPage",
    "QueryOptions",
    "QueryResult",
    "RecordId",
    "RetrieveOptions",
    "RetrieveResult",
    "VectorRecord",
]
