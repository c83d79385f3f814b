"""
libsql-vector
Record-oriented vector search over libSQL's native vector extension
"""

from libsql_vector.core.exceptions import (
    DecodingError,
    LibsqlVectorError,
    QueryError,
    SchemaError,
    StorageError,
)
from libsql_vector.schemas.index import (
    ColumnDefinition,
    IndexOptions,
    ListItem,
    ListPage,
    QueryResult,
    RetrieveResult,
    VectorRecord,
)
from libsql_vector.vectorstore import Index, VectorIndexProtocol

__version__ = "0.1.0"

__all__ = [
    "ColumnDefinition",
    "DecodingError",
    "Index",
    "IndexOptions",
    "LibsqlVectorError",
    "ListItem",
    "ListPage",
    "QueryError",
    "QueryResult",
    "RetrieveResult",
    "SchemaError",
    "StorageError",
    "VectorIndexProtocol",
    "VectorRecord",
]
