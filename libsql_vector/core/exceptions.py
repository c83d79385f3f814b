"""
Custom Exceptions for libsql-vector
"""


class LibsqlVectorError(Exception):
    """Base exception for all libsql-vector errors"""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# Write path
class StorageError(LibsqlVectorError):
    """Insert, replace or delete failed"""

    pass


class SchemaError(StorageError):
    """Index configuration is invalid or the engine rejected the DDL"""

    pass


# Read path
class QueryError(LibsqlVectorError):
    """Query options invalid or the engine rejected a read statement"""

    pass


class DecodingError(QueryError):
    """A vector, score or identifier could not be interpreted"""

    pass
