"""
Index DTO definitions

Typed configuration, per-call options and result shapes shared by the
index facade. Query results flatten the configured columns onto the
result itself; list and retrieve results nest them under ``metadata``.
"""

import re
from typing import Any, Union

from pydantic import ConfigDict, Field, field_validator, model_validator
from sqlalchemy.dialects.sqlite.base import SQLiteIdentifierPreparer

from libsql_vector.core.config import settings
from libsql_vector.schemas.base import BaseSchema, FrozenSchema

RecordId = Union[str, int]

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
SQL_TYPE_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_ ]*(\(\s*\d+\s*(,\s*\d+\s*)?\))?")

# Names used by the generated statements and the result models
RESERVED_COLUMNS = frozenset({"id", "embedding", "vector", "similarity", "score", "metadata"})

# SQLite keywords; names are interpolated unquoted
SQL_KEYWORDS = frozenset(SQLiteIdentifierPreparer.reserved_words)


def validate_identifier(value: str, kind: str) -> str:
    """Reject anything that is not a bare SQL identifier."""

    if not IDENTIFIER_PATTERN.fullmatch(value):
        raise ValueError(f"Unsafe {kind}: {value!r}")
    if value.lower() in SQL_KEYWORDS:
        raise ValueError(f"{kind.capitalize()} {value!r} is an SQL keyword")
    return value


class ColumnDefinition(FrozenSchema):
    """A configured scalar column: name plus declared SQL type."""

    name: str
    type: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        validate_identifier(value, "column name")
        if value.lower() in RESERVED_COLUMNS:
            raise ValueError(f"Column name {value!r} is reserved")
        return value

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        value = value.strip()
        if not SQL_TYPE_PATTERN.fullmatch(value):
            raise ValueError(f"Unsupported column type: {value!r}")
        return value


class IndexOptions(FrozenSchema):
    """
    Table schema of one vector index.

    Attributes:
        table_name: Backing table (defaults to settings.default_table_name)
        dimensions: Vector length every record must have
        columns: Ordered scalar columns stored next to the vector
        debug: Log generated SQL and row counts
    """

    table_name: str = Field(default_factory=lambda: settings.default_table_name)
    dimensions: int = Field(gt=0)
    columns: tuple[ColumnDefinition, ...] = ()
    debug: bool = False

    @field_validator("table_name", mode="before")
    @classmethod
    def _default_table_name(cls, value: Any) -> Any:
        if value is None or value == "":
            return settings.default_table_name
        return value

    @field_validator("table_name")
    @classmethod
    def _check_table_name(cls, value: str) -> str:
        return validate_identifier(value, "table name")

    @model_validator(mode="after")
    def _check_unique_columns(self) -> "IndexOptions":
        seen: set[str] = set()
        for column in self.columns:
            key = column.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate column name: {column.name!r}")
            seen.add(key)
        return self

    @property
    def index_name(self) -> str:
        return f"idx_{self.table_name}_embedding"

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]


class VectorRecord(BaseSchema):
    """Record to upsert: id, vector and configured columns as extra fields."""

    model_config = ConfigDict(extra="allow")

    id: RecordId
    vector: list[float]

    @field_validator("vector", mode="before")
    @classmethod
    def _array_to_list(cls, value: Any) -> Any:
        # numpy arrays and similar
        if hasattr(value, "tolist"):
            return value.tolist()
        return value

    def column_value(self, name: str) -> Any:
        return (self.model_extra or {}).get(name)


# Per-call options ---------------------------------------------------


class QueryOptions(BaseSchema):
    top_k: int = Field(gt=0)
    include_vectors: bool = False
    # Raw SQL predicate, passed through unsanitized
    filter: str | None = None


class ListOptions(BaseSchema):
    cursor: RecordId | None = None
    limit: int = Field(default_factory=lambda: settings.default_list_limit, gt=0)
    include_vectors: bool = False
    include_metadata: bool = True


class RetrieveOptions(BaseSchema):
    include_vector: bool = True
    include_metadata: bool = True


# Results ------------------------------------------------------------


class QueryResult(BaseSchema):
    """
    Single similarity match

    Attributes:
        id: Record identifier
        score: 1 - cosine distance (higher is more similar)
        vector: Stored vector, only when requested

    Configured columns are carried as extra top-level fields.
    """

    model_config = ConfigDict(extra="allow")

    id: RecordId
    score: float
    vector: list[float] | None = None


class ListItem(BaseSchema):
    """Record returned by list/retrieve, columns nested under metadata."""

    id: RecordId
    vector: list[float] | None = None
    metadata: dict[str, Any] | None = None


class RetrieveResult(ListItem):
    pass


class ListPage(BaseSchema):
    """One page of a keyset scan. next_cursor is None on the last page."""

    items: list[ListItem] = Field(default_factory=list)
    next_cursor: RecordId | None = None
