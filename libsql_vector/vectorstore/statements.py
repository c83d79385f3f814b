"""
SQL statement builders for the libSQL vector index.

Table and column names come from a validated IndexOptions and are the
only interpolated values. Identifiers, vector literals, cursors and
limits are bound parameters. The query filter is a caller-trusted raw
predicate.
"""

from __future__ import annotations

from sqlalchemy import Integer, String, bindparam
from sqlalchemy import text as sa_text
from sqlalchemy.sql.elements import TextClause

from libsql_vector.schemas.index import IndexOptions


def create_table(options: IndexOptions) -> TextClause:
    column_definitions = [f"{col.name} {col.type}" for col in options.columns]
    definitions = [
        "id TEXT PRIMARY KEY",
        f"embedding F32_BLOB({options.dimensions})",
        *column_definitions,
    ]
    return sa_text(
        f"CREATE TABLE IF NOT EXISTS {options.table_name} ({', '.join(definitions)})"
    )


def create_index(options: IndexOptions) -> TextClause:
    return sa_text(
        f"CREATE INDEX IF NOT EXISTS {options.index_name} "
        f"ON {options.table_name}(libsql_vector_idx(embedding))"
    )


def upsert(options: IndexOptions) -> TextClause:
    names = ["id", "embedding", *options.column_names]
    values = [":id", "vector32(:embedding)", *(f":{name}" for name in options.column_names)]
    return sa_text(
        f"INSERT OR REPLACE INTO {options.table_name} ({', '.join(names)}) "
        f"VALUES ({', '.join(values)})"
    ).bindparams(bindparam("embedding", type_=String()))


def _escape_filter(predicate: str) -> str:
    # text() treats ":name" as a bind parameter; the filter has none
    return predicate.replace(":", "\\:")


def query(options: IndexOptions, *, include_vectors: bool, filter: str | None) -> TextClause:
    table = options.table_name
    select = [
        f"{table}.id AS id",
        f"1 - vector_distance_cos({table}.embedding, vector32(:query_vector)) AS similarity",
        *(f"{table}.{name} AS {name}" for name in options.column_names),
    ]
    if include_vectors:
        select.append(f"vector_extract({table}.embedding) AS vector")

    where_clause = f"WHERE ({_escape_filter(filter)})" if filter else ""

    return sa_text(
        f"""
        SELECT {', '.join(select)}
        FROM {table}
        {where_clause}
        ORDER BY similarity DESC
        LIMIT :top_k
        """
    ).bindparams(
        bindparam("query_vector", type_=String()),
        bindparam("top_k", type_=Integer()),
    )


def _record_projection(options: IndexOptions, *, include_vector: bool, include_metadata: bool) -> str:
    select = ["id"]
    if include_vector:
        select.append("vector_extract(embedding) AS vector")
    if include_metadata:
        select.extend(options.column_names)
    return ", ".join(select)


def list_page(
    options: IndexOptions,
    *,
    include_vectors: bool,
    include_metadata: bool,
    has_cursor: bool,
) -> TextClause:
    projection = _record_projection(
        options, include_vector=include_vectors, include_metadata=include_metadata
    )
    where_clause = "WHERE id > :cursor" if has_cursor else ""
    binds = [bindparam("limit", type_=Integer())]
    if has_cursor:
        binds.append(bindparam("cursor", type_=String()))

    return sa_text(
        f"""
        SELECT {projection}
        FROM {options.table_name}
        {where_clause}
        ORDER BY id ASC
        LIMIT :limit
        """
    ).bindparams(*binds)


def retrieve(options: IndexOptions, *, include_vector: bool, include_metadata: bool) -> TextClause:
    projection = _record_projection(
        options, include_vector=include_vector, include_metadata=include_metadata
    )
    return sa_text(
        f"SELECT {projection} FROM {options.table_name} WHERE id IN :ids"
    ).bindparams(bindparam("ids", expanding=True))


def delete(options: IndexOptions) -> TextClause:
    return sa_text(f"DELETE FROM {options.table_name} WHERE id IN :ids").bindparams(
        bindparam("ids", expanding=True)
    )


def reset(options: IndexOptions) -> TextClause:
    return sa_text(f"DELETE FROM {options.table_name}")
