"""
libSQL VectorStore implementation.

Record index over libSQL's native vector extension: vectors live in an
``F32_BLOB`` column indexed with ``libsql_vector_idx`` and similarity is
computed by the engine with ``vector_distance_cos``. This module only
builds statements, binds values and shapes rows into results.

The engine is owned by the caller; opening and disposing it is theirs.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import ValidationError
from sqlalchemy import RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql.elements import TextClause

from libsql_vector.core.config import settings
from libsql_vector.core.exceptions import QueryError, SchemaError, StorageError
from libsql_vector.core.logging import get_logger
from libsql_vector.schemas.index import (
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
from libsql_vector.vectorstore import codec, statements
from libsql_vector.vectorstore.protocol import RecordInput, VectorIndexProtocol

logger = get_logger(__name__)

SUCCESS = "Success"


class Index(VectorIndexProtocol):
    """libSQL-backed record index.

    One table per index holding ``id TEXT PRIMARY KEY``, an
    ``F32_BLOB(dimensions)`` embedding and the configured scalar columns.

    Query results flatten the configured columns onto each result;
    list/retrieve results nest them under ``metadata``.
    """

    def __init__(self, engine: AsyncEngine, options: IndexOptions | Mapping[str, Any]) -> None:
        self.engine = engine
        self.options = self._resolve_options(options)

    @property
    def table_name(self) -> str:
        return self.options.table_name

    @property
    def dimensions(self) -> int:
        return self.options.dimensions

    async def initialize(self) -> None:
        create_table = statements.create_table(self.options)
        create_index = statements.create_index(self.options)
        self._log_sql("create_table_sql", create_table)
        self._log_sql("create_index_sql", create_index)

        try:
            async with self.engine.begin() as conn:
                await conn.execute(create_table)
                await conn.execute(create_index)
        except SQLAlchemyError as exc:
            logger.error("libsql_vector_initialize_failed", table=self.table_name, error=str(exc))
            raise SchemaError(f"Failed to initialize index {self.table_name}: {exc}") from exc

        logger.debug(
            "libsql_vector_table_ready",
            table=self.table_name,
            index=self.options.index_name,
            dimension=self.dimensions,
        )

    async def upsert(self, records: RecordInput | Sequence[RecordInput]) -> str:
        batch = [records] if isinstance(records, (VectorRecord, Mapping)) else list(records)
        stmt = statements.upsert(self.options)
        self._log_sql("upsert_sql", stmt)

        # One transaction per record: earlier writes survive a later failure
        for raw in batch:
            record = self._coerce_record(raw)
            params = self._upsert_params(record)
            try:
                async with self.engine.begin() as conn:
                    await conn.execute(stmt, params)
            except SQLAlchemyError as exc:
                logger.error(
                    "libsql_vector_upsert_failed",
                    table=self.table_name,
                    record_id=str(record.id),
                    error=str(exc),
                )
                raise StorageError(f"Failed to upsert record {record.id!r}: {exc}") from exc

        if self.options.debug:
            logger.info("libsql_vector_upserted", table=self.table_name, count=len(batch))
        return SUCCESS

    async def query(
        self,
        query_vector: Sequence[float],
        top_k: int,
        include_vectors: bool = False,
        filter: str | None = None,
    ) -> list[QueryResult]:
        try:
            options = QueryOptions(top_k=top_k, include_vectors=include_vectors, filter=filter)
        except ValidationError as exc:
            raise QueryError(f"Invalid query options: {exc}") from exc

        vector = codec.coerce_vector(query_vector)
        if len(vector) != self.dimensions:
            raise QueryError(
                f"Query vector has {len(vector)} dimensions, index {self.table_name} expects {self.dimensions}"
            )

        stmt = statements.query(
            self.options, include_vectors=options.include_vectors, filter=options.filter
        )
        params = {"query_vector": codec.encode_vector(vector), "top_k": options.top_k}
        rows = await self._fetch("query", stmt, params)

        return [self._to_query_result(row, options.include_vectors) for row in rows]

    async def list(
        self,
        cursor: RecordId | None = None,
        limit: int | None = None,
        include_vectors: bool = False,
        include_metadata: bool = True,
    ) -> ListPage:
        try:
            options = ListOptions(
                cursor=cursor,
                limit=settings.default_list_limit if limit is None else limit,
                include_vectors=include_vectors,
                include_metadata=include_metadata,
            )
        except ValidationError as exc:
            raise QueryError(f"Invalid list options: {exc}") from exc

        has_cursor = options.cursor is not None
        stmt = statements.list_page(
            self.options,
            include_vectors=options.include_vectors,
            include_metadata=options.include_metadata,
            has_cursor=has_cursor,
        )
        # One extra row tells whether another page exists
        params: dict[str, Any] = {"limit": options.limit + 1}
        if has_cursor:
            params["cursor"] = str(options.cursor)
        rows = await self._fetch("list", stmt, params)

        page_rows = rows[: options.limit]
        next_cursor = codec.ensure_id_type(page_rows[-1]["id"]) if len(rows) > options.limit else None
        items = [
            self._to_record(row, ListItem, options.include_vectors, options.include_metadata)
            for row in page_rows
        ]
        return ListPage(items=items, next_cursor=next_cursor)

    async def retrieve(
        self,
        ids: RecordId | Sequence[RecordId],
        include_vector: bool = True,
        include_metadata: bool = True,
    ) -> RetrieveResult | list[RetrieveResult] | None:
        try:
            options = RetrieveOptions(include_vector=include_vector, include_metadata=include_metadata)
        except ValidationError as exc:
            raise QueryError(f"Invalid retrieve options: {exc}") from exc

        single = isinstance(ids, (str, int))
        id_list = self._normalize_ids(ids, QueryError)
        if not id_list:
            return []

        stmt = statements.retrieve(
            self.options,
            include_vector=options.include_vector,
            include_metadata=options.include_metadata,
        )
        rows = await self._fetch("retrieve", stmt, {"ids": id_list})
        results = [
            self._to_record(row, RetrieveResult, options.include_vector, options.include_metadata)
            for row in rows
        ]

        if single:
            return results[0] if results else None
        return results

    async def delete(self, ids: RecordId | Sequence[RecordId]) -> int:
        id_list = self._normalize_ids(ids, StorageError)
        if not id_list:
            return 0

        stmt = statements.delete(self.options)
        self._log_sql("delete_sql", stmt)
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt, {"ids": id_list})
                deleted = result.rowcount
        except SQLAlchemyError as exc:
            logger.error("libsql_vector_delete_failed", table=self.table_name, error=str(exc))
            raise StorageError(f"Failed to delete from {self.table_name}: {exc}") from exc

        if self.options.debug:
            logger.info("libsql_vector_deleted", table=self.table_name, count=deleted)
        return deleted

    async def reset(self) -> None:
        stmt = statements.reset(self.options)
        self._log_sql("reset_sql", stmt)
        try:
            async with self.engine.begin() as conn:
                await conn.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("libsql_vector_reset_failed", table=self.table_name, error=str(exc))
            raise StorageError(f"Failed to reset {self.table_name}: {exc}") from exc

        logger.warning("libsql_vector_index_reset", table=self.table_name)

    # Internal helpers -------------------------------------------------

    def _resolve_options(self, options: IndexOptions | Mapping[str, Any]) -> IndexOptions:
        if isinstance(options, IndexOptions):
            return options
        try:
            return IndexOptions.model_validate(options)
        except ValidationError as exc:
            raise SchemaError(f"Invalid index options: {exc}") from exc

    def _log_sql(self, event: str, stmt: TextClause) -> None:
        if self.options.debug:
            logger.info(event, table=self.table_name, sql=" ".join(stmt.text.split()))

    async def _fetch(
        self, operation: str, stmt: TextClause, params: dict[str, Any]
    ) -> Sequence[RowMapping]:
        self._log_sql(f"{operation}_sql", stmt)
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt, params)
                rows = result.mappings().all()
        except SQLAlchemyError as exc:
            logger.error(
                "libsql_vector_read_failed",
                operation=operation,
                table=self.table_name,
                error=str(exc),
            )
            raise QueryError(f"Failed to {operation} {self.table_name}: {exc}") from exc

        if self.options.debug:
            logger.info(f"{operation}_result", table=self.table_name, rows=len(rows))
        return rows

    def _coerce_record(self, raw: RecordInput) -> VectorRecord:
        try:
            record = raw if isinstance(raw, VectorRecord) else VectorRecord.model_validate(dict(raw))
            vector = codec.coerce_vector(record.vector)
        except (ValidationError, QueryError, TypeError, ValueError) as exc:
            raise StorageError(f"Invalid record: {exc}") from exc

        if len(vector) != self.dimensions:
            raise StorageError(
                f"Record {record.id!r} has {len(vector)} dimensions, "
                f"index {self.table_name} expects {self.dimensions}"
            )
        return record

    def _upsert_params(self, record: VectorRecord) -> dict[str, Any]:
        params: dict[str, Any] = {
            "id": record.id,
            "embedding": codec.encode_vector(record.vector),
        }
        for column in self.options.columns:
            params[column.name] = record.column_value(column.name)
        return params

    def _normalize_ids(self, ids: RecordId | Sequence[RecordId], error: type[Exception]) -> list[str]:
        id_list = [ids] if isinstance(ids, (str, int)) else list(ids)
        for value in id_list:
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                raise error(f"Invalid id: {value!r}")
        # ids are stored as TEXT
        return [str(value) for value in id_list]

    def _to_query_result(self, row: Mapping[str, Any], include_vectors: bool) -> QueryResult:
        return QueryResult(
            id=codec.ensure_id_type(row["id"]),
            score=codec.ensure_number(row["similarity"]),
            vector=codec.decode_vector(row["vector"]) if include_vectors else None,
            **codec.project_columns(row, self.options.columns),
        )

    def _to_record(
        self,
        row: Mapping[str, Any],
        model: type[ListItem],
        include_vector: bool,
        include_metadata: bool,
    ) -> ListItem:
        return model(
            id=codec.ensure_id_type(row["id"]),
            vector=codec.decode_vector(row["vector"]) if include_vector else None,
            metadata=codec.project_columns(row, self.options.columns) if include_metadata else None,
        )
