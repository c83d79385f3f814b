"""
Vector Index Protocol (Interface)
Defines the contract of the record index facade
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, Union

from libsql_vector.schemas.index import (
    ListPage,
    QueryResult,
    RecordId,
    RetrieveResult,
    VectorRecord,
)

RecordInput = Union[VectorRecord, Mapping[str, Any]]


class VectorIndexProtocol(Protocol):
    """
    Protocol for record-oriented vector index implementations

    - One table per index: id, fixed-dimension vector, configured columns
    - Every call is an independent round trip; no cross-call transactions
    """

    async def initialize(self) -> None:
        """
        Create the backing table and vector index if they do not exist

        Raises:
            SchemaError: If the engine rejects the DDL
        """
        ...

    async def upsert(self, records: RecordInput | Sequence[RecordInput]) -> str:
        """
        Insert or replace records keyed on id, in input order

        Args:
            records: A single record or a sequence of records

        Returns:
            "Success"

        Raises:
            StorageError: If a record is malformed or its write fails.
                Records before the failing one stay written.
        """
        ...

    async def query(
        self,
        query_vector: Sequence[float],
        top_k: int,
        include_vectors: bool = False,
        filter: str | None = None,
    ) -> list[QueryResult]:
        """
        Search for the records most similar to query_vector

        Args:
            query_vector: Vector with the index's dimensionality
            top_k: Maximum number of results
            include_vectors: Return stored vectors on each result
            filter: Raw SQL predicate, trusted and passed through

        Returns:
            Results ordered by score (highest first)

        Raises:
            QueryError: Invalid options, dimension mismatch or engine failure
            DecodingError: query_vector or a result value is unreadable
        """
        ...

    async def list(
        self,
        cursor: RecordId | None = None,
        limit: int | None = None,
        include_vectors: bool = False,
        include_metadata: bool = True,
    ) -> ListPage:
        """
        Page through records ordered by id

        Args:
            cursor: Last id of the previous page, None to start
            limit: Page size
            include_vectors: Return stored vectors
            include_metadata: Return configured columns under metadata

        Returns:
            ListPage whose next_cursor is None on the last page
        """
        ...

    async def retrieve(
        self,
        ids: RecordId | Sequence[RecordId],
        include_vector: bool = True,
        include_metadata: bool = True,
    ) -> RetrieveResult | list[RetrieveResult] | None:
        """
        Fetch records by id

        Args:
            ids: A single id or a sequence of ids

        Returns:
            For a single id, the record or None when missing.
            For a sequence, the records found, in engine order.
        """
        ...

    async def delete(self, ids: RecordId | Sequence[RecordId]) -> int:
        """
        Delete records by id

        Returns:
            Number of rows removed
        """
        ...

    async def reset(self) -> None:
        """
        Remove every record, keeping the table and index

        WARNING: Destructive operation. Use with caution.
        """
        ...
