"""
Shared fixtures

Stock SQLite has no libSQL vector functions, so every connection gets
Python stand-ins for vector32 / vector_extract / vector_distance_cos /
libsql_vector_idx with the same float32 storage format.
"""

import json

import numpy as np
import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine

from libsql_vector import ColumnDefinition, Index, IndexOptions


def _unpack(blob: bytes) -> np.ndarray:
    return np.frombuffer(blob, dtype=np.float32)


def vector32(value):
    if value is None or isinstance(value, bytes):
        return value
    return np.array(json.loads(value), dtype=np.float32).tobytes()


def vector_extract(blob):
    if blob is None:
        return None
    return "[" + ",".join(f"{v:g}" for v in _unpack(blob)) + "]"


def vector_distance_cos(left, right):
    a = _unpack(vector32(left))
    b = _unpack(vector32(right))
    if len(a) != len(b):
        raise ValueError("vector dimensions are different")
    a64, b64 = a.astype(np.float64), b.astype(np.float64)
    return float(1.0 - np.dot(a64, b64) / (np.linalg.norm(a64) * np.linalg.norm(b64)))


def libsql_vector_idx(blob):
    return blob


def register_vector_functions(dbapi_connection, connection_record):
    for name, nargs, func in (
        ("vector32", 1, vector32),
        ("vector_extract", 1, vector_extract),
        ("vector_distance_cos", 2, vector_distance_cos),
        ("libsql_vector_idx", 1, libsql_vector_idx),
    ):
        dbapi_connection.create_function(name, nargs, func, deterministic=True)


@pytest.fixture
async def engine(tmp_path):
    """
    File-backed aiosqlite engine with the vector functions registered
    """
    db_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'vectors.db'}")
    event.listen(db_engine.sync_engine, "connect", register_vector_functions)

    yield db_engine

    await db_engine.dispose()


@pytest.fixture
def movie_options() -> IndexOptions:
    return IndexOptions(
        table_name="test_table",
        dimensions=3,
        columns=[
            ColumnDefinition(name="title", type="TEXT"),
            ColumnDefinition(name="year", type="INTEGER"),
        ],
        debug=True,
    )


@pytest.fixture
async def movie_index(engine, movie_options) -> Index:
    index = Index(engine, movie_options)
    await index.initialize()
    return index


@pytest.fixture
def movies() -> list[dict]:
    return [
        {"id": "1", "vector": [0.1, 0.2, 0.3], "title": "Test 1", "year": 2021},
        {"id": "2", "vector": [0.4, 0.5, 0.6], "title": "Test 2", "year": 2022},
        {"id": "3", "vector": [0.7, 0.8, 0.9], "title": "Test 3", "year": 2023},
    ]
