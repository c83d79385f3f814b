"""
Value conversion between Python and libSQL's vector extension.

Vectors travel to the engine as bracketed text literals consumed by
``vector32()`` and come back either as text (``vector_extract()``) or as
the raw ``F32_BLOB`` buffer. Storage is float32, so a round trip is lossy
relative to Python floats.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from numbers import Real
from typing import Any

import numpy as np

from libsql_vector.core.exceptions import DecodingError
from libsql_vector.schemas.index import ColumnDefinition, RecordId

FLOAT32_SIZE = 4


def coerce_vector(value: Any) -> list[float]:
    """
    Validate a caller-supplied vector and return it as floats.

    Raises:
        DecodingError: value is None, not a sequence, or holds a
            non-numeric or non-finite element
    """
    if value is None:
        raise DecodingError("Vector is required")
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise DecodingError(f"Vector must be one-dimensional, got {value.ndim} dimensions")
        value = value.tolist()
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        raise DecodingError(f"Vector must be a sequence of numbers, got {type(value).__name__}")

    floats: list[float] = []
    for element in value:
        if isinstance(element, bool) or not isinstance(element, (Real, Decimal)):
            raise DecodingError(f"Vector element is not a number: {element!r}")
        number = float(element)
        if not math.isfinite(number):
            raise DecodingError(f"Vector element is not finite: {element!r}")
        floats.append(number)
    return floats


def encode_vector(vector: Sequence[float]) -> str:
    """Render floats as the ``[a, b, c]`` literal ``vector32()`` parses."""

    return "[" + ", ".join(repr(float(v)) for v in vector) + "]"


def decode_vector(value: Any) -> list[float] | None:
    """
    Decode a stored vector.

    Accepts the textual form produced by ``vector_extract()`` and the raw
    little-endian float32 buffer. NULL decodes to None.

    Raises:
        DecodingError: any other representation
    """
    if value is None:
        return None

    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError as exc:
            raise DecodingError(f"Failed to parse vector: {exc}") from exc
        if not isinstance(parsed, list):
            raise DecodingError(f"Vector text is not a list: {value[:40]!r}")
        return coerce_vector(parsed)

    if isinstance(value, (bytes, bytearray, memoryview)):
        buffer = bytes(value)
        if len(buffer) % FLOAT32_SIZE:
            raise DecodingError(f"Vector buffer length {len(buffer)} is not a multiple of {FLOAT32_SIZE}")
        return np.frombuffer(buffer, dtype="<f4").tolist()

    raise DecodingError(f"Invalid vector type: {type(value).__name__}")


def ensure_id_type(value: Any) -> RecordId:
    if isinstance(value, bool):
        raise DecodingError(f"Invalid id type: {type(value).__name__}")
    if isinstance(value, (str, int)):
        return value
    # Alternate integer representations from some drivers
    if isinstance(value, (float, Decimal)) and math.isfinite(value) and value == int(value):
        return int(value)
    raise DecodingError(f"Invalid id type: {type(value).__name__}")


def ensure_number(value: Any) -> float:
    if isinstance(value, bool):
        raise DecodingError(f"Invalid score type: {type(value).__name__}")
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise DecodingError(f"Invalid score value: {value!r}") from exc
    raise DecodingError(f"Invalid score type: {type(value).__name__}")


def project_columns(row: Mapping[str, Any], columns: Sequence[ColumnDefinition]) -> dict[str, Any]:
    """Copy each configured column out of a result row, in definition order."""

    return {column.name: row.get(column.name) for column in columns}
