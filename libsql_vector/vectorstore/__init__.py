"""
VectorStore
Record index facade over libSQL's vector extension
"""

from libsql_vector.vectorstore.protocol import VectorIndexProtocol
from libsql_vector.vectorstore.libsql import Index

__all__ = ["VectorIndexProtocol", "Index"]
