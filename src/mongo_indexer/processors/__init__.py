"""Processors for turning source documents into index requests"""

from .document_transformer import DocumentTransformer, encode_bson_value

__all__ = [
    "DocumentTransformer",
    "encode_bson_value",
]
