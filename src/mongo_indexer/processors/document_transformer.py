"""
Turns MongoDB documents into Elasticsearch index requests
"""
import base64
import json
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, Tuple, Union

import bson
from bson import ObjectId
from bson.decimal128 import Decimal128
from bson.errors import BSONError
from bson.raw_bson import RawBSONDocument
from bson.timestamp import Timestamp

from ..exceptions import (
    DocumentDecodeException,
    InvalidIdentifierException,
    SerializationException
)


ID_FIELD = "_id"

RawDocument = Union[bytes, RawBSONDocument, Mapping]


def encode_bson_value(value: Any) -> Any:
    """json.dumps hook for BSON types with no native JSON form"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, Decimal128):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Timestamp):
        return value.as_datetime().isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class DocumentTransformer:
    """Decode, validate and serialize one source document"""

    def decode(self, raw: RawDocument) -> Dict[str, Any]:
        """
        Decode raw BSON into a plain dict

        Raises:
            DocumentDecodeException: If the bytes are not a valid BSON document
        """
        try:
            if isinstance(raw, RawBSONDocument):
                return bson.decode(raw.raw)
            if isinstance(raw, (bytes, bytearray)):
                return bson.decode(bytes(raw))
            if isinstance(raw, Mapping):
                return dict(raw)
        except (BSONError, ValueError) as e:
            raise DocumentDecodeException("Error decoding document", original_error=e)
        raise DocumentDecodeException(f"Error decoding document: unsupported type {type(raw).__name__}")

    def extract_id(self, document: Dict[str, Any]) -> str:
        """
        Hex string of the document's ObjectId

        Raises:
            InvalidIdentifierException: If _id is missing or not an ObjectId
        """
        oid = document.get(ID_FIELD)
        if not isinstance(oid, ObjectId):
            raise InvalidIdentifierException(
                f"Error asserting _id to ObjectID for document: {document!r}"
            )
        return str(oid)

    def serialize(self, body: Dict[str, Any], doc_id: str = None) -> bytes:
        """
        Encode a document body as JSON bytes

        Raises:
            SerializationException: If a value has no JSON representation
        """
        try:
            return json.dumps(body, default=encode_bson_value, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationException("Error marshaling document", original_error=e, doc_id=doc_id)

    def transform(self, raw: RawDocument) -> Tuple[str, bytes]:
        """
        Build the (document id, JSON body) pair for the sink

        Args:
            raw: Document as returned by the source cursor

        Returns:
            tuple: ObjectId hex string and the body without _id
        """
        document = self.decode(raw)
        doc_id = self.extract_id(document)
        body = {key: value for key, value in document.items() if key != ID_FIELD}
        return doc_id, self.serialize(body, doc_id=doc_id)
