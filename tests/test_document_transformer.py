import json
import math
import uuid
from datetime import datetime

import pytest
from bson import ObjectId
from bson.decimal128 import Decimal128
from bson.regex import Regex

from mongo_indexer.exceptions import (
    DocumentDecodeException,
    InvalidIdentifierException,
    SerializationException
)
from mongo_indexer.processors import DocumentTransformer

from helpers import raw


@pytest.fixture
def transformer():
    return DocumentTransformer()


def test_transform_uses_objectid_hex_and_strips_id(transformer):
    oid = ObjectId()

    doc_id, body = transformer.transform(raw({"_id": oid, "name": "x"}))

    assert doc_id == str(oid)
    assert len(doc_id) == 24
    assert json.loads(body) == {"name": "x"}


def test_transform_keeps_nested_and_mixed_fields(transformer):
    ref = ObjectId()
    document = {
        "_id": ObjectId(),
        "title": "Widget",
        "price": 9.5,
        "stock": 3,
        "active": True,
        "tags": ["a", "b"],
        "dimensions": {"w": 1, "h": 2},
        "owner": ref,
        "missing": None,
    }

    _, body = transformer.transform(raw(document))

    assert json.loads(body) == {
        "title": "Widget",
        "price": 9.5,
        "stock": 3,
        "active": True,
        "tags": ["a", "b"],
        "dimensions": {"w": 1, "h": 2},
        "owner": str(ref),
        "missing": None,
    }


def test_bson_specific_types_are_encoded(transformer):
    uid = uuid.UUID("12345678-1234-5678-1234-567812345678")
    document = {
        "_id": ObjectId(),
        "created": datetime(2024, 1, 2, 3, 4, 5),
        "amount": Decimal128("10.25"),
        "blob": b"\x00\x01",
        "uid": uid,
    }

    _, body = transformer.transform(document)

    assert json.loads(body) == {
        "created": "2024-01-02T03:04:05+00:00",
        "amount": "10.25",
        "blob": "AAE=",
        "uid": str(uid),
    }


def test_plain_mapping_is_accepted(transformer):
    oid = ObjectId()

    doc_id, body = transformer.transform({"_id": oid, "name": "y"})

    assert doc_id == str(oid)
    assert json.loads(body) == {"name": "y"}


def test_missing_id_is_rejected(transformer):
    with pytest.raises(InvalidIdentifierException):
        transformer.transform(raw({"name": "no id"}))


@pytest.mark.parametrize("bad_id", ["5f1d7f1e9d1b2c3a4b5c6d7e", 42, {"nested": 1}])
def test_non_objectid_id_is_rejected(transformer, bad_id):
    with pytest.raises(InvalidIdentifierException):
        transformer.transform(raw({"_id": bad_id, "name": "x"}))


def test_corrupt_bson_is_a_decode_error(transformer):
    with pytest.raises(DocumentDecodeException):
        transformer.transform(b"\x05\x00\x00\x00")


def test_unsupported_input_type_is_a_decode_error(transformer):
    with pytest.raises(DocumentDecodeException):
        transformer.transform(42)


def test_nan_is_a_serialization_error(transformer):
    oid = ObjectId()

    with pytest.raises(SerializationException) as exc:
        transformer.transform({"_id": oid, "score": math.nan})

    assert exc.value.doc_id == str(oid)


def test_unknown_bson_type_is_a_serialization_error(transformer):
    with pytest.raises(SerializationException):
        transformer.transform({"_id": ObjectId(), "pattern": Regex("^a")})


def test_source_document_is_not_mutated(transformer):
    document = {"_id": ObjectId(), "name": "x"}

    transformer.transform(document)

    assert "_id" in document
