"""
Tests for Firestore Document Decoding and Name Normalization
============================================================
"""

import pytest

from pipelines.transformers.documents import decode_document, decode_value
from pipelines.transformers.names import normalize_name, same_name


@pytest.mark.parametrize(
    "value, expected",
    [
        ({"nullValue": None}, None),
        ({"integerValue": "12"}, 12),
        ({"doubleValue": 62.5}, 62.5),
        ({"booleanValue": True}, True),
        ({"stringValue": "CB1"}, "CB1"),
        ({"timestampValue": "2025-05-10T09:00:00Z"}, "2025-05-10T09:00:00Z"),
        ({"arrayValue": {}}, []),
        ({"mapValue": {}}, {}),
    ],
)
def test_decode_scalar_values(value, expected):
    assert decode_value(value) == expected


def test_decode_nested_match_document():
    raw = {
        "name": "projects/p/databases/(default)/documents/matches/abc123",
        "fields": {
            "date": {"stringValue": "2025-05-10"},
            "quarters": {
                "arrayValue": {
                    "values": [
                        {
                            "mapValue": {
                                "fields": {
                                    "teams": {
                                        "arrayValue": {
                                            "values": [
                                                {
                                                    "mapValue": {
                                                        "fields": {
                                                            "name": {"stringValue": "Red"},
                                                            "players": {"arrayValue": {}},
                                                        }
                                                    }
                                                }
                                            ]
                                        }
                                    }
                                }
                            }
                        }
                    ]
                }
            },
        },
    }

    doc_id, fields = decode_document(raw)

    assert doc_id == "abc123"
    assert fields == {"date": "2025-05-10", "quarters": [{"teams": [{"name": "Red", "players": []}]}]}


def test_document_without_fields_decodes_empty():
    assert decode_document({"name": "projects/p/databases/d/documents/players/Kim"}) == ("Kim", {})


@pytest.mark.parametrize(
    "raw, expected",
    [("  Kim Min-jae ", "kim min-jae"), ("Dončić", "doncic"), ("김민재", "김민재"), (None, ""), ("", "")],
)
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


def test_same_name_never_matches_blank_names():
    assert same_name("KIM", "kim ")
    assert not same_name("", "")
    assert not same_name(None, None)
