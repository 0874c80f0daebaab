"""
Tests for the Firestore Extractor
=================================

HTTP is mocked at requests.request; retries are instant (see conftest).
"""

from unittest.mock import MagicMock, patch

import pytest

from core.resilience import ClientError, ServerError
from pipelines.extractors.firestore import FirestoreExtractor


def fake_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.headers = {}
    response.text = ""
    response.json.return_value = payload or {}
    return response


def player_doc(name, goals):
    return {
        "name": f"projects/club/databases/(default)/documents/players/{name}",
        "fields": {"goals": {"integerValue": str(goals)}, "position": {"stringValue": "CB"}},
    }


@pytest.fixture
def extractor():
    return FirestoreExtractor(project_id="club", database="(default)", api_key="secret", page_size=2)


def test_list_collection_follows_page_tokens(extractor):
    pages = [
        fake_response(payload={"documents": [player_doc("Kim", 3), player_doc("Lee", 1)], "nextPageToken": "p2"}),
        fake_response(payload={"documents": [player_doc("Park", 0)]}),
    ]

    with patch("core.resilience.requests.request", side_effect=pages) as request:
        players = extractor.list_players()

    assert list(players) == ["Kim", "Lee", "Park"]
    assert players["Kim"] == {"goals": 3, "position": "CB"}

    first, second = request.call_args_list
    assert first.args == (
        "GET",
        "https://firestore.googleapis.com/v1/projects/club/databases/(default)/documents/players",
    )
    assert first.kwargs["params"] == {"pageSize": 2, "key": "secret"}
    assert second.kwargs["params"] == {"pageSize": 2, "pageToken": "p2", "key": "secret"}


def test_empty_collection(extractor):
    with patch("core.resilience.requests.request", return_value=fake_response(payload={})):
        assert extractor.list_matches() == {}


def test_history_lookup_reads_snapshot_path(extractor):
    payload = {"fields": {"goals": {"integerValue": "5"}}}
    with patch("core.resilience.requests.request", return_value=fake_response(payload=payload)) as request:
        assert extractor.get_history("Kim", 2024) == {"goals": 5}

    assert request.call_args.args[1].endswith("/documents/players/Kim/history/2024")


def test_missing_history_snapshot_is_none(extractor):
    with patch("core.resilience.requests.request", return_value=fake_response(404)):
        assert extractor.get_history("Kim", 2022) is None


def test_player_ids_are_url_quoted(extractor):
    with patch("core.resilience.requests.request", return_value=fake_response(404)) as request:
        extractor.get_history("김 민재", 2023)

    assert "/players/%EA%B9%80%20%EB%AF%BC%EC%9E%AC/history/2023" in request.call_args.args[1]


def test_server_errors_are_retried(extractor):
    responses = [fake_response(503), fake_response(payload={"documents": [player_doc("Kim", 1)]})]

    with patch("core.resilience.requests.request", side_effect=responses) as request:
        players = extractor.list_players()

    assert list(players) == ["Kim"]
    assert request.call_count == 2


def test_server_errors_raise_after_max_attempts(extractor):
    with patch("core.resilience.requests.request", return_value=fake_response(500)) as request:
        with pytest.raises(ServerError):
            extractor.list_players()

    assert request.call_count == 3


def test_client_errors_are_not_retried(extractor):
    with patch("core.resilience.requests.request", return_value=fake_response(403)) as request:
        with pytest.raises(ClientError):
            extractor.get_history("Kim", 2024)

    assert request.call_count == 1
