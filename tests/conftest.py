"""
Pytest Configuration and Fixtures
=================================

Shared fixtures: an in-memory document store standing in for Firestore,
a small club with three seasons of records, and an HTTP client wired to
that store.
"""

import os

# Settings are read at import time; keep retries instant and the breaker shut.
os.environ.setdefault("CIRCUIT_BREAKER_THRESHOLD", "1000")
os.environ.setdefault("RETRY_BASE_DELAY", "0")
os.environ.setdefault("RETRY_MAX_DELAY", "0")
os.environ.setdefault("LOG_FORMAT", "console")

from typing import Any, AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.v1.dependencies import get_extractor
from pipelines.extractors.base import BaseExtractor
from main import app


class FakeExtractor(BaseExtractor):
    """
    In-memory document store.

    ``failing`` maps a collection name, or ``history:{year}``, to the
    exception raised when it is read.
    """

    def __init__(
        self,
        players: Optional[dict[str, dict[str, Any]]] = None,
        history: Optional[dict[tuple[str, int], dict[str, Any]]] = None,
        matches: Optional[dict[str, dict[str, Any]]] = None,
    ):
        super().__init__("fake")
        self.players = players or {}
        self.history = history or {}
        self.matches = matches or {}
        self.failing: dict[str, Exception] = {}
        self.calls: list[str] = []

    def list_collection(self, collection: str) -> dict[str, dict[str, Any]]:
        self.calls.append(collection)
        if collection in self.failing:
            raise self.failing[collection]
        source = {"players": self.players, "matches": self.matches}[collection]
        return {doc_id: dict(fields) for doc_id, fields in source.items()}

    def get_document(self, path: str) -> Optional[dict[str, Any]]:
        self.calls.append(path)
        _, player_id, _, year = path.split("/")
        key = f"history:{year}"
        if key in self.failing:
            raise self.failing[key]
        document = self.history.get((player_id, int(year)))
        return dict(document) if document is not None else None


def lineup(name: str, *players: tuple[str, str]) -> dict:
    return {"name": name, "players": [{"name": n, "position": p} for n, p in players]}


def goal(scorer: Optional[str], team: Optional[str], assister: Optional[str] = None) -> dict:
    pair: dict[str, Any] = {"goal": {"player": scorer, "team": team}}
    if assister is not None:
        pair["assist"] = {"player": assister}
    return pair


@pytest.fixture
def players() -> dict[str, dict[str, Any]]:
    """Live documents for the current (2026) season."""
    return {
        "Kim": {
            "position": "CB",
            "goals": 2,
            "assists": 1,
            "cleanSheets": 3,
            "matches": 4,
            "win": 3,
            "draw": 0,
            "lose": 1,
            "winRate": 75.0,
            "personalPoints": 12.5,
            "momScore": 3,
            "momTop3Count": 1,
            "momTop8Count": 2,
        },
        "Lee": {"position": "ST", "goals": 6, "matches": 4, "win": 2, "lose": 2, "winRate": 50},
        "Park": {"position": "CM", "assists": 4, "matches": 3},
    }


@pytest.fixture
def history() -> dict[tuple[str, int], dict[str, Any]]:
    return {
        ("Kim", 2025): {"goals": 3, "assists": 2, "matches": 10, "cleanSheets": 5},
        ("Lee", 2025): {"goals": 5, "assists": 1, "matches": 8},
        ("Kim", 2024): {"goals": 1, "matches": 6},
    }


@pytest.fixture
def matches() -> dict[str, dict[str, Any]]:
    return {
        "m1": {
            "date": "2025-05-10",
            "quarters": [
                {
                    "teams": [
                        lineup("Red", ("Kim", "CB1"), ("Park", "CM1"), ("Lee", "ST")),
                        lineup("Blue", ("Choi", "ST"), ("Jung", "GK")),
                    ],
                    "goalAssistPairs": [goal("Lee", "Red", "Park")],
                },
                {
                    "teams": [
                        lineup("Red", ("Kim", "CB2"), ("Park", "CM")),
                        lineup("Blue", ("Choi", "ST"), ("Lee", "ST")),
                    ],
                    "goalAssistPairs": [goal("Choi", "Blue", "Lee"), goal("Kim", "Red", "Park")],
                },
            ],
        },
        "m2": {
            "date": "2025-06-01",
            "quarters": [
                {
                    "teams": [lineup("Red", ("Kim", "LB"), ("Lee", "ST")), lineup("Blue", ("Park", "CM"))],
                    "goalAssistPairs": [goal("Lee", "Red", "Kim"), goal("Park", "Blue")],
                },
            ],
        },
        "m3": {
            "date": "2024-09-01",
            "quarters": [{"teams": [lineup("Red", ("Kim", "CB1"), ("Park", "CM"))]}],
        },
        "m4": {"date": "2025-01-01", "quarters": "not-a-list"},
    }


@pytest.fixture
def extractor(players, history, matches) -> FakeExtractor:
    return FakeExtractor(players=players, history=history, matches=matches)


@pytest_asyncio.fixture(scope="function")
async def client(extractor: FakeExtractor) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against the app, reading from the fake store."""
    app.dependency_overrides[get_extractor] = lambda: extractor
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
