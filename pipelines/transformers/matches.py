"""
Match Event Transformers

Turns decoded match documents into MatchEvent models and resolves the
calendar date each match was played on.
"""

from collections import Counter
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

import pytz
from pydantic import ValidationError

from core.settings import settings
from schemas.matches import MatchEvent


def parse_match_date(raw: Optional[str]) -> Optional[date]:
    """
    Calendar date of a match, or None when it cannot be read.

    Accepts plain ISO dates and Firestore timestamps. Timestamps are read
    in the club's timezone (``settings.timezone``), so a late UTC evening
    can fall on the next local day.

        >>> parse_match_date("2025-03-09")
        datetime.date(2025, 3, 9)
        >>> parse_match_date("2025-03-09T10:00:00Z")
        datetime.date(2025, 3, 9)
        >>> parse_match_date("next sunday") is None
        True
    """
    if not raw:
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        played_at = datetime.fromisoformat(text)
    except ValueError:
        return None
    if played_at.tzinfo is not None:
        played_at = played_at.astimezone(pytz.timezone(settings.timezone))
    return played_at.date()


def match_year(match: MatchEvent) -> Optional[int]:
    played_on = parse_match_date(match.date)
    return played_on.year if played_on else None


def parse_matches(
    documents: Mapping[str, Mapping[str, Any]],
    malformed: Optional[Counter] = None,
) -> list[MatchEvent]:
    """
    Build MatchEvent models, newest match first.

    Documents that do not fit the match shape are skipped and counted
    under ``malformed_match``; undated matches are kept (positions still
    count them) and counted under ``undated_match``.
    """
    malformed = malformed if malformed is not None else Counter()
    matches: list[MatchEvent] = []

    for match_id, fields in documents.items():
        try:
            match = MatchEvent.model_validate({**fields, "match_id": match_id})
        except ValidationError:
            malformed["malformed_match"] += 1
            continue
        if parse_match_date(match.date) is None:
            malformed["undated_match"] += 1
        matches.append(match)

    return sort_newest_first(matches)


def sort_newest_first(matches: Iterable[MatchEvent]) -> list[MatchEvent]:
    """Newest first; undated matches go last, keeping their relative order."""
    return sorted(matches, key=lambda m: parse_match_date(m.date) or date.min, reverse=True)
