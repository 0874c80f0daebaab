"""
Tests for the Partner Transformer
=================================
"""

from collections import Counter
from datetime import date

import pytest

from pipelines.transformers.matches import match_year, parse_match_date, parse_matches
from pipelines.transformers.partners import PartnerMiner, best_partner, mine_best_partners
from schemas.matches import MatchEvent
from schemas.records import PartnerCount
from tests.conftest import goal, lineup


def match(date, *quarters):
    return MatchEvent.model_validate({"date": date, "quarters": list(quarters)})


def quarter(teams, pairs=()):
    return {"teams": teams, "goalAssistPairs": list(pairs)}


ONE_PAIR = [
    match(
        "2025-03-01",
        quarter(
            [lineup("A", ("X", "ST"), ("Y", "ST")), lineup("B", ("Z", "CB"), ("W", "GK"))],
            [goal("Y", "A", "X")],
        ),
    )
]


def test_assist_credits_given_and_received():
    assert mine_best_partners(ONE_PAIR, "X", 2025).given == PartnerCount(name="Y", count=1)
    assert mine_best_partners(ONE_PAIR, "Y", 2025).received == PartnerCount(name="X", count=1)


def test_non_defender_never_gets_clean_sheet_credit():
    # Team A conceded nothing, but X only played up front
    assert mine_best_partners(ONE_PAIR, "X", 2025).clean_sheet == PartnerCount()


def test_defender_conceding_gets_no_clean_sheet():
    assert mine_best_partners(ONE_PAIR, "Z", 2025).clean_sheet == PartnerCount()


def test_defender_clean_sheet_credits_teammates_per_quarter():
    matches = [
        match(
            "2025-04-01",
            quarter([lineup("A", ("Z", "CB1"), ("W", "GK")), lineup("B", ("Q", "ST"))]),
            quarter([lineup("A", ("Z", "RB"), ("W", "GK")), lineup("B", ("Q", "ST"))], [goal("Z", "A")]),
            quarter([lineup("A", ("Z", "ST"), ("V", "CM")), lineup("B", ("Q", "ST"))], [goal("Q", "b ")]),
        )
    ]

    partners = mine_best_partners(matches, "Z", 2025)

    assert partners.clean_sheet == PartnerCount(name="W", count=2)
    assert partners.teammate == PartnerCount(name="W", count=2)


def test_teammate_counts_quarters_on_the_same_team():
    partners = mine_best_partners(ONE_PAIR, "X", 2025)
    assert partners.teammate == PartnerCount(name="Y", count=1)


def test_other_seasons_are_ignored():
    assert mine_best_partners(ONE_PAIR, "X", 2024).given == PartnerCount()


def test_player_name_is_case_insensitive():
    assert mine_best_partners(ONE_PAIR, " x ", 2025).given == PartnerCount(name="Y", count=1)


def test_ties_go_to_the_first_partner_encountered():
    assert best_partner({"B": 2, "A": 2, "C": 1}) == PartnerCount(name="B", count=2)
    assert best_partner({}) == PartnerCount()


def test_newest_match_decides_ties(matches):
    malformed = Counter()
    miner = PartnerMiner(parse_matches(matches, malformed), 2025, malformed)

    partners = miner.mine("Kim")

    # Lee (newest match first) and Park both share two quarters with Kim
    assert partners.teammate == PartnerCount(name="Lee", count=2)
    assert partners.clean_sheet == PartnerCount(name="Park", count=1)
    assert partners.given == PartnerCount(name="Lee", count=1)
    assert partners.received == PartnerCount(name="Park", count=1)


def test_incomplete_and_unknown_pairs_are_counted():
    malformed = Counter()
    matches = [
        match(
            "2025-05-05",
            quarter(
                [lineup("A", ("Z", "CB")), lineup("B", ("Q", "ST"))],
                [goal(None, "B", "Q"), goal("Q", "Green")],
            ),
        )
    ]

    partners = PartnerMiner(matches, 2025, malformed).mine("Z")

    assert malformed["incomplete_goal_pair"] == 2
    assert malformed["unknown_goal_team"] == 1
    assert partners.given == PartnerCount()


def test_malformed_match_documents_are_skipped():
    malformed = Counter()
    parsed = parse_matches(
        {
            "ok": {"date": "2025-01-02", "quarters": []},
            "undated": {"quarters": []},
            "broken": {"date": "2025-01-03", "quarters": 7},
        },
        malformed,
    )

    assert [m.match_id for m in parsed] == ["ok", "undated"]
    assert malformed == Counter({"malformed_match": 1, "undated_match": 1})


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-03-09", date(2025, 3, 9)),
        ("2024-12-31T15:30:00Z", date(2025, 1, 1)),
        ("2024-12-31T14:59:00Z", date(2024, 12, 31)),
        ("2025-03-09T23:00:00+09:00", date(2025, 3, 9)),
        ("2025-03-09T23:00:00", date(2025, 3, 9)),
        ("next sunday", None),
        (None, None),
    ],
)
def test_match_dates_are_read_in_club_timezone(raw, expected):
    assert parse_match_date(raw) == expected


def test_late_utc_new_years_eve_match_counts_for_next_season():
    assert match_year(match("2024-12-31T15:30:00Z")) == 2025
