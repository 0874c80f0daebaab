"""
Tests for the Ranking Transformer
=================================

Standard competition ranking, top-N cutoffs and badge summaries.
"""

from pipelines.transformers.ranking import RankCandidate, find_entry, rank_entries, summarize_rank


def ranks(entries):
    return {e.entity_id: e.rank for e in entries}


def test_equal_values_share_rank_and_next_rank_skips():
    entries = rank_entries([("A", 10), ("B", 10), ("C", 5)])
    assert ranks(entries) == {"A": 1, "B": 1, "C": 3}


def test_rank_never_decreases_as_value_decreases():
    entries = rank_entries([("A", 3), ("B", 9), ("C", 9), ("D", 7), ("E", 1), ("F", 7)])
    values = [e.value for e in entries]
    assert values == sorted(values, reverse=True)
    assert [e.rank for e in entries] == [1, 1, 3, 3, 5, 6]


def test_zero_and_negative_values_are_dropped_without_shifting_ranks():
    with_zero = rank_entries([("A", 10), ("B", 0), ("C", 5), ("D", -2)])
    without_zero = rank_entries([("A", 10), ("C", 5)])
    assert with_zero == without_zero
    assert ranks(with_zero) == {"A": 1, "C": 2}


def test_reranking_a_ranking_is_idempotent():
    first = rank_entries([RankCandidate("A", 4, 2025), RankCandidate("B", 4, 2024), RankCandidate("C", 2, 2025)])
    assert rank_entries(first) == first


def test_ties_are_ordered_by_entity_then_season():
    entries = rank_entries([
        RankCandidate("b", 5, 2025),
        RankCandidate("a", 5, 2025),
        RankCandidate("a", 5, 2023),
    ])
    assert [(e.entity_id, e.season) for e in entries] == [("a", 2023), ("a", 2025), ("b", 2025)]
    assert {e.rank for e in entries} == {1}


def test_limit_keeps_whole_tie_group():
    entries = rank_entries([("A", 9), ("B", 7), ("C", 7), ("D", 1)], limit=2)
    assert [e.entity_id for e in entries] == ["A", "B", "C"]


def test_limit_excludes_rank_past_cutoff_after_large_tie():
    entries = rank_entries([("A", 5), ("B", 5), ("C", 5), ("D", 4)], limit=2)
    assert ranks(entries) == {"A": 1, "B": 1, "C": 1}


def test_season_and_position_are_carried_through():
    (entry,) = rank_entries([RankCandidate("Kim", 3, 2024, "CB")])
    assert entry.season == 2024
    assert entry.position == "CB"


def test_find_entry_matches_ids_exactly():
    entries = rank_entries([("Kim", 9), ("kim", 1), ("Lee", 2)])
    assert (find_entry(entries, "kim").rank, find_entry(entries, "kim").value) == (3, 1)
    assert find_entry(entries, "Kim").rank == 1
    assert find_entry(entries, "KIM") is None
    assert find_entry(entries, "Park") is None


def test_summarize_rank_does_not_borrow_a_case_variant_standing():
    entries = rank_entries([("Kim", 9), ("kim", 1)])

    summary = summarize_rank(entries, "kim")

    assert (summary.player_rank, summary.player_value) == (2, 1)


def test_summarize_rank_reports_podium_and_player_standing():
    entries = rank_entries([("A", 10), ("B", 8), ("C", 8), ("D", 6), ("E", 5)])

    summary = summarize_rank(entries, "E", cutoff=3)

    assert [e.entity_id for e in summary.top] == ["A", "B", "C"]
    assert summary.player_rank == 5
    assert summary.player_value == 5


def test_summarize_rank_for_unranked_player():
    summary = summarize_rank(rank_entries([("A", 1)]), "Z")
    assert summary.player_rank is None
    assert summary.player_value == 0
