"""
Data Transformers

Pure functions and read-only builders for transforming extracted data.
"""

from pipelines.transformers.names import normalize_name, same_name
from pipelines.transformers.documents import decode_document, decode_fields, decode_value
from pipelines.transformers.season_records import season_record_from_document
from pipelines.transformers.ranking import RankCandidate, rank_entries, summarize_rank
from pipelines.transformers.aggregation import StatsAggregator, season_window
from pipelines.transformers.matches import match_year, parse_match_date, parse_matches
from pipelines.transformers.positions import PositionResolver, unify_position
from pipelines.transformers.partners import PartnerMiner, mine_best_partners

__all__ = [
    "normalize_name",
    "same_name",
    "decode_document",
    "decode_fields",
    "decode_value",
    "season_record_from_document",
    "RankCandidate",
    "rank_entries",
    "summarize_rank",
    "StatsAggregator",
    "season_window",
    "match_year",
    "parse_match_date",
    "parse_matches",
    "PositionResolver",
    "unify_position",
    "PartnerMiner",
    "mine_best_partners",
]
