from pydantic import BaseModel, ConfigDict
from typing import Any, Optional

from .common import ApiStatus
from .records import PlayerHistory, PlayerRecords, RecordsBoard


class Diagnostics(BaseModel):
    """
    What a view load had to work around.

    missing_snapshots: history documents that do not exist (not an error)
    fetch_failures: sections degraded to defaults because a read failed
    malformed_events: skipped match-event records, by kind
    """

    missing_snapshots: int = 0
    fetch_failures: list[str] = []
    malformed_events: dict[str, int] = {}


class PipelineResult(BaseModel):
    """Result of a single view pipeline execution"""

    status: ApiStatus
    message: str
    started_at: str
    completed_at: Optional[str] = None
    duration_seconds: Optional[float] = None
    records_processed: Optional[int] = None
    error: Optional[str] = None
    diagnostics: Diagnostics = Diagnostics()
    data: Optional[Any] = None

    model_config = ConfigDict(use_enum_values=True)


class PipelineInfo(BaseModel):
    name: str
    display_name: str
    description: str
    collections: list[str]


class PipelineListResponse(BaseModel):
    status: ApiStatus
    message: str
    data: list[PipelineInfo]

    model_config = ConfigDict(use_enum_values=True)


class RecordsBoardResponse(BaseModel):
    status: ApiStatus
    message: str
    data: Optional[RecordsBoard] = None
    diagnostics: Optional[Diagnostics] = None

    model_config = ConfigDict(use_enum_values=True)


class PlayerRecordsResponse(BaseModel):
    status: ApiStatus
    message: str
    data: Optional[PlayerRecords] = None
    diagnostics: Optional[Diagnostics] = None

    model_config = ConfigDict(use_enum_values=True)


class PlayerHistoryResponse(BaseModel):
    status: ApiStatus
    message: str
    data: Optional[PlayerHistory] = None
    diagnostics: Optional[Diagnostics] = None

    model_config = ConfigDict(use_enum_values=True)
