"""
Pipeline Context

Manages view pipeline execution context including logging, timing and the
diagnostics of what a load had to work around.
"""

from __future__ import annotations

import traceback
import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

import pytz

from core.logging import get_logger
from core.settings import settings
from schemas.common import ApiStatus
from schemas.pipeline import Diagnostics, PipelineResult


def local_now() -> datetime:
    return datetime.now(pytz.timezone(settings.timezone))


def current_season() -> int:
    """The season in progress, by the club's local wall clock."""
    return local_now().year


class ViewNotFoundError(Exception):
    """Raised when the entity a view is about does not exist."""

    pass


class PlayerNotFoundError(ViewNotFoundError):
    def __init__(self, player: str):
        super().__init__(f"Player '{player}' not found")
        self.player = player


@dataclass
class PipelineContext:
    """
    Manages view pipeline execution context including:
    - Run ID bound into every log line
    - The season the view is computed as of
    - Timing information
    - Records processed counter
    - Diagnostics: missing snapshots, degraded sections, skipped events

    Usage:
        ctx = PipelineContext("records_board", as_of_year=2026)
        ctx.start_tracking()
        try:
            ctx.increment_records(10)
            return ctx.mark_success(board)
        except Exception as e:
            return ctx.mark_failed(e)
    """

    pipeline_name: str
    as_of_year: int
    run_id: uuid.UUID = field(default_factory=uuid.uuid4)
    started_at: datetime = field(default_factory=local_now)
    records_processed: int = 0
    missing_snapshots: int = 0
    fetch_failures: list[str] = field(default_factory=list)
    malformed: Counter = field(default_factory=Counter)

    _log: Any = field(default=None, repr=False)

    def __post_init__(self):
        """Initialize the bound logger."""
        self._log = get_logger("pipeline").bind(
            pipeline=self.pipeline_name,
            run_id=str(self.run_id),
            as_of_year=self.as_of_year,
        )

    @property
    def log(self):
        """Get the bound logger for this context."""
        return self._log

    def start_tracking(self) -> None:
        self.started_at = local_now()
        self._log.info("pipeline_started")

    def increment_records(self, count: int = 1) -> None:
        """Increment the records processed counter."""
        self.records_processed += count

    def record_missing_snapshot(self, count: int = 1) -> None:
        self.missing_snapshots += count

    def record_fetch_failure(self, section: str, error: Exception) -> None:
        """Note a section that degraded to its default because a read failed."""
        if section not in self.fetch_failures:
            self.fetch_failures.append(section)
        self._log.warning(
            "section_degraded",
            section=section,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def diagnostics(self) -> Diagnostics:
        return Diagnostics(
            missing_snapshots=self.missing_snapshots,
            fetch_failures=list(self.fetch_failures),
            malformed_events={k: v for k, v in self.malformed.items() if v},
        )

    def mark_success(self, data: Any = None, message: Optional[str] = None) -> PipelineResult:
        """
        Mark pipeline as successful and return result.

        Args:
            data: The read-model built by the pipeline
            message: Optional custom success message
        """
        completed_at = local_now()
        duration = (completed_at - self.started_at).total_seconds()
        diagnostics = self.diagnostics

        if diagnostics.malformed_events:
            self._log.info("malformed_events_skipped", **diagnostics.malformed_events)

        self._log.info(
            "pipeline_completed",
            records_processed=self.records_processed,
            duration_seconds=duration,
            missing_snapshots=diagnostics.missing_snapshots,
            fetch_failures=diagnostics.fetch_failures,
        )

        return PipelineResult(
            status=ApiStatus.SUCCESS,
            message=message or f"{self.pipeline_name} completed successfully",
            started_at=self.started_at.isoformat(),
            completed_at=completed_at.isoformat(),
            duration_seconds=duration,
            records_processed=self.records_processed,
            diagnostics=diagnostics,
            data=data,
        )

    def mark_failed(self, error: Exception) -> PipelineResult:
        """
        Mark pipeline as failed and return error result.

        A ViewNotFoundError yields NOT_FOUND; anything else is an ERROR.
        """
        completed_at = local_now()
        duration = (completed_at - self.started_at).total_seconds()
        error_msg = f"{type(error).__name__}: {str(error)}"

        if isinstance(error, ViewNotFoundError):
            self._log.info("pipeline_not_found", error=error_msg)
            status = ApiStatus.NOT_FOUND
            message = str(error)
            detail = error_msg
        else:
            tb = traceback.format_exc()
            self._log.error("pipeline_failed", error=error_msg, traceback=tb)
            status = ApiStatus.ERROR
            message = f"{self.pipeline_name} failed"
            detail = f"{error_msg}\n{tb}"

        return PipelineResult(
            status=status,
            message=message,
            started_at=self.started_at.isoformat(),
            completed_at=completed_at.isoformat(),
            duration_seconds=duration,
            records_processed=self.records_processed,
            error=detail,
            diagnostics=self.diagnostics,
        )
