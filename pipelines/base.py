"""
Base Pipeline

Abstract base class for the view pipelines.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext, current_season
from pipelines.extractors.base import BaseExtractor
from pipelines.extractors.firestore import FirestoreExtractor
from schemas.pipeline import PipelineResult


class BasePipeline(ABC):
    """
    Abstract base class for view pipelines.

    Provides:
    - Automatic run tracking via PipelineContext
    - Structured logging with a run id bound in
    - Standardized error handling
    - Template method pattern for run lifecycle

    Subclasses must implement:
    - config: PipelineConfig class attribute
    - execute(): Build the read-model and return it

    Example:
        class RecordsBoardPipeline(BasePipeline):
            config = PipelineConfig(
                name="records_board",
                display_name="Records Board",
                description="Season and career leaderboards",
                collections=("players",),
            )

            async def execute(self, ctx: PipelineContext) -> RecordsBoard:
                snapshot = await load_snapshot(self.extractor, ctx)
                ...
    """

    # Class-level configuration - must be overridden by subclasses
    config: ClassVar[PipelineConfig]

    def __init__(self, extractor: Optional[BaseExtractor] = None):
        """
        Initialize pipeline and validate configuration.

        Args:
            extractor: Document store reader (defaults to Firestore from settings)
        """
        self._validate_config()
        self.extractor = extractor or FirestoreExtractor()

    def _validate_config(self) -> None:
        """Validate that config is properly defined."""
        if not hasattr(self.__class__, "config") or self.__class__.config is None:
            raise ValueError(
                f"{self.__class__.__name__} must define a 'config' class attribute"
            )

    @abstractmethod
    async def execute(self, ctx: PipelineContext) -> Any:
        """
        Build the view's read-model.

        Blocking reads go through asyncio.to_thread() so the event loop
        stays free while documents are fetched.

        Args:
            ctx: Pipeline context with logging, diagnostics, and timing

        Returns:
            The read-model, placed in PipelineResult.data

        Raises:
            Any exception will be caught and converted to a failed result
        """
        pass

    async def run(self, as_of_year: Optional[int] = None) -> PipelineResult:
        """
        Run the pipeline with full lifecycle management.

        Args:
            as_of_year: Season the view is computed as of. Omit to use the
                        current season in the configured timezone.

        Returns:
            PipelineResult with status, timing, diagnostics and the read-model
        """
        ctx = PipelineContext(self.config.name, as_of_year=as_of_year or current_season())
        ctx.start_tracking()

        try:
            self.before_execute(ctx)
            data = await asyncio.wait_for(self.execute(ctx), timeout=self.config.timeout_seconds)
            self.after_execute(ctx)
            return ctx.mark_success(data)
        except Exception as e:
            return ctx.mark_failed(e)

    def before_execute(self, ctx: PipelineContext) -> None:
        """
        Hook called before execute().

        Override for validation or setup tasks.
        """
        pass

    def after_execute(self, ctx: PipelineContext) -> None:
        """
        Hook called after successful execute().

        Override for cleanup tasks.
        """
        pass

    @classmethod
    def get_name(cls) -> str:
        """Get the pipeline name from config."""
        return cls.config.name

    @classmethod
    def get_info(cls) -> dict:
        """Get pipeline information for listing."""
        return {
            "name": cls.config.name,
            "display_name": cls.config.display_name,
            "description": cls.config.description,
            "collections": list(cls.config.collections),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.config.name})>"
