"""
Pipeline Registry and Exports

Provides a registry of the view pipelines and helper functions for
running them by name.
"""

from typing import Any, Optional, Type

from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext, PlayerNotFoundError, ViewNotFoundError
from pipelines.player_history import PlayerHistoryPipeline
from pipelines.records_board import RecordsBoardPipeline
from schemas.pipeline import PipelineResult


# Registry of all available view pipelines
PIPELINE_REGISTRY: dict[str, Type[BasePipeline]] = {
    "records_board": RecordsBoardPipeline,
    "player_history": PlayerHistoryPipeline,
}


def get_pipeline(name: str, **params: Any) -> BasePipeline:
    """
    Get a pipeline instance by name.

    Args:
        name: Pipeline name (e.g., "records_board")
        **params: Constructor arguments (e.g., player_id for player_history)

    Returns:
        Instantiated pipeline

    Raises:
        KeyError: If pipeline name not found
    """
    if name not in PIPELINE_REGISTRY:
        available = ", ".join(PIPELINE_REGISTRY.keys())
        raise KeyError(f"Unknown pipeline '{name}'. Available: {available}")

    return PIPELINE_REGISTRY[name](**params)


async def run_pipeline(name: str, as_of_year: Optional[int] = None, **params: Any) -> PipelineResult:
    """
    Run a pipeline by name.

    Args:
        name: Pipeline name
        as_of_year: Season to compute the view as of; omit for the current season
        **params: Constructor arguments for the pipeline

    Returns:
        PipelineResult with status, diagnostics and the read-model
    """
    pipeline = get_pipeline(name, **params)
    return await pipeline.run(as_of_year=as_of_year)


def list_pipelines() -> list[dict]:
    """
    List all available pipelines with their configurations.

    Returns:
        List of pipeline info dicts
    """
    return [cls.get_info() for cls in PIPELINE_REGISTRY.values()]


__all__ = [
    # Base classes
    "BasePipeline",
    "PipelineConfig",
    "PipelineContext",
    "ViewNotFoundError",
    "PlayerNotFoundError",
    # View pipelines
    "RecordsBoardPipeline",
    "PlayerHistoryPipeline",
    # Registry functions
    "PIPELINE_REGISTRY",
    "get_pipeline",
    "run_pipeline",
    "list_pipelines",
]
