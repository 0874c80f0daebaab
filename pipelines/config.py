"""
Pipeline Configuration

Immutable configuration dataclass for view pipeline metadata.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration for a view pipeline.

    Attributes:
        name: Internal name used for logging and the registry (e.g., "records_board")
        display_name: Human-readable name (e.g., "Records Board")
        description: What this pipeline builds
        collections: Document store collections this pipeline reads
        timeout_seconds: Maximum time for one view load
    """

    name: str
    display_name: str
    description: str
    collections: tuple[str, ...] = field(default_factory=tuple)

    timeout_seconds: int = 120

    def __post_init__(self):
        """Validate configuration."""
        if not self.name:
            raise ValueError("Pipeline name is required")
        if not self.collections:
            raise ValueError("Pipeline collections are required")
        if self.timeout_seconds <= 0:
            raise ValueError("Pipeline timeout_seconds must be positive")
