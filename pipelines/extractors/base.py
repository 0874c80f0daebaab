"""
Base Extractor

Abstract base class for document store extractors.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from core.logging import get_logger


class BaseExtractor(ABC):
    """
    Abstract base class for data extractors.

    Extractors read raw documents from the document store with proper
    error handling and resilience. They never write.

    Subclasses should:
    - Use @with_retry decorator for retryable operations
    - Use circuit breakers for external APIs
    - Return decoded documents (transformation is done by transformers)
    """

    def __init__(self, name: str):
        """
        Initialize extractor.

        Args:
            name: Extractor name for logging
        """
        self.name = name
        self.log = get_logger(f"extractor.{name}")

    @abstractmethod
    def list_collection(self, collection: str) -> dict[str, dict[str, Any]]:
        """
        Read every document of a top-level collection.

        Returns:
            Dict mapping document id to its decoded fields, in store order

        Raises:
            NetworkError, RateLimitError, ServerError for retryable failures
        """
        pass

    @abstractmethod
    def get_document(self, path: str) -> Optional[dict[str, Any]]:
        """
        Read one document by its path (e.g. ``players/Kim/history/2024``).

        Returns:
            Decoded fields, or None if the document does not exist
        """
        pass

    def list_players(self) -> dict[str, dict[str, Any]]:
        """Live player documents keyed by player id."""
        return self.list_collection("players")

    def list_matches(self) -> dict[str, dict[str, Any]]:
        """Match event documents keyed by match id."""
        return self.list_collection("matches")

    def get_history(self, player_id: str, year: int) -> Optional[dict[str, Any]]:
        """A player's snapshot for a past season, or None if never recorded."""
        return self.get_document(f"players/{player_id}/history/{year}")
