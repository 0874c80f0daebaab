"""
Data Extractors

Reusable components for reading documents from the document store.
"""

from pipelines.extractors.base import BaseExtractor
from pipelines.extractors.firestore import FirestoreExtractor

__all__ = [
    "BaseExtractor",
    "FirestoreExtractor",
]
