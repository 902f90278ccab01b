"""Application utilities - shared utilities for application services."""

from .batching import BatchProcessor, ItemResult

__all__ = [
    "BatchProcessor",
    "ItemResult",
]
