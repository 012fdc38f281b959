"""Reusable services."""

from callsync.services.review_store import InMemoryReviewStore, ReviewAction

__all__ = ["InMemoryReviewStore", "ReviewAction"]
