"""Content filter for user-submitted text."""

from typing import Iterable, Optional

from pantry.domain.value import ContentClassification

from .base import Service


class ContentFilter(Service):
    """Classify free text against a fixed blocklist.

    Matching is a case-insensitive substring test, so "Hellish" matches
    "hell". The filter holds no mutable state and is safe to share.
    """

    def __init__(self, blocklist: Iterable[str]) -> None:
        """Initialize content filter.

        Args:
            blocklist: Terms that cause text to be flagged
        """
        self._terms = tuple(term.lower() for term in blocklist if term)

    def matches(self, text: Optional[str]) -> list[str]:
        """Return the blocklisted terms found in text."""
        if not text:
            return []
        lowered = text.lower()
        return [term for term in self._terms if term in lowered]

    def classify(self, text: Optional[str]) -> ContentClassification:
        """Classify text as clean or flagged.

        Empty or missing text is clean.
        """
        if not text:
            return ContentClassification.CLEAN
        lowered = text.lower()
        if any(term in lowered for term in self._terms):
            return ContentClassification.FLAGGED
        return ContentClassification.CLEAN
