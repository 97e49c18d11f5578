"""Domain models for FAQ search results."""

from __future__ import annotations

from pydantic import BaseModel, Field

from faq_rag.extraction.models import DEFAULT_CATEGORY


class SearchHit(BaseModel):
    """A single FAQ returned by a nearest-neighbour query.

    Attributes
    ----------
    id:
        Store-assigned identifier (``None`` when unknown).
    question / answer / category:
        The stored FAQ fields.
    distance:
        Raw distance reported by the vector store.
    similarity:
        Distance converted to a similarity score (higher = closer).
    """

    id: str | None = None
    question: str
    answer: str
    category: str = DEFAULT_CATEGORY
    distance: float | None = None
    similarity: float = Field(default=1.0)

    def short_ref(self) -> str:
        """Return a compact ``[category] question`` reference string."""
        return f"[{self.category}] {self.question}"
