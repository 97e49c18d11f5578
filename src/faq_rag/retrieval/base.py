"""Abstract base class for FAQ vector-store backends.

The store is a black box to the rest of the system: it owns embedding
and indexing, and exposes only collection reset, batch insert and
nearest-neighbour search.  Adding a new backend (Weaviate, Qdrant …)
only requires subclassing :class:`FAQStoreBase`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from faq_rag.extraction.models import FAQRecord
from faq_rag.retrieval.models import SearchHit


class FAQStoreBase(ABC):
    """Backend-agnostic FAQ store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / class / index.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def reset_collection(self) -> None:
        """Delete the collection if it exists and recreate it empty.

        Destructive: every previously imported FAQ is gone afterwards.
        """
        ...

    @abstractmethod
    def insert_batch(self, records: Sequence[FAQRecord]) -> None:
        """Insert *records* in one request.  Raises on failure."""
        ...

    @abstractmethod
    def search(self, query: str, *, limit: int = 3) -> list[SearchHit]:
        """Return up to *limit* FAQs nearest to *query*, closest first."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def count(self) -> int:
        """Number of stored FAQs.  Optional — raises by default."""
        raise NotImplementedError(f"{type(self).__name__} does not support count")

    def list_questions(self, limit: int = 100) -> list[str]:
        """Stored questions, up to *limit*.  Optional — raises by default."""
        raise NotImplementedError(f"{type(self).__name__} does not support list_questions")
