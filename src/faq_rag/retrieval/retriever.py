"""FAQ retriever — nearest-neighbour search over the imported FAQs.

Usage::

    from faq_rag.retrieval.retriever import FAQRetriever

    retriever = FAQRetriever()
    for hit in retriever.search("When is the application deadline?"):
        print(f"{hit.similarity:.2f}", hit.short_ref())
"""

from __future__ import annotations

import logging

from faq_rag.retrieval.base import FAQStoreBase
from faq_rag.retrieval.models import SearchHit

logger = logging.getLogger(__name__)


class FAQRetriever:
    """High-level retriever that wraps any :class:`FAQStoreBase`.

    Parameters
    ----------
    store:
        A concrete backend.  When *None*, a default
        :class:`~faq_rag.retrieval.chroma_store.ChromaFAQStore` is
        created from the global settings.
    default_limit:
        Default number of results returned by :meth:`search`.
    score_threshold:
        Minimum similarity; hits below it are discarded.
    """

    def __init__(
        self,
        store: FAQStoreBase | None = None,
        *,
        default_limit: int = 3,
        score_threshold: float | None = None,
    ) -> None:
        if store is None:
            from faq_rag.retrieval.chroma_store import ChromaFAQStore

            store = ChromaFAQStore()
        self._store = store
        self.default_limit = default_limit
        self.score_threshold = score_threshold

    @property
    def store(self) -> FAQStoreBase:
        return self._store

    def search(self, query: str, *, limit: int | None = None) -> list[SearchHit]:
        """Return the FAQs closest to *query*.

        Raises
        ------
        ValueError
            If *query* is blank or *limit* is not positive.
        """
        if not query or not query.strip():
            raise ValueError("query must be a non-empty string")
        limit = limit or self.default_limit
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        hits = self._store.search(query.strip(), limit=limit)
        if self.score_threshold is not None:
            hits = [h for h in hits if h.similarity >= self.score_threshold]
        logger.info("FAQ search returned %d hit(s) for %r", len(hits), query)
        return hits
