"""Chroma implementation of the FAQ store abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from uuid import uuid4

import chromadb
from chromadb.errors import ChromaError

from faq_rag.config import settings
from faq_rag.extraction.models import DEFAULT_CATEGORY, FAQRecord
from faq_rag.retrieval.base import FAQStoreBase
from faq_rag.retrieval.models import SearchHit

logger = logging.getLogger(__name__)


def distance_to_similarity(distance: float | None, metric: str = "cosine") -> float:
    """Convert a raw Chroma distance into a similarity score.

    ``1 - distance`` is only meaningful for the cosine metric; for the
    unbounded ``l2`` / ``ip`` metrics ``1 / (1 + distance)`` is used.
    A missing distance counts as an exact match.
    """
    if distance is None:
        return 1.0
    if metric == "cosine":
        return 1.0 - distance
    return 1.0 / (1.0 + max(distance, 0.0))


def record_to_document(record: FAQRecord) -> str:
    """Text that gets embedded for *record*: all three schema fields."""
    return f"{record.question}\n{record.answer}\n{record.category}"


class ChromaFAQStore(FAQStoreBase):
    """Chroma-backed FAQ store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host / port:
        Chroma server location.
    embedding_model:
        HuggingFace model id used for text → embedding conversion.
    distance_metric:
        ``cosine`` | ``l2`` | ``ip``; applied when the collection is
        (re)created.
    client / embedder:
        Pre-built Chroma client and LangChain embeddings object; mostly
        useful for tests.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        embedding_model: str = settings.embedding_model,
        distance_metric: str = settings.distance_metric,
        client: Any = None,
        embedder: Any = None,
    ) -> None:
        super().__init__(collection_name)
        self.distance_metric = distance_metric
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        if embedder is None:
            from langchain_huggingface import HuggingFaceEmbeddings

            embedder = HuggingFaceEmbeddings(model_name=embedding_model)
        self._embedder = embedder
        self._collection: Any = None

    @property
    def collection(self) -> Any:
        if self._collection is None:
            self._collection = self._client.get_or_create_collection(
                self.collection_name,
                metadata={"hnsw:space": self.distance_metric},
            )
        return self._collection

    # -- FAQStoreBase overrides -----------------------------------------------

    def reset_collection(self) -> None:
        try:
            self._client.delete_collection(self.collection_name)
            logger.info("Deleted existing collection %r", self.collection_name)
        except (ValueError, ChromaError):
            logger.info("Collection %r did not exist; nothing to delete", self.collection_name)

        self._collection = self._client.create_collection(
            self.collection_name,
            metadata={"hnsw:space": self.distance_metric},
        )
        logger.info("Created collection %r (%s)", self.collection_name, self.distance_metric)

    def insert_batch(self, records: Sequence[FAQRecord]) -> None:
        if not records:
            return
        documents = [record_to_document(r) for r in records]
        self.collection.add(
            ids=[uuid4().hex for _ in records],
            embeddings=self._embedder.embed_documents(documents),
            documents=documents,
            metadatas=[r.model_dump() for r in records],
        )

    def search(self, query: str, *, limit: int = 3) -> list[SearchHit]:
        embedding = self._embedder.embed_query(query)
        results = self.collection.query(
            query_embeddings=[embedding],
            n_results=limit,
            include=["metadatas", "distances"],
        )

        ids = results.get("ids", [[]])[0]
        metas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        hits: list[SearchHit] = []
        for doc_id, meta, dist in zip(ids, metas, distances):
            meta = meta or {}
            hits.append(
                SearchHit(
                    id=doc_id,
                    question=meta.get("question", ""),
                    answer=meta.get("answer", ""),
                    category=meta.get("category") or DEFAULT_CATEGORY,
                    distance=dist,
                    similarity=distance_to_similarity(dist, self.distance_metric),
                )
            )
        return hits

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False

    def count(self) -> int:
        return self.collection.count()

    def list_questions(self, limit: int = 100) -> list[str]:
        results = self.collection.get(limit=limit, include=["metadatas"])
        return [(meta or {}).get("question", "") for meta in results.get("metadatas") or []]
