"""Unit tests for the retrieval layer — models, Chroma backend, FAQRetriever."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from faq_rag.extraction.models import FAQRecord
from faq_rag.retrieval.chroma_store import ChromaFAQStore, distance_to_similarity, record_to_document
from faq_rag.retrieval.models import SearchHit
from faq_rag.retrieval.retriever import FAQRetriever


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def chroma_client() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def embedder() -> MagicMock:
    emb = MagicMock()
    emb.embed_documents.side_effect = lambda texts: [[0.1, 0.2] for _ in texts]
    emb.embed_query.return_value = [0.3, 0.4]
    return emb


@pytest.fixture()
def chroma_store(chroma_client: MagicMock, embedder: MagicMock) -> ChromaFAQStore:
    return ChromaFAQStore("faq-test", client=chroma_client, embedder=embedder)


# ── SearchHit ──────────────────────────────────────────────────────────


class TestSearchHit:
    def test_short_ref(self) -> None:
        hit = SearchHit(question="Is parking free?", answer="On weekends.", category="Campus Life")
        assert hit.short_ref() == "[Campus Life] Is parking free?"

    def test_defaults(self) -> None:
        hit = SearchHit(question="Q?", answer="A.")
        assert hit.category == "General"
        assert hit.similarity == 1.0
        assert hit.distance is None


# ── Similarity conversion ──────────────────────────────────────────────


class TestDistanceToSimilarity:
    def test_cosine(self) -> None:
        assert distance_to_similarity(0.25, "cosine") == pytest.approx(0.75)

    def test_missing_distance(self) -> None:
        assert distance_to_similarity(None) == 1.0

    @pytest.mark.parametrize("metric", ["l2", "ip"])
    def test_unbounded_metrics_stay_in_range(self, metric: str) -> None:
        assert distance_to_similarity(3.0, metric) == pytest.approx(0.25)
        assert 0.0 < distance_to_similarity(1e6, metric) <= 1.0


# ── ChromaFAQStore ─────────────────────────────────────────────────────


class TestChromaFAQStore:
    def test_reset_deletes_then_creates(self, chroma_store: ChromaFAQStore, chroma_client: MagicMock) -> None:
        chroma_store.reset_collection()
        chroma_client.delete_collection.assert_called_once_with("faq-test")
        chroma_client.create_collection.assert_called_once_with(
            "faq-test", metadata={"hnsw:space": "cosine"}
        )

    def test_reset_tolerates_missing_collection(
        self, chroma_store: ChromaFAQStore, chroma_client: MagicMock
    ) -> None:
        chroma_client.delete_collection.side_effect = ValueError("Collection faq-test does not exist.")
        chroma_store.reset_collection()
        chroma_client.create_collection.assert_called_once()

    def test_reset_propagates_other_errors(
        self, chroma_store: ChromaFAQStore, chroma_client: MagicMock
    ) -> None:
        chroma_client.create_collection.side_effect = ConnectionError("refused")
        with pytest.raises(ConnectionError):
            chroma_store.reset_collection()

    def test_insert_batch(self, chroma_store: ChromaFAQStore, chroma_client: MagicMock, make_records) -> None:
        chroma_store.reset_collection()
        records = make_records(3)
        chroma_store.insert_batch(records)

        collection = chroma_client.create_collection.return_value
        kwargs = collection.add.call_args.kwargs
        assert len(kwargs["ids"]) == len(set(kwargs["ids"])) == 3
        assert kwargs["documents"] == [record_to_document(r) for r in records]
        assert kwargs["metadatas"][0] == {
            "question": "What is question number 1?",
            "answer": "This is the detailed answer for question 1.",
            "category": "General",
        }
        assert kwargs["embeddings"] == [[0.1, 0.2]] * 3

    def test_insert_empty_batch_is_noop(self, chroma_store: ChromaFAQStore, chroma_client: MagicMock) -> None:
        chroma_store.insert_batch([])
        chroma_client.get_or_create_collection.assert_not_called()

    def test_insert_errors_propagate(self, chroma_store: ChromaFAQStore, chroma_client: MagicMock, make_records) -> None:
        chroma_client.get_or_create_collection.return_value.add.side_effect = RuntimeError("boom")
        with pytest.raises(RuntimeError, match="boom"):
            chroma_store.insert_batch(make_records(1))

    def test_search_maps_results(self, chroma_store: ChromaFAQStore, chroma_client: MagicMock) -> None:
        collection = chroma_client.get_or_create_collection.return_value
        collection.query.return_value = {
            "ids": [["a", "b"]],
            "metadatas": [
                [
                    {"question": "Is parking free?", "answer": "On weekends only.", "category": "Campus Life"},
                    {"question": "What is tuition?", "answer": "It varies by program."},
                ]
            ],
            "distances": [[0.1, 0.6]],
        }

        hits = chroma_store.search("parking", limit=2)

        collection.query.assert_called_once_with(
            query_embeddings=[[0.3, 0.4]],
            n_results=2,
            include=["metadatas", "distances"],
        )
        assert [h.id for h in hits] == ["a", "b"]
        assert hits[0].category == "Campus Life"
        assert hits[1].category == "General"
        assert hits[0].similarity == pytest.approx(0.9)
        assert hits[1].similarity == pytest.approx(0.4)

    def test_health_check(self, chroma_store: ChromaFAQStore, chroma_client: MagicMock) -> None:
        assert chroma_store.health_check() is True
        chroma_client.heartbeat.side_effect = ConnectionError("down")
        assert chroma_store.health_check() is False

    def test_count_and_list_questions(self, chroma_store: ChromaFAQStore, chroma_client: MagicMock) -> None:
        collection = chroma_client.get_or_create_collection.return_value
        collection.count.return_value = 2
        collection.get.return_value = {"metadatas": [{"question": "One?"}, {"question": "Two?"}]}
        assert chroma_store.count() == 2
        assert chroma_store.list_questions(limit=10) == ["One?", "Two?"]
        collection.get.assert_called_once_with(limit=10, include=["metadatas"])


def test_record_to_document_embeds_all_fields() -> None:
    record = FAQRecord(question="Q?", answer="A full answer.", category="Fees")
    assert record_to_document(record) == "Q?\nA full answer.\nFees"


# ── FAQRetriever ───────────────────────────────────────────────────────


class TestFAQRetriever:
    def test_search_returns_hits(self, store_factory, sample_hits) -> None:
        store = store_factory(hits=sample_hits)
        hits = FAQRetriever(store).search("deadline")
        assert hits == sample_hits[:3]
        assert store.last_limit == 3

    def test_custom_limit(self, store_factory, sample_hits) -> None:
        store = store_factory(hits=sample_hits)
        assert len(FAQRetriever(store).search("deadline", limit=1)) == 1

    def test_score_threshold(self, store_factory, sample_hits) -> None:
        retriever = FAQRetriever(store_factory(hits=sample_hits), score_threshold=0.5)
        assert [h.id for h in retriever.search("anything")] == ["faq-1", "faq-2"]

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_rejected(self, store, query: str) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            FAQRetriever(store).search(query)

    def test_negative_limit_rejected(self, store) -> None:
        with pytest.raises(ValueError, match="limit"):
            FAQRetriever(store).search("x", limit=-1)
