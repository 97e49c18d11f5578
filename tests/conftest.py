"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from faq_rag.extraction.models import FAQRecord
from faq_rag.retrieval.base import FAQStoreBase
from faq_rag.retrieval.models import SearchHit


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


class InMemoryFAQStore(FAQStoreBase):
    """Fake store that records every call and can fail on demand.

    Parameters
    ----------
    fail_on_batch:
        Zero-based index of the ``insert_batch`` call that raises.
    hits:
        Canned search results.
    """

    def __init__(
        self,
        *,
        fail_on_batch: int | None = None,
        hits: list[SearchHit] | None = None,
        healthy: bool = True,
    ) -> None:
        super().__init__("test-faq")
        self.fail_on_batch = fail_on_batch
        self.hits = hits or []
        self.healthy = healthy
        self.batches: list[list[FAQRecord]] = []
        self.insert_calls = 0
        self.resets = 0
        self.last_limit: int | None = None

    @property
    def records(self) -> list[FAQRecord]:
        return [r for batch in self.batches for r in batch]

    def reset_collection(self) -> None:
        self.resets += 1
        self.batches = []

    def insert_batch(self, records: Sequence[FAQRecord]) -> None:
        index = self.insert_calls
        self.insert_calls += 1
        if index == self.fail_on_batch:
            raise ConnectionError("embedding provider rate limit exceeded")
        self.batches.append(list(records))

    def search(self, query: str, *, limit: int = 3) -> list[SearchHit]:
        self.last_limit = limit
        return self.hits[:limit]

    def health_check(self) -> bool:
        return self.healthy

    def count(self) -> int:
        return len(self.records)

    def list_questions(self, limit: int = 100) -> list[str]:
        return [r.question for r in self.records][:limit]


def make_records(n: int, *, category: str = "General") -> list[FAQRecord]:
    """Create *n* distinct, well-formed FAQ records."""
    return [
        FAQRecord(
            question=f"What is question number {i}?",
            answer=f"This is the detailed answer for question {i}.",
            category=category,
        )
        for i in range(1, n + 1)
    ]


SAMPLE_HITS: list[SearchHit] = [
    SearchHit(
        id="faq-1",
        question="When is the application deadline?",
        answer="Applications close on March 31st every year.",
        category="Admissions",
        distance=0.12,
        similarity=0.88,
    ),
    SearchHit(
        id="faq-2",
        question="Are scholarships available?",
        answer="Merit scholarships cover up to half of tuition.",
        category="Scholarships",
        distance=0.35,
        similarity=0.65,
    ),
    SearchHit(
        id="faq-3",
        question="Is housing guaranteed?",
        answer="First-year students are guaranteed on-campus housing.",
        category="Campus Life",
        distance=0.71,
        similarity=0.29,
    ),
]

FAQ_DOCUMENT = """\
Admissions FAQ
Category: Admissions
Q1: When is the application deadline?
Applications close on March 31st every year.
Q2: Can I apply for more than one program?
Yes, you may list up to three programs on one application.
Section: Scholarships
Q3: Are scholarships available for international students?
Merit scholarships are open to every admitted student.
12
"""


@pytest.fixture()
def store() -> InMemoryFAQStore:
    return InMemoryFAQStore()


@pytest.fixture()
def sample_hits() -> list[SearchHit]:
    return list(SAMPLE_HITS)


@pytest.fixture()
def store_factory() -> type[InMemoryFAQStore]:
    """The fake store class, for tests that need a custom configuration."""
    return InMemoryFAQStore


@pytest.fixture(name="make_records")
def make_records_fixture():  # noqa: ANN201
    return make_records


@pytest.fixture()
def faq_document() -> str:
    return FAQ_DOCUMENT
