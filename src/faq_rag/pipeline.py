"""FAQ import pipeline — extract, reset the collection, ingest.

The whole sequence runs under one lock per :class:`FAQImportService`:
the collection reset is destructive, so two imports interleaving on the
same collection would wipe each other's FAQs.

Usage::

    service = FAQImportService(ChromaFAQStore(), ai_extractor=AIExtractor())
    outcome = service.import_document("faq.pdf")
    print(outcome.imported_count, outcome.extraction.method)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from faq_rag.extraction.models import ExtractionResult, FAQRecord
from faq_rag.extraction.orchestrator import FAQExtractor, extract_faqs
from faq_rag.ingestion.batch import BatchIngestor, IngestionError, IngestionResult
from faq_rag.ingestion.loader import load_document_text
from faq_rag.retrieval.base import FAQStoreBase

logger = logging.getLogger(__name__)

NO_FAQS_MESSAGE = (
    "Could not extract any FAQs from the document. "
    "Please ensure it contains question-answer pairs."
)


class NoFAQsExtractedError(ValueError):
    """Every extraction tier came back empty; the document is rejected."""

    def __init__(self, message: str = NO_FAQS_MESSAGE) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ImportOutcome:
    """What a successful import produced."""

    extraction: ExtractionResult
    ingestion: IngestionResult

    @property
    def imported_count(self) -> int:
        return self.ingestion.submitted_count

    @property
    def sample(self) -> list[FAQRecord]:
        return list(self.extraction.records[:3])


class FAQImportService:
    """Serialises document imports against one FAQ store.

    Parameters
    ----------
    store:
        Target backend; its collection is reset on every import.
    ai_extractor:
        Optional AI tier handed to the extraction orchestrator.
    ingestor:
        Batch ingestor; defaults to one built from the global settings.
    """

    def __init__(
        self,
        store: FAQStoreBase,
        *,
        ai_extractor: FAQExtractor | None = None,
        ingestor: BatchIngestor | None = None,
    ) -> None:
        self.store = store
        self.ai_extractor = ai_extractor
        self.ingestor = ingestor or BatchIngestor(store)
        self._lock = threading.Lock()

    def import_text(self, text: str) -> ImportOutcome:
        """Extract FAQs from *text* and replace the stored corpus with them.

        Raises
        ------
        NoFAQsExtractedError
            When no FAQs could be extracted; the store is left untouched.
        IngestionError
            When a batch fails; earlier batches remain committed.
        """
        with self._lock:
            extraction = extract_faqs(text, ai_extractor=self.ai_extractor)
            logger.info("Extracted %d FAQs (method=%s)", len(extraction), extraction.method)
            if extraction.is_empty:
                raise NoFAQsExtractedError()

            result = self.ingestor.replace_corpus(extraction.records)
            if not result.ok:
                raise IngestionError(result)
            return ImportOutcome(extraction=extraction, ingestion=result)

    def import_document(self, path: str | Path) -> ImportOutcome:
        """Load the document at *path* and :meth:`import_text` its contents."""
        logger.info("Processing document: %s", path)
        return self.import_text(load_document_text(path))
