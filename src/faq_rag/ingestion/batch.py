"""Batched, throttled ingestion of FAQ records into the store.

Records are submitted in fixed-size batches, strictly one after the
other.  After every *full* batch the ingestor sleeps for a fixed delay,
which is the only backpressure against the embedding provider's rate
limit; a trailing partial batch is sent once with no delay after it.

The first failed batch stops the run.  Batches already committed stay
in the store (there is no cross-batch transaction) and nothing is
retried, so re-running after a partial failure can duplicate FAQs.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator, Sequence

from pydantic import BaseModel, ConfigDict

from faq_rag.config import settings
from faq_rag.extraction.models import FAQRecord
from faq_rag.retrieval.base import FAQStoreBase

logger = logging.getLogger(__name__)


class BatchFailure(BaseModel):
    """A batch that the store rejected."""

    model_config = ConfigDict(frozen=True)

    batch_index: int
    error: str


class IngestionResult(BaseModel):
    """Outcome of one ingestion run.

    Attributes
    ----------
    submitted_count:
        Records committed to the store (successful batches only).
    succeeded_batches:
        Number of batches the store accepted.
    failed_batches:
        ``(batch_index, error)`` entries; at most one, since the first
        failure aborts the run.
    """

    model_config = ConfigDict(frozen=True)

    submitted_count: int = 0
    succeeded_batches: int = 0
    failed_batches: tuple[BatchFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed_batches


class IngestionError(RuntimeError):
    """Raised by callers that treat a partial import as fatal."""

    def __init__(self, result: IngestionResult) -> None:
        failure = result.failed_batches[0] if result.failed_batches else None
        detail = f"batch {failure.batch_index}: {failure.error}" if failure else "unknown error"
        super().__init__(f"FAQ import failed at {detail} ({result.submitted_count} FAQs committed)")
        self.result = result

    @property
    def committed_count(self) -> int:
        return self.result.submitted_count


def iter_batches(records: Sequence[FAQRecord], batch_size: int) -> Iterator[list[FAQRecord]]:
    """Yield consecutive slices of at most *batch_size* records."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    for start in range(0, len(records), batch_size):
        yield list(records[start : start + batch_size])


class BatchIngestor:
    """Push FAQ records into a :class:`FAQStoreBase` in throttled batches.

    Parameters
    ----------
    store:
        Target backend.
    batch_size:
        Records per insert request.
    delay_seconds:
        Pause after each full batch.
    sleep:
        Sleep function; injectable so tests don't actually wait.
    """

    def __init__(
        self,
        store: FAQStoreBase,
        *,
        batch_size: int = settings.ingest_batch_size,
        delay_seconds: float = settings.ingest_batch_delay_seconds,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.store = store
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def ingest(self, records: Sequence[FAQRecord]) -> IngestionResult:
        """Submit *records* batch by batch and account for the outcome."""
        logger.info("Starting FAQ import for %d FAQs...", len(records))
        submitted = 0
        succeeded = 0

        for index, batch in enumerate(iter_batches(records, self.batch_size)):
            try:
                self.store.insert_batch(batch)
            except Exception as exc:
                logger.error(
                    "Batch %d failed after %d FAQs were committed: %s",
                    index,
                    submitted,
                    exc,
                )
                return IngestionResult(
                    submitted_count=submitted,
                    succeeded_batches=succeeded,
                    failed_batches=(BatchFailure(batch_index=index, error=str(exc) or type(exc).__name__),),
                )

            submitted += len(batch)
            succeeded += 1
            logger.info("  imported batch %d (%d FAQs so far)", index, submitted)

            if len(batch) == self.batch_size:
                self._sleep(self.delay_seconds)

        logger.info("Successfully imported all %d FAQs", submitted)
        return IngestionResult(submitted_count=submitted, succeeded_batches=succeeded)

    def replace_corpus(self, records: Sequence[FAQRecord]) -> IngestionResult:
        """Reset the target collection, then :meth:`ingest` *records*.

        Every previously imported FAQ is removed first: the store holds
        one document's FAQs at a time.
        """
        self.store.reset_collection()
        return self.ingest(records)
