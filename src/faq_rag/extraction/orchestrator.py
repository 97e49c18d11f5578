"""Extraction orchestrator — fixed escalation policy across the parsers.

Policy::

    empty text                     → nothing extracted, no AI call
    line parser                    → basic result
      └ 0 records → sentence pairs → basic result
    basic result < min_basic_records
      └ AI extractor ≥ 1 record    → replaces the basic result

AI output is never merged with the deterministic output; once consulted
and successful it is authoritative.
"""

from __future__ import annotations

import logging
from typing import Protocol

from faq_rag.config import settings
from faq_rag.extraction.fallback import parse_sentence_pairs
from faq_rag.extraction.line_parser import parse_lines
from faq_rag.extraction.models import ExtractionMethod, ExtractionResult, FAQRecord
from faq_rag.extraction.normalizer import normalize_lines

logger = logging.getLogger(__name__)


class FAQExtractor(Protocol):
    """Anything that can pull FAQ records out of raw text."""

    def extract(self, text: str) -> list[FAQRecord]: ...


def basic_extract(text: str) -> tuple[list[FAQRecord], ExtractionMethod]:
    """Run the deterministic tiers: line parser, then sentence pairs."""
    records = parse_lines(normalize_lines(text))
    logger.info("Basic parser found %d FAQs", len(records))
    if records:
        return records, "line"

    records = parse_sentence_pairs(text)
    return records, ("sentence_pair" if records else "none")


def extract_faqs(
    text: str | None,
    *,
    ai_extractor: FAQExtractor | None = None,
    min_basic_records: int = settings.min_basic_records,
) -> ExtractionResult:
    """Extract FAQ records from *text* following the escalation policy.

    Parameters
    ----------
    text:
        Raw document text.
    ai_extractor:
        Optional AI tier; when *None* the deterministic result is final.
    min_basic_records:
        The AI tier is consulted when the basic result is smaller.

    Returns
    -------
    ExtractionResult
        ``is_empty`` is ``True`` when no tier produced anything.
    """
    if not (text or "").strip():
        logger.info("Document is empty; nothing to extract")
        return ExtractionResult()

    records, method = basic_extract(text)
    basic_count = len(records)

    if basic_count >= min_basic_records or ai_extractor is None:
        return ExtractionResult(records=tuple(records), method=method, basic_count=basic_count)

    logger.info("Basic result has %d FAQs (< %d); trying AI parsing", basic_count, min_basic_records)
    ai_records = ai_extractor.extract(text)
    if ai_records:
        logger.info("Replacing basic result with %d AI-extracted FAQs", len(ai_records))
        records, method = ai_records, "ai"

    return ExtractionResult(
        records=tuple(records),
        method=method,
        basic_count=basic_count,
        ai_attempted=True,
    )
