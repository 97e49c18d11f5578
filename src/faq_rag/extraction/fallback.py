"""Sentence-pair fallback parser.

Last-resort heuristic used only when the line parser finds nothing:
split the raw text into sentences and pair every question-bearing
sentence with the sentence that follows it.  Expect false positives.
"""

from __future__ import annotations

import logging
import re

from faq_rag.extraction.models import DEFAULT_CATEGORY, FAQRecord

logger = logging.getLogger(__name__)

MIN_SENTENCE_LENGTH = 10

# A sentence is a run of non-terminators plus the terminator run that closes it.
_SENTENCE = re.compile(r"[^.!?]+[.!?]*")
_TERMINATORS = ".!?"


def split_sentences(text: str | None) -> list[str]:
    """Return trimmed sentences longer than :data:`MIN_SENTENCE_LENGTH`.

    The length check ignores the trailing terminator, so ``"Really?"``
    counts as six characters.
    """
    sentences: list[str] = []
    for match in _SENTENCE.finditer(text or ""):
        sentence = match.group().strip()
        if len(sentence.rstrip(_TERMINATORS).strip()) > MIN_SENTENCE_LENGTH:
            sentences.append(sentence)
    return sentences


def parse_sentence_pairs(text: str | None) -> list[FAQRecord]:
    """Pair each question sentence with its successor."""
    sentences = split_sentences(text)
    records = [
        FAQRecord(question=current, answer=following, category=DEFAULT_CATEGORY)
        for current, following in zip(sentences, sentences[1:])
        if "?" in current
    ]
    logger.info("Sentence-pair parser found %d FAQs", len(records))
    return records
