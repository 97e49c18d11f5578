"""Deterministic line parser — a single forward pass over normalized lines.

The parser is written as a pure transition function::

    step(state, line) -> (new_state, record | None)

folded over the line sequence by :func:`parse_lines`, with
:func:`finish` flushing whatever is pending at end-of-input.  Each
stage can therefore be exercised on its own in tests.

Line classification, in precedence order:

1. **Question** — ends with ``?`` or carries a ``Q1:`` / ``Question 1.``
   style prefix.  Flushes the previous pair and starts a new one.
2. **Category header** — ``Category:``, ``Section``, ``Chapter``,
   ``Topic`` or ``Department`` label.  Sets the sticky category.
3. **Answer content** — appended to the active question, if any.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import replace

from faq_rag.extraction.models import MIN_ANSWER_LENGTH, FAQRecord, ParserState
from faq_rag.extraction.normalizer import normalize_lines

logger = logging.getLogger(__name__)

MIN_DOCUMENT_LINES = 3

_QUESTION_PATTERNS = (
    re.compile(r"^Q[\d.\s:-]+.*\?"),
    re.compile(r"^Question[\d.\s:-]+.*\?"),
    re.compile(r"^[A-Z][^.?]*\?$"),
)
_CATEGORY_HEADER = re.compile(r"^(Category|Section|Chapter|Topic|Department)[:\s]", re.IGNORECASE)
_CATEGORY_LABEL = re.compile(r"^(Category|Section|Chapter|Topic|Department)[:\s]+", re.IGNORECASE)


def is_question(line: str) -> bool:
    """Return ``True`` when *line* looks like an FAQ question."""
    if line.endswith("?"):
        return True
    return any(p.match(line) for p in _QUESTION_PATTERNS)


def category_from_header(line: str) -> str | None:
    """Return the category named by a header line, or ``None``."""
    if not _CATEGORY_HEADER.match(line):
        return None
    return _CATEGORY_LABEL.sub("", line, count=1).strip()


def _flush(state: ParserState) -> FAQRecord | None:
    answer = state.answer.strip()
    if state.question and len(answer) > MIN_ANSWER_LENGTH:
        return FAQRecord(question=state.question, answer=answer, category=state.question_category)
    return None


def step(state: ParserState, line: str) -> tuple[ParserState, FAQRecord | None]:
    """Consume one normalized *line*.

    Returns the next state plus the record completed by this line, if
    any.  Only a question line can complete a record.
    """
    if is_question(line):
        record = _flush(state)
        return replace(state, question=line, answer="", question_category=state.category), record

    category = category_from_header(line)
    if category is not None:
        if category:
            state = replace(state, category=category)
        return state, None

    if state.question is not None:
        return replace(state, answer=state.answer + line + " "), None

    return state, None


def finish(state: ParserState) -> FAQRecord | None:
    """Flush the pending question at end-of-input."""
    return _flush(state)


def parse_lines(lines: Iterable[str]) -> list[FAQRecord]:
    """Fold :func:`step` over already-normalized *lines*."""
    lines = list(lines)
    if len(lines) < MIN_DOCUMENT_LINES:
        return []

    records: list[FAQRecord] = []
    state = ParserState()
    for line in lines:
        state, record = step(state, line)
        if record is not None:
            records.append(record)

    last = finish(state)
    if last is not None:
        records.append(last)
    return records


def parse_text(text: str | None) -> list[FAQRecord]:
    """Normalize *text* and run the line parser over it."""
    records = parse_lines(normalize_lines(text))
    logger.info("Line parser found %d FAQs", len(records))
    return records
