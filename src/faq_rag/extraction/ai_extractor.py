"""AI-assisted FAQ extraction.

The most expensive tier: one chat-completion round trip per document,
invoked only when the deterministic parsers under-perform.  Every
failure mode degrades to an empty list so the pipeline can continue
with whatever it already has:

* transport errors, timeouts, non-success status → ``[]``
* a response that is not a JSON array → ``[]``
* individual array items without a usable question/answer → dropped

Returned categories are clamped to :data:`FAQ_CATEGORIES`.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from faq_rag.config import settings
from faq_rag.extraction.models import DEFAULT_CATEGORY, FAQ_CATEGORIES, FAQRecord
from faq_rag.prompts import build_extraction_prompt

logger = logging.getLogger(__name__)

_CATEGORY_LOOKUP = {c.casefold(): c for c in FAQ_CATEGORIES}
_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove a ```json … ``` (or bare ```) wrapper around *text*."""
    return _CODE_FENCE.sub("", text.strip()).strip()


def clamp_category(value: Any) -> str:
    """Map *value* onto the enumerated categories, defaulting to General."""
    if isinstance(value, str):
        return _CATEGORY_LOOKUP.get(value.strip().casefold(), DEFAULT_CATEGORY)
    return DEFAULT_CATEGORY


def parse_ai_response(content: str) -> list[FAQRecord]:
    """Turn a raw completion into validated records (``[]`` on bad shape)."""
    cleaned = strip_code_fences(content)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("AI response is not valid JSON: %.200s", content)
        return []

    if not isinstance(payload, list):
        logger.warning("AI response is not a JSON array (got %s)", type(payload).__name__)
        return []

    records: list[FAQRecord] = []
    dropped = 0
    for item in payload:
        if not isinstance(item, dict):
            dropped += 1
            continue
        question, answer = item.get("question"), item.get("answer")
        if not isinstance(question, str) or not isinstance(answer, str):
            dropped += 1
            continue
        try:
            records.append(
                FAQRecord(question=question, answer=answer, category=clamp_category(item.get("category")))
            )
        except ValidationError:
            dropped += 1

    if dropped:
        logger.warning("Dropped %d malformed item(s) from AI response", dropped)
    if not records:
        logger.info("AI response contained no FAQs")
    return records


class AIExtractor:
    """Extract FAQs by asking a chat model for a JSON array.

    Parameters
    ----------
    llm:
        Any LangChain chat model (``.invoke(messages)`` returning a
        message with ``.content``).  When *None*, the configured
        ``ChatOpenAI`` client is created on first use.
    max_chars:
        Character budget for the document text sent to the model.
    """

    def __init__(self, llm: Any = None, *, max_chars: int = settings.ai_max_chars) -> None:
        self._llm = llm
        self.max_chars = max_chars

    @property
    def llm(self) -> Any:
        if self._llm is None:
            from faq_rag.llm import get_llm

            self._llm = get_llm(
                temperature=settings.extraction_temperature,
                max_tokens=settings.extraction_max_tokens,
            )
        return self._llm

    def extract(self, text: str) -> list[FAQRecord]:
        """Return the FAQs the model finds in *text*; never raises."""
        limited = (text or "")[: self.max_chars]
        if not limited.strip():
            return []

        try:
            response = self.llm.invoke(build_extraction_prompt(limited))
        except Exception:
            logger.warning("AI extraction call failed", exc_info=True)
            return []

        content = getattr(response, "content", None)
        if not isinstance(content, str):
            logger.warning("AI extraction returned a malformed response envelope: %r", response)
            return []

        records = parse_ai_response(content)
        logger.info("AI parser found %d FAQs", len(records))
        return records
