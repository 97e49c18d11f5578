"""Prompt templates for FAQ extraction and FAQ-grounded chat.

Keeping prompts in one place makes them easy to audit and version.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

from faq_rag.extraction.models import DEFAULT_CATEGORY, FAQ_CATEGORIES

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

    from faq_rag.retrieval.models import SearchHit

# ── 1. FAQ extraction ─────────────────────────────────────────────────

EXTRACTION_SYSTEM = f"""\
You are an expert at extracting FAQs from text. Extract all questions
and their corresponding answers from the provided text.

Format the response as a JSON array of objects with exactly these
fields: "question", "answer", "category".

Category must be one of: {", ".join(FAQ_CATEGORIES)}.
If you can't determine the category, use "{DEFAULT_CATEGORY}".

Return ONLY the JSON array — no markdown fences, no commentary.
"""


def build_extraction_prompt(text: str) -> list[BaseMessage]:
    """Build the prompt for the AI-assisted FAQ extractor."""
    return [
        SystemMessage(content=EXTRACTION_SYSTEM),
        HumanMessage(content=f"Extract FAQs from this text:\n\n{text}"),
    ]


# ── 2. FAQ chat ───────────────────────────────────────────────────────

CHAT_SYSTEM = """\
You are a helpful FAQ assistant. Answer questions ONLY using the
provided FAQ context. If the answer isn't in the FAQs, politely decline
to answer. Keep responses concise and helpful.
"""

NOT_IN_FAQS = (
    "I'm sorry, I don't have information about that in our FAQs. "
    "Please contact our support team for assistance."
)


def build_chat_prompt(message: str, hits: Sequence[SearchHit]) -> list[BaseMessage]:
    """Build the prompt that answers *message* from retrieved FAQs."""
    parts = ["FAQ Context:\n", _format_faqs(hits), f"User Question: {message}\n"]
    parts.append(
        "Instructions: Using ONLY the information from the FAQs above, provide "
        "a helpful answer to the user's question. If the answer cannot be found "
        f'in the provided FAQs, say "{NOT_IN_FAQS}" Do not make up information '
        "or use external knowledge."
    )
    return [
        SystemMessage(content=CHAT_SYSTEM),
        HumanMessage(content="\n".join(parts)),
    ]


# ── Helpers ────────────────────────────────────────────────────────────


def _format_faqs(hits: Sequence[SearchHit]) -> str:
    blocks: list[str] = []
    for i, hit in enumerate(hits, 1):
        blocks.append(
            f"FAQ {i}:\n"
            f"Question: {hit.question}\n"
            f"Answer: {hit.answer}\n"
            f"Category: {hit.category}\n"
        )
    return "\n".join(blocks)
