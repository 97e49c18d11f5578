"""FAQ-grounded chat answering.

Retrieve the closest FAQs for a user message and let the chat model
answer strictly from them.  When nothing is retrieved the model is not
called at all.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from faq_rag.config import settings
from faq_rag.prompts import build_chat_prompt
from faq_rag.retrieval.models import SearchHit
from faq_rag.retrieval.retriever import FAQRetriever

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = (
    "I'm sorry, I couldn't find any relevant information in our FAQ to answer "
    "your question. Please contact our support team for further assistance."
)


class ChatAnswer(BaseModel):
    """Answer returned to the user together with the FAQs it used."""

    message: str
    sources: list[SearchHit] = []
    confidence: str | int = 0


def answer_question(
    message: str,
    retriever: FAQRetriever,
    *,
    llm: Any = None,
    k: int = 3,
) -> ChatAnswer:
    """Answer *message* from the top-*k* FAQs.

    Parameters
    ----------
    message:
        The user's question.
    retriever:
        FAQ retriever used for context.
    llm:
        Chat model; defaults to the configured ``ChatOpenAI``.
    k:
        Number of FAQs placed in the prompt.
    """
    hits = retriever.search(message, limit=k)
    if not hits:
        logger.info("No FAQs matched %r", message)
        return ChatAnswer(message=NO_MATCH_MESSAGE, sources=[], confidence=0)

    if llm is None:
        from faq_rag.llm import get_llm

        llm = get_llm(temperature=settings.chat_temperature, max_tokens=settings.chat_max_tokens)

    response = llm.invoke(build_chat_prompt(message, hits))
    return ChatAnswer(message=response.content, sources=hits, confidence="high")
