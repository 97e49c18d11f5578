"""LLM initialisation — single place to swap providers.

Supports two modes:

1. **OpenAI cloud** (default) — set ``OPENAI_API_KEY``.
2. **OpenAI-compatible endpoint** — set ``LLM_BASE_URL`` to a vLLM or
   similar server exposing ``/v1/chat/completions``; ``ChatOpenAI``
   works unchanged.

Clients are built with ``max_retries=0``: a failed call is never
repeated, callers decide how to degrade.
"""

from __future__ import annotations

import logging

from langchain_openai import ChatOpenAI

from faq_rag.config import settings

logger = logging.getLogger(__name__)


def get_llm(temperature: float = 0.0, max_tokens: int | None = None) -> ChatOpenAI:
    """Return the configured chat model.

    When ``settings.llm_base_url`` is set the client is pointed at that
    endpoint instead of the OpenAI cloud API, with a dummy key
    (``"EMPTY"``) when none is configured.
    """
    kwargs: dict = {
        "model": settings.llm_model_name,
        "temperature": temperature,
        "timeout": settings.llm_timeout_seconds,
        "max_retries": 0,
    }
    if max_tokens is not None:
        kwargs["max_tokens"] = max_tokens

    if settings.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", settings.llm_base_url)
        kwargs["base_url"] = settings.llm_base_url
        # Self-hosted servers don't need a real key; LangChain requires a non-empty value.
        kwargs["api_key"] = settings.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = settings.openai_api_key

    return ChatOpenAI(**kwargs)
