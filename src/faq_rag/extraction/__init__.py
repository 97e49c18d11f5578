"""
Extraction — turn raw document text into FAQ records.

Three tiers, cheapest first:

- :mod:`~faq_rag.extraction.line_parser` — deterministic state machine.
- :mod:`~faq_rag.extraction.fallback` — sentence-pair heuristic.
- :mod:`~faq_rag.extraction.ai_extractor` — chat-model extraction.

:func:`faq_rag.extraction.orchestrator.extract_faqs` applies the
escalation policy across them.
"""
