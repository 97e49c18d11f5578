"""Command-line entry point.

Examples
--------
    faq-rag import docs/admissions_faq.pdf
    faq-rag search "When is the application deadline?" --limit 5
    faq-rag chat "Do you offer scholarships?"
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from faq_rag.config import settings

if TYPE_CHECKING:
    from faq_rag.retrieval.base import FAQStoreBase

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="faq-rag", description="FAQ extraction and retrieval")
    sub = parser.add_subparsers(dest="command", required=True)

    p_import = sub.add_parser("import", help="Extract FAQs from a document and replace the stored corpus")
    p_import.add_argument("path", help="PDF or plain-text file")
    p_import.add_argument(
        "--no-ai",
        action="store_true",
        help="Only use the deterministic parsers",
    )

    p_search = sub.add_parser("search", help="Search the stored FAQs")
    p_search.add_argument("query")
    p_search.add_argument("--limit", type=int, default=3)

    p_chat = sub.add_parser("chat", help="Answer a question from the stored FAQs")
    p_chat.add_argument("message")
    return parser


def _cmd_import(args: argparse.Namespace, store: FAQStoreBase) -> int:
    from faq_rag.extraction.ai_extractor import AIExtractor
    from faq_rag.ingestion.batch import IngestionError
    from faq_rag.pipeline import FAQImportService, NoFAQsExtractedError

    service = FAQImportService(store, ai_extractor=None if args.no_ai else AIExtractor())
    try:
        outcome = service.import_document(args.path)
    except NoFAQsExtractedError as exc:
        print(exc, file=sys.stderr)
        return 1
    except IngestionError as exc:
        print(exc, file=sys.stderr)
        return 2

    print(
        f"Imported {outcome.imported_count} FAQs "
        f"(method={outcome.extraction.method}) → collection '{store.collection_name}'"
    )
    for record in outcome.sample:
        print(f"  [{record.category}] {record.question}")
    return 0


def _cmd_search(args: argparse.Namespace, store: FAQStoreBase) -> int:
    from faq_rag.retrieval.retriever import FAQRetriever

    for hit in FAQRetriever(store).search(args.query, limit=args.limit):
        print(f"{hit.similarity:.3f}  {hit.short_ref()}\n       {hit.answer}")
    return 0


def _cmd_chat(args: argparse.Namespace, store: FAQStoreBase) -> int:
    from faq_rag.chat import answer_question
    from faq_rag.retrieval.retriever import FAQRetriever

    answer = answer_question(args.message, FAQRetriever(store))
    print(answer.message)
    for hit in answer.sources:
        print(f"  · {hit.short_ref()}")
    return 0


_COMMANDS = {"import": _cmd_import, "search": _cmd_search, "chat": _cmd_chat}


def main(argv: list[str] | None = None, *, store: FAQStoreBase | None = None) -> int:
    """Run the CLI; returns the process exit code."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if store is None:
        from faq_rag.retrieval.chroma_store import ChromaFAQStore

        store = ChromaFAQStore()
    return _COMMANDS[args.command](args, store)


if __name__ == "__main__":
    sys.exit(main())
