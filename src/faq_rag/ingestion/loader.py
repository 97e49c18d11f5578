"""Document loaders — raw text out of uploaded PDF / plain-text files.

PDF parsing goes through LangChain's ``PyPDFLoader``; no layout analysis
is attempted, pages are simply joined with newlines.
"""

from __future__ import annotations

import logging
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader, TextLoader

logger = logging.getLogger(__name__)

PDF_SUFFIXES = frozenset({".pdf"})
TEXT_SUFFIXES = frozenset({".txt", ".md", ".text"})


def load_pdf_text(path: str | Path) -> str:
    """Extract the text of every page of a PDF file."""
    pages = PyPDFLoader(str(path)).load()
    text = "\n".join(page.page_content for page in pages)
    logger.info("Extracted %d characters from %d page(s) of %s", len(text), len(pages), path)
    return text


def load_plain_text(path: str | Path) -> str:
    """Read a UTF-8 text file."""
    docs = TextLoader(str(path), encoding="utf-8").load()
    return "\n".join(doc.page_content for doc in docs)


def load_document_text(path: str | Path) -> str:
    """Return the raw text of the document at *path*.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the file type is neither PDF nor plain text.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Document not found at path: {path}")

    suffix = path.suffix.lower()
    if suffix in PDF_SUFFIXES:
        return load_pdf_text(path)
    if suffix in TEXT_SUFFIXES:
        return load_plain_text(path)
    raise ValueError(f"Unsupported document type {suffix!r}; expected PDF or plain text")
