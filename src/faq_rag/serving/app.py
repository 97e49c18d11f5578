"""FastAPI application exposing FAQ import, search and chat as a REST API."""

from __future__ import annotations

import logging
import tempfile
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from faq_rag.chat import ChatAnswer, answer_question
from faq_rag.config import settings
from faq_rag.extraction.models import FAQRecord
from faq_rag.ingestion.batch import IngestionError
from faq_rag.ingestion.loader import PDF_SUFFIXES, TEXT_SUFFIXES
from faq_rag.pipeline import FAQImportService, NoFAQsExtractedError
from faq_rag.retrieval.base import FAQStoreBase
from faq_rag.retrieval.models import SearchHit
from faq_rag.retrieval.retriever import FAQRetriever

logger = logging.getLogger(__name__)

app = FastAPI(
    title="FAQ RAG API",
    version="0.1.0",
    description="Upload FAQ documents, search the extracted FAQs and chat over them.",
)

_CONTENT_TYPE_SUFFIXES = {"application/pdf": ".pdf", "text/plain": ".txt", "text/markdown": ".md"}
_ACCEPTED_SUFFIXES = PDF_SUFFIXES | TEXT_SUFFIXES


# ── Dependencies ──────────────────────────────────────────────────────
@lru_cache(maxsize=1)
def get_store() -> FAQStoreBase:
    from faq_rag.retrieval.chroma_store import ChromaFAQStore

    return ChromaFAQStore()


@lru_cache(maxsize=1)
def get_import_service() -> FAQImportService:
    """One service per process, so its lock covers every upload."""
    from faq_rag.extraction.ai_extractor import AIExtractor

    return FAQImportService(get_store(), ai_extractor=AIExtractor())


def get_retriever(store: FAQStoreBase = Depends(get_store)) -> FAQRetriever:
    return FAQRetriever(store)


# ── Request / Response schemas ────────────────────────────────────────
class UploadResponse(BaseModel):
    """Summary of an imported document."""

    success: bool = True
    message: str
    extracted_faqs: int
    imported_faqs: int
    method: str
    sample_faqs: list[FAQRecord] = []


class SearchRequest(BaseModel):
    """FAQ search query."""

    query: str = Field(min_length=1)
    limit: int = Field(default=3, ge=1, le=50)


class SearchResponse(BaseModel):
    """FAQs nearest to the query."""

    success: bool = True
    query: str
    results: list[SearchHit] = []


class ChatRequest(BaseModel):
    """Incoming question from the user."""

    message: str = Field(min_length=1)


class DebugResponse(BaseModel):
    """Store connectivity and contents."""

    store_connected: bool
    faq_count: int = 0
    faqs: list[str] = []


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/upload", response_model=UploadResponse)
def upload_document(
    file: UploadFile = File(...),
    service: FAQImportService = Depends(get_import_service),
) -> UploadResponse:
    """Extract FAQs from an uploaded PDF / text file and replace the corpus.

    The upload only lives in a temporary file for the duration of the
    request.
    """
    suffix = _CONTENT_TYPE_SUFFIXES.get(file.content_type or "") or Path(file.filename or "").suffix.lower()
    if suffix not in _ACCEPTED_SUFFIXES:
        raise HTTPException(status_code=400, detail="Only PDF or plain-text files are allowed")

    data = file.file.read(settings.max_upload_bytes + 1)
    if not data:
        raise HTTPException(status_code=400, detail="No document uploaded")
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Uploaded file is too large")

    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp.write(data)
        tmp_path = Path(tmp.name)

    try:
        outcome = service.import_document(tmp_path)
    except NoFAQsExtractedError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except IngestionError as exc:
        logger.error("Import of %s failed: %s", file.filename, exc)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": str(exc),
                "imported_faqs": exc.committed_count,
            },
        )
    finally:
        tmp_path.unlink(missing_ok=True)
        logger.info("Cleaned up upload: %s", tmp_path)

    return UploadResponse(
        message=(
            f"Document processed successfully. Imported {outcome.imported_count} "
            "FAQs into the database."
        ),
        extracted_faqs=len(outcome.extraction),
        imported_faqs=outcome.imported_count,
        method=outcome.extraction.method,
        sample_faqs=outcome.sample,
    )


@app.post("/search", response_model=SearchResponse)
def search(request: SearchRequest, retriever: FAQRetriever = Depends(get_retriever)) -> SearchResponse:
    """Return the FAQs closest to the query."""
    try:
        hits = retriever.search(request.query, limit=request.limit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return SearchResponse(query=request.query, results=hits)


@app.post("/chat", response_model=ChatAnswer)
def chat(request: ChatRequest, retriever: FAQRetriever = Depends(get_retriever)) -> ChatAnswer:
    """Answer the user's message from the stored FAQs."""
    try:
        return answer_question(request.message, retriever)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/debug", response_model=DebugResponse)
def debug(store: FAQStoreBase = Depends(get_store)) -> DebugResponse:
    """Report store connectivity and the stored questions."""
    if not store.health_check():
        return DebugResponse(store_connected=False)
    questions = store.list_questions(limit=100)
    return DebugResponse(store_connected=True, faq_count=store.count(), faqs=questions)
