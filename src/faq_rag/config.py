"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (or dummy value for local vLLM)")
    llm_model_name: str = Field(default="gpt-3.5-turbo", description="LLM model identifier")
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for the LLM API. Leave empty to use OpenAI cloud. "
            "Any OpenAI-compatible endpoint (vLLM, Ollama, …) works."
        ),
    )
    llm_timeout_seconds: float = Field(default=60.0, description="Per-request LLM timeout")

    # Extraction
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 2000
    ai_max_chars: int = Field(default=6000, description="Character budget sent to the AI extractor")
    min_basic_records: int = Field(
        default=3,
        description="Below this many deterministic records the AI extractor is consulted",
    )

    # Chat
    chat_temperature: float = 0.3
    chat_max_tokens: int = 500

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "faq"
    distance_metric: str = Field(default="cosine", description="cosine | l2 | ip")

    # Embedding
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"

    # Ingestion
    ingest_batch_size: int = 3
    ingest_batch_delay_seconds: float = 0.5

    # Serving
    max_upload_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
