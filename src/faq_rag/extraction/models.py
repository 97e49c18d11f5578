"""Domain models for extracted FAQ records and extraction outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CATEGORY = "General"

FAQ_CATEGORIES: tuple[str, ...] = (
    "Admissions",
    "Academics",
    "Campus Life",
    "Scholarships",
    "Placements",
    DEFAULT_CATEGORY,
)
"""Categories the AI extractor is allowed to assign."""

ExtractionMethod = Literal["line", "sentence_pair", "ai", "none"]

MIN_ANSWER_LENGTH = 10
"""Answers must be strictly longer than this (after trimming)."""


class FAQRecord(BaseModel):
    """One extracted question / answer / category triple.

    Attributes
    ----------
    question:
        The question text, stripped of surrounding whitespace.
    answer:
        The answer text, stripped of surrounding whitespace; longer
        than :data:`MIN_ANSWER_LENGTH` characters.
    category:
        Free-form category label; ``"General"`` when unknown.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    question: str = Field(min_length=1)
    answer: str = Field(min_length=MIN_ANSWER_LENGTH + 1)
    category: str = DEFAULT_CATEGORY

    @field_validator("category", mode="before")
    @classmethod
    def _default_blank_category(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_CATEGORY
        return value


@dataclass(frozen=True)
class ParserState:
    """Transient state of the deterministic line parser.

    A new instance is produced for every line; nothing is mutated in
    place.

    Attributes
    ----------
    question:
        The question currently collecting answer lines, if any.
    answer:
        Space-joined answer accumulator for ``question``.
    category:
        Sticky category, replaced only by a category header line.
    question_category:
        The category in force when ``question`` started; the flushed
        record carries this value.  A header placed between a question
        and its answer therefore labels the next question, not the
        pending one (the earlier upload parser stamped the category
        current at flush time instead).
    """

    question: str | None = None
    answer: str = ""
    category: str = DEFAULT_CATEGORY
    question_category: str = DEFAULT_CATEGORY


class ExtractionResult(BaseModel):
    """Final record set chosen by the extraction orchestrator."""

    model_config = ConfigDict(frozen=True)

    records: tuple[FAQRecord, ...] = ()
    method: ExtractionMethod = "none"
    basic_count: int = 0
    ai_attempted: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.records

    def __len__(self) -> int:  # noqa: D105
        return len(self.records)
