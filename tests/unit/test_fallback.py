"""Unit tests for the sentence-pair fallback parser."""

from faq_rag.extraction.fallback import parse_sentence_pairs, split_sentences
from faq_rag.extraction.models import FAQRecord


def test_split_discards_short_segments() -> None:
    text = "Hi. What is the refund policy? Yes! Refunds take thirty days."
    assert split_sentences(text) == ["What is the refund policy?", "Refunds take thirty days."]


def test_split_keeps_terminator_runs_together() -> None:
    assert split_sentences("Are you really sure?! Absolutely certain, yes...") == [
        "Are you really sure?!",
        "Absolutely certain, yes...",
    ]


def test_pairs_question_with_following_sentence() -> None:
    text = (
        "Our office handles many requests. What is the refund policy? "
        "Refunds are issued within thirty days. Shipping is free worldwide."
    )
    assert parse_sentence_pairs(text) == [
        FAQRecord(
            question="What is the refund policy?",
            answer="Refunds are issued within thirty days.",
            category="General",
        )
    ]


def test_question_at_end_has_no_pair() -> None:
    assert parse_sentence_pairs("Shipping is free worldwide. How long does it take?") == []


def test_consecutive_questions_pair_with_each_other() -> None:
    records = parse_sentence_pairs("How do I enroll online? Where is the admissions office? It is in Hall B, room 12.")
    assert [r.question for r in records] == ["How do I enroll online?", "Where is the admissions office?"]
    assert records[0].answer == "Where is the admissions office?"


def test_no_question_marks_yield_nothing() -> None:
    text = "The campus opens at eight. Parking is free on weekends. Dining halls close at nine!"
    assert parse_sentence_pairs(text) == []


def test_empty_input() -> None:
    assert parse_sentence_pairs("") == []
    assert parse_sentence_pairs(None) == []
