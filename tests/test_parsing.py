"""
Tests for reading flashcards and quiz questions out of model replies.
"""
import time

from models import FlashcardItem, QuizItem
from services.item_schemas import FlashcardSchema, QuizSchema
from services.parsing import (
    parse_flashcards_fallback,
    parse_flashcards_primary,
    parse_quiz_fallback,
    parse_quiz_primary,
    parse_response,
)

WELL_FORMED_QUIZ = """
Q: Which organelle produces ATP?
A: Nucleus
B: Ribosome
C: Mitochondrion
D: Golgi apparatus
CORRECT: C
EXPLAIN: Mitochondria run cellular respiration.
"""


class TestFlashcardPrimary:
    def test_single_card(self):
        cards = parse_response("Q: What is X?\nA: X is Y.\n", FlashcardSchema())
        assert cards == [FlashcardItem(question="What is X?", answer="X is Y.")]

    def test_multi_line_answer_runs_to_next_question(self):
        raw = (
            "Q: Define osmosis.\nA: Movement of water\nacross a membrane.\n\n"
            "Q: Define diffusion.\nA: Net movement of particles."
        )
        cards = parse_flashcards_primary(raw)
        assert [c.answer for c in cards] == [
            "Movement of water\nacross a membrane.",
            "Net movement of particles.",
        ]

    def test_tolerates_blank_lines_and_indentation(self):
        raw = "\n\n   Q:   What is DNA?  \n\n\n  A:  Deoxyribonucleic acid.   \n\n"
        cards = parse_flashcards_primary(raw)
        assert cards == [FlashcardItem(question="What is DNA?", answer="Deoxyribonucleic acid.")]

    def test_markers_only_count_at_line_start(self):
        raw = "Q: What does FAQ: stand for in A: grade?\nA: Frequently asked questions."
        cards = parse_flashcards_primary(raw)
        assert len(cards) == 1
        assert cards[0].question == "What does FAQ: stand for in A: grade?"

    def test_question_without_answer_does_not_swallow_next_card(self):
        raw = "Q: Orphan question?\n\nQ: Real question?\nA: Real answer."
        cards = parse_flashcards_primary(raw)
        assert cards == [FlashcardItem(question="Real question?", answer="Real answer.")]

    def test_code_fences_are_ignored(self):
        raw = "```text\nQ: What is RNA?\nA: Ribonucleic acid.\n```"
        cards = parse_response(raw, FlashcardSchema())
        assert cards == [FlashcardItem(question="What is RNA?", answer="Ribonucleic acid.")]

    def test_same_count_with_and_without_blank_lines(self):
        spaced = "Q: One?\nA: 1\n\nQ: Two?\nA: 2\n\nQ: Three?\nA: 3\n"
        compact = "Q: One?\nA: 1\nQ: Two?\nA: 2\nQ: Three?\nA: 3"
        schema = FlashcardSchema()
        assert len(parse_response(spaced, schema)) == 3
        assert parse_response(compact, schema) == parse_response(spaced, schema)


class TestFlashcardFallback:
    def test_pairs_question_with_following_answer(self):
        raw = "Intro text\nQ: First?\nA: One\nnoise line\nQ: Second?\nA: Two"
        cards = parse_flashcards_fallback(raw)
        assert [(c.question, c.answer) for c in cards] == [("First?", "One"), ("Second?", "Two")]

    def test_unanswered_question_is_dropped(self):
        cards = parse_flashcards_fallback("Q: one\nQ: two\nA: 2\nA: orphan answer")
        assert cards == [FlashcardItem(question="two", answer="2")]

    def test_nothing_recognisable(self):
        assert parse_flashcards_fallback("Sorry, I cannot help with that.") == []


class TestQuizPrimary:
    def test_letter_maps_to_index(self):
        questions = parse_response(WELL_FORMED_QUIZ, QuizSchema())
        assert len(questions) == 1
        assert questions[0].correct_index == 2
        assert questions[0].options == ["Nucleus", "Ribosome", "Mitochondrion", "Golgi apparatus"]
        assert questions[0].explanation == "Mitochondria run cellular respiration."

    def test_several_questions(self, quiz_text):
        questions = parse_quiz_primary(quiz_text(3, correct="D"))
        assert len(questions) == 3
        assert {q.correct_index for q in questions} == {3}

    def test_block_missing_option_d_yields_nothing(self):
        raw = (
            "Q: What is 2 + 2?\nA: 3\nB: 4\nC: 5\n"
            "CORRECT: B\nEXPLAIN: Basic arithmetic."
        )
        assert parse_response(raw, QuizSchema()) == []

    def test_broken_block_does_not_affect_next_one(self):
        raw = (
            "Q: What is 2 + 2?\nA: 3\nB: 4\nC: 5\nCORRECT: B\nEXPLAIN: Arithmetic.\n\n"
            + WELL_FORMED_QUIZ
        )
        questions = parse_quiz_primary(raw)
        assert [q.question for q in questions] == ["Which organelle produces ATP?"]

    def test_invalid_letter_is_discarded(self):
        raw = WELL_FORMED_QUIZ.replace("CORRECT: C", "CORRECT: E")
        assert parse_response(raw, QuizSchema()) == []

    def test_same_count_with_and_without_blank_lines(self, quiz_text):
        spaced = quiz_text(2)
        compact = spaced.replace("\n\n", "\n")
        assert len(parse_response(compact, QuizSchema())) == len(parse_response(spaced, QuizSchema())) == 2

    def test_repeated_option_groups_are_rejected_quickly(self):
        raw = "Q: q\n" + "A: x\nB: x\nC: x\nD: x\n" * 60 + "EXPLAIN: none\n"

        started = time.perf_counter()
        assert parse_quiz_primary(raw) == []
        assert parse_response(raw, QuizSchema()) == []
        assert time.perf_counter() - started < 1.0


class TestQuizFallback:
    def test_options_out_of_order_are_placed_by_letter(self):
        raw = (
            "Q: Capital of France?\nB: London\nA: Paris\nC: Rome\nD: Berlin\n"
            "CORRECT: A\nEXPLAIN: Paris is the capital."
        )
        assert parse_quiz_primary(raw) == []
        questions = parse_response(raw, QuizSchema())
        assert questions == [
            QuizItem(
                question="Capital of France?",
                options=["Paris", "London", "Rome", "Berlin"],
                correct_index=0,
                explanation="Paris is the capital.",
            )
        ]

    def test_missing_explanation_is_allowed(self):
        raw = "Q: Pick D\nA: a\nB: b\nC: c\nD: d\nCORRECT: D"
        questions = parse_response(raw, QuizSchema())
        assert len(questions) == 1
        assert questions[0].correct_index == 3
        assert questions[0].explanation == ""

    def test_incomplete_candidate_dropped_when_next_question_starts(self):
        raw = (
            "Q: Incomplete\nA: a\nB: b\nCORRECT: A\n"
            "Q: Complete\nA: a\nB: b\nC: c\nD: d\nCORRECT: b\nEXPLAIN: ok"
        )
        questions = parse_quiz_fallback(raw)
        assert [q.question for q in questions] == ["Complete"]
        assert questions[0].correct_index == 1

    def test_repeated_option_letter_is_dropped(self):
        raw = "Q: Pick\nB: b\nA: a\nC: c\nC: c2\nD: d\nCORRECT: A\nEXPLAIN: e"
        assert parse_quiz_fallback(raw) == []

    def test_missing_correct_letter_is_dropped(self):
        raw = "Q: No answer key\nA: a\nB: b\nC: c\nD: d\nEXPLAIN: none"
        assert parse_quiz_fallback(raw) == []

    def test_unknown_lines_are_ignored(self):
        raw = "Here you go!\n1. Q: not at line start\nQ: Real\nA: a\nB: b\nC: c\nD: d\nCORRECT: C\nThanks!"
        questions = parse_quiz_fallback(raw)
        assert len(questions) == 1
        assert questions[0].correct_index == 2


def test_empty_reply_yields_nothing():
    assert parse_response("", FlashcardSchema()) == []
    assert parse_response("   \n ", QuizSchema()) == []
