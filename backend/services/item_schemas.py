"""
Item schemas plug one kind of study item into the generic generation pipeline:
how to ask the model for it, and how to read it back.
"""
from models import DIFFICULTIES
from prompts import DIFFICULTY_INSTRUCTIONS, FLASHCARD_PROMPT, QUIZ_PROMPT
from services.parsing import (
    parse_flashcards_fallback,
    parse_flashcards_primary,
    parse_quiz_fallback,
    parse_quiz_primary,
)


class InputError(ValueError):
    """Caller supplied a parameter outside its allowed set."""


class ItemSchema:
    name: str
    noun: str

    def build_prompt(self, chunk_text: str, target_count: int) -> str:
        raise NotImplementedError

    def parse_primary(self, text: str) -> list:
        raise NotImplementedError

    def parse_fallback(self, text: str) -> list:
        raise NotImplementedError


class FlashcardSchema(ItemSchema):
    name = "flashcard"
    noun = "flashcards"

    def build_prompt(self, chunk_text: str, target_count: int) -> str:
        return FLASHCARD_PROMPT.format(count=target_count, content=chunk_text)

    def parse_primary(self, text: str) -> list:
        return parse_flashcards_primary(text)

    def parse_fallback(self, text: str) -> list:
        return parse_flashcards_fallback(text)


class QuizSchema(ItemSchema):
    name = "quiz"
    noun = "quiz questions"

    def __init__(self, difficulty: str = "medium"):
        difficulty = (difficulty or "medium").strip().lower()
        if difficulty not in DIFFICULTIES:
            raise InputError(
                f"Unknown difficulty {difficulty!r}; expected one of {', '.join(DIFFICULTIES)}"
            )
        self.difficulty = difficulty

    def build_prompt(self, chunk_text: str, target_count: int) -> str:
        return QUIZ_PROMPT.format(
            count=target_count,
            content=chunk_text,
            difficulty_instructions=DIFFICULTY_INSTRUCTIONS[self.difficulty],
        )

    def parse_primary(self, text: str) -> list:
        return parse_quiz_primary(text)

    def parse_fallback(self, text: str) -> list:
        return parse_quiz_fallback(text)
