"""
Turn raw model output into flashcard / quiz items.

Each schema has two pure parsers returning the same item types:

- a primary parser that pulls marker-delimited fields out with a regex and
  allows multi-line values, and
- a fallback line-by-line state machine, used only when the primary parser
  finds nothing in a non-empty reply.

Incomplete candidates are dropped quietly; neither parser raises on bad input.
"""
import re
from enum import Enum

from loguru import logger

from models import FlashcardItem, QuizItem
from utils import strip_code_fences

_OPTION_LETTERS = "ABCD"

# Text up to the next marker. Never runs across a line that opens a new question.
_FIELD = r"((?:(?!^[ \t]*Q:).)+?)"
# Quiz fields stop at every marker line, so a block that cannot match fails in linear time.
_QUIZ_FIELD = r"((?:(?!^[ \t]*(?:Q|A|B|C|D|CORRECT|EXPLAIN):).)+?)"
_NEXT_QUESTION_OR_END = r"\s*(?=^[ \t]*Q:|\Z)"


def _marker(name: str) -> str:
    return rf"^[ \t]*{name}:[ \t]*"


_FLASHCARD_PATTERN = re.compile(
    _marker("Q") + _FIELD + r"\s*"
    + _marker("A") + r"(.+?)" + _NEXT_QUESTION_OR_END,
    re.DOTALL | re.MULTILINE,
)

_QUIZ_PATTERN = re.compile(
    _marker("Q") + _QUIZ_FIELD + r"\s*"
    + _marker("A") + _QUIZ_FIELD + r"\s*"
    + _marker("B") + _QUIZ_FIELD + r"\s*"
    + _marker("C") + _QUIZ_FIELD + r"\s*"
    + _marker("D") + _QUIZ_FIELD + r"\s*"
    + _marker("CORRECT") + r"([A-D])[ \t]*$\s*"
    + _marker("EXPLAIN") + r"(.+?)" + _NEXT_QUESTION_OR_END,
    re.DOTALL | re.MULTILINE,
)


class ParseState(Enum):
    AWAITING_QUESTION = "awaiting_question"
    AWAITING_ANSWER = "awaiting_answer"
    COLLECTING_OPTIONS = "collecting_options"
    COMPLETE = "complete"


# ── Flashcards ────────────────────────────────────────────────────────────────

def parse_flashcards_primary(text: str) -> list[FlashcardItem]:
    cards = []
    for match in _FLASHCARD_PATTERN.finditer(text):
        question, answer = (g.strip() for g in match.groups())
        if question and answer:
            cards.append(FlashcardItem(question=question, answer=answer))
    return cards


def parse_flashcards_fallback(text: str) -> list[FlashcardItem]:
    cards = []
    state = ParseState.AWAITING_QUESTION
    question = ""

    for line in text.splitlines():
        line = line.strip()
        if line.startswith("Q:"):
            # a question still waiting for its answer is dropped here
            question = line[2:].strip()
            state = ParseState.AWAITING_ANSWER
        elif line.startswith("A:") and state is ParseState.AWAITING_ANSWER:
            answer = line[2:].strip()
            if question and answer:
                cards.append(FlashcardItem(question=question, answer=answer))
            question = ""
            state = ParseState.AWAITING_QUESTION

    return cards


# ── Quiz ──────────────────────────────────────────────────────────────────────

def parse_quiz_primary(text: str) -> list[QuizItem]:
    questions = []
    for match in _QUIZ_PATTERN.finditer(text):
        question, a, b, c, d, letter, explanation = (g.strip() for g in match.groups())
        options = [a, b, c, d]
        if not question or not explanation or not all(options):
            continue
        questions.append(
            QuizItem(
                question=question,
                options=options,
                correct_index=_OPTION_LETTERS.index(letter),
                explanation=explanation,
            )
        )
    return questions


class _QuizCandidate:
    def __init__(self, question: str):
        self.question = question
        self.options: dict[str, str] = {}
        self.option_lines = 0
        self.correct_index = -1
        self.explanation = ""

    def add_option(self, letter: str, value: str):
        self.options[letter] = value
        self.option_lines += 1

    def to_item(self):
        """Return a QuizItem, or None when the candidate is incomplete or has a repeated option."""
        if not self.question or self.correct_index not in range(4):
            return None
        if self.option_lines != len(_OPTION_LETTERS):
            return None
        if any(not self.options.get(letter) for letter in _OPTION_LETTERS):
            return None
        return QuizItem(
            question=self.question,
            options=[self.options[letter] for letter in _OPTION_LETTERS],
            correct_index=self.correct_index,
            explanation=self.explanation,
        )


def _option_line(line: str):
    for letter in _OPTION_LETTERS:
        if line.startswith(f"{letter}:"):
            return letter, line[2:].strip()
    return None


def parse_quiz_fallback(text: str) -> list[QuizItem]:
    questions = []
    state = ParseState.AWAITING_QUESTION
    candidate = None

    def finish():
        item = candidate.to_item() if candidate is not None else None
        if item is not None:
            questions.append(item)

    for line in text.splitlines():
        line = line.strip()
        if line.startswith("Q:"):
            finish()
            candidate = _QuizCandidate(line[2:].strip())
            state = ParseState.COLLECTING_OPTIONS
            continue
        if state is ParseState.AWAITING_QUESTION:
            continue

        if line.startswith("CORRECT:"):
            letter = line[len("CORRECT:"):].strip()[:1].upper()
            candidate.correct_index = _OPTION_LETTERS.find(letter) if letter else -1
        elif line.startswith("EXPLAIN:"):
            candidate.explanation = line[len("EXPLAIN:"):].strip()
            state = ParseState.COMPLETE
        elif state is ParseState.COLLECTING_OPTIONS:
            option = _option_line(line)
            if option is not None:
                candidate.add_option(*option)

    finish()
    return questions


# ── Entry point ───────────────────────────────────────────────────────────────

def parse_response(raw: str, schema) -> list:
    """
    Parse one model reply with `schema`'s primary parser, falling back to its
    line parser when the primary one finds nothing. Returns [] if neither does.
    """
    text = strip_code_fences(raw or "")
    if not text.strip():
        return []

    items = schema.parse_primary(text)
    if items:
        return items

    items = schema.parse_fallback(text)
    logger.debug(f"Primary {schema.name} parser found nothing; fallback recovered {len(items)} item(s)")
    return items
