from pydantic import BaseModel, Field, field_validator
from typing import Annotated, Literal, Optional, Union

DIFFICULTIES = ("easy", "medium", "hard")


# ── Pipeline models ───────────────────────────────────────────────────────────

class Chunk(BaseModel):
    index: int
    text: str


class FlashcardItem(BaseModel):
    kind: Literal["flashcard"] = "flashcard"
    question: str
    answer: str


class QuizItem(BaseModel):
    kind: Literal["quiz"] = "quiz"
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_index: int = Field(ge=0, le=3)
    explanation: str = ""


ParsedItem = Annotated[Union[FlashcardItem, QuizItem], Field(discriminator="kind")]


class GenerationResult(BaseModel):
    items: list[ParsedItem]
    requested_count: int
    delivered: int
    shortfall: bool
    # plural noun used in user-facing messages, e.g. "flashcards"
    noun: str = "items"

    @property
    def warning(self) -> Optional[str]:
        if not self.shortfall:
            return None
        if self.delivered == 0:
            return (
                f"Unable to generate {self.noun}. The study material may be too short, "
                "repetitive, or lack educational content. Please provide more substantial material."
            )
        return (
            f"You requested {self.requested_count} {self.noun} but only {self.delivered} "
            "could be generated from the provided material."
        )


# ── Request models ────────────────────────────────────────────────────────────

class GenerateRequest(BaseModel):
    text: str
    count: Optional[int] = None
    owner_id: Optional[str] = None
    title: Optional[str] = None

    @field_validator("text")
    @classmethod
    def text_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Study material cannot be empty")
        return v


class FlashcardRequest(GenerateRequest):
    pass


class QuizRequest(GenerateRequest):
    difficulty: str = "medium"

    @field_validator("difficulty")
    @classmethod
    def difficulty_known(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in DIFFICULTIES:
            raise ValueError(f"Difficulty must be one of: {', '.join(DIFFICULTIES)}")
        return v


class ExtractPdfRequest(BaseModel):
    filename: str
    base64_data: str


# ── Response models ───────────────────────────────────────────────────────────

class FlashcardsResponse(BaseModel):
    flashcards: list[FlashcardItem]
    requested_count: int
    delivered: int
    warning: Optional[str] = None
    set_id: Optional[str] = None


class QuizResponse(BaseModel):
    questions: list[QuizItem]
    requested_count: int
    delivered: int
    warning: Optional[str] = None
    set_id: Optional[str] = None


class ExtractPdfResponse(BaseModel):
    filename: str
    text: str
    char_count: int
