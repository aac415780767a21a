from typing import Optional

from supabase import Client, create_client

from config import get_settings
from models import FlashcardItem, QuizItem
from services.item_schemas import ItemSchema, QuizSchema

_OPTION_LETTERS = "ABCD"


def _get_client() -> Client:
    s = get_settings()
    if not s.persistence_enabled:
        raise RuntimeError("Supabase is not configured. Set SUPABASE_URL and SUPABASE_KEY to save sets.")
    return create_client(s.supabase_url, s.supabase_key)


def _flashcard_row(set_id: str, position: int, card: FlashcardItem) -> dict:
    return {
        "set_id": set_id,
        "question": card.question,
        "answer": card.answer,
        "position": position,
    }


def _quiz_row(set_id: str, position: int, question: QuizItem) -> dict:
    a, b, c, d = question.options
    return {
        "set_id": set_id,
        "question": question.question,
        "option_a": a,
        "option_b": b,
        "option_c": c,
        "option_d": d,
        "correct_answer": _OPTION_LETTERS[question.correct_index],
        "explanation": question.explanation,
        "position": position,
    }


def save_set(
    owner_id: str,
    title: Optional[str],
    source_text: str,
    items: list,
    schema: ItemSchema,
    client: Optional[Client] = None,
) -> str:
    """
    Store a generated set and its items, in order, and return the new set id.
    Expects the final (already truncated) item list.
    """
    client = client or _get_client()

    if isinstance(schema, QuizSchema):
        set_table, item_table, to_row = "quiz_sets", "quiz_questions", _quiz_row
        set_row = {
            "owner_id": owner_id,
            "title": title or "AI Generated Quiz",
            "study_material": source_text,
            "difficulty": schema.difficulty,
        }
    else:
        set_table, item_table, to_row = "flashcard_sets", "flashcards", _flashcard_row
        set_row = {
            "owner_id": owner_id,
            "title": title or "AI Generated Flashcards",
            "study_material": source_text,
        }

    result = client.table(set_table).insert(set_row).execute()
    set_id = str(result.data[0]["id"])

    rows = [to_row(set_id, position, item) for position, item in enumerate(items)]
    if rows:
        client.table(item_table).insert(rows).execute()
    return set_id
