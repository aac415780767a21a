"""
Pytest configuration and shared fixtures.
"""
import os
import sys
from pathlib import Path

import pytest

# Modules under backend/ import each other as top-level modules
BACKEND_DIR = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(BACKEND_DIR))

os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_KEY"] = ""

from services.llm_client import GenerationError  # noqa: E402


class FakeGenerationClient:
    """
    Replays canned replies in call order. A reply may be a string, an exception
    to raise, or a callable taking the prompt and returning either.
    """

    def __init__(self, replies=()):
        self.replies = list(replies)
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if self.replies else ""
        if callable(reply) and not isinstance(reply, type):
            reply = reply(prompt)
        if isinstance(reply, Exception):
            raise reply
        return reply


def flashcard_reply(count: int, start: int = 0) -> str:
    return "\n\n".join(
        f"Q: Question {i}?\nA: Answer {i}." for i in range(start, start + count)
    )


def quiz_reply(count: int, correct: str = "B") -> str:
    return "\n\n".join(
        f"Q: Question {i}?\nA: Option a{i}\nB: Option b{i}\nC: Option c{i}\nD: Option d{i}\n"
        f"CORRECT: {correct}\nEXPLAIN: Because of fact {i}."
        for i in range(count)
    )


@pytest.fixture
def fake_client():
    """Factory for FakeGenerationClient instances."""
    return FakeGenerationClient


@pytest.fixture
def flashcards_text():
    return flashcard_reply


@pytest.fixture
def quiz_text():
    return quiz_reply


@pytest.fixture
def failure():
    return GenerationError("rate limited")
