import asyncio
from typing import NamedTuple, Optional

from loguru import logger

from config import get_settings
from models import Chunk, GenerationResult
from services.allocation import allocate, plan_targets
from services.chunking import split_text
from services.item_schemas import FlashcardSchema, InputError, ItemSchema, QuizSchema
from services.llm_client import GenerationClient, GenerationError, OpenAIGenerationClient
from services.parsing import parse_response


class GenerationState(NamedTuple):
    # items credited to the allocator; a chunk never counts for more than its target
    credited: int = 0
    items: tuple = ()


def advance(state: GenerationState, target: int, parsed: list) -> GenerationState:
    """Fold one chunk's parsed items into the running state."""
    return GenerationState(
        credited=state.credited + min(len(parsed), target),
        items=state.items + tuple(parsed),
    )


async def _generate_chunk(
    chunk: Chunk, target: int, schema: ItemSchema, client: GenerationClient
) -> list:
    prompt = schema.build_prompt(chunk.text, target)
    logger.info(f"Generating {target} {schema.noun} from chunk {chunk.index + 1}")
    try:
        raw = await client.complete(prompt)
    except GenerationError as e:
        logger.warning(f"Error generating {schema.noun} for chunk {chunk.index + 1}: {e}")
        return []

    items = parse_response(raw, schema)
    if len(items) < target:
        logger.info(f"Chunk {chunk.index + 1} yielded {len(items)} of {target} {schema.noun}")
    return items


async def _run_sequential(
    chunks: list[Chunk], requested_count: int, schema: ItemSchema, client: GenerationClient
) -> GenerationState:
    state = GenerationState()
    for chunk in chunks:
        if len(state.items) >= requested_count:
            break
        target = allocate(requested_count, len(chunks), state.credited, chunk.index)
        if target <= 0:
            break
        parsed = await _generate_chunk(chunk, target, schema, client)
        state = advance(state, target, parsed)
    return state


async def _run_concurrent(
    chunks: list[Chunk],
    requested_count: int,
    schema: ItemSchema,
    client: GenerationClient,
    concurrency: int,
) -> GenerationState:
    """
    Targets are fixed up front assuming every chunk delivers in full, so a chunk
    that comes up short is not made up for by later chunks. Results are folded
    in chunk order whatever order the responses arrive in.
    """
    targets = plan_targets(requested_count, len(chunks))
    planned = [(chunk, target) for chunk, target in zip(chunks, targets) if target > 0]
    semaphore = asyncio.Semaphore(concurrency)

    async def run(chunk: Chunk, target: int) -> list:
        async with semaphore:
            return await _generate_chunk(chunk, target, schema, client)

    results = await asyncio.gather(*(run(chunk, target) for chunk, target in planned))

    state = GenerationState()
    for (_, target), parsed in zip(planned, results):
        state = advance(state, target, parsed)
    return state


async def generate_items(
    text: str,
    requested_count: Optional[int],
    schema: ItemSchema,
    client: Optional[GenerationClient] = None,
    max_chunk_chars: Optional[int] = None,
    concurrency: Optional[int] = None,
) -> GenerationResult:
    """
    Split the study material into chunks, ask the model for a share of the
    requested items from each one, and collect what parses.

    Chunks whose generation call fails are skipped. The result holds at most
    requested_count items and flags a shortfall instead of raising when fewer
    could be produced.
    """
    if not text or not text.strip():
        raise InputError("Study material cannot be empty")

    s = get_settings()
    if not requested_count or requested_count <= 0:
        requested_count = s.default_item_count
    max_chunk_chars = max_chunk_chars or s.max_chunk_chars
    concurrency = concurrency or s.generation_concurrency
    client = client or OpenAIGenerationClient()

    chunks = split_text(text, max_chunk_chars)
    logger.info(f"Processing {len(chunks)} chunk(s) for {requested_count} {schema.noun}")

    if concurrency > 1 and len(chunks) > 1:
        state = await _run_concurrent(chunks, requested_count, schema, client, concurrency)
    else:
        state = await _run_sequential(chunks, requested_count, schema, client)

    items = list(state.items[:requested_count])
    if len(items) < requested_count:
        logger.warning(f"Generated {len(items)} of {requested_count} requested {schema.noun}")

    return GenerationResult(
        items=items,
        requested_count=requested_count,
        delivered=len(items),
        shortfall=len(items) < requested_count,
        noun=schema.noun,
    )


async def generate_flashcards(
    text: str, count: Optional[int] = None, client: Optional[GenerationClient] = None
) -> GenerationResult:
    """Generate question/answer flashcards from study material."""
    return await generate_items(text, count, FlashcardSchema(), client=client)


async def generate_quiz(
    text: str,
    count: Optional[int] = None,
    difficulty: str = "medium",
    client: Optional[GenerationClient] = None,
) -> GenerationResult:
    """Generate four-option multiple-choice questions from study material."""
    return await generate_items(text, count, QuizSchema(difficulty), client=client)
