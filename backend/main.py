from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config import get_settings
from models import (
    ExtractPdfRequest,
    ExtractPdfResponse,
    FlashcardRequest,
    FlashcardsResponse,
    GenerateRequest,
    GenerationResult,
    QuizRequest,
    QuizResponse,
)
from services.extraction import decode_base64_upload, extract_pdf_text
from services.generation import generate_items
from services.item_schemas import FlashcardSchema, InputError, ItemSchema, QuizSchema
from services.llm_client import GenerationClient, OpenAIGenerationClient
from services.set_store import save_set
from utils import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(
    title="AI Study Generator API",
    description="Turn study material of any length into flashcards and multiple-choice quizzes.",
    version="1.0.0",
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_generation_client() -> GenerationClient:
    return OpenAIGenerationClient()


async def _generate(
    data: GenerateRequest, schema: ItemSchema, client: GenerationClient
) -> tuple[GenerationResult, Optional[str]]:
    """Run generation for a request and save the set when an owner is given."""
    s = get_settings()
    if len(data.text) > s.max_source_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Study material is too long. Maximum is {s.max_source_chars} characters.",
        )

    try:
        result = await generate_items(data.text, data.count, schema, client=client)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    set_id = None
    if data.owner_id is not None:
        try:
            set_id = save_set(data.owner_id, data.title, data.text, result.items, schema)
        except Exception:
            logger.exception(f"Saving {schema.noun} for owner {data.owner_id} failed")
            raise HTTPException(status_code=502, detail=f"The {schema.noun} were generated but could not be saved.")
    return result, set_id


# ── Health ────────────────────────────────────────────────────────────────────
@app.get("/health")
async def health():
    return {"status": "ok"}


# ── Extract PDF ───────────────────────────────────────────────────────────────
@app.post("/extract-pdf", response_model=ExtractPdfResponse)
async def extract_pdf(data: ExtractPdfRequest):
    """Accept a base64 PDF upload and return its plain text for generation."""
    file_bytes = decode_base64_upload(data.base64_data, get_settings().max_upload_bytes)
    text = extract_pdf_text(file_bytes)
    return ExtractPdfResponse(filename=data.filename, text=text, char_count=len(text))


# ── Generate Flashcards ───────────────────────────────────────────────────────
@app.post("/generate-flashcards", response_model=FlashcardsResponse)
async def generate_flashcards_endpoint(
    data: FlashcardRequest,
    client: GenerationClient = Depends(get_generation_client),
):
    """
    Generate flashcards from study material. When fewer cards than requested
    could be produced the response carries a warning instead of an error.
    """
    result, set_id = await _generate(data, FlashcardSchema(), client)
    return FlashcardsResponse(
        flashcards=result.items,
        requested_count=result.requested_count,
        delivered=result.delivered,
        warning=result.warning,
        set_id=set_id,
    )


# ── Generate Quiz ─────────────────────────────────────────────────────────────
@app.post("/generate-quiz", response_model=QuizResponse)
async def generate_quiz_endpoint(
    data: QuizRequest,
    client: GenerationClient = Depends(get_generation_client),
):
    """Generate four-option multiple-choice questions at the requested difficulty."""
    try:
        schema = QuizSchema(data.difficulty)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result, set_id = await _generate(data, schema, client)
    return QuizResponse(
        questions=result.items,
        requested_count=result.requested_count,
        delivered=result.delivered,
        warning=result.warning,
        set_id=set_id,
    )
