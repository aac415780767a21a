import base64
import binascii
import io

import pypdf
from pypdf.errors import PyPdfError
from fastapi import HTTPException
from loguru import logger


def decode_base64_upload(b64_string: str, max_bytes: int) -> bytes:
    """Decode a base64 upload, accepting an optional data-URL prefix."""
    if "," in b64_string:
        b64_string = b64_string.split(",", 1)[1]

    try:
        file_bytes = base64.b64decode(b64_string, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="Invalid base64 encoding for PDF.")

    if len(file_bytes) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size is {max_bytes // (1024 * 1024)} MB.",
        )
    return file_bytes


def extract_pdf_text(file_bytes: bytes) -> str:
    """
    Extract plain text from a PDF file, one paragraph block per page.
    Raises HTTP 400 if the PDF appears to be scanned (no extractable text).
    """
    try:
        reader = pypdf.PdfReader(io.BytesIO(file_bytes))
        pages_text = [(page.extract_text() or "").strip() for page in reader.pages]
    except PyPdfError as e:
        logger.warning(f"Could not read PDF: {e}")
        raise HTTPException(status_code=400, detail="Could not read the PDF. It may be corrupted or password-protected.")

    pages_text = [t for t in pages_text if t]
    if not pages_text:
        raise HTTPException(
            status_code=400,
            detail="No text could be extracted from this PDF. It may be a scanned image. "
                   "Please use a text-based PDF.",
        )
    return "\n\n".join(pages_text)
