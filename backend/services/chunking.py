from models import Chunk

_PARAGRAPH_BREAK = "\n\n"
_SENTENCE_BREAK = ". "


def split_text(text: str, max_chunk_chars: int) -> list[Chunk]:
    """
    Split text into contiguous chunks of at most max_chunk_chars characters.
    Prefers to cut after a paragraph break, then after a sentence break, as long
    as the break lies in the second half of the window. Chunks never overlap and
    joining their texts gives back the original string.
    """
    if max_chunk_chars <= 0:
        raise ValueError("max_chunk_chars must be positive")

    if len(text) <= max_chunk_chars:
        return [Chunk(index=0, text=text)]

    chunks: list[Chunk] = []
    start = 0
    while start < len(text):
        end = min(start + max_chunk_chars, len(text))

        if end < len(text):
            midpoint = start + max_chunk_chars // 2
            last_paragraph = text.rfind(_PARAGRAPH_BREAK, start, end)
            last_sentence = text.rfind(_SENTENCE_BREAK, start, end)

            if last_paragraph > midpoint:
                end = last_paragraph + len(_PARAGRAPH_BREAK)
            elif last_sentence > midpoint:
                end = last_sentence + len(_SENTENCE_BREAK)

        chunks.append(Chunk(index=len(chunks), text=text[start:end]))
        start = end

    return chunks
