# src/pulseboard_backend/app/services/summarize.py
from __future__ import annotations

import asyncio
import io
import logging
import re
from typing import Any, Dict, List, Optional

from pypdf import PdfReader

from pulseboard_router.adapters.huggingface import InferenceClient, InferenceError, first_text
from pulseboard_router.core.config import section

logger = logging.getLogger(__name__)

EMPTY_PDF_SUMMARY = "The PDF appears to be empty or contains very little text content."
FAILED_CHUNK_SUMMARY = "Failed to generate summary for this section."
TRUNCATION_NOTE = "[Note: This summary covers only the first portion of the document due to its length.]"

_SCIENTIFIC = re.compile(
    r"(?:analysis|experiment|methodology|hypothesis|algorithm|statistical|framework|neural|network)",
    re.IGNORECASE,
)
_CODE = re.compile(
    r"(?:function|const|var|let|if \(|for \(|while \(|class |import |from )",
    re.IGNORECASE,
)


class PdfExtractionError(ValueError):
    pass


def extract_pdf(data: bytes) -> Dict[str, Any]:
    """
    Blocking: parse a PDF buffer into {text, page_count, author, creation_date}.
    Page texts are joined with blank lines so paragraph chunking still works.
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
        info = reader.metadata
    except Exception as ex:  # pypdf raises a wide family of errors on bad input
        raise PdfExtractionError(f"Could not read PDF: {ex}") from ex

    author = None
    created = None
    if info is not None:
        author = info.author
        created = info.get("/CreationDate")

    return {
        "text": "\n\n".join(pages),
        "page_count": len(pages),
        "author": author or "Unknown",
        "creation_date": str(created) if created else "Unknown",
    }


def clean_extracted_text(text: str) -> str:
    """
    Tidy PDF text while keeping paragraph breaks:
      - drop lone page numbers / "Page N" / "[N]" lines and footer lines
      - re-join words hyphenated across line ends
      - drop URLs
      - collapse spaces inside each paragraph
    """
    if not text:
        return ""

    # whole lines go, newline included, so they never fake a paragraph break
    text = re.sub(r"^[ \t]*\d+[ \t]*(?:\n|$)", "", text, flags=re.MULTILINE)
    text = re.sub(r"^[ \t]*Page[ \t]+\d+[ \t]*(?:\n|$)", "", text, flags=re.MULTILINE | re.IGNORECASE)
    text = re.sub(r"^[ \t]*\[[ \t]*\d+[ \t]*\][ \t]*(?:\n|$)", "", text, flags=re.MULTILINE)
    text = re.sub(r"^[ \t]*(?:[A-Z][a-z]+[ \t]*)+\|[ \t]*\d+[ \t]*(?:\n|$)", "", text, flags=re.MULTILINE)
    text = re.sub(r"(\w+)-\n[ \t]*(\w+)", r"\1\2", text)
    text = re.sub(r"https?://\S+", "", text)

    paragraphs = re.split(r"\n\s*\n", text)
    cleaned = [" ".join(p.split()) for p in paragraphs]
    return "\n\n".join(p for p in cleaned if p)


def split_into_chunks(text: str, max_chunk_length: int = 4000) -> List[str]:
    """
    Greedy paragraph packing up to max_chunk_length; a single paragraph longer
    than the limit is cut on word boundaries.
    """
    pieces: List[str] = []
    for paragraph in re.split(r"\n\s*\n", text):
        paragraph = paragraph.strip()
        if not paragraph:
            continue
        while len(paragraph) > max_chunk_length:
            cut = paragraph.rfind(" ", 0, max_chunk_length)
            if cut <= 0:
                cut = max_chunk_length
            pieces.append(paragraph[:cut].strip())
            paragraph = paragraph[cut:].strip()
        if paragraph:
            pieces.append(paragraph)

    chunks: List[str] = []
    current = ""
    for piece in pieces:
        if current and len(current) + len(piece) + 2 > max_chunk_length:
            chunks.append(current)
            current = piece
        else:
            current = f"{current}\n\n{piece}" if current else piece
    if current:
        chunks.append(current)
    return chunks


def select_summarization_model(text: str, cfg: Optional[Dict[str, Any]] = None) -> str:
    cfg = cfg if cfg is not None else section("summarization")
    default = cfg.get("default_model", "facebook/bart-large-cnn")

    if len(text) > int(cfg.get("long_document_chars", 10000)):
        return default
    if _SCIENTIFIC.search(text):
        return cfg.get("scientific_model", "sshleifer/distilbart-cnn-12-6")
    if _CODE.search(text):
        return cfg.get("code_model", "google/pegasus-xsum")
    return default


async def extract_entities(text: str, client: InferenceClient) -> List[str]:
    """PER/ORG/LOC names from the NER model; [] on any failure."""
    cfg = section("summarization")
    try:
        data = await client.run(
            cfg.get("entity_model", "dslim/bert-base-NER"),
            text[: int(cfg.get("entity_input_chars", 5000))],
            timeout=float(cfg.get("entity_timeout", 10.0)),
        )
    except InferenceError as ex:
        logger.warning("entity extraction failed: %s", ex)
        return []

    entities: List[str] = []
    if isinstance(data, list):
        for item in data:
            if not isinstance(item, dict):
                continue
            group = item.get("entity_group")
            word = item.get("word")
            if group in ("PER", "ORG", "LOC") and word:
                word = word.lstrip("#")
                if word not in entities:
                    entities.append(word)
    return entities


async def _summarize_chunk(
    client: InferenceClient,
    model: str,
    chunk: str,
    parameters: Dict[str, Any],
    timeout: float,
) -> Optional[str]:
    try:
        data = await client.run(model, chunk, parameters=parameters, timeout=timeout)
    except InferenceError as ex:
        logger.error("chunk summarization failed: %s", ex)
        return None
    return first_text(data, "summary_text", "generated_text") or None


async def summarize_text(text: str, client: InferenceClient) -> Dict[str, Any]:
    """
    Summarize cleaned document text: pick a model, chunk, summarize the first
    few chunks concurrently, join in chunk order.
    """
    cfg = section("summarization")
    entities = await extract_entities(text, client)
    model = select_summarization_model(text, cfg)
    logger.info("selected summarization model %s", model)

    chunk_size = int(cfg.get("chunk_size", 4000))
    chunks = split_into_chunks(text, chunk_size) if len(text) > chunk_size else [text]
    max_chunks = int(cfg.get("max_chunks", 3))
    selected = chunks[:max_chunks]
    logger.info("document split into %d chunks, summarizing %d", len(chunks), len(selected))

    parameters = dict(cfg.get("parameters") or {})
    timeout = float(cfg.get("timeout", 60.0))
    results = await asyncio.gather(
        *(_summarize_chunk(client, model, chunk, parameters, timeout) for chunk in selected)
    )

    parts = [r if r else FAILED_CHUNK_SUMMARY for r in results]
    summary = "\n\n".join(parts).strip()
    if len(chunks) > len(selected):
        summary += "\n\n" + TRUNCATION_NOTE

    return {"summary": summary, "model_used": model, "entities": entities}


async def summarize_pdf(data: bytes, filename: str, client: InferenceClient) -> Dict[str, Any]:
    """
    Full PDF flow. Raises PdfExtractionError for unreadable files; every
    remote failure degrades inside the summary text instead.
    """
    cfg = section("summarization")
    pdf = await asyncio.to_thread(extract_pdf, data)
    text = clean_extracted_text(pdf["text"])
    logger.info("extracted %d characters from %s", len(text), filename)

    metadata = {
        "title": filename,
        "pageCount": pdf["page_count"],
        "wordCount": len(text.split()),
        "author": pdf["author"],
        "creationDate": pdf["creation_date"],
    }

    if len(text) < int(cfg.get("min_text_length", 100)):
        return {"summary": EMPTY_PDF_SUMMARY, "metadata": {**metadata, "wordCount": 0}}

    result = await summarize_text(text, client)
    body: Dict[str, Any] = {
        "summary": result["summary"],
        "metadata": metadata,
        "model_used": result["model_used"],
    }
    if result["entities"]:
        body["entities"] = result["entities"]
    return body
