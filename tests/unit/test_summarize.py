import io
from unittest.mock import patch

import pytest
from pypdf import PdfWriter

from pulseboard_backend.app.services.summarize import (
    EMPTY_PDF_SUMMARY,
    FAILED_CHUNK_SUMMARY,
    TRUNCATION_NOTE,
    PdfExtractionError,
    clean_extracted_text,
    extract_pdf,
    select_summarization_model,
    split_into_chunks,
    summarize_pdf,
    summarize_text,
)

DEFAULT_MODEL = "facebook/bart-large-cnn"
NER_MODEL = "dslim/bert-base-NER"


def _blank_pdf() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def _paragraphs(n: int, size: int = 1500) -> str:
    return "\n\n".join((f"P{i} " + "word " * size)[:size].strip() for i in range(n))


def test_clean_extracted_text_keeps_paragraphs():
    raw = (
        "Quarterly results were strong and the com-\npany grew revenue.\n"
        "12\n"
        "Page 3\n"
        "See https://example.com/report for details.\n\n"
        "Second   paragraph\nspans lines."
    )

    cleaned = clean_extracted_text(raw)

    assert cleaned == (
        "Quarterly results were strong and the company grew revenue. See for details."
        "\n\nSecond paragraph spans lines."
    )


def test_split_packs_paragraphs_up_to_limit():
    text = "\n\n".join(["a" * 30, "b" * 30, "c" * 30])

    chunks = split_into_chunks(text, max_chunk_length=70)

    assert chunks == ["a" * 30 + "\n\n" + "b" * 30, "c" * 30]


def test_split_hard_cuts_oversized_paragraph():
    text = " ".join(["word"] * 100)  # 499 chars, one paragraph

    chunks = split_into_chunks(text, max_chunk_length=100)

    assert len(chunks) > 1
    assert all(len(c) <= 100 for c in chunks)
    assert " ".join(chunks).split() == text.split()


@pytest.mark.parametrize("text,model", [
    ("A short note about lunch.", DEFAULT_MODEL),
    ("Our methodology and statistical analysis show ...", "sshleifer/distilbart-cnn-12-6"),
    ("def main(): import os", "google/pegasus-xsum"),
    ("algorithm " * 2000, DEFAULT_MODEL),
])
def test_select_summarization_model(text, model):
    assert select_summarization_model(text) == model


@pytest.mark.asyncio
async def test_chunks_summarized_in_order_with_truncation_note(hub, hf_client):
    hub.on(NER_MODEL, [
        {"entity_group": "ORG", "word": "Acme"},
        {"entity_group": "PER", "word": "##Ada"},
        {"entity_group": "ORG", "word": "Acme"},
        {"entity_group": "MISC", "word": "Euro"},
    ])
    hub.on(DEFAULT_MODEL, lambda payload: [{"summary_text": "S-" + payload["inputs"][:2]}])

    # five ~3500-char chunks, only the first three are summarized
    text = _paragraphs(5, size=3500)
    result = await summarize_text(text, hf_client)

    assert result["model_used"] == DEFAULT_MODEL
    assert result["entities"] == ["Acme", "Ada"]
    assert result["summary"] == "S-P0\n\nS-P1\n\nS-P2\n\n" + TRUNCATION_NOTE
    assert hub.models_called.count(DEFAULT_MODEL) == 3


@pytest.mark.asyncio
async def test_failed_chunk_gets_placeholder(hub, hf_client):
    def summarizer(payload):
        if payload["inputs"].startswith("P1"):
            return 500
        return [{"summary_text": "ok"}]

    hub.on(DEFAULT_MODEL, summarizer)

    result = await summarize_text(_paragraphs(3, size=3500), hf_client)

    assert result["summary"] == f"ok\n\n{FAILED_CHUNK_SUMMARY}\n\nok"
    assert result["entities"] == []


@pytest.mark.asyncio
async def test_empty_pdf_short_circuits(hub, hf_client):
    out = await summarize_pdf(_blank_pdf(), "blank.pdf", hf_client)

    assert out["summary"] == EMPTY_PDF_SUMMARY
    assert out["metadata"]["title"] == "blank.pdf"
    assert out["metadata"]["pageCount"] == 1
    assert out["metadata"]["wordCount"] == 0
    assert hub.calls == []


@pytest.mark.asyncio
async def test_pdf_text_flows_into_summary(hub, hf_client):
    hub.on(DEFAULT_MODEL, [{"summary_text": "A short summary."}])
    fake = {
        "text": "This quarter we opened two new stores and hired forty people. " * 5,
        "page_count": 2,
        "author": "Ada",
        "creation_date": "D:20260101000000",
    }

    with patch("pulseboard_backend.app.services.summarize.extract_pdf", return_value=fake):
        out = await summarize_pdf(b"%PDF-fake", "report.pdf", hf_client)

    assert out["summary"] == "A short summary."
    assert out["model_used"] == DEFAULT_MODEL
    assert out["metadata"]["author"] == "Ada"
    assert out["metadata"]["pageCount"] == 2
    assert out["metadata"]["wordCount"] == 55
    assert "entities" not in out


def test_garbage_bytes_raise_extraction_error():
    with pytest.raises(PdfExtractionError):
        extract_pdf(b"definitely not a pdf")
