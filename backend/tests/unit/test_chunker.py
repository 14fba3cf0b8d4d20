"""Unit tests for the fixed-window Chunker."""

import math

import pytest

from app.application.services.chunker import Chunker
from app.domain.entities import ChunkMetadata, Document
from app.domain.exceptions import ChunkingConfigurationError


def _doc(text: str) -> Document:
    return Document(id="note:1", text=text, source="notes")


def _expected_count(length: int, size: int, overlap: int) -> int:
    if length == 0:
        return 0
    if length > overlap:
        return math.ceil((length - overlap) / (size - overlap))
    return 1


@pytest.mark.parametrize("length", [0, 1, 99, 100, 101, 699, 700, 799, 800, 801, 1500, 1501, 5000])
def test_chunk_count_matches_formula(length: int):
    chunker = Chunker(800, 100)
    chunks = chunker.chunk(_doc("x" * length))
    assert len(chunks) == _expected_count(length, 800, 100)


@pytest.mark.parametrize("size,overlap", [(10, 3), (800, 100), (5, 0), (7, 6)])
def test_windows_cover_text_without_gaps(size: int, overlap: int):
    text = "".join(chr(ord("a") + i % 26) for i in range(123))
    chunker = Chunker(size, overlap)
    windows = chunker.split_text(text)

    covered_to = 0
    start = 0
    for window in windows:
        assert start <= covered_to, "gap before window"
        assert text[start : start + len(window)] == window
        assert len(window) <= size
        covered_to = max(covered_to, start + len(window))
        start += size - overlap
    assert covered_to == len(text)


def test_short_text_yields_single_chunk_with_full_text():
    chunks = Chunker().chunk(_doc("Contact Jane Doe"))
    assert len(chunks) == 1
    assert chunks[0].text == "Contact Jane Doe"


def test_empty_text_yields_no_chunks():
    assert Chunker().chunk(_doc("")) == []


def test_consecutive_chunks_share_overlap():
    text = "".join(str(i % 10) for i in range(1000))
    first, second = Chunker(800, 100).chunk(_doc(text))
    assert first.text[-100:] == second.text[:100]
    assert second.text == text[700:]


def test_metadata_inherited_from_document():
    doc = Document(id="deal:42", text="y" * 2000, source="deals")
    chunks = Chunker().chunk(doc)
    assert chunks
    assert all(c.metadata == ChunkMetadata(id="deal:42", source="deals") for c in chunks)


def test_chunk_many_preserves_document_order():
    docs = [
        Document(id="contact:1", text="a" * 900, source="contacts"),
        Document(id="company:1", text="", source="companies"),
        Document(id="task:1", text="Task call", source="tasks"),
    ]
    chunks = Chunker().chunk_many(docs)
    assert [c.metadata.id for c in chunks] == ["contact:1", "contact:1", "task:1"]


@pytest.mark.parametrize("size,overlap", [(100, 100), (100, 150), (0, 0), (-5, 0), (100, -1)])
def test_invalid_parameters_raise(size: int, overlap: int):
    with pytest.raises(ChunkingConfigurationError):
        Chunker(size, overlap)
