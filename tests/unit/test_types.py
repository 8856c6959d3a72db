from __future__ import annotations

from langchain_core.documents import Document as LCDocument

from docsplit.core.types import Document
from docsplit.core.types import to_document


def test_document_from_text_has_empty_metadata():
    doc = Document("hello")
    assert doc.page_content == "hello"
    assert doc.metadata == {}


def test_document_is_a_langchain_document():
    """Chunks must be accepted anywhere langchain expects a Document."""
    assert isinstance(Document("x"), LCDocument)


def test_with_metadata_returns_merged_copy():
    """The receiver stays untouched; new keys win over old ones."""
    original = Document("x", metadata={"src": "a", "page": 1})
    updated = original.with_metadata({"page": 2, "lang": "en"})

    assert updated is not original
    assert updated.page_content == "x"
    assert updated.metadata == {"src": "a", "page": 2, "lang": "en"}
    assert original.metadata == {"src": "a", "page": 1}


def test_metadata_accepts_json_like_values():
    meta = {
        "s": "str",
        "n": 1.5,
        "b": True,
        "none": None,
        "arr": [1, "two", {"three": 3}],
        "obj": {"nested": {"k": "v"}},
    }
    assert Document("x", metadata=meta).metadata == meta


def test_to_document_does_not_mutate_input():
    data = {"content": "body", "source": "notes.md", "tags": ["a"]}
    doc = to_document(data)

    assert doc.page_content == "body"
    assert doc.metadata == {"source": "notes.md", "tags": ["a"]}
    assert "content" in data
