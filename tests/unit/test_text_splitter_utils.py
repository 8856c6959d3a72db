from __future__ import annotations

import pytest

from docsplit.utils import text_splitter


@pytest.fixture(autouse=True)
def _fresh_default_splitters():
    """The helpers cache splitters built from ``Settings``; reset per test."""
    text_splitter._markdown_splitter.cache_clear()
    text_splitter._token_splitter.cache_clear()
    yield
    text_splitter._markdown_splitter.cache_clear()
    text_splitter._token_splitter.cache_clear()


def test_split_markdown_keeps_small_notes_whole():
    assert text_splitter.split_markdown("# Title\n\nThis is a test.") == [
        "# Title\n\nThis is a test."
    ]


def test_split_markdown_honours_settings(monkeypatch):
    monkeypatch.setenv("DOCSPLIT_CHUNK_SIZE", "20")
    monkeypatch.setenv("DOCSPLIT_CHUNK_OVERLAP", "0")
    text = "# One\n\nfirst part\n\n# Two\n\nsecond part"

    chunks = text_splitter.split_markdown(text)

    assert chunks == ["# One\n\nfirst part\n\n", "# Two\n\nsecond part"]


def test_split_tokens_uses_configured_encoding(monkeypatch, mock_get_encoding):
    monkeypatch.setenv("DOCSPLIT_CHUNK_SIZE", "2")
    monkeypatch.setenv("DOCSPLIT_CHUNK_OVERLAP", "0")
    monkeypatch.setenv("DOCSPLIT_ENCODING_NAME", "p50k_base")

    chunks = text_splitter.split_tokens("alpha beta gamma")

    assert chunks == ["alpha beta", " gamma"]
    mock_get_encoding.assert_called_once_with("p50k_base")
