"""Consistent chunking strategy shared by loaders & indexing jobs."""

from __future__ import annotations

from functools import lru_cache

from docsplit.core.config import Settings
from docsplit.splitters.markdown import MarkdownSplitter
from docsplit.splitters.token import TokenSplitter

__all__ = ["split_markdown", "split_tokens"]


@lru_cache(maxsize=1)
def _markdown_splitter() -> MarkdownSplitter:
    return MarkdownSplitter.from_settings(Settings())


@lru_cache(maxsize=1)
def _token_splitter() -> TokenSplitter:
    return TokenSplitter.from_settings(Settings())


def split_markdown(text: str) -> list[str]:
    """Return a list of *overlapping* chunks suitable for embedding."""
    return _markdown_splitter().split_text(text)


def split_tokens(text: str) -> list[str]:
    """Return token windows sized by the configured tiktoken encoding."""
    return _token_splitter().split_text(text)
