"""Splitting strategies and a factory to pick one by name."""

from __future__ import annotations

from typing import Any
from typing import Literal

from docsplit.core.errors import InvalidConfiguration
from docsplit.splitters.base import TextSplitter
from docsplit.splitters.markdown import MARKDOWN_SEPARATORS
from docsplit.splitters.markdown import MarkdownSplitter
from docsplit.splitters.token import TokenSplitter

__all__ = [
    "TextSplitter",
    "MarkdownSplitter",
    "TokenSplitter",
    "MARKDOWN_SEPARATORS",
    "get_splitter",
]

SplitterKind = Literal["markdown", "token"]

_STRATEGIES: dict[str, type[TextSplitter]] = {
    "markdown": MarkdownSplitter,
    "token": TokenSplitter,
}


def get_splitter(kind: SplitterKind, **options: Any) -> TextSplitter:
    """Instantiate the strategy registered under ``kind``."""
    try:
        cls = _STRATEGIES[kind]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown splitter {kind!r}; expected one of {sorted(_STRATEGIES)}"
        ) from None
    return cls(**options)
