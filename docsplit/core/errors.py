"""Failure kinds raised by the splitters.

Every error is a subclass of :class:`TextSplitterError` so callers can catch
the whole family at once or branch on the specific kind. None of them are
retriable.
"""

from __future__ import annotations

__all__ = [
    "TextSplitterError",
    "MetadataTextMismatch",
    "TokenizationFailure",
    "InvalidConfiguration",
]


class TextSplitterError(Exception):
    """Base class for all splitter failures."""


class MetadataTextMismatch(TextSplitterError):
    """``texts`` and ``metadatas`` have different lengths."""

    def __init__(self, texts: int, metadatas: int):
        self.texts = texts
        self.metadatas = metadatas
        super().__init__(
            f"Got {texts} texts but {metadatas} metadatas; lengths must match."
        )


class TokenizationFailure(TextSplitterError):
    """The measurement function could not process the input."""


class InvalidConfiguration(TextSplitterError):
    """Splitter options are out of range (e.g. ``chunk_overlap >= chunk_size``)."""
