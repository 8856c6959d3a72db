"""Domain models shared across the package."""

from __future__ import annotations

from typing import Any

from langchain_core.documents import Document as _LCDocument

__all__ = ["Document", "to_document"]


class Document(_LCDocument):
    """A piece of text plus JSON-like metadata.

    Thin subclass of the langchain ``Document`` so chunks can be handed
    directly to vector stores and retrievers.
    """

    def with_metadata(self, metadata: dict[str, Any]) -> Document:
        """Return a copy carrying ``metadata`` merged over the current one."""
        return self.model_copy(update={"metadata": {**self.metadata, **metadata}})


def to_document(data: dict) -> Document:
    """Convert a dictionary to a Document.

    The `page_content` will be the `content` field, and the rest of
    the fields will be stored in the `metadata` attribute.
    """
    # Create a copy to avoid mutating the original dictionary
    data_copy = data.copy()
    return Document(page_content=data_copy.pop("content"), metadata=data_copy)
