"""Common splitter contract.

Concrete strategies only implement :meth:`TextSplitter.split_text`; the batch
handling (metadata alignment, copying, ordering) lives here once.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable
from collections.abc import Sequence
import copy
import logging
from typing import Any

from langchain_core.documents import BaseDocumentTransformer
from langchain_core.documents import Document as _LCDocument
from langchain_core.runnables.config import run_in_executor

from docsplit.core.config import SplitterOptions
from docsplit.core.errors import MetadataTextMismatch
from docsplit.core.tokenizers import Tokenizer
from docsplit.core.types import Document

__all__ = ["TextSplitter"]

logger = logging.getLogger(__name__)


class TextSplitter(BaseDocumentTransformer, ABC):
    """Turn texts (plus metadata) into chunked :class:`Document` objects.

    Instances are immutable after construction and safe to share between
    threads and tasks.
    """

    def __init__(self, options: SplitterOptions, tokenizer: Tokenizer):
        self._options = options
        self._tokenizer = tokenizer

    @property
    def options(self) -> SplitterOptions:
        return self._options

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def chunk_size(self) -> int:
        return self._options.chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self._options.chunk_overlap

    def count(self, text: str) -> int:
        """Size of ``text`` in this splitter's units."""
        return self._tokenizer.count(text)

    @abstractmethod
    def split_text(self, text: str) -> list[str]:
        """Split one text into chunks; ``""`` yields ``[]``."""

    def create_documents(
        self,
        texts: Sequence[str],
        metadatas: Sequence[dict[str, Any]] | None = None,
    ) -> list[Document]:
        """Split every text and attach a copy of its metadata to each chunk.

        An empty (or missing) ``metadatas`` means "no metadata" for every
        text. Otherwise both sequences must have the same length; the check
        runs before any splitting so a bad batch yields nothing.
        """
        texts = list(texts)
        metadatas = list(metadatas) if metadatas else [{} for _ in texts]
        if len(texts) != len(metadatas):
            raise MetadataTextMismatch(len(texts), len(metadatas))

        documents: list[Document] = []
        for text, metadata in zip(texts, metadatas):
            for chunk in self.split_text(text):
                documents.append(
                    Document(page_content=chunk, metadata=copy.deepcopy(metadata))
                )

        logger.debug(
            "%s split %d texts into %d chunks",
            type(self).__name__,
            len(texts),
            len(documents),
        )
        return documents

    def split_documents(self, documents: Iterable[_LCDocument]) -> list[Document]:
        """Split documents, keeping each chunk's source metadata."""
        texts: list[str] = []
        metadatas: list[dict[str, Any]] = []
        for doc in documents:
            texts.append(doc.page_content)
            metadatas.append(doc.metadata)
        return self.create_documents(texts, metadatas)

    def transform_documents(
        self, documents: Sequence[_LCDocument], **kwargs: Any
    ) -> Sequence[Document]:
        """langchain hook; identical to :meth:`split_documents`."""
        return self.split_documents(documents)

    # ------------------------------------------------------------------ #
    # Async variants                                                     #
    # ------------------------------------------------------------------ #
    async def asplit_text(self, text: str) -> list[str]:
        return await run_in_executor(None, self.split_text, text)

    async def acreate_documents(
        self,
        texts: Sequence[str],
        metadatas: Sequence[dict[str, Any]] | None = None,
    ) -> list[Document]:
        return await run_in_executor(None, self.create_documents, texts, metadatas)

    async def asplit_documents(
        self, documents: Iterable[_LCDocument]
    ) -> list[Document]:
        return await run_in_executor(None, self.split_documents, list(documents))

    async def atransform_documents(
        self, documents: Sequence[_LCDocument], **kwargs: Any
    ) -> Sequence[Document]:
        return await self.asplit_documents(documents)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(chunk_size={self.chunk_size}, "
            f"chunk_overlap={self.chunk_overlap}, tokenizer={self._tokenizer!r})"
        )
