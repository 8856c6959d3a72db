"""Split long documents into metadata-carrying chunks.

Usage::

    from docsplit import Document, MarkdownSplitter

    splitter = MarkdownSplitter(chunk_size=1000, chunk_overlap=100)
    chunks = splitter.split_documents([Document(text, metadata={"src": "a.md"})])
"""

from __future__ import annotations

from docsplit.core.config import Settings
from docsplit.core.config import SplitterOptions
from docsplit.core.errors import InvalidConfiguration
from docsplit.core.errors import MetadataTextMismatch
from docsplit.core.errors import TextSplitterError
from docsplit.core.errors import TokenizationFailure
from docsplit.core.tokenizers import CharacterTokenizer
from docsplit.core.tokenizers import TiktokenTokenizer
from docsplit.core.tokenizers import Tokenizer
from docsplit.core.types import Document
from docsplit.core.types import to_document
from docsplit.splitters import MarkdownSplitter
from docsplit.splitters import TextSplitter
from docsplit.splitters import TokenSplitter
from docsplit.splitters import get_splitter

__all__ = [
    "Document",
    "to_document",
    "Settings",
    "SplitterOptions",
    "TextSplitterError",
    "MetadataTextMismatch",
    "TokenizationFailure",
    "InvalidConfiguration",
    "Tokenizer",
    "CharacterTokenizer",
    "TiktokenTokenizer",
    "TextSplitter",
    "MarkdownSplitter",
    "TokenSplitter",
    "get_splitter",
]
