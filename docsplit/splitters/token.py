"""Token-count-bounded splitting with a sliding window."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from docsplit.core.config import Settings
from docsplit.core.config import SplitterOptions
from docsplit.core.tokenizers import TiktokenTokenizer
from docsplit.core.tokenizers import Tokenizer
from docsplit.splitters.base import TextSplitter

__all__ = ["TokenSplitter", "window_bounds"]

logger = logging.getLogger(__name__)


def window_bounds(
    offsets: Sequence[int],
    length: int,
    chunk_size: int,
    chunk_overlap: int,
) -> list[tuple[int, int]]:
    """Character spans of a sliding window over tokenized text.

    Args:
        offsets: Start offset of every unit, as returned by a tokenizer.
        length: Length of the text the offsets refer to.
        chunk_size: Units per window.
        chunk_overlap: Units shared by consecutive windows.

    Returns:
        ``(start, end)`` pairs. Windows advance by ``chunk_size - chunk_overlap``
        units and stop once one reaches the end of the text.

    Example:
        >>> window_bounds(range(25), 25, chunk_size=10, chunk_overlap=2)
        [(0, 10), (8, 18), (16, 25)]
    """
    n = len(offsets)
    if n == 0:
        return []

    bounds: list[tuple[int, int]] = []
    step = chunk_size - chunk_overlap
    for start in range(0, n, step):
        end = start + chunk_size
        lo = 0 if start == 0 else offsets[start]
        hi = offsets[end] if end < n else length
        # A character split over several tokens can leave a window empty.
        if hi > lo:
            bounds.append((lo, hi))
        if end >= n:
            break
    return bounds


class TokenSplitter(TextSplitter):
    """Split text into windows of at most ``chunk_size`` tokens.

    Consecutive chunks share ``chunk_overlap`` tokens. Chunks are sliced out
    of the original string at token boundaries, so dropping each chunk's
    overlap and concatenating gives back the input exactly.
    """

    def __init__(
        self,
        chunk_size: int = 512,
        chunk_overlap: int = 0,
        *,
        tokenizer: Tokenizer | None = None,
        encoding_name: str = "cl100k_base",
        model_name: str | None = None,
    ):
        options = SplitterOptions(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        if tokenizer is None:
            tokenizer = TiktokenTokenizer(
                encoding_name=encoding_name, model_name=model_name
            )
        super().__init__(options, tokenizer)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs) -> TokenSplitter:
        """Build a splitter from :class:`Settings`; ``kwargs`` win."""
        settings = settings or Settings()
        params = {
            "chunk_size": settings.chunk_size,
            "chunk_overlap": settings.chunk_overlap,
            "encoding_name": settings.encoding_name,
            "model_name": settings.model_name,
        }
        params.update(kwargs)
        return cls(**params)

    def split_text(self, text: str) -> list[str]:
        if not text:
            return []
        offsets = self._tokenizer.offsets(text)
        bounds = window_bounds(offsets, len(text), self.chunk_size, self.chunk_overlap)
        logger.debug("Split %d tokens into %d windows", len(offsets), len(bounds))
        return [text[lo:hi] for lo, hi in bounds]
