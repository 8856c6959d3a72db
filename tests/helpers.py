from __future__ import annotations

import re

from docsplit.core.config import Settings


def get_test_settings() -> Settings:
    """Returns a Settings instance for testing.

    Automatically uses DOCSPLIT_TEST_* environment variables when available.
    """
    return Settings.for_testing()


class FakeEncoding:
    """Word-level stand-in for ``tiktoken.Encoding``.

    Every token is a word together with the whitespace before it, so
    ``"alpha beta"`` encodes to ``["alpha", " beta"]``. Only the methods the
    tokenizer wrapper calls are provided.
    """

    _TOKEN_RE = re.compile(r"\s*\S+|\s+")

    def __init__(self):
        self._ids: dict[str, int] = {}
        self._pieces: list[str] = []

    def encode(self, text: str, *, disallowed_special=()) -> list[int]:
        tokens = []
        for piece in self._TOKEN_RE.findall(text):
            if piece not in self._ids:
                self._ids[piece] = len(self._pieces)
                self._pieces.append(piece)
            tokens.append(self._ids[piece])
        return tokens

    def decode_with_offsets(self, tokens: list[int]) -> tuple[str, list[int]]:
        offsets = []
        pos = 0
        for token in tokens:
            offsets.append(pos)
            pos += len(self._pieces[token])
        return "".join(self._pieces[t] for t in tokens), offsets


def drop_overlap(chunks: list[str], overlap: int) -> str:
    """Rebuild a text from sliding-window character chunks."""
    if not chunks:
        return ""
    return chunks[0] + "".join(chunk[overlap:] for chunk in chunks[1:])
