"""Measurement functions used to size chunks.

A tokenizer reports where each of its units starts inside a text. The unit
count is the size the splitters compare against ``chunk_size``, and the
offsets let chunks be cut straight out of the original string, so no text
is ever re-encoded or altered on the way out.
"""

from __future__ import annotations

from typing import Protocol
from typing import runtime_checkable

import tiktoken

from docsplit.core.errors import TokenizationFailure

__all__ = ["Tokenizer", "CharacterTokenizer", "TiktokenTokenizer"]


@runtime_checkable
class Tokenizer(Protocol):
    """Anything that can split text into ordered, measurable units."""

    def offsets(self, text: str) -> list[int]:
        """Return the non-decreasing character offset where each unit starts."""
        ...

    def count(self, text: str) -> int:
        """Return the number of units in ``text``."""
        ...


class CharacterTokenizer:
    """One unit per character."""

    def offsets(self, text: str) -> list[int]:
        return list(range(len(text)))

    def count(self, text: str) -> int:
        return len(text)

    def __repr__(self) -> str:
        return "CharacterTokenizer()"


class TiktokenTokenizer:
    """BPE token units from a ``tiktoken`` encoding.

    The encoding is resolved on first use: ``model_name`` wins when given,
    otherwise ``encoding_name`` is used. Special-token text (``<|endoftext|>``
    and friends) is treated as ordinary text.
    """

    def __init__(
        self, encoding_name: str = "cl100k_base", model_name: str | None = None
    ):
        self.encoding_name = encoding_name
        self.model_name = model_name
        self._encoding: tiktoken.Encoding | None = None

    @property
    def encoding(self) -> tiktoken.Encoding:
        if self._encoding is None:
            try:
                if self.model_name:
                    self._encoding = tiktoken.encoding_for_model(self.model_name)
                else:
                    self._encoding = tiktoken.get_encoding(self.encoding_name)
            except (KeyError, ValueError, OSError) as e:
                raise TokenizationFailure(
                    f"Could not load tiktoken encoding for {self._label()}: {e}"
                ) from e
        return self._encoding

    def _label(self) -> str:
        if self.model_name:
            return f"model {self.model_name!r}"
        return repr(self.encoding_name)

    def _encode(self, text: str) -> list[int]:
        try:
            return self.encoding.encode(text, disallowed_special=())
        except (UnicodeError, ValueError) as e:
            raise TokenizationFailure(f"Could not tokenize input: {e}") from e

    def offsets(self, text: str) -> list[int]:
        tokens = self._encode(text)
        try:
            decoded, offsets = self.encoding.decode_with_offsets(tokens)
        except UnicodeDecodeError as e:
            raise TokenizationFailure(f"Tokens do not decode to valid UTF-8: {e}") from e
        # tiktoken silently replaces lone surrogates; offsets would then
        # point into a different string.
        if decoded != text:
            raise TokenizationFailure(
                "Input does not round-trip through the tokenizer "
                "(malformed or unpaired surrogate characters?)"
            )
        return offsets

    def count(self, text: str) -> int:
        return len(self._encode(text))

    def __repr__(self) -> str:
        return f"TiktokenTokenizer({self._label()})"
