"""Markdown-structure-aware splitting.

Recursive separator splitting is delegated to langchain's
``RecursiveCharacterTextSplitter``. Text is cut at the coarsest markdown
boundary that helps: headings first (H1 down to H6), then code fences and
horizontal rules, paragraphs, list items, lines, sentences and finally words.
Pieces that are still too large recurse into the next boundary kind and small
neighbours are merged back together. Whatever no separator can reduce goes
through the sliding window from :mod:`docsplit.splitters.token`.

Closed code fences are never cut. Before splitting, each fence is swapped for
a single private-use placeholder character that no separator matches, and the
placeholder is measured as the fence it stands for. A fence larger than
``chunk_size`` becomes a chunk of its own. The newlines that close a heading
line are masked the same way, so a heading stays with the first text below it.

The split happens *before* each separator match and the matched text opens
the next piece (``keep_separator="start"``). The default separators are
zero-width, so a heading line starts its piece and a paragraph keeps its
trailing blank line. Nothing is stripped: with ``chunk_overlap=0`` the chunks
concatenate back to the input.

Overlap is added after the split. Every chunk except an oversized fence is
prefixed with the last ``chunk_overlap`` tokenizer units of the chunk before
it, so the pieces are sized to ``chunk_size - chunk_overlap``.
"""

from __future__ import annotations

from collections.abc import Iterator
from collections.abc import Sequence
import itertools
import logging
import re

from langchain_text_splitters import RecursiveCharacterTextSplitter

from docsplit.core.config import Settings
from docsplit.core.config import SplitterOptions
from docsplit.core.errors import InvalidConfiguration
from docsplit.core.tokenizers import CharacterTokenizer
from docsplit.core.tokenizers import TiktokenTokenizer
from docsplit.core.tokenizers import Tokenizer
from docsplit.splitters.base import TextSplitter
from docsplit.splitters.token import window_bounds

__all__ = ["MarkdownSplitter", "MARKDOWN_SEPARATORS", "fence_spans"]

logger = logging.getLogger(__name__)

Span = tuple[int, int]

# Unicode private-use planes; masked fences and heading breaks live here.
_PRIVATE_USE = f"{chr(0xE000)}-{chr(0xF8FF)}{chr(0xF0000)}-{chr(0xFFFFD)}"

# Patterns are wrapped in a capturing group by langchain, so they must not
# contain capturing groups of their own.
MARKDOWN_SEPARATORS: tuple[str, ...] = (
    # Headings, coarsest first
    r"(?<=\n)(?=[ ]{0,3}#[ \t])",
    r"(?<=\n)(?=[ ]{0,3}##[ \t])",
    r"(?<=\n)(?=[ ]{0,3}###[ \t])",
    r"(?<=\n)(?=[ ]{0,3}####[ \t])",
    r"(?<=\n)(?=[ ]{0,3}#####[ \t])",
    r"(?<=\n)(?=[ ]{0,3}######[ \t])",
    # Code fences, masked or unclosed
    rf"(?<=\n)(?=[{_PRIVATE_USE}]|[ ]{{0,3}}(?:```|~~~))",
    # Horizontal rules
    r"(?<=\n)(?=[ ]{0,3}(?:(?:\*[ \t]*){3,}|(?:-[ \t]*){3,}|(?:_[ \t]*){3,})(?:\n|$))",
    # Paragraphs
    r"(?<=\n\n)(?=[^\n])",
    # List items
    r"(?<=\n)(?=[ \t]*(?:[-*+]|\d{1,9}[.)])[ \t])",
    # Lines
    r"(?<=\n)(?=[^\n])",
    # Sentences
    r"(?<=[.!?][ \t])(?=[^ \t\n])",
    # Words
    r"(?<=[ \t])(?=[^ \t])",
)

_FENCE_RE = re.compile(
    r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})[^\n]*\n.*?^[ ]{0,3}(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)

# A heading line and the newlines after it, when body text follows.
_HEADING_BREAK_RE = re.compile(
    r"^([ ]{0,3}#{1,6}[ \t][^\n]*)(\n+)(?=[ \t]*[^#\s])",
    re.MULTILINE,
)


def fence_spans(text: str) -> list[Span]:
    """Spans of every *closed* fenced code block in ``text``.

    An opening fence without a matching close is ignored, so the rest of the
    document is split as plain text.
    """
    return [m.span() for m in _FENCE_RE.finditer(text)]


def _free_chars(text: str) -> Iterator[str]:
    used = set(text)
    for code in itertools.chain(range(0xE000, 0xF900), range(0xF0000, 0xFFFFE)):
        char = chr(code)
        if char not in used:
            yield char


def _mask(text: str) -> tuple[str, dict[str, str], dict[int, str]]:
    """Swap closed fences and heading line breaks for placeholder characters.

    Returns the masked text, the fence placeholders mapped to their source,
    and a ``str.translate`` table that restores the original text.
    """
    free = _free_chars(text)
    fences: dict[str, str] = {}
    parts: list[str] = []
    pos = 0
    for start, end in fence_spans(text):
        placeholder = next(free)
        fences[placeholder] = text[start:end]
        parts += [text[pos:start], placeholder]
        pos = end
    parts.append(text[pos:])

    newline = next(free)
    masked = _HEADING_BREAK_RE.sub(
        lambda m: m.group(1) + newline * len(m.group(2)), "".join(parts)
    )
    table = {ord(placeholder): source for placeholder, source in fences.items()}
    table[ord(newline)] = "\n"
    return masked, fences, table


class MarkdownSplitter(TextSplitter):
    """Split markdown at structural boundaries before falling back to size.

    Args:
        chunk_size: Maximum chunk size in tokenizer units.
        chunk_overlap: Units of the previous chunk repeated at the start of
            the next one.
        separators: Ordered separator preference list, most preferred
            first. Defaults to :data:`MARKDOWN_SEPARATORS`.
        is_separator_regex: Treat ``separators`` as regular expressions.
            Plain strings are escaped. The defaults are always regexes.
        tokenizer: Measurement function. Defaults to one unit per character.
    """

    def __init__(
        self,
        chunk_size: int = 512,
        chunk_overlap: int = 0,
        *,
        separators: Sequence[str] | None = None,
        is_separator_regex: bool = False,
        tokenizer: Tokenizer | None = None,
    ):
        if separators is None:
            separators = MARKDOWN_SEPARATORS
            is_separator_regex = True
        options = SplitterOptions(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=tuple(separators),
            is_separator_regex=is_separator_regex,
        )
        super().__init__(options, tokenizer or CharacterTokenizer())
        self._patterns = [
            sep if is_separator_regex else re.escape(sep) for sep in options.separators
        ]
        try:
            for pattern in self._patterns:
                re.compile(pattern)
        except re.error as e:
            raise InvalidConfiguration(f"Invalid separator pattern: {e}") from e
        # Room left for the overlap prefix.
        self._budget = chunk_size - chunk_overlap

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        use_tokens: bool = False,
        **kwargs,
    ) -> MarkdownSplitter:
        """Build a splitter from :class:`Settings`; ``kwargs`` win.

        With ``use_tokens`` the chunk size is counted in tiktoken tokens of
        the configured encoding instead of characters.
        """
        settings = settings or Settings()
        params = {
            "chunk_size": settings.chunk_size,
            "chunk_overlap": settings.chunk_overlap,
        }
        if use_tokens:
            params["tokenizer"] = TiktokenTokenizer(
                encoding_name=settings.encoding_name, model_name=settings.model_name
            )
        params.update(kwargs)
        return cls(**params)

    def split_text(self, text: str) -> list[str]:
        if not text:
            return []
        masked, fences, table = _mask(text)

        def measure(piece: str) -> int:
            return self._tokenizer.count(piece.translate(table))

        splitter = RecursiveCharacterTextSplitter(
            separators=self._patterns,
            is_separator_regex=True,
            keep_separator="start",
            strip_whitespace=False,
            chunk_size=self._budget,
            chunk_overlap=0,
            length_function=measure,
        )
        pieces: list[str] = []
        for piece in splitter.split_text(masked):
            if measure(piece) <= self._budget:
                pieces.append(piece.translate(table))
            else:
                pieces.extend(self._split_atom(piece, fences, table))

        chunks = self._add_overlap(self._absorb_blank(pieces))
        logger.debug("Split %d characters into %d markdown chunks", len(text), len(chunks))
        return chunks

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #
    def _split_atom(
        self, piece: str, fences: dict[str, str], table: dict[int, str]
    ) -> list[str]:
        """Terminal step for a masked piece no separator could reduce.

        Fences come out whole; the text around them is cut into windows.
        """
        parts = [piece]
        if fences:
            parts = re.split(f"([{''.join(fences)}])", piece)

        out: list[str] = []
        for part in parts:
            if not part:
                continue
            if part in fences:
                fence = fences[part]
                logger.debug("Keeping oversized code fence of %d characters whole", len(fence))
                out.append(fence)
                continue
            plain = part.translate(table)
            offsets = self._tokenizer.offsets(plain)
            out.extend(
                plain[lo:hi]
                for lo, hi in window_bounds(offsets, len(plain), self._budget, 0)
            )
        return out

    def _absorb_blank(self, pieces: list[str]) -> list[str]:
        """Fold whitespace-only pieces into a neighbour when the result fits."""
        out: list[str] = []
        for piece in pieces:
            if (
                out
                and (not out[-1].strip() or not piece.strip())
                and self.count(out[-1] + piece) <= self._budget
            ):
                out[-1] += piece
            else:
                out.append(piece)
        return out

    def _add_overlap(self, pieces: list[str]) -> list[str]:
        """Prefix each piece with the last ``chunk_overlap`` units of its predecessor.

        An oversized fence is left as it is.
        """
        k = self.chunk_overlap
        if not k or not pieces:
            return pieces

        chunks = [pieces[0]]
        for piece in pieces[1:]:
            if self.count(piece) > self._budget:
                chunks.append(piece)
                continue
            prev = chunks[-1]
            offsets = self._tokenizer.offsets(prev)
            seed = prev[offsets[-k]:] if len(offsets) > k else prev
            chunks.append(seed + piece)
        return chunks
