"""Splitter configuration.

Two layers:

* :class:`SplitterOptions` - the immutable per-splitter options validated at
  construction time.
* :class:`Settings` - process-wide defaults (12-factor style) used when a
  splitter is built through ``from_settings``.

Environment variables (all optional, prefix ``DOCSPLIT_``):

* ``DOCSPLIT_CHUNK_SIZE``    - default: ``512``
* ``DOCSPLIT_CHUNK_OVERLAP`` - default: ``50``
* ``DOCSPLIT_ENCODING_NAME`` - default: ``"cl100k_base"``
* ``DOCSPLIT_MODEL_NAME``    - optional; wins over the encoding name when set

Test environment variables:

* ``DOCSPLIT_TEST_CHUNK_SIZE``    - default: uses CHUNK_SIZE value
* ``DOCSPLIT_TEST_CHUNK_OVERLAP`` - default: uses CHUNK_OVERLAP value

Usage:

    from docsplit.core.config import Settings
    settings = Settings()  # auto-loads & validates env vars

    # For tests:
    test_settings = Settings.for_testing()
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import model_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from docsplit.core.errors import InvalidConfiguration

__all__ = ["SplitterOptions", "Settings"]


class SplitterOptions(BaseModel):
    """Chunking knobs owned by one splitter instance.

    ``chunk_size`` and ``chunk_overlap`` are measured in the splitter's
    tokenizer units (characters or tokens).
    """

    model_config = ConfigDict(frozen=True)

    chunk_size: int
    chunk_overlap: int = 0
    separators: tuple[str, ...] | None = None
    is_separator_regex: bool = False

    @model_validator(mode="after")
    def _check_sizes(self) -> SplitterOptions:
        # InvalidConfiguration is not a ValueError, so pydantic re-raises it
        # unchanged instead of folding it into a ValidationError.
        if self.chunk_size <= 0:
            raise InvalidConfiguration(
                f"chunk_size must be positive, got {self.chunk_size}"
            )
        if self.chunk_overlap < 0:
            raise InvalidConfiguration(
                f"chunk_overlap must be non-negative, got {self.chunk_overlap}"
            )
        if self.chunk_overlap >= self.chunk_size:
            raise InvalidConfiguration(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        if self.separators is not None and not self.separators:
            raise InvalidConfiguration("separators must not be an empty list")
        return self


class Settings(BaseSettings):
    """Typed view over process environment."""

    model_config = SettingsConfigDict(
        env_prefix="DOCSPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    chunk_size: int = 512
    chunk_overlap: int = 50

    encoding_name: str = "cl100k_base"
    model_name: str | None = None

    # Test-specific environment variables
    test_chunk_size: int | None = None
    test_chunk_overlap: int | None = None

    @classmethod
    def for_testing(cls) -> Settings:
        """Returns a Settings instance configured for testing.

        Uses TEST_* environment variables when available, falling back to
        regular values if not set.
        """
        settings = cls()

        if settings.test_chunk_size is not None:
            settings.chunk_size = settings.test_chunk_size
        if settings.test_chunk_overlap is not None:
            settings.chunk_overlap = settings.test_chunk_overlap

        return settings

    def options(self, **overrides) -> SplitterOptions:
        """Build validated :class:`SplitterOptions` from these settings."""
        values = {"chunk_size": self.chunk_size, "chunk_overlap": self.chunk_overlap}
        values.update(overrides)
        return SplitterOptions(**values)
