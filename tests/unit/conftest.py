from __future__ import annotations

import pytest

from docsplit.core.tokenizers import CharacterTokenizer
from tests.helpers import FakeEncoding


@pytest.fixture
def char_tokenizer() -> CharacterTokenizer:
    """One unit per character."""
    return CharacterTokenizer()


@pytest.fixture
def fake_encoding() -> FakeEncoding:
    """A fresh word-level encoding."""
    return FakeEncoding()


@pytest.fixture
def mock_get_encoding(mocker, fake_encoding):
    """Route ``tiktoken.get_encoding`` to the word-level fake."""
    return mocker.patch(
        "docsplit.core.tokenizers.tiktoken.get_encoding", return_value=fake_encoding
    )


@pytest.fixture
def mock_encoding_for_model(mocker, fake_encoding):
    """Route ``tiktoken.encoding_for_model`` to the word-level fake."""
    return mocker.patch(
        "docsplit.core.tokenizers.tiktoken.encoding_for_model",
        return_value=fake_encoding,
    )
