"""
pytest configuration for the agent / vectorstores test suite.

Sets PYTHONPATH so tests can import from the project root without installing.
No test talks to a real model or HTTP service: models are langchain_core fakes
or MagicMocks, the environment is a plain dict handed in as getenv.

asyncio_mode = "auto" (pyproject.toml) means async test functions are
collected as asyncio tests without @pytest.mark.asyncio.
"""
import os
import sys

import pytest
from langchain_core.embeddings import Embeddings
from langchain_core.tools import tool

# Ensure the project root is on sys.path so `import agent` and `import vectorstores` work
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))


@tool
def word_length(word: str) -> str:
    """Return the number of characters in a word."""
    return str(len(word))


@tool
def echo(text: str) -> str:
    """Repeat the input back unchanged."""
    return text


@pytest.fixture
def tools():
    return [word_length, echo]


class CharacterEmbeddings(Embeddings):
    """Four-dimensional embedding computed from the text itself; same text, same vector."""

    def embed_query(self, text: str) -> list[float]:
        return [
            float(len(text)),
            float(len(text.split())),
            float(sum(map(ord, text)) % 97),
            1.0,
        ]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]


@pytest.fixture
def embedder():
    return CharacterEmbeddings()


@pytest.fixture
def make_getenv():
    """Build a getenv replacement backed by a dict — never touches os.environ."""
    def _make(**values: str):
        return values.get
    return _make
