from __future__ import annotations

import pytest

from scorekeeper.storage.match_store import MatchStore
from tests.factories import make_match


@pytest.fixture
def match():
    return make_match()


@pytest.fixture
def long_match():
    """Twenty-over match, enough room for all-out scenarios."""
    return make_match(total_overs=20)


@pytest.fixture
def store(tmp_path):
    return MatchStore(tmp_path / "data")


class FakeLLMClient:
    """Stands in for LLMClient; returns canned text and records prompts."""

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls = []

    def generate(self, messages, **kwargs):
        self.calls.append((messages, kwargs))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_llm():
    return FakeLLMClient
