import httpx
import pytest

from rural_search.core.settings import Settings
from rural_search.core.errors import UpstreamDegraded


def make_settings(**overrides) -> Settings:
    """Settings isolated from the shell environment and any local .env file."""
    base = dict(
        _env_file=None,
        llm_provider="gemini",
        gemini_api_key=None,
        openai_api_key=None,
        serpapi_key=None,
        bing_search_key=None,
        bing_search_endpoint=None,
    )
    base.update(overrides)
    return Settings(**base)


class FakeModel:
    """Stands in for a language model: returns canned completions in order, or raises."""

    name = "fake"

    def __init__(self, *replies, error: Exception | None = None):
        self.replies = list(replies)
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)


def json_response(url: str, payload, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json=payload, request=httpx.Request("GET", url))


@pytest.fixture
def degraded():
    return UpstreamDegraded("fake", "boom")
