"""Shared fixtures for engine tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from outlinker.engine.config import load_config
from outlinker.engine.types import RawSearchHit, SearchConfig


@pytest.fixture()
def engine_config():
    """Default configuration with throttle delays disabled."""

    config = load_config(None)
    config.raw["request_delay_seconds"] = 0
    config.raw["topic_delay_seconds"] = 0
    return config


@pytest.fixture()
def search_config() -> SearchConfig:
    return SearchConfig(api_key="search-key", search_engine_id="engine-id", is_enabled=True)


@pytest.fixture()
def make_hit() -> Callable[..., RawSearchHit]:
    def _make(
        link: str,
        title: str = "Housing Market Data",
        snippet: str = "",
        **kwargs: Any,
    ) -> RawSearchHit:
        return RawSearchHit(title=title, link=link, snippet=snippet, **kwargs)

    return _make


class FakeGenerativeClient:
    """Records prompts and replays canned responses or errors in order."""

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def generate(self, prompt: str, *, web_search: bool = False, json_output: bool = False, temperature=None) -> str:
        self.calls.append(
            {"prompt": prompt, "web_search": web_search, "json_output": json_output, "temperature": temperature}
        )
        response = self.responses.pop(0) if self.responses else "[]"
        if isinstance(response, Exception):
            raise response
        if not isinstance(response, str):
            return json.dumps(response)
        return response


@pytest.fixture()
def fake_generative() -> Callable[..., FakeGenerativeClient]:
    return FakeGenerativeClient


def search_payload(*items: Dict[str, str]) -> Dict[str, Any]:
    return {"items": list(items), "searchInformation": {"totalResults": str(len(items)), "searchTime": 0.1}}


@pytest.fixture()
def search_transport() -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport from a handler; requests are recorded on ``.requests``."""

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
        requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(_record)
        transport.requests = requests  # type: ignore[attr-defined]
        return transport

    return _build


@pytest.fixture()
def search_items() -> Callable[..., Dict[str, Any]]:
    return search_payload
