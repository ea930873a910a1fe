"""Test helpers shared by unit and integration tests."""

import json
from typing import Any, Iterable

import httpx


class RecordingSleep:
    """Awaitable stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def completion_body(content: Any, model: str = "test-model") -> dict:
    """OpenAI-compatible chat completion response body."""
    return {
        "id": "cmpl-test",
        "object": "chat.completion",
        "model": model,
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


class ScriptedUpstream:
    """
    httpx.MockTransport handler that replays scripted responses per host.

    Each script entry is either an httpx.Response, an exception instance to
    raise, or a str (shorthand for a 200 completion with that content).
    Every request is recorded as (host, parsed JSON body, headers).
    """

    def __init__(self, scripts: dict[str, Iterable[Any]]):
        self.scripts = {host: list(entries) for host, entries in scripts.items()}
        self.requests: list[tuple[str, dict, httpx.Headers]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.requests.append((host, json.loads(request.content), request.headers))
        entries = self.scripts.get(host)
        if not entries:
            raise AssertionError(f"Unexpected request to {host}")
        entry = entries.pop(0)
        if isinstance(entry, httpx.RequestError):
            entry.request = request
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, str):
            return httpx.Response(200, json=completion_body(entry))
        return entry

    def models_for(self, host: str) -> list[str]:
        return [body["model"] for h, body, _ in self.requests if h == host]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)
