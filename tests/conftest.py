"""Shared fakes for the HTTP session."""

from __future__ import annotations

import base64
import json


class FakeResponse:
    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Replays scripted responses in order and records every POST."""

    def __init__(self, responses) -> None:
        self._responses = list(responses)
        self.calls: list[dict] = []

    async def post(self, url, headers=None, json=None, **kwargs):
        self.calls.append({"url": url, "headers": headers, "json": json})
        if not self._responses:
            raise AssertionError(f"Unexpected request to {url}")
        outcome = self._responses.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        pass

    @property
    def models(self) -> list[str]:
        return [call["url"].rsplit("/", 1)[1].split(":", 1)[0] for call in self.calls]


def image_body(data: bytes = b"PNGDATA", text: str | None = None) -> str:
    parts = []
    if text is not None:
        parts.append({"text": text})
    parts.append(
        {"inlineData": {"mimeType": "image/png", "data": base64.b64encode(data).decode()}}
    )
    return json.dumps(
        {"candidates": [{"content": {"parts": parts, "role": "model"}, "finishReason": "STOP"}]}
    )
