"""Tests for the command line in :mod:`imago.main`."""

from __future__ import annotations

import base64
import io
import json

import pytest
from click.testing import CliRunner
from loguru import logger
from PIL import Image

from imago import main
from imago.services import image_handler
from imago.services.image_handler import TerminalSupport
from imago.config import settings

from .conftest import FakeResponse, FakeSession, image_body


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()


@pytest.fixture
def session(monkeypatch):
    session = FakeSession([FakeResponse(404), FakeResponse(200, image_body(b"PNGDATA", "done"))])

    async def get_session():
        return session

    async def close_session():
        pass

    monkeypatch.setattr(main, "get_session", get_session)
    monkeypatch.setattr(main, "close_session", close_session)
    monkeypatch.setattr(settings, "fallback_models", ["fallback-model"])
    return session


def test_generates_and_saves_image(session, tmp_path):
    output = tmp_path / "out.png"

    result = CliRunner().invoke(
        main.cli,
        ["a lighthouse", "-o", str(output), "--no-preview", "-k", "key", "-m", "custom", "--no-color"],
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b"PNGDATA"
    assert session.models == ["custom", "fallback-model"]
    assert "Generating: a lighthouse" in result.output
    assert "Model response: done" in result.output
    assert str(output) in result.output


def test_api_key_from_settings(session, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "gemini_api_key", "env-key")

    result = CliRunner().invoke(
        main.cli, ["a lighthouse", "-o", str(tmp_path), "--no-preview", "-m", "custom"]
    )

    assert result.exit_code == 0, result.output
    assert session.calls[0]["url"].endswith("?key=env-key")


def test_missing_api_key_exits_with_error(session, monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", None)

    result = CliRunner().invoke(main.cli, ["a lighthouse", "--no-preview", "--no-color"])

    assert result.exit_code == 1
    assert "API key not found" in result.output
    assert session.calls == []


def test_api_error_exits_with_error(monkeypatch, tmp_path):
    session = FakeSession([FakeResponse(401, "bad key")])

    async def get_session():
        return session

    async def close_session():
        pass

    monkeypatch.setattr(main, "get_session", get_session)
    monkeypatch.setattr(main, "close_session", close_session)

    result = CliRunner().invoke(
        main.cli, ["a lighthouse", "-o", str(tmp_path), "-k", "key", "--no-color"]
    )

    assert result.exit_code == 1
    assert "API error (status 401): bad key" in result.output
    assert list(tmp_path.iterdir()) == []


def test_zero_width_is_rejected():
    result = CliRunner().invoke(main.cli, ["a lighthouse", "-w", "0"])

    assert result.exit_code == 2


def test_oversized_preview_is_only_a_warning(monkeypatch, tmp_path):
    buffer = io.BytesIO()
    Image.new("1", (8, 8)).save(buffer, format="PNG")
    body = json.dumps(
        {
            "candidates": [
                {
                    "content": {
                        "parts": [
                            {
                                "inlineData": {
                                    "mimeType": "image/png",
                                    "data": base64.b64encode(buffer.getvalue()).decode(),
                                }
                            }
                        ]
                    },
                    "finishReason": "STOP",
                }
            ]
        }
    )
    session = FakeSession([FakeResponse(200, body)])

    async def get_session():
        return session

    async def close_session():
        pass

    monkeypatch.setattr(main, "get_session", get_session)
    monkeypatch.setattr(main, "close_session", close_session)
    monkeypatch.setattr(image_handler.shutil, "which", lambda name: None)
    monkeypatch.setattr(image_handler, "detect_terminal_support", lambda: TerminalSupport.HALF_BLOCKS)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 16)
    output = tmp_path / "out.png"

    result = CliRunner().invoke(
        main.cli, ["a lighthouse", "-o", str(output), "-k", "key", "--no-color"]
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == buffer.getvalue()
    assert "Could not display preview" in result.output
