"""Shared fixtures: throwaway media directories and an app built over them."""
from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ..main import create_app
from ..util.config import Settings


@pytest.fixture
def media_dirs(tmp_path: Path) -> dict[str, Path]:
    channel_a = tmp_path / "a"
    channel_b = tmp_path / "b"
    channel_a.mkdir()
    channel_b.mkdir()
    (channel_a / "b.mp4").write_bytes(b"video-bytes")
    (channel_a / "a.jpg").write_bytes(b"image-bytes")
    (channel_a / "notes.txt").write_text("not media", encoding="utf-8")
    (channel_a / "nested.png").mkdir()
    (channel_b / "x.png").write_bytes(b"png-bytes")
    return {"a": channel_a, "b": channel_b}


@pytest.fixture
def settings(media_dirs: dict[str, Path]) -> Settings:
    return Settings(
        channel_a_dir=media_dirs["a"],
        channel_b_dir=media_dirs["b"],
        queue_size=10,
        ping_seconds=15,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
