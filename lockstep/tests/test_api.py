"""Integration tests for the display, advance and state endpoints."""
from __future__ import annotations

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ..core.catalog import CatalogError
from ..main import create_app
from ..util.config import Settings


def test_initial_content_for_both_channels(client: TestClient) -> None:
    content_a = client.get("/content/a")
    assert content_a.status_code == 200
    assert content_a.headers["x-media-type"] == "image"
    assert 'src="/static/a/a.jpg"' in content_a.text
    assert "<img" in content_a.text

    content_b = client.get("/content/b")
    assert content_b.headers["x-media-type"] == "image"
    assert 'src="/static/b/x.png"' in content_b.text


def test_advance_moves_both_channels(client: TestClient) -> None:
    response = client.post("/advance")
    assert response.status_code == 200
    assert response.content == b""

    content_a = client.get("/content/a")
    assert content_a.headers["x-media-type"] == "video"
    assert "<video autoplay muted loop" in content_a.text
    assert 'src="/static/a/b.mp4"' in content_a.text

    content_b = client.get("/content/b")
    assert 'src="/static/b/x.png"' in content_b.text


def test_content_wraps_after_many_advances(client: TestClient) -> None:
    for _ in range(5):
        assert client.post("/advance").status_code == 200
    assert 'src="/static/a/b.mp4"' in client.get("/content/a").text
    assert client.get("/api/state").json()["playhead"] == 5


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
def test_advance_rejects_other_methods(client: TestClient, method: str) -> None:
    response = client.request(method, "/advance")
    assert response.status_code == 405
    assert response.headers["allow"] == "POST"
    assert client.get("/api/state").json()["playhead"] == 0


def test_pages_reference_content_and_stream(client: TestClient) -> None:
    page = client.get("/b")
    assert page.status_code == 200
    assert "<title>Display B</title>" in page.text
    assert 'hx-get="/content/b"' in page.text
    assert "connect:/events-stream" in page.text
    assert 'hx-post="/advance"' in page.text


@pytest.mark.parametrize("path", ["/c", "/content/c"])
def test_unknown_channel_is_not_found(client: TestClient, path: str) -> None:
    assert client.get(path).status_code == 404


def test_static_files_are_served_per_channel(client: TestClient) -> None:
    response = client.get("/static/a/b.mp4")
    assert response.status_code == 200
    assert response.content == b"video-bytes"

    assert client.get("/static/b/x.png").content == b"png-bytes"
    assert client.get("/static/b/a.jpg").status_code == 404


def test_state_snapshot(client: TestClient) -> None:
    client.post("/advance")
    payload = client.get("/api/state").json()
    assert payload["playhead"] == 1
    assert payload["subscribers"] == 0
    channels = {entry["channel"]: entry for entry in payload["channels"]}
    assert channels["a"] == {
        "channel": "a",
        "index": 1,
        "size": 2,
        "identifier": "b.mp4",
        "media_type": "video",
    }
    assert channels["b"]["identifier"] == "x.png"
    assert channels["b"]["size"] == 1


def test_healthcheck(client: TestClient) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}


def test_create_app_requires_media_in_every_channel(media_dirs: dict[str, Path], tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    with pytest.raises(CatalogError):
        create_app(Settings(channel_a_dir=media_dirs["a"], channel_b_dir=empty))


def test_create_app_requires_existing_directories(tmp_path: Path) -> None:
    with pytest.raises(CatalogError):
        create_app(Settings(data_dir=tmp_path / "missing"))


def test_content_renders_with_undecodable_file_names_present(media_dirs: dict[str, Path]) -> None:
    with open(os.path.join(os.fsencode(media_dirs["a"]), b"\xff.jpg"), "wb") as handle:
        handle.write(b"image-bytes")

    with TestClient(create_app(Settings(channel_a_dir=media_dirs["a"], channel_b_dir=media_dirs["b"]))) as client:
        for _ in range(3):
            response = client.get("/content/a")
            assert response.status_code == 200
            client.post("/advance")
        assert client.get("/api/state").json()["channels"][0]["size"] == 2
