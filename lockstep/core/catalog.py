"""Media catalog loading for the display channels."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Literal

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})
VIDEO_EXTENSIONS = frozenset({".mp4", ".webm", ".ogg"})
MEDIA_EXTENSIONS = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS

MediaType = Literal["image", "video"]

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Raised when a channel's media directory is unusable at startup."""


def is_media(name: str) -> bool:
    return PurePosixPath(name).suffix in MEDIA_EXTENSIONS


def is_video(name: str) -> bool:
    return PurePosixPath(name).suffix in VIDEO_EXTENSIONS


def media_type(name: str) -> MediaType:
    return "video" if is_video(name) else "image"


def load_media(directory: Path) -> tuple[str, ...]:
    """Return the recognised media file names in ``directory``, sorted."""

    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise CatalogError(f"Cannot read media directory {directory}: {exc}") from exc
    names = []
    for entry in entries:
        if entry.is_dir() or not is_media(entry.name):
            continue
        if not _is_utf8(entry.name):
            logger.warning("Skipping %r in %s: file name is not valid UTF-8", entry.name, directory)
            continue
        names.append(entry.name)
    return tuple(sorted(names))


def _is_utf8(name: str) -> bool:
    # Undecodable bytes come back from the OS as lone surrogates.
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


@dataclass(frozen=True, slots=True)
class MediaItem:
    """Catalog entry selected for a channel at a given playhead."""

    channel: str
    index: int
    identifier: str

    @property
    def media_type(self) -> MediaType:
        return media_type(self.identifier)

    @property
    def is_video(self) -> bool:
        return is_video(self.identifier)


@dataclass(frozen=True, slots=True)
class MediaCatalog:
    """Immutable per-channel media listing built once at startup."""

    channels: Mapping[str, tuple[str, ...]]
    directories: Mapping[str, Path]

    @classmethod
    def load(cls, directories: Mapping[str, Path]) -> "MediaCatalog":
        channels: dict[str, tuple[str, ...]] = {}
        for channel, directory in directories.items():
            items = load_media(directory)
            if not items:
                raise CatalogError(f"No media files found for channel {channel!r} in {directory}")
            channels[channel] = items
        return cls(channels=channels, directories=dict(directories))

    def __contains__(self, channel: object) -> bool:
        return channel in self.channels

    def items(self, channel: str) -> tuple[str, ...]:
        return self.channels[channel]

    def select(self, channel: str, playhead: int) -> MediaItem:
        """Map the shared playhead onto this channel's catalog."""

        items = self.channels[channel]
        index = playhead % len(items)
        return MediaItem(channel=channel, index=index, identifier=items[index])
