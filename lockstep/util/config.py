"""Runtime settings read from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..core.events import DEFAULT_QUEUE_SIZE


@dataclass(slots=True)
class Settings:
    """Container for slideshow server settings."""

    data_dir: Path = Path("data")
    channel_a_dir: Path | None = None
    channel_b_dir: Path | None = None
    host: str = "0.0.0.0"
    port: int = 8080
    queue_size: int = DEFAULT_QUEUE_SIZE
    ping_seconds: int = 15
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(os.getenv("LOCKSTEP_DATA_DIR", "data")),
            channel_a_dir=_env_path("LOCKSTEP_CHANNEL_A_DIR"),
            channel_b_dir=_env_path("LOCKSTEP_CHANNEL_B_DIR"),
            host=os.getenv("LOCKSTEP_HOST", "0.0.0.0"),
            port=_env_int("LOCKSTEP_PORT", default=8080),
            queue_size=_env_int("LOCKSTEP_QUEUE_SIZE", default=DEFAULT_QUEUE_SIZE, minimum=1),
            ping_seconds=_env_int("LOCKSTEP_PING_SECONDS", default=15, minimum=1),
            log_level=os.getenv("LOCKSTEP_LOG_LEVEL", "INFO").upper(),
        )

    def channel_dirs(self) -> dict[str, Path]:
        """Backing directory for each channel, in display order."""

        return {
            "a": self.channel_a_dir or self.data_dir / "a",
            "b": self.channel_b_dir or self.data_dir / "b",
        }


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    return Path(raw) if raw else None


def _env_int(name: str, *, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value
