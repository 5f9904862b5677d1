"""Pydantic models for the state API."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ChannelPosition(BaseModel):
    channel: str
    index: int
    size: int
    identifier: str
    media_type: Literal["image", "video"]


class StateSnapshot(BaseModel):
    playhead: int
    subscribers: int
    channels: list[ChannelPosition] = Field(default_factory=list)
