"""Playback state shared by the player, transcript and QA surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PlaybackPhase(str, Enum):
    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"


@dataclass(frozen=True)
class PlaybackState:
    current_time: float = 0.0
    duration: float = 0.0
    is_playing: bool = False
    active_segment_id: str | None = None

    duration_known: bool = False
    volume: float = 1.0
    muted: bool = False
    playback_rate: float = 1.0

    @property
    def phase(self) -> PlaybackPhase:
        if not self.duration_known:
            return PlaybackPhase.IDLE
        return PlaybackPhase.PLAYING if self.is_playing else PlaybackPhase.PAUSED
