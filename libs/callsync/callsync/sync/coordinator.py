"""Playback coordinator: one instance per call view.

Owns the single `PlaybackState` for the view. Every event builds a new frozen
state and swaps it in once, then notifies listeners in event order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from callsync.config import PlaybackConfig
from callsync.error_codes import ErrorCode
from callsync.exceptions import ConfigurationError
from callsync.models.playback import PlaybackPhase, PlaybackState
from callsync.models.transcript import Transcript, TranscriptEntry
from callsync.sync.resolver import find_segment_start_time, resolve_active_segment

logger = logging.getLogger(__name__)

StateListener = Callable[[PlaybackState], None]


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class PlaybackCoordinator:
    def __init__(self, transcript: Transcript | None, *, config: PlaybackConfig | None = None) -> None:
        self._transcript: tuple[TranscriptEntry, ...] = tuple(transcript or ())
        self._config = config or PlaybackConfig()
        self._state = PlaybackState(
            volume=float(self._config.initial_volume),
            muted=float(self._config.initial_volume) == 0.0,
            playback_rate=float(self._config.default_playback_rate),
        )
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def transcript(self) -> tuple[TranscriptEntry, ...]:
        return self._transcript

    @property
    def phase(self) -> PlaybackPhase:
        return self._state.phase

    @property
    def active_segment_id(self) -> str | None:
        return self._state.active_segment_id

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(self, **changes: Any) -> PlaybackState:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def _at(self, time: float) -> dict[str, Any]:
        return {
            "current_time": time,
            "active_segment_id": resolve_active_segment(self._transcript, time),
        }

    # Clock events from the audio element

    def load_metadata(self, duration: float) -> PlaybackState:
        value = float(duration)
        if not math.isfinite(value) or value < 0:
            value = 0.0
        return self._commit(duration=value, duration_known=True)

    def time_update(self, time: float) -> PlaybackState:
        value = float(time)
        if math.isnan(value):
            logger.debug("ignoring NaN time update")
            return self._state
        return self._commit(**self._at(max(0.0, value)))

    def ended(self) -> PlaybackState:
        return self._commit(is_playing=False, **self._at(0.0))

    # User intents

    def play(self) -> bool:
        if self._state.phase is PlaybackPhase.IDLE:
            logger.debug("play requested before metadata loaded; ignoring")
            return False
        if not self._state.is_playing:
            self._commit(is_playing=True)
        return True

    def pause(self) -> None:
        if self._state.is_playing:
            self._commit(is_playing=False)

    def toggle_play_pause(self) -> bool:
        if self._state.is_playing:
            self.pause()
            return False
        return self.play()

    def _seek_target(self, time: float) -> float:
        value = float(time)
        if math.isnan(value):
            value = 0.0
        upper = float(self._state.duration) if self._state.duration_known else math.inf
        target = _clamp(value, 0.0, upper)
        if target != value:
            logger.debug("seek target %.3f clamped to %.3f", value, target)
        return target

    def seek(self, time: float) -> float:
        target = self._seek_target(time)
        self._commit(**self._at(target))
        return target

    def jump_to_segment(self, segment_id: str) -> bool:
        """Seek to the start of a transcript entry and mark it active.

        The entry is marked active even if the resolver would pick a neighbour
        at that time. Unknown or untimed entries are ignored.
        """
        start = find_segment_start_time(self._transcript, segment_id)
        if start is None:
            logger.debug("jump to %r ignored (unknown or untimed entry)", segment_id)
            return False
        self._commit(current_time=self._seek_target(start), active_segment_id=segment_id)
        return True

    def skip(self, delta_s: float) -> float:
        return self.seek(float(self._state.current_time) + float(delta_s))

    def skip_forward(self) -> float:
        return self.skip(float(self._config.seek_step_s))

    def skip_backward(self) -> float:
        return self.skip(-float(self._config.seek_step_s))

    def set_volume(self, volume: float) -> float:
        value = _clamp(float(volume), 0.0, 1.0)
        self._commit(volume=value, muted=value == 0.0)
        return value

    def volume_up(self) -> float:
        return self.set_volume(float(self._state.volume) + float(self._config.volume_step))

    def volume_down(self) -> float:
        return self.set_volume(float(self._state.volume) - float(self._config.volume_step))

    def toggle_mute(self) -> bool:
        self._commit(muted=not self._state.muted)
        return self._state.muted

    def set_playback_rate(self, rate: float) -> float:
        value = float(rate)
        if value not in {float(r) for r in self._config.playback_rates}:
            raise ConfigurationError(
                f"Unsupported playback rate: {rate!r}",
                error_code=ErrorCode.UNSUPPORTED_PLAYBACK_RATE,
            )
        self._commit(playback_rate=value)
        return value
