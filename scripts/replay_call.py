from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from callsync.config import Settings
from callsync.exceptions import PayloadError
from callsync.models.serializers import deserialize_call_detail
from callsync.sync import PlaybackCoordinator, find_segment
from callsync.utils import format_time
from callsync.utils.logging_setup import setup_logging

logger = logging.getLogger("callsync.scripts.replay_call")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay a call transcript against a synthetic playback clock.")
    parser.add_argument("--call", required=True, help="Path to a call detail JSON document")
    parser.add_argument("--step", type=float, default=1.0, help="Clock tick size in seconds")
    parser.add_argument("--jump", default=None, help="Transcript entry id to jump to before replaying")
    parser.add_argument("--until", type=float, default=None, help="Stop after N seconds (defaults to call duration)")
    return parser.parse_args()


def _run() -> int:
    args = _parse_args()
    call_path = Path(args.call)
    if not call_path.exists():
        raise SystemExit(f"Call document not found: {call_path}")
    if args.step <= 0:
        raise SystemExit("--step must be positive")

    settings = Settings()
    setup_logging(settings)

    try:
        call = deserialize_call_detail(json.loads(call_path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, PayloadError) as exc:
        raise SystemExit(f"Invalid call document: {exc}") from exc

    meta = call.transcript_metadata
    logger.info(
        "call %s: %d entries, %d words, duration %s",
        call.id,
        meta.segment_count,
        meta.word_count,
        format_time(call.duration),
    )

    coordinator = PlaybackCoordinator(call.transcript, config=settings.playback)
    duration = call.audio.duration if call.audio is not None else call.duration
    coordinator.load_metadata(duration)

    start = 0.0
    if args.jump:
        if not coordinator.jump_to_segment(str(args.jump)):
            logger.warning("cannot jump to %r (unknown or untimed entry)", args.jump)
        start = coordinator.state.current_time

    until = float(args.until) if args.until is not None else float(coordinator.state.duration)
    coordinator.play()

    last_active: str | None = None
    t = start
    while t <= until:
        state = coordinator.time_update(t)
        if state.active_segment_id != last_active:
            entry = find_segment(call.transcript, state.active_segment_id or "")
            speaker = f"{entry.speaker_name} ({entry.speaker_role.value})" if entry else "-"
            text = entry.text if entry else ""
            print(f"{format_time(state.current_time):>6}  {state.active_segment_id or '-':<12} {speaker:<28} {text}")
            last_active = state.active_segment_id
        t += float(args.step)

    coordinator.ended()
    return 0


def main() -> None:
    raise SystemExit(_run())


if __name__ == "__main__":
    main()
