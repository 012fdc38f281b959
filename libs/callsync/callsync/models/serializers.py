"""JSON codecs for call payloads (camelCase wire keys)."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from callsync.exceptions import PayloadError
from callsync.models.call import AudioInfo, CallDetail, CallStatus
from callsync.models.qa import CriterionEvaluation, NoteCategory, QAData, QANote, QAStatus
from callsync.models.transcript import SpeakerRole, TranscriptEntry, Word


def _require(item: dict[str, Any], key: str, path: str) -> Any:
    if not isinstance(item, dict):
        raise PayloadError(path, "expected an object")
    if key not in item or item[key] is None:
        raise PayloadError(f"{path}.{key}", "missing required field")
    return item[key]


def _float(value: Any, path: str) -> float:
    if isinstance(value, bool):
        raise PayloadError(path, f"expected a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise PayloadError(path, f"expected a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise PayloadError(path, f"expected a finite number, got {value!r}")
    return number


def _int(value: Any, path: str) -> int:
    number = _float(value, path)
    if not number.is_integer():
        raise PayloadError(path, f"expected an integer, got {value!r}")
    return int(number)


def _optional_float(value: Any, path: str) -> float | None:
    if value is None:
        return None
    return _float(value, path)


def _dt_to_iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def _dt_from_iso(value: str | None, path: str) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as exc:
        raise PayloadError(path, f"invalid timestamp {value!r}") from exc


def serialize_word(word: Word) -> dict[str, Any]:
    out: dict[str, Any] = {
        "text": word.text,
        "startTime": float(word.start_time),
        "endTime": float(word.end_time),
    }
    if word.confidence is not None:
        out["confidence"] = float(word.confidence)
    return out


def deserialize_word(item: dict[str, Any], path: str = "word") -> Word:
    start = _float(_require(item, "startTime", path), f"{path}.startTime")
    end = _float(_require(item, "endTime", path), f"{path}.endTime")
    if start < 0:
        raise PayloadError(f"{path}.startTime", "must be >= 0")
    if end < start:
        raise PayloadError(f"{path}.endTime", "must be >= startTime")
    confidence = _optional_float(item.get("confidence"), f"{path}.confidence")
    if confidence is not None and not 0.0 <= confidence <= 1.0:
        raise PayloadError(f"{path}.confidence", "must be within [0, 1]")
    return Word(text=str(item.get("text") or ""), start_time=start, end_time=end, confidence=confidence)


def serialize_transcript_entry(entry: TranscriptEntry) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": entry.id,
        "speakerId": entry.speaker_id,
        "speakerName": entry.speaker_name,
        "speakerRole": entry.speaker_role.value,
        "text": entry.text,
        "words": [serialize_word(w) for w in entry.words],
    }
    if entry.confidence is not None:
        out["confidence"] = float(entry.confidence)
    return out


def deserialize_transcript_entry(item: dict[str, Any], path: str = "entry") -> TranscriptEntry:
    entry_id = str(_require(item, "id", path))
    raw_role = str(item.get("speakerRole") or SpeakerRole.UNKNOWN.value).strip().lower()
    try:
        role = SpeakerRole(raw_role)
    except ValueError as exc:
        raise PayloadError(f"{path}.speakerRole", f"unknown role {raw_role!r}") from exc

    words = tuple(
        deserialize_word(w, f"{path}.words[{i}]") for i, w in enumerate(list(item.get("words") or []))
    )
    for i in range(1, len(words)):
        if words[i].start_time < words[i - 1].start_time:
            raise PayloadError(f"{path}.words[{i}].startTime", "words must be ordered by startTime")

    return TranscriptEntry(
        id=entry_id,
        speaker_id=str(item.get("speakerId") or ""),
        speaker_name=str(item.get("speakerName") or ""),
        speaker_role=role,
        text=str(item.get("text") or ""),
        confidence=_optional_float(item.get("confidence"), f"{path}.confidence"),
        words=words,
    )


def serialize_transcript(entries: list[TranscriptEntry]) -> list[dict[str, Any]]:
    return [serialize_transcript_entry(e) for e in entries]


def deserialize_transcript(items: list[dict[str, Any]] | None, path: str = "transcript") -> list[TranscriptEntry]:
    out: list[TranscriptEntry] = []
    seen: set[str] = set()
    for i, item in enumerate(list(items or [])):
        entry = deserialize_transcript_entry(item, f"{path}[{i}]")
        if entry.id in seen:
            raise PayloadError(f"{path}[{i}].id", f"duplicate transcript entry id {entry.id!r}")
        seen.add(entry.id)
        out.append(entry)
    return out


def serialize_qa_note(note: QANote) -> dict[str, Any]:
    return {
        "id": note.id,
        "text": note.text,
        "transcriptEntryId": note.transcript_entry_id,
        "createdAt": _dt_to_iso(note.created_at),
        "createdBy": note.created_by,
        "category": note.category.value,
    }


def deserialize_qa_note(item: dict[str, Any], path: str = "note") -> QANote:
    created_at = _dt_from_iso(_require(item, "createdAt", path), f"{path}.createdAt")
    if created_at is None:
        raise PayloadError(f"{path}.createdAt", "missing required field")
    try:
        category = NoteCategory.parse(item.get("category"))
    except ValueError as exc:
        raise PayloadError(f"{path}.category", f"unknown category {item.get('category')!r}") from exc
    created_by = item.get("createdBy")
    if isinstance(created_by, dict):
        created_by = created_by.get("name") or created_by.get("id")
    return QANote(
        id=str(_require(item, "id", path)),
        text=str(item.get("text") or ""),
        transcript_entry_id=str(_require(item, "transcriptEntryId", path)),
        created_at=created_at,
        category=category,
        created_by=str(created_by) if created_by else None,
    )


def serialize_qa_data(data: QAData) -> dict[str, Any]:
    return {
        "callId": data.call_id,
        "score": float(data.score),
        "status": data.status.value,
        "evaluatedBy": data.evaluated_by,
        "evaluatedAt": _dt_to_iso(data.evaluated_at),
        "criteriaEvaluations": [
            {
                "criterionId": e.criterion_id,
                "score": int(e.score),
                "comment": e.comment,
            }
            for e in data.criteria_evaluations
        ],
        "notes": [serialize_qa_note(n) for n in data.notes],
        "feedback": data.feedback,
    }


def deserialize_qa_data(item: dict[str, Any], path: str = "qaData") -> QAData:
    if not isinstance(item, dict):
        raise PayloadError(path, "expected an object")
    raw_status = str(item.get("status") or QAStatus.PENDING.value)
    try:
        status = QAStatus(raw_status)
    except ValueError as exc:
        raise PayloadError(f"{path}.status", f"unknown status {raw_status!r}") from exc

    evaluations: list[CriterionEvaluation] = []
    for i, raw in enumerate(list(item.get("criteriaEvaluations") or [])):
        sub = f"{path}.criteriaEvaluations[{i}]"
        evaluations.append(
            CriterionEvaluation(
                criterion_id=str(_require(raw, "criterionId", sub)),
                score=_int(raw.get("score") or 0, f"{sub}.score"),
                comment=raw.get("comment"),
            )
        )
    evaluated_by = item.get("evaluatedBy")
    if isinstance(evaluated_by, dict):
        evaluated_by = evaluated_by.get("name") or evaluated_by.get("id")
    return QAData(
        call_id=str(_require(item, "callId", path)),
        score=_float(item.get("score") or 0.0, f"{path}.score"),
        status=status,
        evaluated_by=str(evaluated_by) if evaluated_by else None,
        evaluated_at=_dt_from_iso(item.get("evaluatedAt"), f"{path}.evaluatedAt"),
        criteria_evaluations=evaluations,
        notes=[deserialize_qa_note(n, f"{path}.notes[{i}]") for i, n in enumerate(list(item.get("notes") or []))],
        feedback=item.get("feedback"),
    )


def serialize_call_detail(call: CallDetail) -> dict[str, Any]:
    meta = call.transcript_metadata
    return {
        "id": call.id,
        "title": call.title,
        "date": call.date,
        "duration": float(call.duration),
        "agentName": call.agent_name,
        "customerName": call.customer_name,
        "status": call.status.value,
        "audio": (
            {
                "url": call.audio.url,
                "duration": float(call.audio.duration),
                "format": call.audio.format,
                "size": int(call.audio.size),
            }
            if call.audio is not None
            else None
        ),
        "transcript": serialize_transcript(call.transcript),
        "transcriptMetadata": {
            "available": meta.available,
            "segmentCount": meta.segment_count,
            "wordCount": meta.word_count,
            "confidence": meta.confidence,
        },
    }


def deserialize_call_detail(item: dict[str, Any], path: str = "call") -> CallDetail:
    if not isinstance(item, dict):
        raise PayloadError(path, "expected an object")
    raw_status = str(item.get("status") or CallStatus.PENDING.value)
    try:
        status = CallStatus(raw_status)
    except ValueError as exc:
        raise PayloadError(f"{path}.status", f"unknown status {raw_status!r}") from exc

    audio: AudioInfo | None = None
    raw_audio = item.get("audio")
    if isinstance(raw_audio, dict):
        audio = AudioInfo(
            url=str(raw_audio.get("url") or ""),
            duration=_float(raw_audio.get("duration") or 0.0, f"{path}.audio.duration"),
            format=str(raw_audio.get("format") or ""),
            size=_int(raw_audio.get("size") or 0, f"{path}.audio.size"),
        )
        if audio.size < 0:
            raise PayloadError(f"{path}.audio.size", "must be >= 0")

    duration = _float(item.get("duration") or 0.0, f"{path}.duration")
    if duration < 0:
        raise PayloadError(f"{path}.duration", "must be >= 0")
    return CallDetail(
        id=str(_require(item, "id", path)),
        title=str(item.get("title") or ""),
        date=str(item.get("date") or ""),
        duration=duration,
        agent_name=str(item.get("agentName") or ""),
        customer_name=str(item.get("customerName") or ""),
        status=status,
        audio=audio,
        transcript=deserialize_transcript(item.get("transcript"), f"{path}.transcript"),
    )
