from __future__ import annotations

from typing import Any

import pytest

from callsync.config import Settings


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(log_dir=str(tmp_path / "logs"))


@pytest.fixture()
def call_payload() -> dict[str, Any]:
    return {
        "id": "call-001",
        "title": "Billing dispute",
        "date": "2024-03-12T14:05:00Z",
        "duration": 120,
        "agentName": "Dana Whitfield",
        "customerName": "Robin Ortega",
        "status": "analyzed",
        "audio": {"url": "https://example.com/call-001.mp3", "duration": 120, "format": "mp3", "size": 1920000},
        "transcript": [
            {
                "id": "t1",
                "speakerId": "agent-1",
                "speakerName": "Dana Whitfield",
                "speakerRole": "agent",
                "text": "Thanks for calling, how can I help?",
                "words": [
                    {"text": "Thanks", "startTime": 0.0, "endTime": 0.4, "confidence": 0.9},
                    {"text": "help?", "startTime": 2.1, "endTime": 2.6, "confidence": 0.7},
                ],
            },
            {
                "id": "t2",
                "speakerId": "cust-1",
                "speakerName": "Robin Ortega",
                "speakerRole": "customer",
                "text": "I was charged twice.",
                "words": [
                    {"text": "I", "startTime": 3.0, "endTime": 3.1},
                    {"text": "twice.", "startTime": 4.2, "endTime": 4.8, "confidence": 0.8},
                ],
            },
            {
                "id": "t3",
                "speakerId": "agent-1",
                "speakerName": "Dana Whitfield",
                "speakerRole": "agent",
                "text": "(inaudible)",
            },
        ],
    }
