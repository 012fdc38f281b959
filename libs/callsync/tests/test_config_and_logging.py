from __future__ import annotations

import logging

import pytest

from callsync.config import LoggingSettings, PlaybackConfig, QAConfig, Settings
from callsync.exceptions import ConfigurationError
from callsync.utils import format_time
from callsync.utils.logging_setup import reset_logging, setup_logging


def test_default_settings(settings: Settings) -> None:
    assert settings.playback.seek_step_s == 5.0
    assert settings.playback.volume_step == pytest.approx(0.1)
    assert settings.playback.default_playback_rate in settings.playback.playback_rates
    assert (settings.qa.min_score, settings.qa.max_score) == (1, 10)


def test_playback_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("PLAYBACK_SEEK_STEP_S", "10")
    monkeypatch.setenv("PLAYBACK_PLAYBACK_RATES", "[1.0, 2.0]")
    config = PlaybackConfig()
    assert config.seek_step_s == 10.0
    assert config.playback_rates == [1.0, 2.0]


def test_default_rate_must_be_offered() -> None:
    with pytest.raises((ConfigurationError, ValueError)):
        PlaybackConfig(playback_rates=[0.5, 2.0], default_playback_rate=1.0)


def test_qa_score_range_validated() -> None:
    with pytest.raises((ConfigurationError, ValueError)):
        QAConfig(min_score=8, max_score=3)


@pytest.fixture()
def clean_logging():
    yield
    reset_logging()


def test_setup_logging_configures_callsync_tree_once(tmp_path, clean_logging) -> None:
    settings = Settings(
        log_dir=str(tmp_path),
        logging=LoggingSettings(level="debug", console=False, file="callsync.log"),
    )
    logger = setup_logging(settings)
    assert logger.name == "callsync"
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 1

    again = setup_logging(Settings(log_dir=str(tmp_path), logging=LoggingSettings(level="error")))
    assert again is logger
    assert logger.level == logging.DEBUG

    logging.getLogger("callsync.sync.coordinator").debug("hello")
    logger.handlers[0].flush()
    assert "hello" in (tmp_path / "callsync.log").read_text(encoding="utf-8")


def test_setup_logging_force_rebuilds_handlers(tmp_path, clean_logging) -> None:
    first = setup_logging(Settings(log_dir=str(tmp_path), logging=LoggingSettings(console=False, file="a.log")))
    old_handler = first.handlers[0]

    logger = setup_logging(
        Settings(log_dir=str(tmp_path), logging=LoggingSettings(level="warning", console=True)),
        force=True,
    )
    assert old_handler not in logger.handlers
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_file_level_can_be_more_verbose_than_console(tmp_path, clean_logging) -> None:
    cfg = LoggingSettings(level="warning", console=True, file="debug.log", file_level="debug")
    logger = setup_logging(Settings(log_dir=str(tmp_path), logging=cfg))
    console, rotating = logger.handlers
    assert console.level == logging.WARNING
    assert rotating.level == logging.DEBUG
    assert logger.level == logging.DEBUG


def test_reset_logging_restores_propagation(tmp_path) -> None:
    cfg = LoggingSettings(logger_name="callsync.qa", console=False, file="qa.log")
    logger = setup_logging(Settings(log_dir=str(tmp_path), logging=cfg))
    assert logger.propagate is False and logger.handlers

    reset_logging("callsync.qa")
    assert logger.handlers == []
    assert logger.propagate is True
    assert logger.level == logging.NOTSET


def test_default_note_category_validated(monkeypatch) -> None:
    monkeypatch.setenv("QA_DEFAULT_NOTE_CATEGORY", "praise")
    with pytest.raises((ConfigurationError, ValueError)):
        QAConfig()
    monkeypatch.setenv("QA_DEFAULT_NOTE_CATEGORY", "Suggestion")
    assert QAConfig().default_note_category == "Suggestion"


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "0:00"), (5.9, "0:05"), (65, "1:05"), (3600, "60:00"), (-3, "0:00"), (None, "0:00")],
)
def test_format_time(seconds, expected) -> None:
    assert format_time(seconds) == expected
