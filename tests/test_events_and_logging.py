import logging

import pytest

from dungeonites.clock import ManualClock, SystemClock
from dungeonites.economy import CurrencyLedger
from dungeonites.events import CurrencyChangedEvent, EffectExpiredEvent, EventBus
from dungeonites.logging_config import configure_logging, resolve_level


def test_event_bus_dispatch_and_unsubscribe():
    bus = EventBus()
    seen = []
    bus.subscribe(CurrencyChangedEvent, seen.append)
    bus.emit(EffectExpiredEvent(player_id="p", effect_id="x"))
    assert seen == []

    evt = CurrencyChangedEvent(currency="gold", old_amount=0, new_amount=5, delta=5, reason="grant")
    bus.emit(evt)
    assert seen == [evt]

    bus.unsubscribe(CurrencyChangedEvent, seen.append)
    bus.emit(evt)
    assert seen == [evt]


def test_manual_clock():
    clock = ManualClock()
    assert clock.now_ms() == 0
    assert clock.advance(250) == 250
    with pytest.raises(ValueError):
        clock.advance(-1)
    assert SystemClock().now_ms() > 0


def test_configure_logging_reads_env(monkeypatch):
    captured = {}

    def fake_basic_config(**kwargs):
        captured.update(kwargs)

    monkeypatch.setenv("DUNGEONITES_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    configure_logging()
    assert captured["level"] == logging.DEBUG

    monkeypatch.setenv("DUNGEONITES_LOG_LEVEL", "nonsense")
    configure_logging(default_level=logging.WARNING)
    assert captured["level"] == logging.WARNING


def test_unknown_currency_is_logged(caplog):
    ledger = CurrencyLedger()
    with caplog.at_level(logging.WARNING, logger="dungeonites.economy.ledger"):
        ledger.add("rubies", 3)
    assert "unknown currency" in caplog.text


@pytest.mark.parametrize(
    "value,expected",
    [(None, logging.INFO), ("", logging.INFO), ("warning", logging.WARNING), (" Error ", logging.ERROR),
     ("10", 10), (5, 5), ("loud", logging.INFO)],
)
def test_resolve_level(value, expected):
    assert resolve_level(value) == expected


def test_unknown_env_level_is_reported(monkeypatch, caplog):
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    monkeypatch.setenv("DUNGEONITES_LOG_LEVEL", "loud")
    with caplog.at_level(logging.WARNING, logger="dungeonites.logging_config"):
        level = configure_logging(default_level=logging.ERROR)
    assert level == logging.ERROR
    assert "Ignoring unknown DUNGEONITES_LOG_LEVEL='loud'" in caplog.text

    caplog.clear()
    monkeypatch.setenv("DUNGEONITES_LOG_LEVEL", "info")
    with caplog.at_level(logging.WARNING, logger="dungeonites.logging_config"):
        assert configure_logging() == logging.INFO
    assert caplog.text == ""
