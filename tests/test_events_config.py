import logging

import pytest

from finance_core.config import AppSettings, Theme, ensure_data_directories, load_settings, parse_theme
from finance_core.events import EventChannel, RefreshType
from finance_core.logging_setup import _parse_level, get_logger


def test_publish_reaches_every_listener_even_if_one_fails(caplog):
    events = EventChannel()
    received = []

    def broken(kind):
        raise RuntimeError('listener bug')

    events.subscribe(broken)
    events.subscribe(received.append)
    events.publish(RefreshType.ALL)

    assert received == [RefreshType.ALL]
    assert 'Refresh listener' in caplog.text


def test_subscribe_returns_unsubscribe():
    events = EventChannel()
    received = []
    unsubscribe = events.subscribe(received.append)
    events.subscribe(received.append)
    assert len(events) == 1

    unsubscribe()
    events.publish(RefreshType.BUDGETS)
    assert received == []


def test_listener_may_unsubscribe_while_handling():
    events = EventChannel()
    received = []

    def once(kind):
        received.append(kind)
        events.unsubscribe(once)

    events.subscribe(once)
    events.publish(RefreshType.TRANSACTIONS)
    events.publish(RefreshType.TRANSACTIONS)
    assert received == [RefreshType.TRANSACTIONS]


def test_load_settings_from_environment():
    settings = load_settings({
        'FINANCE_CORE_CURRENCY': 'eur',
        'FINANCE_CORE_CURRENCY_SYMBOL': '€',
        'FINANCE_CORE_THEME': 'light',
    })
    assert settings == AppSettings('EUR', '€', Theme.LIGHT)


def test_load_settings_ignores_invalid_currency():
    settings = load_settings({'FINANCE_CORE_CURRENCY': 'EURO'})
    assert settings == AppSettings()


def test_with_currency_validates_code():
    settings = AppSettings()
    with pytest.raises(ValueError):
        settings.with_currency('12$', '$')
    assert settings.with_currency('GBP', '£').currency_symbol == '£'
    assert settings.with_currency('JPY', '').currency_symbol == 'JPY'
    assert settings.currency_code == 'USD'


def test_parse_theme_defaults_to_dark():
    assert parse_theme('LIGHT') is Theme.LIGHT
    assert parse_theme('sepia') is Theme.DARK
    assert parse_theme(None) is Theme.DARK
    assert AppSettings().with_theme('light').theme is Theme.LIGHT


def test_ensure_data_directories(tmp_path):
    target = ensure_data_directories(tmp_path / 'nested' / 'data')
    assert target.is_dir()


def test_parse_level(monkeypatch):
    monkeypatch.delenv('FINANCE_CORE_LOG_LEVEL', raising=False)
    assert _parse_level('debug') == logging.DEBUG
    assert _parse_level('10') == 10
    assert _parse_level(None) == logging.INFO
    monkeypatch.setenv('FINANCE_CORE_LOG_LEVEL', 'WARNING')
    assert _parse_level(None) == logging.WARNING


def test_get_logger_is_namespaced():
    assert get_logger('finance_core.tests').name == 'finance_core.tests'
    assert logging.getLogger('finance_core').handlers
