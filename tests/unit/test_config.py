"""
Tests for settings and logging setup.
"""

import logging

from agents.ai_model_tester_agent import get_query_clients
from agents.scorer_analyzer_agent.utils import build_verifier_model
from config.logging import NOISY_LOGGERS, configure_logging
from config.settings import Settings, settings


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("CONSENSUS_RUNS", "5")
    monkeypatch.setenv("QUERY_TIMEOUT", "2.5")
    loaded = Settings(_env_file=None)
    assert loaded.CONSENSUS_RUNS == 5
    assert loaded.QUERY_TIMEOUT == 2.5
    assert loaded.MAX_QUERY_COUNT == 50


def test_configure_logging_quiets_http_clients():
    configure_logging("debug")
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_default_clients_follow_scan_providers():
    clients = get_query_clients()
    assert list(clients) == settings.SCAN_PROVIDERS


def test_no_verifier_without_openai_key(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
    assert build_verifier_model() is None
