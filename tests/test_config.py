import logging

import pytest

from speedrun_stats import config, logging_setup
from speedrun_stats.client import base, session as session_module
from speedrun_stats.client.rate_limit import RateLimitPolicy


def test_env_int_and_float_fallbacks(monkeypatch):
    monkeypatch.setenv("SPEEDRUN_TEST_INT", "12")
    monkeypatch.setenv("SPEEDRUN_TEST_FLOAT", "nope")
    assert config._env_int("SPEEDRUN_TEST_INT", 3) == 12
    assert config._env_float("SPEEDRUN_TEST_FLOAT", 1.5) == 1.5
    assert config._env_int("SPEEDRUN_TEST_MISSING", 9) == 9


def test_protocol_constants():
    assert config.SPEEDRUN_BASE_URL == "https://www.speedrun.com/api/v1"
    assert config.RATE_LIMIT_STATUS == 420
    assert config.RATE_LIMIT_MAX_RETRIES == 10
    assert config.MAX_PAGE_SIZE == 200


def test_rate_limit_policy_defaults_and_validation():
    policy = RateLimitPolicy()
    assert policy.max_attempts == 11
    assert policy.backoff_seconds == 2.0
    assert policy.is_rate_limited(420)
    assert not policy.is_rate_limited(429)
    with pytest.raises(ValueError):
        RateLimitPolicy(max_retries=-1)


def test_default_session_headers_and_no_adapter_retries():
    session = session_module.create_default_session()
    adapter = session.get_adapter("https://www.speedrun.com/api/v1/users")

    assert adapter.max_retries.total == 0
    assert session.headers["Accept"] == "application/json"
    assert session.headers["User-Agent"] == config.USER_AGENT


def test_request_headers_merge():
    assert base.request_headers("", None) == {}
    assert base.request_headers("k", {"A": "b"}) == {"X-API-Key": "k", "A": "b"}


def test_setup_logging_installs_handler_once(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_setup.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    monkeypatch.setattr(logging.Logger, "hasHandlers", lambda self: False)
    logging_setup.setup_logging("DEBUG")
    assert calls == [{"level": "DEBUG", "format": logging_setup.LOG_FORMAT}]

    monkeypatch.setattr(logging.Logger, "hasHandlers", lambda self: True)
    logging_setup.setup_logging("DEBUG")
    assert len(calls) == 1
