from __future__ import annotations

import logging

import pytest

from jif.runtime_config import PipelineConfig, pipeline_config_from_env, validate_runtime_environment


def test_defaults_without_environment():
    config = pipeline_config_from_env(env={})

    assert config == PipelineConfig()
    assert config.log_level == "INFO"
    assert config.siteswap_jugglers == 2
    assert config.trace is False
    assert config.log_level_number == logging.INFO


def test_reads_prefixed_variables():
    env = {
        "JIF_LOG_LEVEL": " debug ",
        "JIF_SITESWAP_JUGGLERS": "3",
        "JIF_TRACE": "Yes",
    }

    config = pipeline_config_from_env(env=env)

    assert config.log_level == "DEBUG"
    assert config.log_level_number == logging.DEBUG
    assert config.siteswap_jugglers == 3
    assert config.trace is True


def test_invalid_values_fall_back_to_defaults():
    env = {
        "JIF_LOG_LEVEL": "chatty",
        "JIF_SITESWAP_JUGGLERS": "many",
        "JIF_TRACE": "sometimes",
    }

    config = pipeline_config_from_env(env=env)

    assert config == PipelineConfig()


def test_juggler_count_is_at_least_one():
    assert pipeline_config_from_env(env={"JIF_SITESWAP_JUGGLERS": "0"}).siteswap_jugglers == 1


def test_custom_prefix():
    config = pipeline_config_from_env(env={"PATTERN_TRACE": "1"}, prefix="PATTERN_")

    assert config.trace is True


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("JIF_SITESWAP_JUGGLERS", "4")

    assert pipeline_config_from_env().siteswap_jugglers == 4


def test_valid_environment_passes():
    validate_runtime_environment("api", env={})
    validate_runtime_environment("cli", env={"JIF_LOG_LEVEL": "warning", "JIF_SITESWAP_JUGGLERS": "3"})


def test_rejects_unknown_log_level():
    with pytest.raises(RuntimeError, match="JIF_LOG_LEVEL must be one of"):
        validate_runtime_environment("api", env={"JIF_LOG_LEVEL": "chatty"})


def test_rejects_invalid_juggler_count():
    with pytest.raises(RuntimeError, match="JIF_SITESWAP_JUGGLERS must be an integer"):
        validate_runtime_environment("api", env={"JIF_SITESWAP_JUGGLERS": "NaN"})

    with pytest.raises(RuntimeError, match="JIF_SITESWAP_JUGGLERS must be a positive integer"):
        validate_runtime_environment("api", env={"JIF_SITESWAP_JUGGLERS": "0"})


def test_reports_every_problem_at_once():
    env = {"JIF_LOG_LEVEL": "chatty", "JIF_SITESWAP_JUGGLERS": "-1"}

    with pytest.raises(RuntimeError) as exc_info:
        validate_runtime_environment("api", env=env)

    message = str(exc_info.value)
    assert message.startswith("Invalid runtime environment for api:")
    assert "JIF_LOG_LEVEL" in message
    assert "JIF_SITESWAP_JUGGLERS" in message
