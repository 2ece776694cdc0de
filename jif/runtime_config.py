"""Environment-driven settings for the CLI and the API."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


INLINE_TRUE_VALUES = {"1", "true", "yes", "on"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class PipelineConfig:
    """Settings shared by the command-line runner and the HTTP API."""

    log_level: str = "INFO"
    siteswap_jugglers: int = 2
    trace: bool = False

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def pipeline_config_from_env(
    env: Optional[Mapping[str, str]] = None,
    prefix: str = "JIF_",
) -> PipelineConfig:
    """Build pipeline config from environment variables with sane defaults.

    Supported variables:
    - {prefix}LOG_LEVEL (DEBUG, INFO, WARNING, ERROR or CRITICAL)
    - {prefix}SITESWAP_JUGGLERS (int, at least 1)
    - {prefix}TRACE (1/true/yes/on)
    """
    active_env = os.environ if env is None else env
    defaults = PipelineConfig()

    def _int_env(name: str, default: int, minimum: int) -> int:
        raw = active_env.get(name)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError:
            return default
        return max(minimum, value)

    log_level = active_env.get(f"{prefix}LOG_LEVEL", defaults.log_level).strip().upper()
    if log_level not in LOG_LEVELS:
        log_level = defaults.log_level

    return PipelineConfig(
        log_level=log_level,
        siteswap_jugglers=_int_env(f"{prefix}SITESWAP_JUGGLERS", defaults.siteswap_jugglers, 1),
        trace=active_env.get(f"{prefix}TRACE", "").strip().lower() in INLINE_TRUE_VALUES,
    )


def _require_positive_int(env: Mapping[str, str], name: str, default: int) -> None:
    raw_value = env.get(name, str(default)).strip()
    try:
        parsed = int(raw_value)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer.") from exc
    if parsed <= 0:
        raise RuntimeError(f"{name} must be a positive integer.")


def validate_runtime_environment(mode: str, env: Optional[Mapping[str, str]] = None) -> None:
    """Raise RuntimeError listing every invalid ``JIF_`` setting, if any."""
    active_env = os.environ if env is None else env

    errors: list[str] = []
    log_level = active_env.get("JIF_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        errors.append(f"JIF_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}.")

    try:
        _require_positive_int(active_env, "JIF_SITESWAP_JUGGLERS", 2)
    except RuntimeError as exc:
        errors.append(str(exc))

    if errors:
        error_lines = "\n- ".join(errors)
        raise RuntimeError(f"Invalid runtime environment for {mode}:\n- {error_lines}")
