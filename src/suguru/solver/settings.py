"""Solver settings resolved from ``config.toml`` and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from project_config import get_section

from .checkpoint import DEFAULT_STAGNATION_THRESHOLD
from .phases.branch import DEFAULT_MAX_ATTEMPTS
from .trace import TRACE_LEVELS


@dataclass(frozen=True)
class SolverSettings:
    """Finalised solver policy after precedence resolution.

    ``max_passes`` and ``timeout_s`` are opt-in cancellation limits; ``None``
    lets the loop run until the grid is solved.
    """

    wait_ms: int = 0
    seed: Optional[int] = None
    max_guess_attempts: int = DEFAULT_MAX_ATTEMPTS
    stagnation_threshold: int = DEFAULT_STAGNATION_THRESHOLD
    max_passes: Optional[int] = None
    timeout_s: Optional[float] = None
    log_passes: bool = False
    trace_level: str = "none"


_ENV_PREFIX = "SUGURU_"
_CLI_PREFIX = "CLI_SUGURU_"
_INVALID = object()


def _parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def _parse_int(value: Any) -> Optional[int]:
    try:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip():
            return int(value)
    except (TypeError, ValueError):
        return None
    return None


def _parse_float(value: Any) -> Optional[float]:
    try:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str) and value.strip():
            return float(value)
    except (TypeError, ValueError):
        return None
    return None


def _parse_limit(value: Any, parser) -> Any:
    """Limits treat ``0``, ``"none"`` and ``"off"`` as *unbounded*."""

    if isinstance(value, str) and value.strip().lower() in {"", "none", "off", "unbounded"}:
        return None
    parsed = parser(value)
    if parsed is None:
        return _INVALID
    return parsed if parsed > 0 else None


def _coerce(name: str, value: Any) -> Any:
    """Return the typed value for field ``name`` or ``_INVALID``."""

    if name in {"wait_ms", "max_guess_attempts", "stagnation_threshold"}:
        parsed = _parse_int(value)
        if parsed is None or parsed < 0 or (name == "max_guess_attempts" and parsed < 1):
            return _INVALID
        return parsed
    if name == "seed":
        if isinstance(value, str) and value.strip().lower() in {"", "none", "random"}:
            return None
        parsed = _parse_int(value)
        return _INVALID if parsed is None else parsed
    if name == "max_passes":
        return _parse_limit(value, _parse_int)
    if name == "timeout_s":
        return _parse_limit(value, _parse_float)
    if name == "log_passes":
        parsed_bool = _parse_bool(value)
        return _INVALID if parsed_bool is None else parsed_bool
    if name == "trace_level":
        text = str(value).strip().lower()
        return text if text in TRACE_LEVELS else _INVALID
    return _INVALID


def _overlay(settings: SolverSettings, source: Mapping[str, Any]) -> SolverSettings:
    changes: Dict[str, Any] = {}
    for item in fields(SolverSettings):
        if item.name not in source:
            continue
        value = _coerce(item.name, source[item.name])
        if value is _INVALID:
            continue
        changes[item.name] = value
    return replace(settings, **changes) if changes else settings


def _env_block(env: Mapping[str, str], prefix: str) -> Dict[str, str]:
    block: Dict[str, str] = {}
    for key, value in env.items():
        upper = str(key).upper()
        if upper.startswith(prefix):
            block[upper[len(prefix):].lower()] = str(value)
    return block


def resolve_settings(env: Mapping[str, str] | None = None) -> SolverSettings:
    """Build :class:`SolverSettings` with precedence TOML < env < CLI.

    ``SUGURU_<FIELD>`` environment variables override the ``[solver]`` table
    and ``CLI_SUGURU_<FIELD>`` keys (set by the command line front-end)
    override both.  Values that fail to parse keep the previous layer.
    ``env`` defaults to :data:`os.environ`.
    """

    if env is None:
        env = os.environ
    settings = SolverSettings()
    section = get_section("solver", {})
    if isinstance(section, dict):
        settings = _overlay(settings, section)

    if env:
        cli_block = _env_block(env, _CLI_PREFIX)
        env_block = _env_block(
            {k: v for k, v in env.items() if not str(k).upper().startswith(_CLI_PREFIX)},
            _ENV_PREFIX,
        )
        settings = _overlay(settings, env_block)
        settings = _overlay(settings, cli_block)
    return settings


__all__ = ["SolverSettings", "resolve_settings"]
