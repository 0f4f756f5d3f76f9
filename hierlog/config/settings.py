"""
hierlog.config.settings – environment-driven logging configuration (dataclass + validators).

Env vars: LOG_LEVEL, LOG_CONSOLE, LOG_CONSOLE_LEVEL, LOG_COLOR, LOG_STREAM,
LOG_FILE, LOG_FILE_LEVEL, LOG_FILE_FORMAT, LOG_SILENCE.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from hierlog.core.exceptions import ConfigurationError

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")

STREAMS = ("stdout", "stderr")
FILE_FORMATS = ("text", "json")
SILENCE_MODES = ("none", "console", "all")


def _parse_bool(raw: str, name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean (1/0, true/false, yes/no), got {raw!r}",
        details={"variable": name, "value": raw},
    )


def _validate_choice(value: str, name: str, choices: tuple[str, ...]) -> str:
    if value not in choices:
        raise ConfigurationError(
            f"{name} must be one of {list(choices)}, got {value!r}",
            details={"field": name, "value": value},
        )
    return value


def _validate_level_name(value: Optional[str], name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{name} must be a non-empty level name, got {value!r}")
    return value.strip().upper()


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration applied to the root logger by hierlog.setup.configure().

    Level names are checked against the logging system's levels when the
    config is applied, not here, since the level list is per system.
    """

    level: Optional[str] = "INFO"
    """Root logger level. None leaves the root unrestricted."""

    console: bool = True
    """Attach a ConsoleHandler to the root logger."""

    console_level: Optional[str] = "INFO"

    color: bool = True
    """ANSI colored console output; False uses the plain template."""

    stream: str = "stdout"
    """Console stream: "stdout" or "stderr"."""

    log_file: Optional[str] = None
    """Path of the log file; no FileHandler when None."""

    file_level: Optional[str] = "DEBUG"

    file_format: str = "text"
    """"text" (template lines) or "json" (JSON Lines)."""

    silence: Optional[str] = None
    """Process-wide silence: "none", "console" or "all". None leaves the silence flags as they are."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", _validate_level_name(self.level, "level"))
        object.__setattr__(self, "console_level", _validate_level_name(self.console_level, "console_level"))
        object.__setattr__(self, "file_level", _validate_level_name(self.file_level, "file_level"))
        _validate_choice(self.stream, "stream", STREAMS)
        _validate_choice(self.file_format, "file_format", FILE_FORMATS)
        if self.silence is not None:
            _validate_choice(self.silence, "silence", SILENCE_MODES)
        if self.log_file is not None and not str(self.log_file).strip():
            raise ConfigurationError("log_file must be a non-empty path or None")

    @classmethod
    def from_env(cls, **overrides: object) -> LoggerConfig:
        """
        Build config from environment variables.

        Env:
            LOG_LEVEL          – root level, default INFO
            LOG_CONSOLE        – "1" / "true" / "yes" → console handler (default true)
            LOG_CONSOLE_LEVEL  – default INFO
            LOG_COLOR          – default true
            LOG_STREAM         – stdout | stderr
            LOG_FILE           – path; unset → no file handler
            LOG_FILE_LEVEL     – default DEBUG
            LOG_FILE_FORMAT    – text | json
            LOG_SILENCE        – none | console | all; unset → silence flags untouched

        Overrides (keyword args) take precedence over env.
        """
        env = os.environ
        kwargs: dict[str, object] = {
            "level": env.get("LOG_LEVEL", "INFO"),
            "console": _parse_bool(env.get("LOG_CONSOLE", "true"), "LOG_CONSOLE"),
            "console_level": env.get("LOG_CONSOLE_LEVEL", "INFO"),
            "color": _parse_bool(env.get("LOG_COLOR", "true"), "LOG_COLOR"),
            "stream": env.get("LOG_STREAM", "stdout").strip().lower(),
            "log_file": env.get("LOG_FILE") or None,
            "file_level": env.get("LOG_FILE_LEVEL", "DEBUG"),
            "file_format": env.get("LOG_FILE_FORMAT", "text").strip().lower(),
            "silence": env.get("LOG_SILENCE", "").strip().lower() or None,
        }
        kwargs.update(overrides)
        return cls(**kwargs)  # type: ignore[arg-type]

    def with_overrides(self, **overrides: object) -> LoggerConfig:
        """Return a new config with the given overrides (for immutability)."""
        return replace(self, **overrides)  # type: ignore[arg-type]
