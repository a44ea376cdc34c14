"""Telelog wiring for the editor.

The Textual UI owns the terminal, so console output is opt-in
(``FEMTO_LOG_CONSOLE=1``) and logs normally go to ``FEMTO_LOG_FILE``.
The rest of the package talks to telelog only through:

``get_logger(name)`` -- cached logger bound to the active configuration
``record_event(name, ...)`` -- one structured ``event::<name>`` line
``span(name, ...)`` -- profiled, optionally component-tracked block
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "FEMTO_"
DEFAULT_LOGGER_NAME = "femto"
_TRUTHY = {"1", "true", "yes", "on"}

_LOGGERS: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True)
class LogSettings:
    """Plain description of a telelog configuration."""

    level: str = "INFO"
    console: bool = False
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "LogSettings":
        source = os.environ if env is None else env

        def read(name: str) -> Optional[str]:
            value = source.get(f"{ENV_PREFIX}{name}")
            return value.strip() if value and value.strip() else None

        def flag(name: str, default: bool) -> bool:
            raw = read(name)
            return default if raw is None else raw.lower() in _TRUTHY

        defaults = cls()
        buffer_size = read("LOG_BUFFER_SIZE")
        return cls(
            level=(read("LOG_LEVEL") or defaults.level).upper(),
            console=flag("LOG_CONSOLE", defaults.console),
            color=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", defaults.json),
            log_file=read("LOG_FILE") or defaults.log_file,
            buffered=flag("LOG_BUFFERED", defaults.buffered),
            buffer_size=int(buffer_size) if buffer_size else defaults.buffer_size,
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


PRESETS: Dict[str, LogSettings] = {
    "development": LogSettings(level="DEBUG", console=True),
    "production": LogSettings(level="INFO", log_file="femto.log", buffered=True),
    "performance": LogSettings(
        level="DEBUG", json=True, log_file="femto-performance.log", buffered=True
    ),
}


def preset_settings(
    preset: str, env: Optional[Mapping[str, str]] = None
) -> LogSettings:
    """Look up a named preset; ``FEMTO_LOG_FILE`` still overrides its file."""

    try:
        settings = PRESETS[preset.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown preset '{preset}'.") from exc
    log_file = LogSettings.from_env(env).log_file
    return replace(settings, log_file=log_file) if log_file else settings


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    ``config`` is a ready ``telelog.Config``; ``preset`` names one of
    ``PRESETS``. With neither, settings are re-read from the environment.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = preset_settings(preset).build()
    elif config is None:
        config = LogSettings.from_env().build()
    _ACTIVE_CONFIG = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = LogSettings.from_env().build()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGERS[logger_name]


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _stringify(v)) for k, v in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so the block can attach results or report failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component`` set to ``True`` tracks the block as component ``name``; a
    string names the component explicitly. ``metadata`` is attached as
    logger context while the block runs. An escaping exception is logged
    as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata=dict(context),
    )

    for key, value in context.items():
        log.add_context(key, value)
    try:
        with ExitStack() as stack:
            if component_name:
                stack.enter_context(log.track_component(component_name))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = [
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
