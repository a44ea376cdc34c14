"""Environment-driven editor configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "FEMTO_"


def _read_int(
    env: Mapping[str, str], name: str, default: Optional[int], *, minimum: int
) -> Optional[int]:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Settings shared by the session, the keymaps and the Textual host."""

    encoding: str = "utf-8"
    history_limit: Optional[int] = None
    viewport_rows: int = 20
    viewport_cols: int = 40
    sequence_timeout_ms: int = 1000

    def __post_init__(self) -> None:
        if self.history_limit is not None and self.history_limit < 2:
            raise ValueError("history_limit must be at least 2 when set")
        if self.viewport_rows < 1 or self.viewport_cols < 1:
            raise ValueError("viewport dimensions must be positive")
        if self.sequence_timeout_ms <= 0:
            raise ValueError("sequence_timeout_ms must be positive")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            encoding=source.get(f"{ENV_PREFIX}ENCODING") or defaults.encoding,
            history_limit=_read_int(source, "HISTORY_LIMIT", None, minimum=2),
            viewport_rows=_read_int(
                source, "ROWS", defaults.viewport_rows, minimum=1
            )
            or defaults.viewport_rows,
            viewport_cols=_read_int(
                source, "COLS", defaults.viewport_cols, minimum=1
            )
            or defaults.viewport_cols,
            sequence_timeout_ms=_read_int(
                source, "SEQUENCE_TIMEOUT_MS", defaults.sequence_timeout_ms, minimum=1
            )
            or defaults.sequence_timeout_ms,
        )


__all__ = ["EditorConfig"]
