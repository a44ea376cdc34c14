from __future__ import annotations

import pytest

from femto.runtime.config import EditorConfig


def test_from_env_uses_defaults_when_unset() -> None:
    assert EditorConfig.from_env({}) == EditorConfig()


def test_from_env_reads_prefixed_values() -> None:
    config = EditorConfig.from_env(
        {
            "FEMTO_ENCODING": "latin-1",
            "FEMTO_HISTORY_LIMIT": "50",
            "FEMTO_ROWS": "10",
            "FEMTO_COLS": "80",
            "FEMTO_SEQUENCE_TIMEOUT_MS": "400",
        }
    )

    assert config == EditorConfig(
        encoding="latin-1",
        history_limit=50,
        viewport_rows=10,
        viewport_cols=80,
        sequence_timeout_ms=400,
    )


def test_blank_values_fall_back_to_defaults() -> None:
    config = EditorConfig.from_env({"FEMTO_ROWS": " ", "FEMTO_HISTORY_LIMIT": ""})

    assert config.viewport_rows == 20
    assert config.history_limit is None


@pytest.mark.parametrize(
    "env, fragment",
    [
        ({"FEMTO_ROWS": "many"}, "FEMTO_ROWS must be an integer"),
        ({"FEMTO_COLS": "0"}, "FEMTO_COLS must be >= 1"),
        ({"FEMTO_HISTORY_LIMIT": "1"}, "FEMTO_HISTORY_LIMIT must be >= 2"),
    ],
)
def test_from_env_rejects_invalid_values(env: dict[str, str], fragment: str) -> None:
    with pytest.raises(ValueError, match=fragment):
        EditorConfig.from_env(env)


def test_direct_construction_validates() -> None:
    with pytest.raises(ValueError):
        EditorConfig(viewport_rows=0)
    with pytest.raises(ValueError):
        EditorConfig(sequence_timeout_ms=0)
