"""File-storage port and its local-disk implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Union

from femto.runtime import telemetry

PathLike = Union[str, Path]


class FileStorage(Protocol):
    """Raw byte access used by the session to load and save documents."""

    def read(self, path: PathLike) -> bytes:
        """Return the file's bytes; raise ``FileNotFoundError`` when absent."""
        ...

    def write(self, path: PathLike, data: bytes) -> None:
        """Replace the file's contents; raise ``OSError`` on failure."""
        ...


class LocalFileStorage:
    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name

    def read(self, path: PathLike) -> bytes:
        with telemetry.span(
            "storage::read",
            logger_name=self._logger_name,
            component="storage",
            metadata={"path": str(path)},
        ) as handle:
            with open(path, "rb") as stream:
                data = stream.read()
            handle.add_metadata("bytes", len(data))
            return data

    def write(self, path: PathLike, data: bytes) -> None:
        with telemetry.span(
            "storage::write",
            logger_name=self._logger_name,
            component="storage",
            metadata={"path": str(path), "bytes": len(data)},
        ):
            with open(path, "wb") as stream:
                stream.write(data)


__all__ = ["FileStorage", "LocalFileStorage", "PathLike"]
