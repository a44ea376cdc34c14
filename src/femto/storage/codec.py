"""Line-separator detection and document (de)serialization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from femto.buffer import TextBuffer

CRLF = "\r\n"
LF = "\n"


@dataclass(frozen=True, slots=True)
class DecodedDocument:
    buffer: TextBuffer
    separator: str


def detect_separator(text: str) -> str:
    return CRLF if CRLF in text else LF


def split_lines(text: str, separator: str) -> list[str]:
    if not text:
        return [""]
    return text.split(separator)


def join_lines(lines: Sequence[str], separator: str) -> str:
    """Join ``lines`` so the result ends with exactly one separator.

    A trailing empty line (left over from splitting content that already
    ended in a separator) is folded into that final separator.
    """

    data = separator.join(lines)
    if data.endswith(separator):
        data = data[: -len(separator)]
    if data:
        data += separator
    return data


def decode_document(data: bytes, *, encoding: str = "utf-8") -> DecodedDocument:
    text = data.decode(encoding, errors="surrogateescape")
    separator = detect_separator(text)
    return DecodedDocument(
        buffer=TextBuffer.from_lines(split_lines(text, separator)),
        separator=separator,
    )


def encode_document(
    buffer: TextBuffer, separator: str, *, encoding: str = "utf-8"
) -> bytes:
    return join_lines(buffer.lines, separator).encode(
        encoding, errors="surrogateescape"
    )


__all__ = [
    "CRLF",
    "LF",
    "DecodedDocument",
    "detect_separator",
    "split_lines",
    "join_lines",
    "decode_document",
    "encode_document",
]
