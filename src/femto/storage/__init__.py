"""Document codec and file-storage port."""

from .codec import (
    CRLF,
    LF,
    DecodedDocument,
    decode_document,
    detect_separator,
    encode_document,
    join_lines,
    split_lines,
)
from .files import FileStorage, LocalFileStorage, PathLike

__all__ = [
    "CRLF",
    "LF",
    "DecodedDocument",
    "decode_document",
    "detect_separator",
    "encode_document",
    "join_lines",
    "split_lines",
    "FileStorage",
    "LocalFileStorage",
    "PathLike",
]
