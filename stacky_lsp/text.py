"""Line splitting and UTF-16 column helpers shared by the parser and the server."""

from __future__ import annotations

import re
from typing import List

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """Split *text* the way the protocol counts lines.

    Only ``\\r\\n``, ``\\r`` and ``\\n`` terminate a line.  A trailing line
    break yields a final empty line, which is a valid cursor position.
    """

    return _LINE_BREAK.split(text)


def utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def utf16_to_index(line: str, character: int) -> int:
    """Map a UTF-16 column on *line* to a string index, clamped to the line."""

    if character <= 0:
        return 0
    units = 0
    for index, char in enumerate(line):
        if units >= character:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(line)


def index_to_utf16(line: str, index: int) -> int:
    return utf16_length(line[: max(index, 0)])


__all__ = ["split_lines", "utf16_length", "utf16_to_index", "index_to_utf16"]
