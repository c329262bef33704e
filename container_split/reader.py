"""Generator-based line source for the concatenated container log."""

from typing import Generator, TextIO


def open_input(filepath: str) -> TextIO:
    """Open the input log for line scanning.

    Lines end at ``\\n`` only; a ``\\r`` elsewhere in a line is kept. Bytes
    that are not valid UTF-8 come through as lone surrogates instead of
    failing the read.
    """
    return open(filepath, "r", encoding="utf-8", errors="surrogateescape", newline="\n")


def strip_terminator(line: str) -> str:
    """Drop a trailing ``\\n`` and a ``\\r`` in front of it, if present."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def iter_lines(f: TextIO) -> Generator[str, None, None]:
    """Yield each line of an open file without its line terminator."""
    for line in f:
        yield strip_terminator(line)
