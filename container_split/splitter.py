"""Dispatcher: route lines of a concatenated container log to per-container writers."""

import logging
import sys
from typing import Iterable, TextIO

from container_split.classifier import Classifier
from container_split.config import DEFAULT_RULES, ClassificationRule
from container_split.errors import MalformedMarkerError, PayloadBeforeMarkerError
from container_split.writer import ContainerWriter, SessionResult

logger = logging.getLogger(__name__)

MARKER_TOKEN = "==>"
NAME_SEGMENT = 5


def is_marker(line: str) -> bool:
    """True if the line starts a new container section."""
    return line.startswith(MARKER_TOKEN)


def parse_container_name(line: str) -> str:
    """Extract the container name from a marker line.

    ``==> /var/lib/docker/containers/<id>/<id>-json.log <==`` splits on ``/``
    into ``[" ", "var", "lib", "docker", "containers", "<id>", ...]`` once the
    token is removed; the name is segment 5 of that split.
    """
    segments = line[len(MARKER_TOKEN):].split("/")
    if len(segments) <= NAME_SEGMENT:
        raise MalformedMarkerError(
            f"marker line has {len(segments)} '/'-separated segment(s), "
            f"need at least {NAME_SEGMENT + 1}: {line!r}"
        )
    return segments[NAME_SEGMENT]


def split_stream(
    lines: Iterable[str],
    output_dir: str,
    rules: Iterable[ClassificationRule] = DEFAULT_RULES,
    out: TextIO | None = None,
) -> list[SessionResult]:
    """Write every container section of *lines* to its own file in *output_dir*.

    Returns one SessionResult per marker, in input order. Any error aborts
    the run: the open file is released and the exception propagates.
    """
    classifier = Classifier(rules)
    out = out or sys.stdout
    results = []
    writer = None

    try:
        for line_number, line in enumerate(lines, 1):
            if is_marker(line):
                if writer is not None:
                    results.append(writer.close())
                    writer = None
                name = parse_container_name(line)
                writer = ContainerWriter(output_dir, name, classifier, out)
                continue
            if writer is None:
                if not line:
                    continue
                raise PayloadBeforeMarkerError(
                    f"line {line_number}: payload before any container marker"
                )
            writer.write(line, line_number)

        if writer is not None:
            results.append(writer.close())
            writer = None
    finally:
        if writer is not None:
            writer.abort()

    logger.info(
        "Split %d container(s), %d payload line(s), %d classified",
        len(results),
        sum(r.line_count for r in results),
        sum(1 for r in results if r.label),
    )
    return results
