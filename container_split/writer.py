"""Per-container writer: decode payloads, classify, persist, rename on close."""

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from typing import TextIO

from container_split.classifier import Classifier
from container_split.errors import MalformedPayloadError

logger = logging.getLogger(__name__)

# Lone surrogates: JSON escapes like \ud800 and undecodable input bytes.
SURROGATES = re.compile("[\ud800-\udfff]")


def replace_surrogates(text: str) -> str:
    """Swap lone surrogates for U+FFFD so the text encodes as UTF-8."""
    return SURROGATES.sub("\ufffd", text)


@dataclass(frozen=True)
class SessionResult:
    name: str
    line_count: int
    label: str | None
    path: str


def decode_payload(line: str, line_number: int | None = None) -> str:
    """Return the ``log`` field of a ``{"log": "..."}`` payload line."""
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(f"invalid JSON payload: {e}", line_number) from e
    if not isinstance(data, dict):
        raise MalformedPayloadError(
            f"payload must be a JSON object, got {type(data).__name__}", line_number
        )
    log = data.get("log")
    if not isinstance(log, str):
        raise MalformedPayloadError("payload has no string 'log' field", line_number)
    return replace_surrogates(log)


class ContainerWriter:
    def __init__(self, output_dir: str, name: str, classifier: Classifier,
                 out: TextIO | None = None):
        self._output_dir = output_dir
        self._name = name
        self._classifier = classifier
        self._out = out or sys.stdout
        self._count = 0
        self._label = None
        self._result = None
        self._path = os.path.join(output_dir, name + ".log")

        display = replace_surrogates(self._path)
        print(f"Writing {display} ... ", end="", file=self._out, flush=True)
        self._file = open(self._path, "wb")
        logger.debug("Opened %s", self._path)

    @property
    def line_count(self) -> int:
        return self._count

    @property
    def label(self) -> str | None:
        return self._label

    def write(self, line: str, line_number: int | None = None) -> int:
        """Decode one payload line and append its log text. Returns bytes written."""
        if not line:
            return 0
        text = decode_payload(line, line_number)
        self._count += 1
        if self._label is None:
            self._label = self._classifier.classify(text)
            if self._label is not None:
                logger.info("Detected %s in container %s", self._label, self._name)
        return self._file.write(text.encode("utf-8"))

    def close(self) -> SessionResult:
        """Report the count, close the file, and rename it if a label was found."""
        if self._result is not None:
            return self._result

        detected = f", detected: {self._label}" if self._label else ""
        print(f"{self._count} lines{detected}", file=self._out, flush=True)
        self._file.close()

        final_path = self._path
        if self._label:
            final_path = os.path.join(self._output_dir, f"{self._name}-{self._label}.log")
            os.rename(self._path, final_path)
            logger.debug("Renamed %s -> %s", self._path, final_path)

        self._result = SessionResult(
            name=self._name,
            line_count=self._count,
            label=self._label,
            path=final_path,
        )
        return self._result

    def abort(self):
        """Release the file handle without reporting or renaming."""
        if not self._file.closed:
            self._file.close()
