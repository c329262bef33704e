"""Error taxonomy for the splitter. Everything here is fatal to the run."""


class SplitError(Exception):
    """Base class for errors the splitter reports as ``ERROR: <message>``."""


class UsageError(SplitError):
    """Wrong number of arguments or an unknown option."""


class ConfigError(SplitError):
    """The YAML config file is unreadable or has the wrong shape."""


class MalformedMarkerError(SplitError):
    """A boundary marker line has too few ``/``-separated segments."""


class MalformedPayloadError(SplitError):
    """A payload line is not a JSON object with a string ``log`` field."""

    def __init__(self, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        if line_number is not None:
            super().__init__(f"line {line_number}: {reason}")
        else:
            super().__init__(reason)


class PayloadBeforeMarkerError(SplitError):
    """A payload line appeared before any container marker."""
