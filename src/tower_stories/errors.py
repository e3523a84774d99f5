"""Exceptions raised by tower_stories."""


class InvalidArgument(ValueError):
    """Malformed input to a derivation, factory or engine call."""


class EngineError(RuntimeError):
    """The analysis engine reported a non-zero status."""

    def __init__(self, status: int, call: str, message: str = ""):
        self.status = status
        self.call = call
        detail = f"{call} returned {status}"
        super().__init__(f"{message} ({detail})" if message else detail)
