"""Diagnostics raised while parsing BL programs."""

from __future__ import annotations

from typing import Optional

DEFAULT_FILENAME = "<bl>"


class BLParseError(RuntimeError):
    """Fatal parse diagnostic carrying the offending token when one is known."""

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.message = message
        self.token = token
        self.filename = filename
        self.line: Optional[int] = getattr(token, "line", None)
        self.column: Optional[int] = getattr(token, "column", None)
        if self.line is not None and self.column is not None:
            location = f"{filename}:{self.line}:{self.column}"
        else:
            location = filename
        super().__init__(f"{location}: {message}")


def require(
    condition: bool,
    message: str,
    token: Optional[str] = None,
    filename: str = DEFAULT_FILENAME,
) -> None:
    """Raise :class:`BLParseError` with ``message`` unless ``condition`` holds."""

    if not condition:
        raise BLParseError(message, token, filename)


__all__ = ["BLParseError", "DEFAULT_FILENAME", "require"]
