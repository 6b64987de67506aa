from __future__ import annotations


class BdfParseError(ValueError):
    """Raised when BDF text cannot be turned into a font document."""

    def __init__(self, message: str, *, line_number: int | None = None, line: str | None = None) -> None:
        self.reason = message
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
            if line is not None:
                message += f" ({line!r})"
        super().__init__(message)


class MalformedIntegerField(BdfParseError):
    """A numeric token is missing, non-numeric or out of range."""

    def __init__(self, field: str, message: str, **kwargs) -> None:
        self.field = field
        super().__init__(f"{field}: {message}", **kwargs)


class MalformedHexRow(BdfParseError):
    """A BITMAP row is not a 16-bit hexadecimal value."""


class UnterminatedGlyph(BdfParseError):
    """Input ended inside a STARTCHAR block."""

    def __init__(self, glyph_name: str, message: str, **kwargs) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"glyph {glyph_name!r}: {message}", **kwargs)
