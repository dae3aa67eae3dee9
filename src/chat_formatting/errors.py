"""Typed parse errors for the chat formatting package.

This module defines a small, explicit exception hierarchy raised by the
strict parsing entry points in :mod:`chat_formatting.formatting` and by the
translation table loaders in :mod:`chat_formatting.translator`.

Design intent:
    - Every error carries the offending input so that callers can report it
      without re-deriving anything.
    - The root class subclasses :class:`ValueError`.  Pydantic field
      validators convert ``ValueError`` into a ``ValidationError``, so a bad
      ``"color"`` value in structured input surfaces through the normal
      validation path.
    - The legacy parser never raises any of these.  Unknown escape codes in
      legacy text are dropped silently; only the standalone parsers are
      strict.
"""

from __future__ import annotations


class ChatFormattingError(ValueError):
    """Base exception for all chat formatting failures."""


# ---------------------------------------------------------------------------
# Color parsing
# ---------------------------------------------------------------------------


class ChatColorParseError(ChatFormattingError):
    """Base exception for color parsing failures."""


class InvalidHexFormat(ChatColorParseError):
    """The input does not look like ``#RRGGBB``."""

    def __init__(self, *, found: str) -> None:
        super().__init__(
            f"Invalid hex format (expected format like #RRGGBB in hex, found {found!r})"
        )
        self.found = found


class HexUnparsableInt(ChatColorParseError):
    """A channel of a ``#RRGGBB`` string is not valid hexadecimal."""

    def __init__(self, *, found: str) -> None:
        super().__init__(f"Couldn't parse int ({found!r} is not a valid hex component)")
        self.found = found


class UnknownChatColorFormat(ChatColorParseError):
    """The input is neither a hex color, a legacy code, nor a color name."""

    def __init__(self, *, found: str) -> None:
        super().__init__(f"Expected one of §<code>, #RRGGBB or color_name, found {found!r}")
        self.found = found


class InvalidColorCodeChar(ChatColorParseError):
    """A single code character does not name a color."""

    def __init__(self, *, color_code_char: str) -> None:
        super().__init__(f"{color_code_char!r} is not a valid color code")
        self.color_code_char = color_code_char


class InvalidColorCodeFormat(ChatColorParseError):
    """A legacy color code is not exactly two characters long."""

    def __init__(self, *, found: str, length: int) -> None:
        super().__init__(
            "Invalid color code format (expected format like §X of length 2, "
            f"found {found!r} of length {length})"
        )
        self.found = found
        self.length = length


class InvalidColorName(ChatColorParseError):
    """A symbolic name does not name a color."""

    def __init__(self, *, color_name: str) -> None:
        super().__init__(f"{color_name!r} is not a valid color name")
        self.color_name = color_name


# ---------------------------------------------------------------------------
# Format (style flag) parsing
# ---------------------------------------------------------------------------


class ChatFormatParseError(ChatFormattingError):
    """Base exception for style flag parsing failures."""


class InvalidFormatCodeChar(ChatFormatParseError):
    """A single code character does not name a style flag."""

    def __init__(self, *, format_code_char: str) -> None:
        super().__init__(f"{format_code_char!r} is not a valid format code")
        self.format_code_char = format_code_char


class InvalidFormatCodeFormat(ChatFormatParseError):
    """A legacy format code is not exactly two characters long."""

    def __init__(self, *, found: str, length: int) -> None:
        super().__init__(
            "Invalid format code format (expected format like §X of length 2, "
            f"found {found!r} of length {length})"
        )
        self.found = found
        self.length = length


class InvalidFormatName(ChatFormatParseError):
    """A symbolic name does not name a style flag."""

    def __init__(self, *, format_name: str) -> None:
        super().__init__(f"{format_name!r} is not a valid format name")
        self.format_name = format_name


# ---------------------------------------------------------------------------
# Translation tables
# ---------------------------------------------------------------------------


class TranslationTableError(ChatFormattingError):
    """A translation table could not be read as a flat key → template mapping.

    Args:
        source: Where the table came from (a file path or ``"<string>"``).
        details: Human-readable reason.
    """

    def __init__(self, *, source: str, details: str) -> None:
        super().__init__(f"{source}: {details}")
        self.source = source
        self.details = details
