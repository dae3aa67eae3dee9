"""Code tables for colors and style flags.

Legacy chat text carries styling as two-character escapes: the section sign
``§`` followed by one code character.  This module owns the fixed mappings
between those code characters, the symbolic names used by the structured
(JSON) form, and the SGR attribute numbers used for terminal output.

Colors
------
:class:`ChatColor` enumerates the sixteen named colors plus ``reset``.  Each
has exactly one legacy code (``0``-``9``, ``a``-``f``, ``r``).

:class:`HexColor` is the arbitrary 24-bit color from the structured form.  It
has **no** legacy code, so it survives only through the structured encoding
(``#RRGGBB``); legacy rendering cannot carry it.

Style flags
-----------
:class:`ChatFormat` enumerates the five combinable style flags.  Reset is a
color value, not a flag.

Strict parsing
--------------
The ``from_*`` constructors and :func:`parse_color` raise the typed errors
from :mod:`chat_formatting.errors`.  They are for validating standalone
strings; the legacy parser looks codes up in :data:`COLORS_BY_CODE` and
:data:`FORMATS_BY_CODE` and never raises.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Union

from chat_formatting.errors import (
    HexUnparsableInt,
    InvalidColorCodeChar,
    InvalidColorCodeFormat,
    InvalidColorName,
    InvalidFormatCodeChar,
    InvalidFormatCodeFormat,
    InvalidFormatName,
    InvalidHexFormat,
    UnknownChatColorFormat,
)

#: Escape marker that introduces every legacy formatting code.
SECTION_SIGN = "§"

#: Terminal escape that clears every color and attribute.
ANSI_RESET = "\x1b[0m"


def _sgr(*params: object) -> str:
    """Build an SGR escape sequence from its parameters."""
    return f"\x1b[{';'.join(str(p) for p in params)}m"


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------


class ChatColor(Enum):
    """Named chat colors, valued by their structured-form name."""

    BLACK = "black"
    DARK_BLUE = "dark_blue"
    DARK_GREEN = "dark_green"
    DARK_AQUA = "dark_aqua"
    DARK_RED = "dark_red"
    DARK_PURPLE = "dark_purple"
    GOLD = "gold"
    GRAY = "gray"
    DARK_GRAY = "dark_gray"
    BLUE = "blue"
    GREEN = "green"
    AQUA = "aqua"
    RED = "red"
    LIGHT_PURPLE = "light_purple"
    YELLOW = "yellow"
    WHITE = "white"
    RESET = "reset"

    def __str__(self) -> str:
        return self.value

    @property
    def code(self) -> str:
        """Single legacy code character for this color."""
        return _COLOR_CODES[self]

    @property
    def ansi_attribute(self) -> int:
        """SGR foreground attribute (``0`` for reset)."""
        return _COLOR_ANSI[self]

    def to_ansi_escape_code(self, reset_formatting: bool = False) -> str:
        """Terminal escape that switches to this color.

        Args:
            reset_formatting: Prefix the attribute with ``0;`` so that any
                active bold/italic/etc. is cleared along with the color
                change, mirroring legacy semantics where a color code clears
                the style flags.

        Returns:
            The escape string.  ``RESET`` always yields ``\\x1b[0m``.
        """
        if self is ChatColor.RESET:
            return ANSI_RESET
        if reset_formatting:
            return _sgr(0, self.ansi_attribute)
        return _sgr(self.ansi_attribute)

    # ── Strict parsers ──────────────────────────────────────────────────────

    @classmethod
    def from_color_code_char(cls, color_code_char: str) -> ChatColor:
        """Look up a color by its legacy code character (``"c"`` → RED)."""
        try:
            return COLORS_BY_CODE[color_code_char]
        except KeyError:
            raise InvalidColorCodeChar(color_code_char=color_code_char) from None

    @classmethod
    def from_color_code(cls, color_code: str) -> ChatColor:
        """Parse a two-character legacy code such as ``"§c"``.

        Only the length is checked; the first character is taken to be the
        marker and the second is looked up.

        Raises:
            InvalidColorCodeFormat: The string is not exactly 2 characters.
            InvalidColorCodeChar:   The code character names no color.
        """
        if len(color_code) != 2:
            raise InvalidColorCodeFormat(found=color_code, length=len(color_code))
        return cls.from_color_code_char(color_code[1])

    @classmethod
    def from_color_name(cls, color_name: str) -> ChatColor:
        """Look up a color by its structured-form name (``"dark_red"``)."""
        try:
            return cls(color_name)
        except ValueError:
            raise InvalidColorName(color_name=color_name) from None

    @staticmethod
    def from_hex_str(hex_str: str) -> HexColor:
        """Parse ``#RRGGBB`` into a :class:`HexColor`."""
        return HexColor.from_hex_str(hex_str)


@dataclass(frozen=True)
class HexColor:
    """A 24-bit color with independent red/green/blue byte channels.

    Attributes:
        red:   0-255.
        green: 0-255.
        blue:  0-255.
    """

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 0xFF:
                raise ValueError(f"color channel out of range: {channel}")

    def __str__(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"

    @property
    def code(self) -> None:
        """Hex colors have no legacy code character."""
        return None

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def to_ansi_escape_code(self, reset_formatting: bool = False) -> str:
        """24-bit terminal escape (``38;2;R;G;B``) for this color."""
        if reset_formatting:
            return _sgr(0, 38, 2, self.red, self.green, self.blue)
        return _sgr(38, 2, self.red, self.green, self.blue)

    @classmethod
    def from_hex_str(cls, hex_str: str) -> HexColor:
        """Parse ``#RRGGBB`` (either case).

        Raises:
            InvalidHexFormat: Missing ``#`` or wrong length.
            HexUnparsableInt: A channel contains a non-hex digit.
        """
        if not hex_str.startswith("#") or len(hex_str) != 7:
            raise InvalidHexFormat(found=hex_str)
        channels = []
        for start in (1, 3, 5):
            pair = hex_str[start : start + 2]
            # int(..., 16) would also accept signs and underscores.
            if not all(ch in string.hexdigits for ch in pair):
                raise HexUnparsableInt(found=pair)
            channels.append(int(pair, 16))
        return cls(*channels)


#: Either kind of color a component can carry.
Color = Union[ChatColor, HexColor]


def parse_color(value: str) -> Color:
    """Parse any textual color form.

    Dispatch is by prefix: ``#`` → hex, ``§`` → legacy code, anything else →
    color name.  An unknown name is reported as
    :class:`~chat_formatting.errors.UnknownChatColorFormat` since at that
    point none of the three forms matched.

    Args:
        value: ``"#F00420"``, ``"§1"`` or ``"dark_blue"``.

    Returns:
        A :class:`ChatColor` or :class:`HexColor`.
    """
    if value.startswith("#"):
        return HexColor.from_hex_str(value)
    if value.startswith(SECTION_SIGN):
        return ChatColor.from_color_code(value)
    try:
        return ChatColor.from_color_name(value)
    except InvalidColorName:
        raise UnknownChatColorFormat(found=value) from None


# ---------------------------------------------------------------------------
# Style flags
# ---------------------------------------------------------------------------


class ChatFormat(Enum):
    """Combinable style flags, valued by their structured-form field name."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINED = "underlined"
    STRIKETHROUGH = "strikethrough"
    OBFUSCATED = "obfuscated"

    def __str__(self) -> str:
        return self.value

    @property
    def code(self) -> str:
        """Single legacy code character for this flag."""
        return _FORMAT_CODES[self]

    @property
    def ansi_attribute(self) -> int:
        """SGR display attribute for this flag."""
        return _FORMAT_ANSI[self]

    def to_ansi_escape_code(self) -> str:
        return _sgr(self.ansi_attribute)

    @classmethod
    def from_format_code_char(cls, format_code_char: str) -> ChatFormat:
        """Look up a flag by its legacy code character (``"l"`` → BOLD)."""
        try:
            return FORMATS_BY_CODE[format_code_char]
        except KeyError:
            raise InvalidFormatCodeChar(format_code_char=format_code_char) from None

    @classmethod
    def from_format_code(cls, format_code: str) -> ChatFormat:
        """Parse a two-character legacy code such as ``"§m"``."""
        if len(format_code) != 2:
            raise InvalidFormatCodeFormat(found=format_code, length=len(format_code))
        return cls.from_format_code_char(format_code[1])

    @classmethod
    def from_format_name(cls, format_name: str) -> ChatFormat:
        try:
            return cls(format_name)
        except ValueError:
            raise InvalidFormatName(format_name=format_name) from None


#: Order in which a component's flags are emitted into legacy text.
RENDER_ORDER: tuple[ChatFormat, ...] = (
    ChatFormat.BOLD,
    ChatFormat.ITALIC,
    ChatFormat.STRIKETHROUGH,
    ChatFormat.UNDERLINED,
    ChatFormat.OBFUSCATED,
)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

_COLOR_CODES: dict[ChatColor, str] = {
    ChatColor.BLACK: "0",
    ChatColor.DARK_BLUE: "1",
    ChatColor.DARK_GREEN: "2",
    ChatColor.DARK_AQUA: "3",
    ChatColor.DARK_RED: "4",
    ChatColor.DARK_PURPLE: "5",
    ChatColor.GOLD: "6",
    ChatColor.GRAY: "7",
    ChatColor.DARK_GRAY: "8",
    ChatColor.BLUE: "9",
    ChatColor.GREEN: "a",
    ChatColor.AQUA: "b",
    ChatColor.RED: "c",
    ChatColor.LIGHT_PURPLE: "d",
    ChatColor.YELLOW: "e",
    ChatColor.WHITE: "f",
    ChatColor.RESET: "r",
}

_COLOR_ANSI: dict[ChatColor, int] = {
    ChatColor.BLACK: 30,
    ChatColor.DARK_BLUE: 34,
    ChatColor.DARK_GREEN: 32,
    ChatColor.DARK_AQUA: 36,
    ChatColor.DARK_RED: 31,
    ChatColor.DARK_PURPLE: 35,
    ChatColor.GOLD: 33,
    ChatColor.GRAY: 37,
    ChatColor.DARK_GRAY: 90,
    ChatColor.BLUE: 94,
    ChatColor.GREEN: 92,
    ChatColor.AQUA: 96,
    ChatColor.RED: 91,
    ChatColor.LIGHT_PURPLE: 95,
    ChatColor.YELLOW: 93,
    ChatColor.WHITE: 97,
    ChatColor.RESET: 0,
}

_FORMAT_CODES: dict[ChatFormat, str] = {
    ChatFormat.BOLD: "l",
    ChatFormat.ITALIC: "o",
    ChatFormat.UNDERLINED: "n",
    ChatFormat.STRIKETHROUGH: "m",
    ChatFormat.OBFUSCATED: "k",
}

_FORMAT_ANSI: dict[ChatFormat, int] = {
    ChatFormat.BOLD: 1,
    ChatFormat.ITALIC: 3,
    ChatFormat.UNDERLINED: 4,
    ChatFormat.STRIKETHROUGH: 9,
    ChatFormat.OBFUSCATED: 8,
}

#: Legacy code character → color (includes ``r`` for reset).
COLORS_BY_CODE: dict[str, ChatColor] = {code: color for color, code in _COLOR_CODES.items()}

#: Legacy code character → style flag.
FORMATS_BY_CODE: dict[str, ChatFormat] = {code: fmt for fmt, code in _FORMAT_CODES.items()}
