"""
Unit tests for the color and style-flag code tables (chat_formatting/formatting.py).

Tests cover:
- Named color lookups by code, name and display string
- Hex color parsing and its error kinds
- parse_color prefix dispatch
- Style flag lookups and terminal escapes
"""

import pytest

from chat_formatting.errors import (
    ChatColorParseError,
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
from chat_formatting.formatting import (
    COLORS_BY_CODE,
    FORMATS_BY_CODE,
    RENDER_ORDER,
    ChatColor,
    ChatFormat,
    HexColor,
    parse_color,
)

# ============================================================================
# NAMED COLORS
# ============================================================================


@pytest.mark.unit
class TestChatColor:
    """Named colors and their three textual forms."""

    @pytest.mark.parametrize("color", list(ChatColor))
    def test_display_string_round_trips(self, color):
        assert parse_color(str(color)) is color

    @pytest.mark.parametrize("color", list(ChatColor))
    def test_legacy_code_round_trips(self, color):
        assert ChatColor.from_color_code(f"§{color.code}") is color

    def test_code_table_is_a_bijection(self):
        assert len(COLORS_BY_CODE) == len(ChatColor) == 17
        assert set(COLORS_BY_CODE) == set("0123456789abcdefr")

    def test_known_codes(self):
        assert ChatColor.from_color_code_char("c") is ChatColor.RED
        assert ChatColor.from_color_code_char("0") is ChatColor.BLACK
        assert ChatColor.from_color_code_char("r") is ChatColor.RESET

    def test_unknown_code_char(self):
        with pytest.raises(InvalidColorCodeChar) as exc_info:
            ChatColor.from_color_code_char("z")
        assert exc_info.value.color_code_char == "z"

    def test_code_with_wrong_length(self):
        with pytest.raises(InvalidColorCodeFormat) as exc_info:
            ChatColor.from_color_code("§cc")
        assert exc_info.value.found == "§cc"
        assert exc_info.value.length == 3

    def test_unknown_name(self):
        with pytest.raises(InvalidColorName) as exc_info:
            ChatColor.from_color_name("purple")
        assert exc_info.value.color_name == "purple"

    def test_ansi_escapes(self):
        assert ChatColor.RED.to_ansi_escape_code() == "\x1b[91m"
        assert ChatColor.RED.to_ansi_escape_code(reset_formatting=True) == "\x1b[0;91m"
        assert ChatColor.DARK_BLUE.to_ansi_escape_code() == "\x1b[34m"

    def test_reset_always_clears(self):
        assert ChatColor.RESET.to_ansi_escape_code() == "\x1b[0m"
        assert ChatColor.RESET.to_ansi_escape_code(reset_formatting=True) == "\x1b[0m"

    def test_ansi_attribute_ranges(self):
        for color in ChatColor:
            if color is ChatColor.RESET:
                continue
            assert 30 <= color.ansi_attribute <= 37 or 90 <= color.ansi_attribute <= 97


# ============================================================================
# HEX COLORS
# ============================================================================


@pytest.mark.unit
class TestHexColor:
    """24-bit colors."""

    def test_parse(self):
        color = HexColor.from_hex_str("#F00420")
        assert color.rgb == (0xF0, 0x04, 0x20)

    def test_lowercase_input_formats_uppercase(self):
        assert str(HexColor.from_hex_str("#abcdef")) == "#ABCDEF"

    def test_round_trip_through_display_string(self):
        color = HexColor(1, 2, 255)
        assert parse_color(str(color)) == color

    def test_has_no_legacy_code(self):
        assert HexColor(0, 0, 0).code is None

    def test_ansi_escape(self):
        assert HexColor(1, 2, 3).to_ansi_escape_code() == "\x1b[38;2;1;2;3m"

    def test_chat_color_delegates(self):
        assert ChatColor.from_hex_str("#000000") == HexColor(0, 0, 0)

    @pytest.mark.parametrize("value", ["#-azxxxx", "F00420", "#F0042", "#F004200"])
    def test_invalid_format(self, value):
        with pytest.raises(InvalidHexFormat) as exc_info:
            HexColor.from_hex_str(value)
        assert exc_info.value.found == value

    @pytest.mark.parametrize("value", ["#zz0000", "#00+100", "#0000_1"])
    def test_unparsable_digit(self, value):
        with pytest.raises(HexUnparsableInt):
            HexColor.from_hex_str(value)

    def test_channel_out_of_range(self):
        with pytest.raises(ValueError):
            HexColor(256, 0, 0)


# ============================================================================
# parse_color
# ============================================================================


@pytest.mark.unit
class TestParseColor:
    """Prefix dispatch between the three textual forms."""

    def test_name(self):
        assert parse_color("dark_blue") is ChatColor.DARK_BLUE

    def test_legacy_code(self):
        assert parse_color("§1") is ChatColor.DARK_BLUE

    def test_hex(self):
        assert parse_color("#0000AA") == HexColor(0, 0, 0xAA)

    def test_garbled_hex_fails_as_hex_format(self):
        with pytest.raises(InvalidHexFormat):
            parse_color("#-azxxxx")

    def test_unknown_name_fails_as_unknown_format(self):
        with pytest.raises(UnknownChatColorFormat) as exc_info:
            parse_color("foobar")
        assert exc_info.value.found == "foobar"

    def test_errors_share_a_base(self):
        with pytest.raises(ChatColorParseError):
            parse_color("foobar")
        with pytest.raises(ValueError):
            parse_color("#-azxxxx")


# ============================================================================
# STYLE FLAGS
# ============================================================================


@pytest.mark.unit
class TestChatFormat:
    """Style flags and their codes."""

    @pytest.mark.parametrize(
        ("code", "fmt"),
        [
            ("l", ChatFormat.BOLD),
            ("o", ChatFormat.ITALIC),
            ("n", ChatFormat.UNDERLINED),
            ("m", ChatFormat.STRIKETHROUGH),
            ("k", ChatFormat.OBFUSCATED),
        ],
    )
    def test_code_lookup(self, code, fmt):
        assert ChatFormat.from_format_code_char(code) is fmt
        assert ChatFormat.from_format_code(f"§{code}") is fmt
        assert fmt.code == code

    def test_codes_do_not_overlap_colors(self):
        assert not set(FORMATS_BY_CODE) & set(COLORS_BY_CODE)

    def test_name_lookup(self):
        assert ChatFormat.from_format_name("strikethrough") is ChatFormat.STRIKETHROUGH

    def test_unknown_name(self):
        with pytest.raises(InvalidFormatName):
            ChatFormat.from_format_name("blink")

    def test_unknown_code_char(self):
        with pytest.raises(InvalidFormatCodeChar) as exc_info:
            ChatFormat.from_format_code_char("c")
        assert exc_info.value.format_code_char == "c"

    def test_code_with_wrong_length(self):
        with pytest.raises(InvalidFormatCodeFormat):
            ChatFormat.from_format_code("l")

    def test_ansi_attributes(self):
        assert [fmt.ansi_attribute for fmt in RENDER_ORDER] == [1, 3, 9, 4, 8]
        assert ChatFormat.BOLD.to_ansi_escape_code() == "\x1b[1m"
