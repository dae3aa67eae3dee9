"""Legacy string → terminal output.

Both transforms run over an already-rendered legacy string, never over the
component tree, so the ``§X`` escape grammar is the single intermediate form
for every display encoding.

``legacy_to_ansi``
    Color codes become ``\\x1b[0;<n>m`` (the ``0;`` clears styles, as a color
    code does in legacy text), ``§r`` becomes ``\\x1b[0m``, style codes become
    their SGR attribute.  An unknown code character is kept as plain text;
    its marker is not.

``legacy_to_plain``
    Every two-character escape is removed, known or not.
"""

from __future__ import annotations

from chat_formatting.formatting import COLORS_BY_CODE, FORMATS_BY_CODE, SECTION_SIGN


def legacy_to_ansi(legacy: str) -> str:
    """Convert legacy escapes to ANSI terminal escapes."""
    output: list[str] = []
    after_marker = False
    for char in legacy:
        if after_marker:
            after_marker = False
            if char in COLORS_BY_CODE:
                output.append(COLORS_BY_CODE[char].to_ansi_escape_code(reset_formatting=True))
            elif char in FORMATS_BY_CODE:
                output.append(FORMATS_BY_CODE[char].to_ansi_escape_code())
            else:
                output.append(char)
        elif char == SECTION_SIGN:
            after_marker = True
        else:
            output.append(char)
    return "".join(output)


def legacy_to_plain(legacy: str) -> str:
    """Strip every legacy escape, leaving unstyled text."""
    output: list[str] = []
    after_marker = False
    for char in legacy:
        if after_marker:
            after_marker = False
        elif char == SECTION_SIGN:
            after_marker = True
        else:
            output.append(char)
    return "".join(output)
