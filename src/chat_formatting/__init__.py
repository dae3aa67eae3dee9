"""chat_formatting: rich chat text between components, legacy codes and terminals.

Three representations of the same styled text:

- the structured component tree (:mod:`chat_formatting.models`), decoded from
  and encoded to the JSON wire format;
- flat legacy strings carrying ``§X`` escape codes
  (:mod:`chat_formatting.legacy`);
- terminal output, either ANSI-colored or plain
  (:mod:`chat_formatting.postprocess`).

Typical usage::

    from chat_formatting import Translator, chat_from_json_str, render_ansi

    message = chat_from_json_str('{"text": "Hello", "color": "red"}')
    print(render_ansi(message, Translator()))

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from chat_formatting.formatting import ChatColor, ChatFormat, HexColor, parse_color
from chat_formatting.legacy import parse_legacy, render_ansi, render_legacy, render_plain
from chat_formatting.models import (
    ChatComponent,
    ClickEvent,
    HoverEvent,
    KeybindContent,
    LiteralContent,
    Message,
    NbtContent,
    Score,
    ScoreContent,
    SelectorContent,
    TranslatableContent,
    chat_from_json,
    chat_from_json_str,
    chat_to_json,
    chat_to_json_str,
)
from chat_formatting.postprocess import legacy_to_ansi, legacy_to_plain
from chat_formatting.translator import Translator

# ---------------------------------------------------------------------------
# Package version, read from pyproject.toml via importlib.metadata.
#
# Falls back to "0.0.0-dev" when the package is imported from a
# source checkout without being installed.
# ---------------------------------------------------------------------------
try:
    __version__: str = version("chat_formatting")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "ChatColor",
    "ChatComponent",
    "ChatFormat",
    "ClickEvent",
    "HexColor",
    "HoverEvent",
    "KeybindContent",
    "LiteralContent",
    "Message",
    "NbtContent",
    "Score",
    "ScoreContent",
    "SelectorContent",
    "TranslatableContent",
    "Translator",
    "chat_from_json",
    "chat_from_json_str",
    "chat_to_json",
    "chat_to_json_str",
    "legacy_to_ansi",
    "legacy_to_plain",
    "parse_color",
    "parse_legacy",
    "render_ansi",
    "render_legacy",
    "render_plain",
]
