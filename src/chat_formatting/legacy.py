"""Legacy string ⇄ component tree conversion.

Legacy text carries styling as ``§`` + one code character and has no
nesting.  This module converts in both directions.

Parsing (``parse_legacy``)
--------------------------
The parser walks the string keeping the pending text, the active color and
the active set of style flags:

- A flag code (``§l`` etc.) closes the pending run and adds the flag.
- A color code (``§c``, ``§r`` …) closes the pending run, switches the color
  and clears the flags.
- Any other code is dropped together with its marker.  Legacy text is parsed
  leniently; strict validation lives in :mod:`chat_formatting.formatting`.

Each run becomes one literal component.  The first run is the root and the
rest are appended to its ``extra`` in order, so the tree is always one level
deep.

Rendering (``render_legacy``)
-----------------------------
Each node emits its *formatting prefix* (color code, then flag codes in
:data:`~chat_formatting.formatting.RENDER_ORDER`), its content, and an
unconditional ``§r``, followed by each child's rendering.  The trailing
reset keeps a node's styling from leaking into its siblings.

Translatable content is filled in by a :class:`~chat_formatting.translator.Translator`.
Every argument is rendered in full and then followed by the enclosing node's
prefix, because an argument's own trailing ``§r`` would otherwise strip the
node's styling from the rest of the template.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from chat_formatting.formatting import (
    COLORS_BY_CODE,
    FORMATS_BY_CODE,
    RENDER_ORDER,
    SECTION_SIGN,
    ChatColor,
    ChatFormat,
)
from chat_formatting.models import (
    ChatComponent,
    KeybindContent,
    LiteralContent,
    NbtContent,
    ScoreContent,
    SelectorContent,
    TranslatableContent,
)
from chat_formatting.postprocess import legacy_to_ansi, legacy_to_plain
from chat_formatting.translator import Translator

logger = logging.getLogger(__name__)

_RESET = f"{SECTION_SIGN}{ChatColor.RESET.code}"

_EMPTY_TRANSLATOR = Translator()

# A Message is a legacy string, one component, or an iterable of components.
MessageLike = str | ChatComponent | Iterable[ChatComponent]


# ============================================================================
# PARSING
# ============================================================================


def _run_component(
    text: str,
    color: ChatColor | None,
    formats: frozenset[ChatFormat],
    extra: tuple[ChatComponent, ...] = (),
) -> ChatComponent:
    flags = {fmt.value: True for fmt in formats}
    return ChatComponent(content=LiteralContent(text=text), color=color, extra=extra, **flags)


def parse_legacy(legacy: str) -> ChatComponent:
    """Parse a legacy-formatted string into a component tree.

    Args:
        legacy: Text such as ``"§cHello §lWorld"``.

    Returns:
        The root run with every later run as a direct child.  Input with no
        text at all yields an empty literal component.
    """
    runs: list[tuple[str, ChatColor | None, frozenset[ChatFormat]]] = []
    pending: list[str] = []
    color: ChatColor | None = None
    formats: set[ChatFormat] = set()

    def flush() -> None:
        if pending:
            runs.append(("".join(pending), color, frozenset(formats)))
            pending.clear()

    chars = iter(legacy)
    for char in chars:
        if char != SECTION_SIGN:
            pending.append(char)
            continue

        # Always consumed as the code, even a second marker: "§§c" keeps "c" as text
        # rather than re-arming the escape.
        code = next(chars, None)
        if code is None:
            break
        if code in FORMATS_BY_CODE:
            flush()
            formats.add(FORMATS_BY_CODE[code])
        elif code in COLORS_BY_CODE:
            flush()
            color = COLORS_BY_CODE[code]
            formats.clear()
        else:
            logger.debug("Dropping unknown legacy code %r", code)

    flush()

    if not runs:
        return ChatComponent()
    children = tuple(_run_component(*run) for run in runs[1:])
    return _run_component(*runs[0], extra=children)


# ============================================================================
# RENDERING
# ============================================================================


def formatting_prefix(component: ChatComponent) -> str:
    """Legacy codes that establish *component*'s own color and flags.

    Hex colors have no legacy code and contribute nothing.
    """
    parts: list[str] = []
    code = component.color.code if component.color is not None else None
    if code is not None:
        parts.append(f"{SECTION_SIGN}{code}")
    for fmt in RENDER_ORDER:
        if getattr(component, fmt.value):
            parts.append(f"{SECTION_SIGN}{fmt.code}")
    return "".join(parts)


def _quoted(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _render_content(component: ChatComponent, prefix: str, translator: Translator) -> str:
    content = component.content
    if isinstance(content, LiteralContent):
        return content.text
    if isinstance(content, TranslatableContent):
        args = [render_legacy(arg, translator) + prefix for arg in content.with_ or ()]
        return translator.translate(content.translate, args, content.fallback)
    # The remaining variants are resolved by the receiving client, not here.
    if isinstance(content, KeybindContent):
        return f"<keybind:{_quoted(content.keybind)}>"
    if isinstance(content, NbtContent):
        return "<nbt>"
    if isinstance(content, ScoreContent):
        return f"<sbvalue:{_quoted(content.score.name)}>"
    if isinstance(content, SelectorContent):
        return f"<selector:{_quoted(content.selector)}>"
    raise TypeError(f"unsupported content type: {type(content).__name__}")


def _render_component(component: ChatComponent, translator: Translator) -> str:
    prefix = formatting_prefix(component)
    body = _render_content(component, prefix, translator)
    children = "".join(_render_component(child, translator) for child in component.extra)
    return f"{prefix}{body}{_RESET}{children}"


def render_legacy(message: MessageLike, translator: Translator | None = None) -> str:
    """Render a message as a legacy-formatted string.

    Args:
        message:    A legacy string (returned unchanged), a component, or a
                    sequence of components (concatenated).
        translator: Table for translatable content; defaults to an empty
                    table, which renders fallbacks or raw keys.

    Returns:
        The legacy string.
    """
    if translator is None:
        translator = _EMPTY_TRANSLATOR
    if isinstance(message, str):
        return message
    if isinstance(message, ChatComponent):
        return _render_component(message, translator)
    return "".join(_render_component(component, translator) for component in message)


def render_ansi(message: MessageLike, translator: Translator | None = None) -> str:
    """Render a message for an ANSI-capable terminal."""
    return legacy_to_ansi(render_legacy(message, translator))


def render_plain(message: MessageLike, translator: Translator | None = None) -> str:
    """Render a message as unstyled text."""
    return legacy_to_plain(render_legacy(message, translator))
