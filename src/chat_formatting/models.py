"""Pydantic models for structured chat components.

This module defines the component tree that every other part of the package
passes around, together with the JSON boundary codec.  Pydantic provides:

- Validation of structured (JSON) input, including the camelCase field names
  of the wire format (``clickEvent``, ``hoverEvent``)
- Immutability: every model is frozen, so a built tree can be shared freely
- Serialization back to the canonical wire shape

Wire shape
----------
A component carries its content fields *inline*::

    {"text": "Hello ", "color": "red", "bold": true, "extra": [...]}
    {"translate": "chat.type.text", "with": ["Steve", "hi"]}

In memory the content lives in a separate :data:`TextContent` value under
``ChatComponent.content``.  A ``before`` validator lifts the inline content
keys into that nested field on the way in; a wrap serializer flattens it back
out on the way out and omits false flags, absent optionals and an empty
``extra``.

Content discrimination
----------------------
Which content variant a dict decodes to is decided by :func:`_content_tag`,
an explicit ordered predicate table (:data:`CONTENT_SHAPES`).  The first
variant whose key is present wins, so ``{"translate": ..., "text": ...}`` is
translatable.  A dict matching none of them is literal text.

Messages
--------
:data:`Message` is the top-level boundary value: a bare legacy string, one
component, or a sequence of components.  Decoding tries those three shapes
left to right.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    JsonValue,
    PlainSerializer,
    PlainValidator,
    SerializerFunctionWrapHandler,
    Tag,
    TypeAdapter,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from chat_formatting.formatting import ChatColor, ChatFormat, Color, HexColor, parse_color


# ============================================================================
# FIELD TYPES
# ============================================================================


def _validate_color(value: Any) -> Color:
    """Accept a color object or any textual color form."""
    if isinstance(value, (ChatColor, HexColor)):
        return value
    if isinstance(value, str):
        return parse_color(value)
    raise ValueError(f"color must be a string, got {type(value).__name__}")


#: Color field: decodes names, ``#RRGGBB`` and ``§X``; encodes via ``str()``.
ColorField = Annotated[
    Color,
    PlainValidator(_validate_color),
    PlainSerializer(str, return_type=str),
]


def _prune(data: dict[str, Any]) -> dict[str, Any]:
    """Drop ``None``/``False`` values and an empty ``extra`` from a dump."""
    return {
        key: value
        for key, value in data.items()
        if value is not None and value is not False and not (key == "extra" and not value)
    }


class _ChatModel(BaseModel):
    """Shared configuration for every wire model."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @model_serializer(mode="wrap")
    def serialize_wire(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return _prune(handler(self))


# ============================================================================
# CONTENT VARIANTS
# ============================================================================


class LiteralContent(_ChatModel):
    """Plain text."""

    text: str = ""


class TranslatableContent(_ChatModel):
    """Text resolved through a translation table.

    Attributes:
        translate: Translation key, e.g. ``"chat.type.text"``.
        with_:     Substitution arguments (wire name ``with``).  Each is a
                   full :data:`Message`, so arguments can carry their own
                   styling.
        fallback:  Template used when the key is missing from the table.
    """

    translate: str
    with_: tuple[Message, ...] | None = Field(default=None, alias="with")
    fallback: str | None = None

    @classmethod
    def create(cls, translate: str, args: tuple[str, ...] | list[str] = ()) -> TranslatableContent:
        """Wrap a key with plain-string arguments; no arguments → no ``with``."""
        if not args:
            return cls(translate=translate)
        return cls(translate=translate, with_=tuple(args))


class KeybindContent(_ChatModel):
    """Reference to a client key binding, e.g. ``"key.jump"``."""

    keybind: str


class NbtContent(_ChatModel):
    """Reference to structured (NBT) data resolved by the receiving client.

    Attributes:
        nbt:       Path query string.
        interpret: Whether the resolved value is itself a component.
        separator: Joins multiple results; ``None`` means the default
                   gray ``", "``.
        block:     Block coordinates scope.
        entity:    Entity selector scope.
        storage:   Storage identifier scope.
    """

    nbt: str
    interpret: bool = False
    separator: ChatComponent | None = None
    block: str | None = None
    entity: str | None = None
    storage: str | None = None

    @model_serializer(mode="wrap")
    def serialize_wire(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = _prune(handler(self))
        if self.separator == DEFAULT_SEPARATOR:
            data.pop("separator", None)
        return data


class SelectorContent(_ChatModel):
    """Reference to the names of entities matched by a selector (``@p``)."""

    selector: str
    separator: ChatComponent | None = None

    @model_serializer(mode="wrap")
    def serialize_wire(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = _prune(handler(self))
        if self.separator == DEFAULT_SEPARATOR:
            data.pop("separator", None)
        return data


class Score(_ChatModel):
    """Scoreboard lookup: *name*'s score in *objective*, or a fixed *value*."""

    name: str
    objective: str
    value: int | None = None


class ScoreContent(_ChatModel):
    """Reference to a scoreboard value."""

    score: Score


#: Ordered (wire key, tag) predicates; the first key present decides the variant.
CONTENT_SHAPES: tuple[tuple[str, str], ...] = (
    ("translate", "translatable"),
    ("keybind", "keybind"),
    ("nbt", "nbt"),
    ("selector", "selector"),
    ("score", "score"),
)

_TAG_BY_TYPE: dict[type, str] = {
    TranslatableContent: "translatable",
    KeybindContent: "keybind",
    NbtContent: "nbt",
    SelectorContent: "selector",
    ScoreContent: "score",
    LiteralContent: "literal",
}

#: Every wire key that belongs to some content variant.
CONTENT_KEYS: frozenset[str] = frozenset(
    {"text", "translate", "with", "fallback", "keybind", "nbt", "interpret", "separator"}
    | {"block", "entity", "storage", "selector", "score"}
)


def _content_tag(value: Any) -> str:
    """Pick the content variant for *value* (a dict or a content model)."""
    if isinstance(value, Mapping):
        for key, tag in CONTENT_SHAPES:
            if key in value:
                return tag
        return "literal"
    return _TAG_BY_TYPE.get(type(value), "literal")


#: Exactly one kind of text a component displays.
TextContent = Annotated[
    Union[
        Annotated[TranslatableContent, Tag("translatable")],
        Annotated[KeybindContent, Tag("keybind")],
        Annotated[NbtContent, Tag("nbt")],
        Annotated[SelectorContent, Tag("selector")],
        Annotated[ScoreContent, Tag("score")],
        Annotated[LiteralContent, Tag("literal")],
    ],
    Discriminator(_content_tag),
]


# ============================================================================
# INTERACTIVE METADATA (pass-through)
# ============================================================================


class ClickAction(Enum):
    OPEN_URL = "open_url"
    OPEN_FILE = "open_file"
    RUN_COMMAND = "run_command"
    SUGGEST_COMMAND = "suggest_command"
    CHANGE_PAGE = "change_page"
    COPY_TO_CLIPBOARD = "copy_to_clipboard"


class HoverAction(Enum):
    SHOW_TEXT = "show_text"
    SHOW_ITEM = "show_item"
    SHOW_ENTITY = "show_entity"


class ClickEvent(_ChatModel):
    """What happens when the text is clicked.  Never interpreted here."""

    action: ClickAction
    value: str


class HoverEvent(_ChatModel):
    """What is shown when the text is hovered.

    ``contents`` is either legacy text or an arbitrary JSON value (an item,
    an entity, or another component).  It is carried through unchanged.
    The older wire name ``value`` is accepted on input.
    """

    action: HoverAction
    contents: JsonValue = Field(validation_alias=AliasChoices("contents", "value"))


# ============================================================================
# COMPONENT
# ============================================================================


class ChatComponent(_ChatModel):
    """One styled text node and its ordered children.

    Attributes:
        content:       What the node displays.
        bold:          Style flag.
        italic:        Style flag.
        underlined:    Style flag.
        strikethrough: Style flag.
        obfuscated:    Style flag.
        color:         Named or hex color; ``None`` inherits nothing here.
        insertion:     Text inserted into the chat prompt on shift-click.
        font:          Resource location of a custom font.
        click_event:   Pass-through click payload.
        hover_event:   Pass-through hover payload.
        extra:         Children, rendered in order after this node.
    """

    content: TextContent = Field(default_factory=LiteralContent)

    bold: bool = False
    italic: bool = False
    underlined: bool = False
    strikethrough: bool = False
    obfuscated: bool = False

    color: ColorField | None = None

    insertion: str | None = None
    font: str | None = None

    click_event: ClickEvent | None = None
    hover_event: HoverEvent | None = None

    extra: tuple[ChatComponent, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def lift_inline_content(cls, data: Any) -> Any:
        """Move inline content keys under ``content`` before field validation.

        A ``content`` value that is already a content model or mapping was
        built in Python and is kept.  Any other ``content`` value is an
        unknown wire key and is discarded.
        """
        if not isinstance(data, Mapping):
            return data
        if isinstance(data.get("content"), (Mapping, *_TAG_BY_TYPE)):
            return data
        fields = dict(data)
        fields["content"] = {key: fields.pop(key) for key in CONTENT_KEYS if key in fields}
        return fields

    @model_serializer(mode="wrap")
    def serialize_wire(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = _prune(handler(self))
        content = data.pop("content", {})
        return {**content, **data}

    @property
    def formats(self) -> frozenset[ChatFormat]:
        """The style flags set on this node."""
        return frozenset(fmt for fmt in ChatFormat if getattr(self, fmt.value))

    @classmethod
    def literal(cls, text: str, **fields: Any) -> ChatComponent:
        """Build a literal-text component; *fields* are passed through."""
        return cls(content=LiteralContent(text=text), **fields)


# ============================================================================
# MESSAGE (boundary value)
# ============================================================================


def _message_tag(value: Any) -> str:
    """Try the three boundary shapes in order: string, object, array."""
    if isinstance(value, str):
        return "legacy"
    if isinstance(value, (Mapping, ChatComponent)):
        return "component"
    return "components"


#: A bare legacy string, one component, or components rendered in order.
Message = Annotated[
    Union[
        Annotated[str, Tag("legacy")],
        Annotated[ChatComponent, Tag("component")],
        Annotated[tuple[ChatComponent, ...], Tag("components")],
    ],
    Discriminator(_message_tag),
]

for _model in (TranslatableContent, NbtContent, SelectorContent, ChatComponent):
    _model.model_rebuild()

#: Separator used by nbt/selector content when none is given.
DEFAULT_SEPARATOR = ChatComponent(content=LiteralContent(text=", "), color=ChatColor.GRAY)

_MESSAGE_ADAPTER: TypeAdapter[Any] = TypeAdapter(Message)


def chat_from_json(value: Any) -> str | ChatComponent | tuple[ChatComponent, ...]:
    """Decode an already-parsed JSON value into a :data:`Message`.

    Raises:
        pydantic.ValidationError: *value* is none of the three shapes.
    """
    return _MESSAGE_ADAPTER.validate_python(value)


def chat_from_json_str(text: str | bytes) -> str | ChatComponent | tuple[ChatComponent, ...]:
    """Decode JSON text into a :data:`Message`."""
    return _MESSAGE_ADAPTER.validate_json(text)


def chat_to_json(message: str | ChatComponent | tuple[ChatComponent, ...]) -> Any:
    """Encode a :data:`Message` into plain JSON-compatible data (camelCase keys)."""
    return _MESSAGE_ADAPTER.dump_python(message, mode="json", by_alias=True)


def chat_to_json_str(message: str | ChatComponent | tuple[ChatComponent, ...]) -> str:
    """Encode a :data:`Message` as compact JSON text."""
    return _MESSAGE_ADAPTER.dump_json(message, by_alias=True).decode()
