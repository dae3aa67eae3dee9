"""Translation tables and placeholder substitution.

``Translator`` maps translation keys to template strings and fills the
templates with already-rendered arguments.  It is the only collaborator the
legacy renderer consults.

Template syntax
---------------
A placeholder is ``%`` optionally followed by a one-based index and ``$``,
then one letter, another ``%``, or the end of the template:

    ``%s``      next unused argument (left to right)
    ``%2$s``    second argument; does not move the sequential cursor
    ``%%``      kept as the two characters ``%%``
    ``%d``      any letter other than ``s`` is dropped

Missing or out-of-range arguments substitute as the empty string.
``translate`` never raises.

Lookup order
------------
table entry → caller's fallback template → the key itself.

Thread safety
-------------
The table is exposed read-only and the compiled placeholder pattern is built
once on first use and shared.  A ``Translator`` can be used from any number
of threads without locking.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from functools import cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from chat_formatting.errors import TranslationTableError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


@cache
def placeholder_pattern() -> re.Pattern[str]:
    """Compiled placeholder pattern, built on first use."""
    return re.compile(r"%(?:(\d+)\$)?([A-Za-z%]|\Z)")


class Translator:
    """Immutable key → template table with ``%s``-style substitution.

    Attributes:
        translations: Read-only view of the table.
    """

    def __init__(self, translations: Mapping[str, str] | None = None) -> None:
        """Initialise from an in-memory mapping (copied)."""
        self._translations: Mapping[str, str] = MappingProxyType(dict(translations or {}))

    def __repr__(self) -> str:
        return f"Translator(<{len(self._translations)} entries>)"

    def __len__(self) -> int:
        return len(self._translations)

    def __contains__(self, key: object) -> bool:
        return key in self._translations

    def __iter__(self) -> Iterator[str]:
        return iter(self._translations)

    @property
    def translations(self) -> Mapping[str, str]:
        return self._translations

    def get(self, key: str) -> str | None:
        """Raw template for *key*, or ``None``."""
        return self._translations.get(key)

    # ── Loading ───────────────────────────────────────────────────────────────

    @classmethod
    def from_translation_content(cls, content: str, *, source: str = "<string>") -> Translator:
        """Build a translator from JSON text holding a flat object of strings.

        Args:
            content: JSON text, e.g. the contents of a language file.
            source:  Label used in error messages.

        Raises:
            TranslationTableError: Invalid JSON, or not a string → string object.
        """
        try:
            raw = json.loads(content)
        except json.JSONDecodeError as exc:
            raise TranslationTableError(source=source, details=f"invalid JSON: {exc}") from exc
        return cls(_validate_table(raw, source=source))

    @classmethod
    def from_file(cls, path: Path | str) -> Translator:
        """Load a translation table from a ``.json`` or ``.yaml``/``.yml`` file.

        Raises:
            FileNotFoundError:     *path* does not exist.
            TranslationTableError: The file is not a flat string mapping.
        """
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in _YAML_SUFFIXES:
            try:
                raw = yaml.safe_load(text) or {}
            except yaml.YAMLError as exc:
                raise TranslationTableError(
                    source=str(path), details=f"invalid YAML: {exc}"
                ) from exc
            translator = cls(_validate_table(raw, source=str(path)))
        else:
            translator = cls.from_translation_content(text, source=str(path))
        logger.debug("Loaded %d translations from %s", len(translator), path)
        return translator

    # ── Substitution ──────────────────────────────────────────────────────────

    def translate(self, key: str, args: Sequence[str] = (), fallback: str | None = None) -> str:
        """Resolve *key* and substitute *args* into its template.

        Args:
            key:      Translation key.
            args:     Already-rendered argument strings.
            fallback: Template used when *key* is not in the table.

        Returns:
            The substituted string.  Never raises.
        """
        template = self._translations.get(key)
        if template is None:
            template = fallback if fallback is not None else key
            logger.debug(
                "No translation for %r; using %s",
                key,
                "fallback" if fallback is not None else "key",
            )

        cursor = 0

        def substitute(match: re.Match[str]) -> str:
            nonlocal cursor
            explicit_index, conversion = match.group(1), match.group(2)
            if conversion == "%":
                return "%%"
            if conversion != "s":
                return ""
            if explicit_index is not None:
                index = int(explicit_index) - 1
            else:
                index = cursor
                cursor += 1
            if 0 <= index < len(args):
                return args[index]
            return ""

        return placeholder_pattern().sub(substitute, template)


def _validate_table(raw: Any, *, source: str) -> dict[str, str]:
    """Check that *raw* is a flat string → string mapping."""
    if not isinstance(raw, dict):
        raise TranslationTableError(source=source, details="translation table must be a mapping")
    for key, value in raw.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise TranslationTableError(
                source=source,
                details=f"entry {key!r} must map a string key to a string template",
            )
    return raw
