"""
Depth-first encoder producing JSON text with tagged extended values.

All per-call state lives on a ``JsonEncoder`` instance, so a hook may
call ``stringify`` again without disturbing the outer call.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from typing import Any

from ._profile import ProfileContext
from ._tags import BIGINT_TAG
from ._tags import DATE_TAG
from ._tags import NUMBER_TAG
from ._tags import UNDEFINED_TAG
from ._tags import encode_tag
from ._tags import format_big_integer
from ._tags import format_non_finite
from ._tags import quote
from ._tags import to_epoch_millis
from ._types import UNDEFINED
from ._types import Category
from ._types import EncodeHook
from ._types import Key
from ._types import Path
from ._types import Plugin
from ._types import Replacer
from ._types import classify


class InvalidReplacerError(TypeError):
    """Raised when a replacer is neither callable, None, nor a list of keys."""


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures one encode call with immutable settings.

    The replacer is split into either a transform function or an
    inclusion tuple of property names; the indent unit is derived from
    ``space``.
    """

    replacer: Replacer = None
    space: Any = None
    plugins: tuple[Plugin, ...] = ()
    transform: EncodeHook | None = field(init=False, default=None)
    include: tuple[str, ...] | None = field(init=False, default=None)
    indent: str = field(init=False, default="")

    def __post_init__(self) -> None:
        replacer = self.replacer
        if callable(replacer):
            object.__setattr__(self, "transform", replacer)
        elif isinstance(replacer, Sequence) and not isinstance(
            replacer, str | bytes | bytearray
        ):
            # string entries only, first occurrence wins
            names = dict.fromkeys(
                entry for entry in replacer if isinstance(entry, str)
            )
            object.__setattr__(self, "include", tuple(names))
        elif replacer is not None:
            msg = (
                "replacer must be a callable, a list of keys or None, "
                f"not {type(replacer).__name__}"
            )
            raise InvalidReplacerError(msg)

        object.__setattr__(self, "indent", _indent_unit(self.space))


def _indent_unit(space: Any) -> str:
    if isinstance(space, bool):
        return ""
    if isinstance(space, int):
        return " " * space
    if isinstance(space, str):
        return space
    return ""


def _key_to_str(key: Any) -> str:
    """Converts a mapping key the way the stdlib encoder does."""
    if isinstance(key, str):
        return key
    if key is True:
        return "true"
    if key is False:
        return "false"
    if key is None:
        return "null"
    if isinstance(key, int):
        return int.__repr__(key)
    if isinstance(key, float):
        if not math.isfinite(key):
            return format_non_finite(key)
        return float.__repr__(key)
    msg = (
        "keys must be str, int, float, bool or None, "
        f"not {type(key).__name__}"
    )
    raise TypeError(msg)


class JsonEncoder:
    """
    Walks a value tree and renders it as JSON text.

    One instance serves exactly one top-level ``encode`` call.
    """

    def __init__(self, config: EncodeConfig):
        self.config = config
        self.nodes = 0
        self.tags = 0
        self._markers: set[int] = set()

    def encode(self, value: Any) -> str | None:
        """Renders value, or returns None when the root is unsupported."""
        with ProfileContext("stringify") as profile:
            text = self._serialize("", value, "", ("",))
            profile.nodes = self.nodes
            profile.tags = self.tags
        return text

    def _transform(self, key: Key, raw: Any, path: Path) -> Any:
        """Runs ``__json__``, plugin hooks and the replacer in order."""
        value = raw
        to_json = getattr(value, "__json__", None)
        if callable(to_json) and not isinstance(value, datetime):
            value = to_json(key)

        for plugin in self.config.plugins:
            if plugin.encode_hook is not None:
                value = plugin.encode_hook(key, value, raw, path)

        if self.config.transform is not None:
            value = self.config.transform(key, value, raw, path)

        return value

    def _serialize(  # noqa: PLR0911
        self, key: Key, raw: Any, gap: str, path: Path
    ) -> str | None:
        value = self._transform(key, raw, path)
        category = classify(value)
        self.nodes += 1

        if category is Category.ABSENT:
            return self._tagged(UNDEFINED_TAG, "")
        elif category is Category.STRING:
            return quote(value)
        elif category is Category.FINITE_NUMBER:
            if isinstance(value, int):
                return int.__repr__(value)
            return float.__repr__(value)
        elif category is Category.NON_FINITE_NUMBER:
            return self._tagged(NUMBER_TAG, format_non_finite(value))
        elif category is Category.BIG_INTEGER:
            return self._tagged(BIGINT_TAG, format_big_integer(value))
        elif category is Category.BOOLEAN:
            return "true" if value else "false"
        elif category is Category.NULL:
            return "null"
        elif category is Category.TIMESTAMP:
            return self._tagged(DATE_TAG, str(to_epoch_millis(value)))
        elif category is Category.SEQUENCE:
            return self._serialize_sequence(value, gap, path)
        elif category is Category.KEYED:
            return self._serialize_mapping(value, gap, path)
        return None

    def _tagged(self, type_: str, payload: str) -> str:
        self.tags += 1
        return quote(encode_tag(type_, payload))

    def _enter(self, container: Any) -> None:
        marker = id(container)
        if marker in self._markers:
            raise ValueError("Circular reference detected")
        self._markers.add(marker)

    def _serialize_sequence(
        self, items: Sequence[Any], gap: str, path: Path
    ) -> str:
        """Encodes an array; unsupported elements become null."""
        self._enter(items)
        inner = gap + self.config.indent
        parts = []
        for index, item in enumerate(items):
            encoded = self._serialize(index, item, inner, (*path, index))
            parts.append("null" if encoded is None else encoded)
        self._markers.discard(id(items))

        if not parts:
            return "[]"
        if inner:
            separator = ",\n" + inner
            return "[\n" + inner + separator.join(parts) + "\n" + gap + "]"
        return "[" + ",".join(parts) + "]"

    def _serialize_mapping(
        self, mapping: Mapping[Any, Any], gap: str, path: Path
    ) -> str:
        """Encodes an object; members that render to nothing are skipped."""
        self._enter(mapping)
        inner = gap + self.config.indent
        colon = ": " if inner else ":"

        if self.config.include is not None:
            members = [
                (name, mapping.get(name, UNDEFINED))
                for name in self.config.include
            ]
        else:
            members = [(_key_to_str(k), v) for k, v in mapping.items()]

        parts = []
        for name, member in members:
            encoded = self._serialize(name, member, inner, (*path, name))
            if encoded is not None:
                parts.append(quote(name) + colon + encoded)
        self._markers.discard(id(mapping))

        if not parts:
            return "{}"
        if inner:
            separator = ",\n" + inner
            return "{\n" + inner + separator.join(parts) + "\n" + gap + "}"
        return "{" + ",".join(parts) + "}"
