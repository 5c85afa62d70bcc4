"""
Extended value types, hook signatures and value classification.

Every encode branch dispatches on the ``Category`` returned by
``classify``, so the set of categories below is the complete set of
values the encoder knows how to emit.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from typing import Final
from typing import TypeAlias

Key: TypeAlias = str | int
Path: TypeAlias = tuple[Key, ...]


class Undefined:
    """
    The absent value.

    JSON has no spelling for a member that exists but holds nothing, so
    this singleton travels as a tagged token instead. Compare with
    ``is``; it is falsy and survives copying and pickling as itself.
    """

    __slots__ = ()
    _instance: Undefined | None = None

    def __new__(cls) -> Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final[Undefined] = Undefined()


class BigInt(int):
    """
    Integer that is serialized as an arbitrary-precision token.

    Plain ``int`` values are written as JSON numbers; wrapping one in
    ``BigInt`` asks for the ``bigint`` tag so that readers with 64-bit
    floats do not lose digits.
    """

    def __repr__(self) -> str:
        return f"BigInt({Decimal(self)})"


@dataclass(frozen=True)
class Tag:
    """Decoded form of a tagged token: its type name and raw payload."""

    type: str
    value: str


# Hook signatures: (key, value, raw, path) and (key, value, raw, tag)
EncodeHook = Callable[[Key, Any, Any, Path], Any]
DecodeHook = Callable[[Key, Any, Any, Tag | None], Any]
Replacer = EncodeHook | list[str | int] | tuple[str | int, ...] | None
Reviver = DecodeHook | None


@dataclass(frozen=True)
class Plugin:
    """
    A pair of optional hooks run by every encode and decode call.

    ``encode_hook`` runs after ``__json__`` and before the caller's
    replacer; ``decode_hook`` runs after tag decoding and the caller's
    reviver.
    """

    encode_hook: EncodeHook | None = None
    decode_hook: DecodeHook | None = None


class Category(Enum):
    """Semantic category of a value, as seen by the encoder."""

    ABSENT = "absent"
    STRING = "string"
    FINITE_NUMBER = "finite_number"
    NON_FINITE_NUMBER = "non_finite_number"
    BIG_INTEGER = "big_integer"
    BOOLEAN = "boolean"
    NULL = "null"
    TIMESTAMP = "timestamp"
    SEQUENCE = "sequence"
    KEYED = "keyed"
    UNSUPPORTED = "unsupported"


def classify(value: Any) -> Category:  # noqa: PLR0911
    """Maps a Python value onto the closed set of encoder categories."""
    if value is UNDEFINED:
        return Category.ABSENT
    if value is None:
        return Category.NULL
    # bool before int: True is an int
    if isinstance(value, bool):
        return Category.BOOLEAN
    if isinstance(value, str):
        return Category.STRING
    if isinstance(value, BigInt):
        return Category.BIG_INTEGER
    if isinstance(value, int):
        return Category.FINITE_NUMBER
    if isinstance(value, float):
        if math.isfinite(value):
            return Category.FINITE_NUMBER
        return Category.NON_FINITE_NUMBER
    if isinstance(value, datetime):
        return Category.TIMESTAMP
    if isinstance(value, list | tuple):
        return Category.SEQUENCE
    if isinstance(value, Mapping):
        return Category.KEYED
    return Category.UNSUPPORTED
