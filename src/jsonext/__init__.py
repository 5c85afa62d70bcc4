"""
JSON encoding and decoding that round-trips values JSON cannot spell.

Absent values, NaN and infinities, arbitrary-precision integers and
timestamps are written as ordinary JSON strings carrying a
``data:<type>,<payload>`` tag, so any standard parser still accepts the
output. Encoding and decoding accept hooks in the style of JavaScript's
``JSON.stringify`` / ``JSON.parse``, and plugins can be registered on a
``Serializer`` to extend both directions at once.

    >>> import math, jsonext
    >>> jsonext.stringify({"a": jsonext.UNDEFINED, "b": math.inf})
    '{"a":"data:undefined,","b":"data:number,Infinity"}'
"""

import logging
from json import JSONDecodeError
from typing import IO
from typing import Any

from ._decoder import JsonDecoder
from ._decoder import ParseConfig
from ._encoder import EncodeConfig
from ._encoder import InvalidReplacerError
from ._encoder import JsonEncoder
from ._profile import PhaseStats
from ._profile import clear_phase_stats
from ._profile import get_phase_stats
from ._tags import SCHEME
from ._tags import decode_tag
from ._tags import encode_tag
from ._tags import is_tag
from ._tags import quote
from ._types import UNDEFINED
from ._types import BigInt
from ._types import Category
from ._types import Plugin
from ._types import Replacer
from ._types import Reviver
from ._types import Tag
from ._types import Undefined
from ._types import classify

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


class Serializer:
    """
    Encode/decode engine with its own ordered plugin registry.

    Instances never share plugins; use ``create()`` for a fresh one or
    the module-level functions for the shared ``default`` instance.
    """

    def __init__(self) -> None:
        self.plugins: tuple[Plugin, ...] = ()

    def register(self, *plugins: Plugin) -> None:
        """Appends plugins; they run in registration order."""
        self.plugins = (*self.plugins, *plugins)
        logger.debug(
            "Registered %d plugin(s), %d total", len(plugins), len(self.plugins)
        )

    def stringify(
        self, value: Any, replacer: Replacer = None, space: Any = None
    ) -> str | None:
        """
        Converts a Python value to JSON text.

        ``replacer`` is either ``(key, value, raw, path) -> value`` or a
        list of property names to keep. ``space`` is an indent width or
        an indent string. Returns None when the root value itself has no
        JSON representation.
        """
        config = EncodeConfig(
            replacer=replacer, space=space, plugins=self.plugins
        )
        return JsonEncoder(config).encode(value)

    def parse(
        self, text: str | bytes | bytearray, reviver: Reviver = None
    ) -> Any:
        """
        Converts JSON text to a Python value, restoring tagged values.

        ``reviver`` is called as ``(key, value, raw, tag)`` for every
        node, children before their parent.
        """
        config = ParseConfig(reviver=reviver, plugins=self.plugins)
        return JsonDecoder(config).decode(text)

    def dump(self, obj: Any, fp: IO[str], **kwargs: Any) -> None:
        """Serializes obj as JSON text to a file-like object."""
        if not hasattr(fp, "write"):
            raise TypeError("fp must have a write() method")

        text = self.stringify(obj, **kwargs)
        if text is None:
            msg = (
                f"Object of type {type(obj).__name__} is not JSON serializable"
            )
            raise TypeError(msg)
        fp.write(text)

    def load(self, fp: IO[str], **kwargs: Any) -> Any:
        """Parses JSON text read from a file-like object."""
        if not hasattr(fp, "read"):
            raise TypeError("fp must have a read() method")

        return self.parse(fp.read(), **kwargs)


default = Serializer()


def create() -> Serializer:
    """Returns a new engine with an empty plugin registry."""
    return Serializer()


stringify = default.stringify
parse = default.parse
register = default.register
dump = default.dump
load = default.load


__all__ = [
    "SCHEME",
    "UNDEFINED",
    "BigInt",
    "Category",
    "EncodeConfig",
    "InvalidReplacerError",
    "JSONDecodeError",
    "ParseConfig",
    "PhaseStats",
    "Plugin",
    "Serializer",
    "Tag",
    "Undefined",
    "classify",
    "clear_phase_stats",
    "create",
    "decode_tag",
    "default",
    "dump",
    "encode_tag",
    "get_phase_stats",
    "is_tag",
    "load",
    "parse",
    "quote",
    "register",
    "stringify",
]
