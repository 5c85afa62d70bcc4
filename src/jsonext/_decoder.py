"""
Decoder restoring tagged extended values from JSON text.

Structural parsing is delegated to the stdlib ``json`` module. Revival
then runs bottom-up over the parsed tree, and a breadth-first sweep
turns absent-value placeholders back into ``UNDEFINED``.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from typing import Final

from ._profile import ProfileContext
from ._tags import decode_tag
from ._tags import is_tag
from ._tags import untag
from ._types import UNDEFINED
from ._types import Key
from ._types import Plugin
from ._types import Reviver
from ._types import Tag

logger = logging.getLogger(__name__)


class _AbsentPlaceholder:
    """Stands in for ``UNDEFINED`` until the sweep runs."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<ABSENT>"


_ABSENT: Final = _AbsentPlaceholder()


@dataclass(frozen=True)
class ParseConfig:
    """Configures one decode call with immutable settings."""

    reviver: Reviver = None
    plugins: tuple[Plugin, ...] = ()

    def __post_init__(self) -> None:
        if self.reviver is not None and not callable(self.reviver):
            raise TypeError("reviver must be callable")


def internalize(document: Any, hook: Callable[[Key, Any], Any]) -> Any:
    """
    Applies hook to every node of a parsed document, children first.

    This is the JSON reviver contract: members are visited in document
    order, the root under key ``""``, and each node sees its children
    already replaced. Returning ``UNDEFINED`` removes an object member
    (an array slot becomes ``None``). Uses an explicit stack, so depth
    is bounded only by memory.
    """
    root = {"": document}
    stack: list[tuple[Any, Key, bool]] = [(root, "", False)]

    while stack:
        holder, key, expanded = stack.pop()
        value = holder[key]

        if not expanded:
            stack.append((holder, key, True))
            if isinstance(value, dict):
                stack.extend((value, k, False) for k in reversed(list(value)))
            elif isinstance(value, list):
                stack.extend(
                    (value, index, False)
                    for index in range(len(value) - 1, -1, -1)
                )
            continue

        revived = hook(key, value)
        if revived is not UNDEFINED:
            holder[key] = revived
        elif isinstance(holder, dict):
            del holder[key]
        else:
            holder[key] = None

    return root.get("", UNDEFINED)


def sweep(document: Any) -> tuple[Any, int]:
    """
    Replaces every absent placeholder with ``UNDEFINED``.

    Breadth-first over dicts and lists with a FIFO queue; each
    structure is visited once even when it is reachable twice. Returns
    the document and the number of structures visited.
    """
    if document is _ABSENT:
        return UNDEFINED, 0
    if not isinstance(document, dict | list):
        return document, 0

    queue: deque[dict[Any, Any] | list[Any]] = deque([document])
    seen = {id(document)}
    visited = 0

    while queue:
        current = queue.popleft()
        visited += 1
        members = (
            list(current.items())
            if isinstance(current, dict)
            else list(enumerate(current))
        )
        for key, value in members:
            if value is _ABSENT:
                current[key] = UNDEFINED
            elif isinstance(value, dict | list) and id(value) not in seen:
                seen.add(id(value))
                queue.append(value)

    logger.debug("Absent-value sweep visited %d structure(s)", visited)
    return document, visited


class JsonDecoder:
    """
    Parses JSON text and restores extended values.

    Per node: tag decoding, then the caller's reviver, then each
    plugin's decode hook in registration order.
    """

    def __init__(self, config: ParseConfig):
        self.config = config
        self.nodes = 0
        self.tags = 0

    def decode(self, text: str | bytes | bytearray) -> Any:
        with ProfileContext("parse") as profile:
            document = internalize(json.loads(text), self._revive)
            profile.nodes = self.nodes
            profile.tags = self.tags
        with ProfileContext("sweep") as profile:
            result, profile.nodes = sweep(document)
        return result

    def _revive(self, key: Key, raw: Any) -> Any:
        result = raw
        tag: Tag | None = None
        self.nodes += 1

        if isinstance(raw, str) and is_tag(raw):
            self.tags += 1
            tag = decode_tag(raw)
            result = untag(tag, raw)

        if self.config.reviver is not None:
            result = self.config.reviver(key, result, raw, tag)

        for plugin in self.config.plugins:
            if plugin.decode_hook is not None:
                result = plugin.decode_hook(key, result, raw, tag)

        # returning UNDEFINED here would delete the member
        if result is UNDEFINED:
            return _ABSENT
        return result
