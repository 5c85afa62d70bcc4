"""Tagged-token codec and JSON string quoting."""

from __future__ import annotations

import decimal
import math
import re
from datetime import UTC
from datetime import datetime
from datetime import timedelta
from typing import Any
from typing import Final

from ._types import UNDEFINED
from ._types import BigInt
from ._types import Tag

SCHEME: Final = "data"

UNDEFINED_TAG: Final = "undefined"
NUMBER_TAG: Final = "number"
BIGINT_TAG: Final = "bigint"
DATE_TAG: Final = "date"

_EPOCH: Final = datetime(1970, 1, 1, tzinfo=UTC)
_MILLISECOND: Final = timedelta(milliseconds=1)

_DIGITS: Final = re.compile(r"\s*[+-]?[0-9]+\s*")

# Characters escaped on output: JSON's mandatory set plus code points
# that break when the text is embedded in JavaScript or HTML.
_ESCAPABLE: Final = re.compile(
    r'[\\"\x00-\x1f\x7f-\x9f\xad\u0600-\u0604\u070f\u17b4\u17b5'
    r"\u200c-\u200f\u2028-\u202f\u2060-\u206f\ufeff\ufff0-\uffff]"
)
_META: Final = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}

# Only the first comma separates type from payload
_TOKEN: Final = re.compile(SCHEME + r":[^,]+,[^,]*")

_NON_FINITE: Final = {
    "NaN": math.nan,
    "Infinity": math.inf,
    "-Infinity": -math.inf,
}


def _escape(match: re.Match[str]) -> str:
    char = match.group(0)
    return _META.get(char) or f"\\u{ord(char):04x}"


def quote(text: str) -> str:
    """
    Wraps text in double quotes, escaping what JSON and embedders forbid.

    Strings with nothing to escape are quoted without substitution.
    """
    if _ESCAPABLE.search(text) is None:
        return '"' + text + '"'
    return '"' + _ESCAPABLE.sub(_escape, text) + '"'


def encode_tag(type_: str, value: str) -> str:
    """Builds the ``data:<type>,<value>`` token. Inputs are not validated."""
    return SCHEME + ":" + type_ + "," + value


def decode_tag(token: str) -> Tag:
    """
    Splits a token into its type and payload.

    The payload is everything after the first comma, commas included.
    """
    head, _, value = token.partition(",")
    parts = head.split(":")
    return Tag(parts[1] if len(parts) > 1 else "", value)


def is_tag(text: str) -> bool:
    """Reports whether text has the shape of a tagged token."""
    return _TOKEN.fullmatch(text) is not None


def to_epoch_millis(moment: datetime) -> int:
    """Whole milliseconds since the epoch; naive datetimes count as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - _EPOCH) // _MILLISECOND


def from_epoch_millis(payload: str) -> datetime:
    """
    Parses an epoch-millisecond payload into an aware UTC datetime.

    Fractional milliseconds truncate toward zero. Raises ``ValueError``
    for text that is not a number or is NaN, and ``OverflowError`` for
    infinities and moments outside the ``datetime`` range.
    """
    millis = int(float(payload))
    return _EPOCH + timedelta(milliseconds=millis)


def format_big_integer(number: int) -> str:
    """
    Decimal digits of number, however many there are.

    Goes through ``Decimal``, whose exact conversions are not subject to
    the interpreter's int/str digit limit.
    """
    return str(decimal.Decimal(number))


def parse_big_integer(payload: str) -> BigInt:
    """
    Parses a ``bigint`` payload of any length.

    Anything other than optionally signed digits goes through ``int()``
    and fails the way ``int()`` does.
    """
    if _DIGITS.fullmatch(payload) is None:
        return BigInt(payload)
    return BigInt(decimal.Decimal(payload))


def format_non_finite(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    return "Infinity" if number > 0 else "-Infinity"


def untag(tag: Tag, text: str) -> Any:
    """
    Restores the value a recognised tag stands for.

    Unknown types, ``number`` tags with an unknown payload and ``date``
    tags that do not name a representable moment give back the original
    text unchanged.
    """
    if tag.type == UNDEFINED_TAG:
        return UNDEFINED
    if tag.type == NUMBER_TAG:
        return _NON_FINITE.get(tag.value, text)
    if tag.type == BIGINT_TAG:
        return parse_big_integer(tag.value)
    if tag.type == DATE_TAG:
        try:
            return from_epoch_millis(tag.value)
        except (ValueError, OverflowError):
            return text
    return text
