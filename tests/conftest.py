"""
Pytest configuration and shared fixtures for jsonext tests.

Provides immutable test data fixtures and a comparison helper that
understands NaN and the absent value.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC
from datetime import datetime
from typing import Any

import pytest

import jsonext


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""


@dataclass(frozen=True)
class RoundTripCase:
    """A value, and the exact text ``stringify`` must produce for it."""

    description: str
    value: Any
    expected_text: str


def assert_equivalent(actual: Any, expected: Any) -> None:
    """
    Deep comparison that treats NaN as equal to NaN.

    Also checks that absent values are the ``UNDEFINED`` singleton and
    that big integers come back as ``BigInt``.
    """
    if expected is jsonext.UNDEFINED:
        assert actual is jsonext.UNDEFINED
    elif isinstance(expected, float) and math.isnan(expected):
        assert isinstance(actual, float)
        assert math.isnan(actual)
    elif isinstance(expected, jsonext.BigInt):
        assert type(actual) is jsonext.BigInt
        assert actual == expected
    elif isinstance(expected, dict):
        assert isinstance(actual, dict)
        assert list(actual) == list(expected)
        for key, value in expected.items():
            assert_equivalent(actual[key], value)
    elif isinstance(expected, list | tuple):
        assert isinstance(actual, list)
        assert len(actual) == len(expected)
        for item, value in zip(actual, expected, strict=True):
            assert_equivalent(item, value)
    else:
        assert type(actual) is type(expected)
        assert actual == expected


@pytest.fixture
def engine() -> jsonext.Serializer:
    """Provides an engine with an empty plugin registry."""
    return jsonext.create()


@pytest.fixture
def restore_default_plugins() -> Iterator[None]:
    """Restores the shared instance's registry after a test registers on it."""
    saved = jsonext.default.plugins
    yield
    jsonext.default.plugins = saved


@pytest.fixture
def extended_values() -> list[RoundTripCase]:
    """
    Provides one case per extended type plus a mixed document.

    Expected texts are compact output with no replacer.
    """
    moment = datetime(2024, 1, 15, 10, 30, 0, 123000, tzinfo=UTC)
    return [
        RoundTripCase("absent", jsonext.UNDEFINED, '"data:undefined,"'),
        RoundTripCase("nan", math.nan, '"data:number,NaN"'),
        RoundTripCase("infinity", math.inf, '"data:number,Infinity"'),
        RoundTripCase(
            "negative infinity", -math.inf, '"data:number,-Infinity"'
        ),
        RoundTripCase(
            "big integer",
            jsonext.BigInt(2**80),
            '"data:bigint,1208925819614629174706176"',
        ),
        RoundTripCase(
            "negative big integer",
            jsonext.BigInt(-(10**30)),
            '"data:bigint,-1000000000000000000000000000000"',
        ),
        RoundTripCase("timestamp", moment, '"data:date,1705314600123"'),
        RoundTripCase(
            "epoch",
            datetime(1970, 1, 1, tzinfo=UTC),
            '"data:date,0"',
        ),
        RoundTripCase(
            "before epoch",
            datetime(1969, 12, 31, 23, 59, 59, tzinfo=UTC),
            '"data:date,-1000"',
        ),
        RoundTripCase(
            "mixed document",
            {
                "id": jsonext.BigInt(9007199254740993),
                "score": math.nan,
                "limits": [-math.inf, 0, math.inf],
                "note": jsonext.UNDEFINED,
                "seen": moment,
                "tags": ["a", None, True],
            },
            '{"id":"data:bigint,9007199254740993",'
            '"score":"data:number,NaN",'
            '"limits":["data:number,-Infinity",0,"data:number,Infinity"],'
            '"note":"data:undefined,",'
            '"seen":"data:date,1705314600123",'
            '"tags":["a",null,true]}',
        ),
    ]


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that the host parser must reject.

    These cases from json.org JSON_checker reach ``parse`` unchanged,
    so each must surface as the host parser's JSONDecodeError.
    """
    fail_docs = [
        # https://json.org/JSON_checker/test/fail1.json
        '"A JSON payload should be an object or array, not a string."',
        # https://json.org/JSON_checker/test/fail2.json
        '["Unclosed array"',
        # https://json.org/JSON_checker/test/fail3.json
        '{unquoted_key: "keys must be quoted"}',
        # https://json.org/JSON_checker/test/fail4.json
        '["extra comma",]',
        # https://json.org/JSON_checker/test/fail5.json
        '["double extra comma",,]',
        # https://json.org/JSON_checker/test/fail6.json
        '[   , "<-- missing value"]',
        # https://json.org/JSON_checker/test/fail7.json
        '["Comma after the close"],',
        # https://json.org/JSON_checker/test/fail8.json
        '["Extra close"]]',
        # https://json.org/JSON_checker/test/fail9.json
        '{"Extra comma": true,}',
        # https://json.org/JSON_checker/test/fail10.json
        '{"Extra value after close": true} "misplaced quoted value"',
        # https://json.org/JSON_checker/test/fail11.json
        '{"Illegal expression": 1 + 2}',
        # https://json.org/JSON_checker/test/fail12.json
        '{"Illegal invocation": alert()}',
        # https://json.org/JSON_checker/test/fail13.json
        '{"Numbers cannot have leading zeroes": 013}',
        # https://json.org/JSON_checker/test/fail14.json
        '{"Numbers cannot be hex": 0x14}',
        # https://json.org/JSON_checker/test/fail15.json
        '["Illegal backslash escape: \\x15"]',
        # https://json.org/JSON_checker/test/fail16.json
        "[\\naked]",
        # https://json.org/JSON_checker/test/fail17.json
        '["Illegal backslash escape: \\017"]',
        # https://json.org/JSON_checker/test/fail18.json
        '[[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]]]',
        # https://json.org/JSON_checker/test/fail19.json
        '{"Missing colon" null}',
        # https://json.org/JSON_checker/test/fail20.json
        '{"Double colon":: null}',
        # https://json.org/JSON_checker/test/fail21.json
        '{"Comma instead of colon", null}',
        # https://json.org/JSON_checker/test/fail22.json
        '["Colon instead of comma": false]',
        # https://json.org/JSON_checker/test/fail23.json
        '["Bad value", truth]',
        # https://json.org/JSON_checker/test/fail24.json
        "['single quote']",
        # https://json.org/JSON_checker/test/fail25.json
        '["\ttab\tcharacter\tin\tstring\t"]',
        # https://json.org/JSON_checker/test/fail26.json
        '["tab\\   character\\   in\\  string\\  "]',
        # https://json.org/JSON_checker/test/fail27.json
        '["line\nbreak"]',
        # https://json.org/JSON_checker/test/fail28.json
        '["line\\\nbreak"]',
        # https://json.org/JSON_checker/test/fail29.json
        "[0e]",
        # https://json.org/JSON_checker/test/fail30.json
        "[0e+]",
        # https://json.org/JSON_checker/test/fail31.json
        "[0e+-1]",
        # https://json.org/JSON_checker/test/fail32.json
        '{"Comma instead if closing brace": true,',
        # https://json.org/JSON_checker/test/fail33.json
        '["mismatch"}',
        # https://code.google.com/archive/p/simplejson/issues/3
        '["A\u001fZ control characters in string"]',
    ]

    # Cases the host parser accepts
    skips = {
        1: "why not have a string payload?",
        18: "spec doesn't specify any nesting limitations",
    }

    return [
        JsonTestCase(
            description=f"fail{idx + 1}.json",
            input_data=doc,
            should_fail=True,
            skip_reason=skips.get(idx + 1, ""),
        )
        for idx, doc in enumerate(fail_docs)
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must parse successfully per JSON specification.

    None of them contains a tagged token, so ``parse`` must agree with
    the stdlib parser on every one.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]""",
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental parsing.

    Covers all JSON primitive types and basic container structures.
    """
    return [
        JsonTestCase("null value", "null", False, None),
        JsonTestCase("true boolean", "true", False, True),
        JsonTestCase("false boolean", "false", False, False),
        JsonTestCase("integer", "42", False, 42),
        JsonTestCase("negative integer", "-17", False, -17),
        JsonTestCase("float", "3.14", False, 3.14),
        JsonTestCase("empty string", '""', False, ""),
        JsonTestCase("simple string", '"hello"', False, "hello"),
        JsonTestCase("empty array", "[]", False, []),
        JsonTestCase("empty object", "{}", False, {}),
        JsonTestCase("simple array", "[1,2,3]", False, [1, 2, 3]),
        JsonTestCase(
            "simple object", '{"key":"value"}', False, {"key": "value"}
        ),
    ]
