"""
Tests for value coercion across scalar, sequence and mapping shapes.
"""

import struct
from datetime import timedelta
from typing import Annotated, Optional

import pytest

from envbind import (
    Float32,
    Int8,
    Int16,
    Int32,
    InvalidMapItemError,
    MalformedValueError,
    UInt,
    UInt8,
    UInt16,
    UnsupportedTypeError,
    Width,
    coerce,
)


# Scalars

@pytest.mark.parametrize(
    "hint, raw, expected",
    [
        (str, "ENVI", "ENVI"),
        (str, "  padded  ", "  padded  "),
        (int, "8080", 8080),
        (int, "-42", -42),
        (int, "0x1F", 31),
        (int, "0o17", 15),
        (int, "0b101", 5),
        (int, "010", 8),
        (int, "-010", -8),
        (int, "0755", 493),
        (int, "00", 0),
        (Int8, "127", 127),
        (Int8, "-128", -128),
        (Int16, "32767", 32767),
        (Int32, "-2147483648", -2147483648),
        (UInt, "18446744073709551615", 18446744073709551615),
        (UInt8, "255", 255),
        (UInt16, "0xffff", 65535),
        (float, "0.5", 0.5),
        (float, "1e3", 1000.0),
        (Float32, "0.5", 0.5),
        (bool, "true", True),
        (bool, "TRUE", True),
        (bool, "t", True),
        (bool, "1", True),
        (bool, "False", False),
        (bool, "F", False),
        (bool, "0", False),
        (timedelta, "2h30m", timedelta(hours=2, minutes=30)),
    ],
)
def test_scalar_coercion(hint, raw, expected):
    """Valid literals coerce to the native value."""
    assert coerce(hint, raw) == expected


def test_float32_rounds_to_single_precision():
    """Float32 values carry single-precision rounding."""
    value = coerce(Float32, "0.1")
    assert value == struct.unpack("<f", struct.pack("<f", 0.1))[0]
    assert value != 0.1


@pytest.mark.parametrize("raw", ["1e39", "-1e39", "3.5e38"])
def test_float32_out_of_range(raw):
    """Finite values beyond single precision are rejected, not turned into infinity."""
    with pytest.raises(MalformedValueError) as exc:
        coerce(Float32, raw)
    assert "out of range" in str(exc.value)


def test_float32_infinity_literal():
    """An explicit infinity is still accepted."""
    assert coerce(Float32, "inf") == float("inf")
    assert coerce(float, "1e39") == 1e39


@pytest.mark.parametrize(
    "hint, raw",
    [
        (int, "abc"),
        (int, ""),
        (int, " 8080"),
        (int, "1.5"),
        (int, "08"),
        (int, "0789"),
        (Int8, "0200"),
        (Int8, "128"),
        (Int8, "-129"),
        (int, "9223372036854775808"),
        (UInt8, "256"),
        (UInt8, "-1"),
        (UInt, "+1"),
        (float, "x0.5"),
        (float, "0.5 "),
        (Float32, "1e39"),
        (bool, "yes"),
        (bool, ""),
        (timedelta, "5"),
        (timedelta, "10 minutes"),
    ],
)
def test_malformed_scalar(hint, raw):
    """Malformed or out-of-range input raises MalformedValueError."""
    with pytest.raises(MalformedValueError) as exc:
        coerce(hint, raw)
    assert exc.value.raw == raw


def test_malformed_value_chains_parser_error():
    """The underlying parser diagnostic is kept as the cause."""
    with pytest.raises(MalformedValueError) as exc:
        coerce(int, "nope")
    assert isinstance(exc.value.__cause__, ValueError)
    assert "int64" in str(exc.value)


def test_optional_scalar():
    """Optional[T] coerces into T."""
    assert coerce(Optional[int], "5") == 5
    assert coerce(int | None, "7") == 7
    assert coerce(Optional[str], "x") == "x"


# Sequences

def test_sequence_default_separator():
    """Test splitting on the default comma."""
    assert coerce(list[int], "1,2,3,4,5") == [1, 2, 3, 4, 5]


def test_sequence_custom_separator():
    """Test a declared separator."""
    assert coerce(list[str], "a:b:c", ":") == ["a", "b", "c"]
    assert coerce(list[UInt8], "10:20", ":") == [10, 20]


def test_sequence_keeps_one_element_per_token():
    """Empty tokens are kept as elements."""
    assert coerce(list[str], "a,,b,") == ["a", "", "b", ""]
    assert coerce(list[str], "single") == ["single"]


def test_sequence_variants():
    """Tuples, bare lists and optional elements."""
    assert coerce(tuple[int, ...], "1,2") == (1, 2)
    assert coerce(list, "a,b") == ["a", "b"]
    assert coerce(list[Optional[int]], "1,2") == [1, 2]
    assert coerce(Optional[list[float]], "0.5,1") == [0.5, 1.0]
    assert coerce(list[timedelta], "1s,1m") == [timedelta(seconds=1), timedelta(minutes=1)]


def test_sequence_element_failure():
    """One bad element fails the whole sequence."""
    with pytest.raises(MalformedValueError) as exc:
        coerce(list[int], "1,2,x,4")
    assert exc.value.raw == "x"


def test_nested_sequence_unsupported():
    """Elements are always scalars."""
    with pytest.raises(UnsupportedTypeError):
        coerce(list[list[int]], "1,2")
    with pytest.raises(UnsupportedTypeError):
        coerce(list[dict[str, str]], "a:b")


# Mappings

def test_mapping():
    """Test the country-code example."""
    result = coerce(dict[str, str], "Chile:CL,Venezuela:VEN,Colombia:CO")
    assert result == {"Chile": "CL", "Venezuela": "VEN", "Colombia": "CO"}


def test_mapping_empty_input():
    """Blank input yields an empty mapping."""
    assert coerce(dict[str, str], "") == {}
    assert coerce(dict[str, int], "   ") == {}


def test_mapping_typed_sides():
    """Keys and values are coerced to their declared types."""
    assert coerce(dict[str, int], "a:1,b:2") == {"a": 1, "b": 2}
    assert coerce(dict[int, bool], "1:true,2:f") == {1: True, 2: False}
    assert coerce(dict, "k:v") == {"k": "v"}


def test_mapping_duplicate_keys_overwrite():
    """Later duplicates win."""
    assert coerce(dict[str, str], "a:1,a:2") == {"a": "2"}


def test_mapping_ignores_separator():
    """Mappings always split on "," and ":"."""
    assert coerce(dict[str, str], "a:1,b:2", ";") == {"a": "1", "b": "2"}


@pytest.mark.parametrize("raw, item", [("a:b,c", "c"), ("a:b:c", "a:b:c"), ("a:b,", "")])
def test_invalid_map_item(raw, item):
    """Pairs must split into exactly two parts."""
    with pytest.raises(InvalidMapItemError) as exc:
        coerce(dict[str, str], raw)
    assert exc.value.item == item
    assert repr(item) in str(exc.value)


def test_mapping_value_failure():
    """A bad value fails the whole mapping."""
    with pytest.raises(MalformedValueError):
        coerce(dict[str, int], "a:1,b:x")


# Unsupported shapes

class Nested:
    pass


@pytest.mark.parametrize(
    "hint",
    [bytes, set[int], Nested, int | str, Annotated[int, Width(12)], Annotated[float, Width(16)]],
)
def test_unsupported_type(hint):
    """Shapes without a coercion rule raise UnsupportedTypeError."""
    with pytest.raises(UnsupportedTypeError):
        coerce(hint, "1")
