from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

import pytest
from canonjson import (
    InvalidString,
    NewtypeVariant,
    NonCanonicalNumber,
    StructVariant,
    TupleVariant,
    UnitVariant,
    UnorderedKey,
    UnsupportedType,
    encode_to_bytes,
    encode_to_text,
)
from canonjson.ser import Serializer


def assert_encode_ok(cases: list[tuple[Any, str]]) -> None:
    for value, expected in cases:
        assert encode_to_text(value) == expected


# --- Scalars ---


def test_write_null() -> None:
    assert_encode_ok([(None, "null")])


def test_write_bool() -> None:
    assert_encode_ok([(True, "true"), (False, "false")])


@pytest.mark.parametrize(
    "value",
    [
        0,
        3,
        46,
        -2,
        -1933,
        -(2**7),
        2**7 - 1,
        2**8 - 1,
        -(2**15),
        2**16 - 1,
        -(2**31),
        2**32 - 1,
        -(2**63),
        2**63 - 1,
        2**64 - 1,
    ],
)
def test_write_int(value: int) -> None:
    assert encode_to_text(value) == str(value)


@pytest.mark.parametrize("value", [2**64, -(2**63) - 1, 10**30])
def test_int_outside_64_bit_range_rejected(value: int) -> None:
    with pytest.raises(NonCanonicalNumber):
        encode_to_bytes(value)


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_nonfinite_float_rejected(value: float) -> None:
    with pytest.raises(NonCanonicalNumber):
        encode_to_bytes(value)


@pytest.mark.parametrize("value", [3.1, -1.3, 0.5, 1e-300])
def test_fractional_float_rejected(value: float) -> None:
    with pytest.raises(NonCanonicalNumber):
        encode_to_bytes(value)


def test_write_integral_float() -> None:
    assert_encode_ok(
        [
            (3.0, "3"),
            (46.0, "46"),
            (-254.0, "-254"),
            (-0.0, "0"),
            (2.0**53, "9007199254740992"),
            (-(2.0**63), "-9223372036854775808"),
        ]
    )


@pytest.mark.parametrize("value", [2.0**63, 1e300, -1e300])
def test_float_beyond_i64_rejected(value: float) -> None:
    with pytest.raises(NonCanonicalNumber):
        encode_to_bytes(value)


# --- Strings ---


def test_write_str() -> None:
    assert_encode_ok(
        [
            ("", '""'),
            ("foo", '"foo"'),
            ("\\", '"\\\\"'),
            ('"', '"\\""'),
            ("\n", '"\n"'),
            ("\r", '"\r"'),
            ("\t", '"\t"'),
            ("☃", '"☃"'),
        ]
    )


def test_control_bytes_are_written_raw() -> None:
    out = encode_to_bytes("a\nb\x00\x1f")
    assert out == b'"a\nb\x00\x1f"'
    assert b"\\n" not in out
    assert b"\\u" not in out


def test_escapes_inside_longer_runs() -> None:
    assert encode_to_bytes('say "hi" \\ bye') == b'"say \\"hi\\" \\\\ bye"'


def test_multibyte_text_copied_verbatim() -> None:
    assert encode_to_bytes("hé☃\U0001f600") == '"hé☃\U0001f600"'.encode()


def test_lone_surrogate_rejected() -> None:
    with pytest.raises(InvalidString):
        encode_to_bytes("\ud800")


def test_write_char() -> None:
    import io

    buf = io.BytesIO()
    Serializer(buf).serialize_char('"')
    assert buf.getvalue() == b'"\\""'
    with pytest.raises(ValueError):
        Serializer(io.BytesIO()).serialize_char("ab")


def test_write_bytes_as_integer_sequence() -> None:
    assert_encode_ok(
        [
            (b"", "[]"),
            (b"\x00\x01\xff", "[0,1,255]"),
            (bytearray(b"AB"), "[65,66]"),
            (memoryview(b"\x07"), "[7]"),
        ]
    )


# --- Sequences ---


def test_write_list() -> None:
    assert_encode_ok(
        [
            ([], "[]"),
            ([True], "[true]"),
            ([True, False], "[true,false]"),
            ([False, None], "[false,null]"),
        ]
    )
    assert_encode_ok(
        [
            ([[], [], []], "[[],[],[]]"),
            ([[1, 2, 3], [], []], "[[1,2,3],[],[]]"),
            ([[], [1, 2, 3], []], "[[],[1,2,3],[]]"),
            ([[], [], [1, 2, 3]], "[[],[],[1,2,3]]"),
        ]
    )


def test_write_tuple() -> None:
    assert_encode_ok([((5,), "[5]"), ((5, (6, "abc")), '[5,[6,"abc"]]')])


# --- Mappings ---


def test_write_object() -> None:
    assert_encode_ok(
        [
            ({}, "{}"),
            ({"a": True}, '{"a":true}'),
            ({"a": True, "b": False}, '{"a":true,"b":false}'),
        ]
    )
    assert_encode_ok(
        [
            ({"a": {}, "b": {}, "c": {}}, '{"a":{},"b":{},"c":{}}'),
            (
                {"a": {"a": {"a": [1, 2, 3]}, "b": {}, "c": {}}, "b": {}, "c": {}},
                '{"a":{"a":{"a":[1,2,3]},"b":{},"c":{}},"b":{},"c":{}}',
            ),
            (
                {"a": {}, "b": {}, "c": {"a": {"a": [1, 2, 3]}, "b": {}, "c": {}}},
                '{"a":{},"b":{},"c":{"a":{"a":[1,2,3]},"b":{},"c":{}}}',
            ),
        ]
    )


def test_write_object_with_raw_control_characters() -> None:
    value = {"b": [{"c": "\x0c\x1f\r"}, {"d": ""}]}
    assert encode_to_text(value) == '{"b":[{"c":"\x0c\x1f\r"},{"d":""}]}'


def test_output_is_deterministic() -> None:
    value = {"a": [1, 2.0, "x"], "b": {"c": None, "d": b"\x01"}}
    assert encode_to_bytes(value) == encode_to_bytes(value)
    assert encode_to_bytes(value) == b'{"a":[1,2,"x"],"b":{"c":null,"d":[1]}}'


# --- Tagged variants ---


def test_write_enum_variants() -> None:
    assert_encode_ok(
        [
            (UnitVariant("Dog"), '"Dog"'),
            (TupleVariant("Frog", ("Henry", [])), '{"Frog":["Henry",[]]}'),
            (TupleVariant("Frog", ("Henry", [349])), '{"Frog":["Henry",[349]]}'),
            (TupleVariant("Frog", ("Henry", [349, 102])), '{"Frog":["Henry",[349,102]]}'),
            (StructVariant("Cat", {"age": 5, "name": "Kate"}), '{"Cat":{"age":5,"name":"Kate"}}'),
            (NewtypeVariant("AntHive", ["Bob", "Stuart"]), '{"AntHive":["Bob","Stuart"]}'),
        ]
    )


def test_each_variant_form() -> None:
    assert encode_to_text(UnitVariant("Unit")) == '"Unit"'
    assert encode_to_text(NewtypeVariant("Newtype", 1)) == '{"Newtype":1}'
    assert encode_to_text(TupleVariant("Tuple", (1, 2))) == '{"Tuple":[1,2]}'
    assert encode_to_text(StructVariant("Struct", {"a": 1})) == '{"Struct":{"a":1}}'


def test_empty_variant_payloads() -> None:
    assert encode_to_text(TupleVariant("T")) == '{"T":[]}'
    assert encode_to_text(StructVariant("S")) == '{"S":{}}'
    assert encode_to_text(NewtypeVariant("N")) == '{"N":null}'


def test_nested_variants_close_in_order() -> None:
    value = StructVariant("Outer", {"inner": TupleVariant("Deep", [UnitVariant("X"), 1])})
    assert encode_to_text(value) == '{"Outer":{"inner":{"Deep":["X",1]}}}'


def test_unsorted_struct_variant_rejected() -> None:
    with pytest.raises(UnorderedKey):
        encode_to_bytes(StructVariant("Boo", {"z": 1, "a": 2}))


class Color(Enum):
    RED = 1
    GREEN = 2


class Level(IntEnum):
    LOW = 1


def test_enum_member_is_unit_variant() -> None:
    assert encode_to_text(Color.GREEN) == '"GREEN"'
    assert encode_to_text([Color.RED, Level.LOW]) == '["RED",1]'


# --- Records, optionals, newtypes ---


@dataclass
class Record:
    int: int
    seq: list[str]


@dataclass
class Unsorted:
    z: int
    a: int


@dataclass
class WithOptional:
    a: int | None
    b: int


def test_write_dataclass() -> None:
    assert encode_to_text(Record(int=1, seq=["a", "b"])) == '{"int":1,"seq":["a","b"]}'


def test_unsorted_dataclass_rejected() -> None:
    with pytest.raises(UnorderedKey):
        encode_to_bytes(Unsorted(z=1, a=2))


def test_write_option() -> None:
    assert_encode_ok([(None, "null"), ("jodhpurs", '"jodhpurs"'), (["foo", "bar"], '["foo","bar"]')])


def test_absent_value_encodes_as_explicit_null() -> None:
    absent = encode_to_text(WithOptional(a=None, b=1))
    assert absent == '{"a":null,"b":1}'
    assert absent == encode_to_text({"a": None, "b": 1})


class Newtype:
    def __init__(self, inner: Any) -> None:
        self.inner = inner

    def serialize(self, serializer: Any) -> None:
        serializer.serialize_value(self.inner)


def test_write_newtype_struct() -> None:
    inner = Newtype({"inner": 123})
    assert encode_to_text(inner) == '{"inner":123}'
    assert encode_to_text({"outer": inner}) == '{"outer":{"inner":123}}'


# --- Unsupported shapes ---


@pytest.mark.parametrize("value", [{1, 2}, object(), frozenset(), 1j])
def test_unsupported_type(value: Any) -> None:
    with pytest.raises(UnsupportedType) as exc_info:
        encode_to_bytes(value)
    assert isinstance(exc_info.value, TypeError)
