"""Bridge from Python values to the serializer's shape callbacks.

Dispatch is a fixed chain: objects that implement :class:`Serializable`
report their own shape; the built-in JSON-like types, ``Enum`` members and
dataclass instances are mapped here. Anything else is rejected.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .exceptions import UnsupportedType

if TYPE_CHECKING:
    from .ser import Serializer


@runtime_checkable
class Serializable(Protocol):
    def serialize(self, serializer: Serializer) -> None: ...


def serialize_value(value: Any, serializer: Serializer) -> None:
    """Report ``value`` to ``serializer`` one shape callback at a time."""
    if isinstance(value, Serializable) and not isinstance(value, type):
        value.serialize(serializer)
    elif value is None:
        serializer.serialize_null()
    elif isinstance(value, bool):
        serializer.serialize_bool(value)
    elif isinstance(value, int):
        serializer.serialize_int(value)
    elif isinstance(value, float):
        serializer.serialize_float(value)
    elif isinstance(value, str):
        serializer.serialize_str(value)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        serializer.serialize_bytes(value)
    elif isinstance(value, Enum):
        serializer.serialize_unit_variant(value.name)
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        _serialize_dataclass(value, serializer)
    elif isinstance(value, Mapping):
        _serialize_mapping(value.items(), len(value), serializer)
    elif isinstance(value, Sequence):
        _serialize_sequence(value, serializer)
    else:
        raise UnsupportedType(value)


def _serialize_dataclass(value: Any, serializer: Serializer) -> None:
    # Declaration order; fields must already be declared in ascending order.
    fields = dataclasses.fields(value)
    mapping = serializer.begin_mapping(len(fields))
    for f in fields:
        mapping.entry(f.name, getattr(value, f.name))
    mapping.end()


def _serialize_mapping(items: Any, length: int, serializer: Serializer) -> None:
    mapping = serializer.begin_mapping(length)
    for key, item in items:
        mapping.entry(key, item)
    mapping.end()


def _serialize_sequence(value: Sequence[Any], serializer: Serializer) -> None:
    seq = serializer.begin_sequence(len(value))
    for item in value:
        seq.element(item)
    seq.end()


class CanonicalValue:
    """A parsed JSON document, encoded with its object keys in sorted order.

    Parsers hand back objects in source order, which carries no meaning in
    JSON, so this adapter visits keys sorted instead of rejecting them.
    Everything else (numbers, strings, nesting) follows the normal rules.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    @classmethod
    def from_json(cls, text: str | bytes) -> CanonicalValue:
        return cls(json.loads(text))

    def serialize(self, serializer: Serializer) -> None:
        value = self.value
        if isinstance(value, Mapping):
            items = list(value.items())
            # Non-string keys are left in place for the key guard to reject.
            if all(isinstance(k, str) for k, _ in items):
                items.sort(key=lambda kv: kv[0])
            _serialize_mapping(
                ((k, CanonicalValue(v)) for k, v in items), len(items), serializer
            )
        elif isinstance(value, (list, tuple)):
            _serialize_sequence([CanonicalValue(v) for v in value], serializer)
        else:
            serialize_value(value, serializer)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CanonicalValue):
            return NotImplemented
        return self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        from .encode import encode_to_text

        return encode_to_text(self)

    def __repr__(self) -> str:
        value = self.value
        if value is None:
            return "Null"
        if isinstance(value, bool):
            return f"Bool({value!r})"
        if isinstance(value, (int, float)):
            return f"Number({value!r})"
        if isinstance(value, str):
            return f"String({value!r})"
        if isinstance(value, (list, tuple)):
            return f"Array([{', '.join(repr(CanonicalValue(v)) for v in value)}])"
        if isinstance(value, Mapping):
            inner = ", ".join(f"{k!r}: {CanonicalValue(v)!r}" for k, v in value.items())
            return f"Object({{{inner}}})"
        return f"CanonicalValue({value!r})"
