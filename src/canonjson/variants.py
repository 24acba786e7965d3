"""Externally tagged sum-type values.

=================  ===============================
value              encoding
=================  ===============================
``UnitVariant``    ``"Tag"``
``NewtypeVariant`` ``{"Tag":<value>}``
``TupleVariant``   ``{"Tag":[<f1>,<f2>,...]}``
``StructVariant``  ``{"Tag":{"field":<value>,...}}``
=================  ===============================

Struct variant fields go through the same ascending-key check as any other
mapping, so they must be given in sorted order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .ser import Serializer


@dataclass(frozen=True)
class UnitVariant:
    tag: str

    def serialize(self, serializer: Serializer) -> None:
        serializer.serialize_unit_variant(self.tag)


@dataclass(frozen=True)
class NewtypeVariant:
    tag: str
    value: Any = None

    def serialize(self, serializer: Serializer) -> None:
        serializer.serialize_newtype_variant(self.tag, self.value)


@dataclass(frozen=True)
class TupleVariant:
    tag: str
    fields: Sequence[Any] = ()

    def serialize(self, serializer: Serializer) -> None:
        payload = serializer.begin_tuple_variant(self.tag, len(self.fields))
        for item in self.fields:
            payload.element(item)
        payload.end()


@dataclass(frozen=True)
class StructVariant:
    tag: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def serialize(self, serializer: Serializer) -> None:
        payload = serializer.begin_struct_variant(self.tag, len(self.fields))
        for name, item in self.fields.items():
            payload.entry(name, item)
        payload.end()
