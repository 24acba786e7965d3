from __future__ import annotations

from typing import TYPE_CHECKING, Any, NoReturn

from .exceptions import DuplicateKey, KeyMustBeString, UnorderedKey, UnsupportedType
from .value import serialize_value

if TYPE_CHECKING:
    from .ser import Serializer


def _rejects(shape: str):
    def reject(self: AscendingKeyGuard, *args: Any, **kwargs: Any) -> NoReturn:
        raise KeyMustBeString(shape)

    reject.__name__ = f"reject_{shape}"
    return reject


class AscendingKeyGuard:
    """Serializer view used for the key half of a mapping entry.

    Only strings get through. Each accepted key must sort strictly after the
    previous one in the same mapping; Python's code point ordering of ``str``
    agrees with byte order of the UTF-8 encoding.
    """

    def __init__(self, ser: Serializer) -> None:
        self._ser = ser
        self.previous: str | None = None

    def serialize_str(self, value: str) -> None:
        previous = self.previous
        if previous is not None:
            if value == previous:
                raise DuplicateKey(value)
            if value < previous:
                raise UnorderedKey(value, previous)
        self.previous = value
        self._ser.serialize_str(value)

    def serialize_value(self, value: Any) -> None:
        try:
            serialize_value(value, self)
        except UnsupportedType as e:
            raise KeyMustBeString(type(e.value).__name__) from e

    serialize_null = _rejects("null")
    serialize_bool = _rejects("bool")
    serialize_int = _rejects("int")
    serialize_float = _rejects("float")
    serialize_char = _rejects("char")
    serialize_bytes = _rejects("bytes")
    serialize_unit_variant = _rejects("unit variant")
    serialize_newtype_variant = _rejects("newtype variant")
    begin_sequence = _rejects("sequence")
    begin_mapping = _rejects("mapping")
    begin_tagged = _rejects("variant")
    begin_tuple_variant = _rejects("tuple variant")
    begin_struct_variant = _rejects("struct variant")
