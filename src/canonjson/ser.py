"""Single-pass canonical JSON serializer.

A :class:`Serializer` receives one callback per value shape and writes the
corresponding bytes straight into its sink. Compound values (sequences,
mappings, variant payloads) are tracked by small frame objects whose
:class:`State` decides when a ``,`` separator is due and whether ``end()``
must write a closing delimiter. Nesting rides the Python call stack; the
number of open delimiters is bounded by ``max_depth``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from . import scalar
from .constants import DEFAULT_MAX_DEPTH
from .escape import write_str
from .exceptions import DepthExceeded, IoFailure
from .keys import AscendingKeyGuard
from .value import serialize_value


class Sink(Protocol):
    def write(self, data: bytes, /) -> Any: ...


class State(Enum):
    EMPTY = "empty"
    FIRST = "first"
    REST = "rest"


class Shape(Enum):
    UNIT = "unit"
    NEWTYPE = "newtype"
    TUPLE = "tuple"
    STRUCT = "struct"


class _Compound:
    def __init__(
        self, ser: Serializer, state: State, closer: bytes, *, wrapped: bool = False
    ) -> None:
        self._ser = ser
        self.state = state
        self._closer = closer
        self._wrapped = wrapped
        self.closed = False

    def _separate(self) -> None:
        if self.closed:
            raise ValueError("compound is already closed")
        if self.state is State.EMPTY:
            raise ValueError("compound was declared with length 0")
        if self.state is State.REST:
            self._ser.write(b",")
        self.state = State.REST

    def end(self) -> None:
        if self.closed:
            raise ValueError("compound is already closed")
        self.closed = True
        # Payload closer first, then the variant wrapper (if any).
        if self.state is not State.EMPTY:
            self._ser.write(self._closer)
        self._ser._leave()
        if self._wrapped:
            self._ser.write(b"}")
            self._ser._leave()


class SequenceEncoder(_Compound):
    def element(self, value: Any) -> None:
        self._separate()
        self._ser.serialize_value(value)


class MappingEncoder(_Compound):
    def __init__(
        self, ser: Serializer, state: State, closer: bytes, *, wrapped: bool = False
    ) -> None:
        super().__init__(ser, state, closer, wrapped=wrapped)
        self._guard = AscendingKeyGuard(ser)

    def key(self, key: Any) -> None:
        self._separate()
        self._guard.serialize_value(key)

    def value(self, value: Any) -> None:
        self._ser.write(b":")
        self._ser.serialize_value(value)

    def entry(self, key: Any, value: Any) -> None:
        self.key(key)
        self.value(value)


class NewtypeEncoder:
    """Payload handle for ``{"Tag":<value>}``; accepts exactly one value."""

    def __init__(self, ser: Serializer) -> None:
        self._ser = ser
        self._filled = False
        self.closed = False

    def value(self, value: Any) -> None:
        if self._filled:
            raise ValueError("newtype variant carries exactly one value")
        self._filled = True
        self._ser.serialize_value(value)

    def end(self) -> None:
        if self.closed:
            raise ValueError("newtype variant is already closed")
        if not self._filled:
            raise ValueError("newtype variant closed without a value")
        self.closed = True
        self._ser.write(b"}")
        self._ser._leave()


class Serializer:
    def __init__(self, sink: Sink, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._sink = sink
        self.max_depth = max_depth
        self.depth = 0

    def write(self, data: bytes) -> None:
        try:
            self._sink.write(data)
        except (OSError, ValueError) as e:
            # ValueError: write on a closed file object.
            raise IoFailure(f"sink rejected write: {e}") from e

    def _enter(self) -> None:
        if self.depth >= self.max_depth:
            raise DepthExceeded(self.max_depth)
        self.depth += 1

    def _leave(self) -> None:
        self.depth -= 1

    # --- scalars ---

    def serialize_null(self) -> None:
        self.write(b"null")

    def serialize_bool(self, value: bool) -> None:
        self.write(scalar.encode_bool(value))

    def serialize_int(self, value: int) -> None:
        self.write(scalar.encode_int(value))

    def serialize_float(self, value: float) -> None:
        self.write(scalar.encode_float(value))

    def serialize_str(self, value: str) -> None:
        write_str(self.write, value)

    def serialize_char(self, value: str) -> None:
        self.serialize_str(scalar.check_char(value))

    def serialize_bytes(self, value: bytes | bytearray | memoryview) -> None:
        data = bytes(value)
        seq = self.begin_sequence(len(data))
        for byte in data:
            seq.element(byte)
        seq.end()

    def serialize_value(self, value: Any) -> None:
        # An aborted value leaves its frames unclosed; unwind their levels.
        depth = self.depth
        try:
            serialize_value(value, self)
        except Exception:
            self.depth = depth
            raise

    # --- compounds ---

    def _begin(
        self,
        cls: type[_Compound],
        length: int | None,
        opener: bytes,
        closer: bytes,
        *,
        wrapped: bool = False,
    ) -> Any:
        self._enter()
        if length == 0:
            self.write(opener + closer)
            return cls(self, State.EMPTY, closer, wrapped=wrapped)
        self.write(opener)
        return cls(self, State.FIRST, closer, wrapped=wrapped)

    def begin_sequence(self, length: int | None = None) -> SequenceEncoder:
        return self._begin(SequenceEncoder, length, b"[", b"]")

    def begin_mapping(self, length: int | None = None) -> MappingEncoder:
        return self._begin(MappingEncoder, length, b"{", b"}")

    # --- tagged variants (externally tagged) ---

    def _open_variant(self, tag: str) -> None:
        self._enter()
        self.write(b"{")
        self.serialize_str(tag)
        self.write(b":")

    def begin_tagged(
        self, tag: str, shape: Shape, length: int | None = None
    ) -> SequenceEncoder | MappingEncoder | NewtypeEncoder | None:
        """Start a variant named ``tag`` with a payload of ``shape``.

        ``UNIT`` writes the tag as a string and returns ``None``. The other
        shapes write the ``{"Tag":`` wrapper and return the payload handle
        whose ``end()`` closes both the payload and the wrapper.
        """
        if shape is Shape.UNIT:
            self.serialize_str(tag)
            return None
        self._open_variant(tag)
        if shape is Shape.NEWTYPE:
            return NewtypeEncoder(self)
        if shape is Shape.TUPLE:
            return self._begin(SequenceEncoder, length, b"[", b"]", wrapped=True)
        if shape is Shape.STRUCT:
            return self._begin(MappingEncoder, length, b"{", b"}", wrapped=True)
        raise ValueError(f"unknown variant shape: {shape!r}")

    def serialize_unit_variant(self, tag: str) -> None:
        self.begin_tagged(tag, Shape.UNIT)

    def serialize_newtype_variant(self, tag: str, value: Any) -> None:
        payload = self.begin_tagged(tag, Shape.NEWTYPE)
        payload.value(value)
        payload.end()

    def begin_tuple_variant(self, tag: str, length: int | None = None) -> SequenceEncoder:
        return self.begin_tagged(tag, Shape.TUPLE, length)

    def begin_struct_variant(self, tag: str, length: int | None = None) -> MappingEncoder:
        return self.begin_tagged(tag, Shape.STRUCT, length)
