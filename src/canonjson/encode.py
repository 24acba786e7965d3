from __future__ import annotations

import io
import logging
from typing import Any

from .config import resolve_max_depth
from .exceptions import EncodeError
from .ser import Serializer, Sink

logger = logging.getLogger(__name__)


def encode_to_sink(value: Any, sink: Sink, *, max_depth: int | None = None) -> None:
    """Write ``value`` as canonical JSON into ``sink``.

    ``sink`` only needs a ``write(bytes)`` method. On failure the bytes
    already written stay in the sink; use :func:`encode_to_bytes` when the
    output must be all-or-nothing.
    """
    ser = Serializer(sink, max_depth=resolve_max_depth(max_depth))
    try:
        ser.serialize_value(value)
    except EncodeError as e:
        logger.debug("canonical encode aborted (%s): %s", e.reason.value, e)
        raise


def encode_to_bytes(value: Any, *, max_depth: int | None = None) -> bytes:
    buf = io.BytesIO()
    encode_to_sink(value, buf, max_depth=max_depth)
    return buf.getvalue()


def encode_to_text(value: Any, *, max_depth: int | None = None) -> str:
    return encode_to_bytes(value, max_depth=max_depth).decode("utf-8")
