from __future__ import annotations

from typing import Any

from .constants import CID_PREFIX
from .encode import encode_to_bytes
from .utils import sha256_hex


def canonical_json(obj: Any) -> bytes:
    """Return the canonical JSON bytes of ``obj`` (keys must already be sorted)."""
    return encode_to_bytes(obj)


def compute_cid(obj: Any) -> str:
    """Compute content identifier as 'sha256:<hex>' over canonical JSON bytes."""
    return f"{CID_PREFIX}{sha256_hex(canonical_json(obj))}"
