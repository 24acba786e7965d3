from __future__ import annotations

import hashlib
import pathlib
from abc import ABC, abstractmethod
from typing import Any

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .encode import encode_to_bytes
from .utils import b64u_decode, b64u_encode


def jwk_thumbprint(jwk: dict[str, Any]) -> str:
    """RFC 7638 thumbprint of an OKP key: sha256 over its canonical required members."""
    required = {"crv": jwk["crv"], "kty": jwk["kty"], "x": jwk["x"]}
    return b64u_encode(hashlib.sha256(encode_to_bytes(required)).digest())


class BaseSigner(ABC):
    @property
    @abstractmethod
    def kid(self) -> str: ...

    @abstractmethod
    def sign(self, msg: bytes) -> str:
        """Sign ``msg`` and return the base64url signature."""

    @abstractmethod
    def public_jwk(self) -> dict[str, Any]: ...


class FileSigner(BaseSigner):
    """Ed25519 signer built from a 32-byte base64url seed."""

    def __init__(self, seed_b64u: str) -> None:
        seed = b64u_decode(seed_b64u)
        if len(seed) != 32:
            raise ValueError(f"seed must decode to 32 bytes, got {len(seed)}")
        self._key = Ed25519PrivateKey.from_private_bytes(seed)
        raw = self._key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
        self._x = b64u_encode(raw)
        self._kid = jwk_thumbprint({"crv": "Ed25519", "kty": "OKP", "x": self._x})

    @classmethod
    def from_file(cls, path: str | pathlib.Path) -> FileSigner:
        return cls(pathlib.Path(path).read_text("utf-8").strip())

    @property
    def kid(self) -> str:
        if not isinstance(self._kid, str):
            raise ValueError("signer kid is not a string")
        return self._kid

    def sign(self, msg: bytes) -> str:
        if not isinstance(msg, bytes):
            raise ValueError("message must be bytes")
        return b64u_encode(self._key.sign(msg))

    def public_jwk(self) -> dict[str, Any]:
        return {"crv": "Ed25519", "kid": self.kid, "kty": "OKP", "x": self._x}
