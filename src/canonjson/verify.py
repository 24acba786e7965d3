from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from .encode import encode_to_bytes
from .exceptions import CanonJSONError, KidNotFound, SignatureInvalid, reason_code_for_exception
from .signers import BaseSigner
from .utils import b64u_decode


def _find_jwk(jwks: dict[str, Any], kid: str) -> dict[str, Any] | None:
    keys_obj = jwks.get("keys")
    if not isinstance(keys_obj, list):
        return None
    for k in keys_obj:
        if isinstance(k, dict) and k.get("kid") == kid:
            return k
    return None


def _verify_sig_ed25519(jwk: dict[str, Any], message: bytes, sig_b64u: str) -> bool:
    if jwk.get("kty") != "OKP" or jwk.get("crv") != "Ed25519":
        return False
    x = jwk.get("x")
    if not isinstance(x, str):
        return False
    try:
        pub = Ed25519PublicKey.from_public_bytes(b64u_decode(x))
        pub.verify(b64u_decode(sig_b64u), message)
    except (InvalidSignature, ValueError):
        return False
    return True


def sign_value(value: Any, signer: BaseSigner) -> str:
    """Sign the canonical JSON bytes of ``value``."""
    return signer.sign(encode_to_bytes(value))


def verify_value_or_raise(
    value: Any,
    signature_b64u: str,
    jwks: dict[str, Any],
    kid: str,
) -> None:
    """Verify a signature over ``value`` or raise a typed exception.

    Values that cannot be canonically encoded raise their encode error; a
    signature can never be valid for them.
    """
    jwk = _find_jwk(jwks, kid)
    if not jwk:
        raise KidNotFound(f"kid not found: {kid}")
    message = encode_to_bytes(value)
    if not _verify_sig_ed25519(jwk, message, signature_b64u):
        raise SignatureInvalid("signature invalid")


def verify_value(
    value: Any,
    signature_b64u: str,
    jwks: dict[str, Any],
    kid: str,
) -> tuple[bool, str | None]:
    """Boolean API over :func:`verify_value_or_raise`.

    Returns (ok, reason) where reason is a short string when not ok.
    """
    try:
        verify_value_or_raise(value, signature_b64u, jwks, kid)
        return True, None
    except CanonJSONError as e:
        return False, reason_code_for_exception(e)


def build_jwks_for_signers(signers: Iterable[BaseSigner]) -> dict[str, Any]:
    return {"keys": [s.public_jwk() for s in signers]}
