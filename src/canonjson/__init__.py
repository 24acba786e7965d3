from .cid import canonical_json, compute_cid
from .config import EncoderConfig
from .encode import encode_to_bytes, encode_to_sink, encode_to_text
from .exceptions import (
    CanonJSONError,
    ConfigError,
    DepthExceeded,
    DuplicateKey,
    EncodeError,
    InvalidString,
    IoFailure,
    KeyMustBeString,
    KidNotFound,
    NonCanonicalNumber,
    ReasonCode,
    SignatureInvalid,
    UnorderedKey,
    UnsupportedType,
    reason_code_for_exception,
)
from .keys import AscendingKeyGuard
from .ser import (
    MappingEncoder,
    NewtypeEncoder,
    SequenceEncoder,
    Serializer,
    Shape,
    Sink,
    State,
)
from .signers import BaseSigner, FileSigner
from .value import CanonicalValue, Serializable, serialize_value
from .variants import NewtypeVariant, StructVariant, TupleVariant, UnitVariant
from .verify import build_jwks_for_signers, sign_value, verify_value, verify_value_or_raise

__all__ = [
    "encode_to_sink",
    "encode_to_bytes",
    "encode_to_text",
    "canonical_json",
    "compute_cid",
    "Serializer",
    "Sink",
    "State",
    "Shape",
    "SequenceEncoder",
    "MappingEncoder",
    "NewtypeEncoder",
    "AscendingKeyGuard",
    "Serializable",
    "serialize_value",
    "CanonicalValue",
    "UnitVariant",
    "NewtypeVariant",
    "TupleVariant",
    "StructVariant",
    "EncoderConfig",
    "BaseSigner",
    "FileSigner",
    "sign_value",
    "verify_value",
    "verify_value_or_raise",
    "build_jwks_for_signers",
    # exceptions
    "CanonJSONError",
    "EncodeError",
    "IoFailure",
    "NonCanonicalNumber",
    "KeyMustBeString",
    "DuplicateKey",
    "UnorderedKey",
    "DepthExceeded",
    "UnsupportedType",
    "InvalidString",
    "ConfigError",
    "KidNotFound",
    "SignatureInvalid",
    "ReasonCode",
    "reason_code_for_exception",
    "__version__",
]
try:  # prefer single source of truth from installed metadata
    from importlib.metadata import version as _pkg_version

    __version__ = _pkg_version("canonjson")
except Exception:  # pragma: no cover
    __version__ = "0.0.0"
