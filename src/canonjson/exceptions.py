from __future__ import annotations

from enum import Enum


class ReasonCode(str, Enum):
    IO_FAILURE = "io_failure"
    NON_CANONICAL_NUMBER = "non_canonical_number"
    KEY_MUST_BE_STRING = "key_must_be_string"
    DUPLICATE_KEY = "duplicate_key"
    UNORDERED_KEY = "unordered_key"
    DEPTH_EXCEEDED = "depth_exceeded"
    UNSUPPORTED_TYPE = "unsupported_type"
    INVALID_STRING = "invalid_string"
    CONFIG_ERROR = "config_error"
    KID_NOT_FOUND = "kid_not_found"
    SIGNATURE_INVALID = "signature_invalid"
    INTERNAL = "internal_error"


class CanonJSONError(Exception):
    """Base class for all errors raised by canonjson."""

    reason: ReasonCode = ReasonCode.INTERNAL


class EncodeError(CanonJSONError):
    """The value could not be written as canonical JSON.

    Output already handed to the sink is not rolled back.
    """


class IoFailure(EncodeError):
    reason = ReasonCode.IO_FAILURE


class NonCanonicalNumber(EncodeError):
    reason = ReasonCode.NON_CANONICAL_NUMBER

    def __init__(self, value: object) -> None:
        super().__init__(f"value not allowed in canonical JSON: {value!r}")
        self.value = value


class KeyMustBeString(EncodeError):
    reason = ReasonCode.KEY_MUST_BE_STRING

    def __init__(self, shape: str) -> None:
        super().__init__(f"key must be a string, got {shape}")
        self.shape = shape


class DuplicateKey(EncodeError):
    reason = ReasonCode.DUPLICATE_KEY

    def __init__(self, key: str) -> None:
        super().__init__(f"repeated key: {key!r}")
        self.key = key


class UnorderedKey(EncodeError):
    reason = ReasonCode.UNORDERED_KEY

    def __init__(self, key: str, previous: str) -> None:
        super().__init__(f"unordered key: {key!r} after {previous!r}")
        self.key = key
        self.previous = previous


class DepthExceeded(EncodeError):
    reason = ReasonCode.DEPTH_EXCEEDED

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"nesting deeper than {max_depth} levels")
        self.max_depth = max_depth


class UnsupportedType(EncodeError, TypeError):
    reason = ReasonCode.UNSUPPORTED_TYPE

    def __init__(self, value: object) -> None:
        super().__init__(f"unsupported value type: {type(value).__name__}")
        self.value = value


class InvalidString(EncodeError):
    reason = ReasonCode.INVALID_STRING


class ConfigError(CanonJSONError):
    reason = ReasonCode.CONFIG_ERROR


class KidNotFound(CanonJSONError):
    reason = ReasonCode.KID_NOT_FOUND


class SignatureInvalid(CanonJSONError):
    reason = ReasonCode.SIGNATURE_INVALID


def reason_code_for_exception(exc: BaseException) -> str:
    """Map an exception to its short, machine-friendly reason string."""
    if isinstance(exc, CanonJSONError):
        return exc.reason.value
    return ReasonCode.INTERNAL.value
