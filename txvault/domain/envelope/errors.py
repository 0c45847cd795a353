"""Envelope Error Taxonomy.

Every failure of the envelope engine is one of five kinds. Callers match on the
exception class or on ``kind``; messages are for humans and never carry key,
plaintext or tag bytes.
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    CONFIG = "config"
    VALIDATION = "validation"
    UNWRAP = "unwrap"
    DECRYPT = "decrypt"
    FORMAT = "format"


# Boundary mapping: client-correctable kinds are 4xx, key-layer and
# data-layer authentication failures are 5xx.
HTTP_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.CONFIG: 500,
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNWRAP: 500,
    ErrorKind.DECRYPT: 500,
    ErrorKind.FORMAT: 400,
}


class EnvelopeError(Exception):
    """Base class for all envelope engine failures."""

    kind: ErrorKind
    code: str

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def details(self) -> Optional[Dict[str, Any]]:
        return None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ConfigError(EnvelopeError):
    """Master key missing, malformed, or of the wrong length."""
    kind = ErrorKind.CONFIG
    code = "CONFIG_ERROR"


class ValidationError(EnvelopeError):
    """A record field failed its hex-format or exact-length check."""
    kind = ErrorKind.VALIDATION
    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: str,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.actual = actual

    def details(self) -> Optional[Dict[str, Any]]:
        details: Dict[str, Any] = {"field": self.field}
        if self.expected is not None:
            details["expected_bytes"] = self.expected
        if self.actual is not None:
            details["actual_bytes"] = self.actual
        return details


class UnwrapError(EnvelopeError):
    """Authentication failed while recovering the per-record key."""
    kind = ErrorKind.UNWRAP
    code = "UNWRAP_FAILED"


class DecryptError(EnvelopeError):
    """Authentication failed while recovering the payload."""
    kind = ErrorKind.DECRYPT
    code = "DECRYPT_FAILED"


class FormatError(EnvelopeError):
    """Payload bytes could not be (de)serialized as JSON."""
    kind = ErrorKind.FORMAT
    code = "FORMAT_ERROR"
