"""Logging Hardening and Redaction.

This module provides filters to prevent sealed record material (nonces, tags,
ciphertexts, wrapped keys) and master key hex from appearing in application
logs.
"""
import logging
import re
from typing import Optional

_ENVELOPE_FIELDS = (
    "payload_nonce",
    "payload_ct",
    "payload_ciphertext",
    "payload_tag",
    "dek_wrap_nonce",
    "dek_wrapped",
    "dek_wrap_tag",
    "wrapped_key_nonce",
    "wrapped_key_ciphertext",
    "wrapped_key_tag",
    "MASTER_KEY_HEX",
)
_FIELD_ALT = "|".join(_ENVELOPE_FIELDS)

SECRET_PATTERNS = [
    # JSON style: "payload_ct": "abcd..."
    (re.compile(r'("(?:' + _FIELD_ALT + r')":\s*")[0-9a-fA-F]+(")'), r'\1[REDACTED]\2'),
    # Python repr style: 'payload_ct': 'abcd...'
    (re.compile(r"('(?:" + _FIELD_ALT + r")':\s*')[0-9a-fA-F]+(')"), r'\1[REDACTED]\2'),
    # Keyword assignments: payload_ct=abcd...
    (re.compile(r"\b(" + _FIELD_ALT + r")=['\"]?[0-9a-fA-F]+['\"]?"), r'\1=[REDACTED]'),
    # Any bare 256-bit hex run (master key or wrapped DEK)
    (re.compile(r'\b[0-9a-fA-F]{64}\b'), '[REDACTED]'),
]


def redact(text: str) -> str:
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class SecretRedactionFilter(logging.Filter):
    """Filter that redacts secret-like patterns from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)

        # Also redact arguments if they are strings
        if isinstance(record.args, tuple) and record.args:
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True


def setup_logging_redaction() -> None:
    """Apply the SecretRedactionFilter to the root logger and its handlers."""
    redact_filter = SecretRedactionFilter()

    root_logger = logging.getLogger()

    # Remove existing filters if any (to avoid duplicates)
    for f in root_logger.filters[:]:
        if isinstance(f, SecretRedactionFilter):
            root_logger.removeFilter(f)
    root_logger.addFilter(redact_filter)

    # Records from child loggers skip root's filters but pass its handlers
    for handler in root_logger.handlers:
        for f in handler.filters[:]:
            if isinstance(f, SecretRedactionFilter):
                handler.removeFilter(f)
        handler.addFilter(redact_filter)

    logging.info("Logging redaction filters active.")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging and install redaction."""
    if level is None:
        from txvault.settings import settings
        level = settings.LOG_LEVEL
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging_redaction()
