"""Envelope Cipher.

seal: payload -> AES-256-GCM under a fresh data key (DEK); DEK -> AES-256-GCM
under the master key. open: validate, unwrap DEK, decrypt, parse. Both are
stateless; the only shared state is the read-only master key handle.
"""
import binascii
import logging
import re
import uuid
from typing import Callable, Dict, Optional

from . import aead
from .canonical import JsonValue, canonical_json_bytes, parse_json_bytes
from .errors import DecryptError, FormatError, UnwrapError, ValidationError
from .master_key import MASTER_KEY_VERSION, MasterKey, get_master_key
from .models import FIXED_LENGTH_FIELDS, SealedRecord, utc_timestamp

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def _hex(data: bytes) -> str:
    return binascii.hexlify(data).decode("ascii")


def _decode_hex_field(record: SealedRecord, attribute: str, expected: Optional[int] = None) -> bytes:
    """Decode one hex field, checking alphabet first and then exact length."""
    name = SealedRecord.wire_name(attribute)
    value = getattr(record, attribute)
    if not isinstance(value, str) or not _HEX_RE.fullmatch(value) or len(value) % 2:
        raise ValidationError(f"{name} must be a valid hex string", field=name)

    raw = binascii.unhexlify(value)
    if expected is not None and len(raw) != expected:
        raise ValidationError(
            f"{name} must be {expected} bytes, got {len(raw)} bytes",
            field=name,
            expected=expected,
            actual=len(raw),
        )
    return raw


class EnvelopeCipher:
    """Seals and opens transaction payloads with envelope encryption."""

    def __init__(self, master_key_provider: Callable[[], MasterKey] = get_master_key):
        self._master_key = master_key_provider

    def seal(self, owner_tag: str, payload: JsonValue) -> SealedRecord:
        master_key = self._master_key()

        try:
            plaintext = canonical_json_bytes(payload)
        except (TypeError, ValueError) as e:
            raise FormatError(f"Payload is not JSON-serializable: {type(e).__name__}") from None

        # Step 1: fresh DEK, used for exactly one payload
        dek = aead.random_key()

        # Step 2: encrypt payload under the DEK
        payload_nonce = aead.random_nonce()
        payload_ct, payload_tag = aead.encrypt(dek, payload_nonce, plaintext)

        # Step 3: wrap the DEK under the master key with an independent nonce
        wrap_nonce = aead.random_nonce()
        dek_wrapped, dek_wrap_tag = aead.encrypt(master_key.key, wrap_nonce, dek)

        del dek, plaintext

        record = SealedRecord(
            id=str(uuid.uuid4()),
            owner_tag=owner_tag,
            created_at=utc_timestamp(),
            payload_nonce=_hex(payload_nonce),
            payload_ciphertext=_hex(payload_ct),
            payload_tag=_hex(payload_tag),
            wrapped_key_nonce=_hex(wrap_nonce),
            wrapped_key_ciphertext=_hex(dek_wrapped),
            wrapped_key_tag=_hex(dek_wrap_tag),
            algorithm=aead.ALGORITHM_AES_256_GCM,
            key_version=master_key.version,
        )
        logger.debug(f"Sealed record {record.id} for party {owner_tag}")
        return record

    def validate(self, record: SealedRecord) -> Dict[str, bytes]:
        """Check every field's encoding and length without any crypto work.

        Returns the decoded byte fields keyed by attribute name.
        """
        fields = {
            attribute: _decode_hex_field(record, attribute, expected)
            for attribute, expected in FIXED_LENGTH_FIELDS.items()
        }
        fields["payload_ciphertext"] = _decode_hex_field(record, "payload_ciphertext")

        if record.algorithm != aead.ALGORITHM_AES_256_GCM:
            raise ValidationError(
                f"Unsupported algorithm: {record.algorithm}",
                field=SealedRecord.wire_name("algorithm"),
            )
        if record.key_version != MASTER_KEY_VERSION:
            raise ValidationError(
                f"Unsupported master key version: {record.key_version}",
                field=SealedRecord.wire_name("key_version"),
            )
        return fields

    def open(self, record: SealedRecord) -> JsonValue:
        # Step 1: structural validation before any cryptographic work
        fields = self.validate(record)

        # Step 2: master key (ConfigError propagates unchanged)
        master_key = self._master_key()

        # Step 3: unwrap DEK
        try:
            dek = aead.decrypt(
                master_key.key,
                fields["wrapped_key_nonce"],
                fields["wrapped_key_ciphertext"],
                fields["wrapped_key_tag"],
            )
        except aead.InvalidTag:
            logger.warning(f"DEK unwrap failed for record {record.id}")
            raise UnwrapError("DEK unwrapping failed: invalid auth tag or tampered data") from None

        # Step 4: decrypt payload
        try:
            plaintext = aead.decrypt(
                dek,
                fields["payload_nonce"],
                fields["payload_ciphertext"],
                fields["payload_tag"],
            )
        except aead.InvalidTag:
            logger.warning(f"Payload decryption failed for record {record.id}")
            raise DecryptError("Payload decryption failed: invalid auth tag or tampered ciphertext") from None
        finally:
            del dek

        # Step 5: parse
        try:
            return parse_json_bytes(plaintext)
        except ValueError:
            # UnicodeDecodeError is a ValueError
            raise FormatError("Failed to parse decrypted payload as JSON") from None


_DEFAULT_CIPHER = EnvelopeCipher()


def get_envelope_cipher() -> EnvelopeCipher:
    return _DEFAULT_CIPHER


def seal(owner_tag: str, payload: JsonValue) -> SealedRecord:
    """Seal ``payload`` under the process master key."""
    return _DEFAULT_CIPHER.seal(owner_tag, payload)


def open_sealed(record: SealedRecord) -> JsonValue:
    """Open ``record`` under the process master key."""
    return _DEFAULT_CIPHER.open(record)
