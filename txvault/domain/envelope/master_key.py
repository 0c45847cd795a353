"""Master Key Loader.

The master key (KEK) wraps every per-record data key. It is supplied once per
process as a 64-character hex string and never changes afterwards, so it is
decoded on first use and cached behind a lock.
"""
import binascii
import logging
import os
import re
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

MASTER_KEY_ENV = "MASTER_KEY_HEX"
MASTER_KEY_BYTES = 32
MASTER_KEY_VERSION = 1

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


@dataclass(frozen=True)
class MasterKey:
    """Immutable 32-byte master key. Key bytes never appear in repr."""
    key: bytes = field(repr=False)
    version: int = MASTER_KEY_VERSION

    def __post_init__(self):
        if len(self.key) != MASTER_KEY_BYTES:
            raise ConfigError(
                f"{MASTER_KEY_ENV} must decode to exactly {MASTER_KEY_BYTES} bytes, "
                f"got {len(self.key)} bytes"
            )


def load_master_key(value: Optional[str]) -> MasterKey:
    """Parse and validate hex key material.

    Checks run in order: presence, hex alphabet, decoded length.
    """
    if not value:
        raise ConfigError(f"{MASTER_KEY_ENV} environment variable is missing")

    if not _HEX_RE.fullmatch(value) or len(value) % 2:
        raise ConfigError(f"{MASTER_KEY_ENV} must be a valid hex string")

    raw = binascii.unhexlify(value)
    if len(raw) != MASTER_KEY_BYTES:
        raise ConfigError(
            f"{MASTER_KEY_ENV} must decode to exactly {MASTER_KEY_BYTES} bytes, "
            f"got {len(raw)} bytes"
        )
    return MasterKey(raw)


def generate_master_key_hex() -> str:
    """Return a fresh random master key as lowercase hex."""
    return binascii.hexlify(os.urandom(MASTER_KEY_BYTES)).decode("ascii")


def _key_from_settings() -> Optional[str]:
    from txvault.settings import settings
    return settings.MASTER_KEY_HEX


class MasterKeyHandle:
    """Read-only, load-once access to the process master key.

    The only transition is unset -> set. A failed load is not cached, so a
    missing key keeps raising ConfigError on every call.
    """

    def __init__(self, source: Callable[[], Optional[str]] = _key_from_settings):
        self._source = source
        self._key: Optional[MasterKey] = None
        self._lock = threading.Lock()

    def get(self) -> MasterKey:
        key = self._key
        if key is not None:
            return key
        with self._lock:
            if self._key is None:
                self._key = load_master_key(self._source())
                logger.info(f"Master key loaded (version {self._key.version})")
            return self._key

    @property
    def loaded(self) -> bool:
        return self._key is not None

    def reset(self) -> None:
        with self._lock:
            self._key = None


_DEFAULT_HANDLE = MasterKeyHandle()


def get_master_key_handle() -> MasterKeyHandle:
    return _DEFAULT_HANDLE


def get_master_key() -> MasterKey:
    """Return the process master key, loading it on first use."""
    return _DEFAULT_HANDLE.get()
