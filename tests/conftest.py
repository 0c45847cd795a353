import pytest

from txvault.settings import settings
from txvault.domain.envelope.master_key import get_master_key_handle, load_master_key

TEST_MASTER_KEY_HEX = "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
OTHER_MASTER_KEY_HEX = "fedcba9876543210fedcba9876543210fedcba9876543210fedcba9876543210"


@pytest.fixture(autouse=True)
def master_key_hex(monkeypatch):
    """Provision the process master key for every test and reset the cache."""
    monkeypatch.setattr(settings, "MASTER_KEY_HEX", TEST_MASTER_KEY_HEX)
    handle = get_master_key_handle()
    handle.reset()
    yield TEST_MASTER_KEY_HEX
    handle.reset()


@pytest.fixture
def other_master_key():
    return load_master_key(OTHER_MASTER_KEY_HEX)


@pytest.fixture
def flip_byte():
    """Return a helper that flips one bit of the byte at ``index`` in a hex string."""
    def _flip(hex_str: str, index: int = 0) -> str:
        raw = bytearray.fromhex(hex_str)
        raw[index] ^= 0x01
        return raw.hex()
    return _flip
