import pytest
from cryptography.exceptions import InvalidTag

from txvault.domain.envelope import aead


def test_encrypt_splits_ciphertext_and_tag():
    key = aead.random_key()
    nonce = aead.random_nonce()
    ct, tag = aead.encrypt(key, nonce, b"hello world")
    assert len(ct) == len(b"hello world")
    assert len(tag) == aead.TAG_SIZE
    assert aead.decrypt(key, nonce, ct, tag) == b"hello world"


def test_key_wrap_is_fixed_length():
    master = aead.random_key()
    dek = aead.random_key()
    wrapped, tag = aead.encrypt(master, aead.random_nonce(), dek)
    assert len(wrapped) == 32
    assert len(tag) == 16


def test_wrong_key_raises_invalid_tag():
    nonce = aead.random_nonce()
    ct, tag = aead.encrypt(aead.random_key(), nonce, b"data")
    with pytest.raises(InvalidTag):
        aead.decrypt(aead.random_key(), nonce, ct, tag)


def test_random_sizes():
    assert len(aead.random_key()) == 32
    assert len(aead.random_nonce()) == 12
    assert aead.random_nonce() != aead.random_nonce()
