"""
Unit tests for the legacy AES-256-CBC container (IV || ciphertext).
"""

import os
import pytest
from unittest.mock import patch
from cryptify.core.exceptions import DecryptionFailure, EncryptionFailure, MalformedContainer
from cryptify.security.container import IV_LENGTH, decrypt, encrypt
from cryptify.security.kdf import derive_key


# ==============================================================================
# Fixtures
# ==============================================================================

@pytest.fixture(scope="module")
def key():
    return derive_key(b"correct horse")


@pytest.fixture(scope="module")
def other_key():
    return derive_key(b"battery staple")


# ==============================================================================
# Tests: Round trip & layout
# ==============================================================================

@pytest.mark.parametrize("size", [0, 1, 15, 16, 17, 31, 32, 1000, 65_537])
def test_roundtrip(key, size):
    data = os.urandom(size)
    assert decrypt(key, encrypt(key, data)) == data


def test_hello_world_scenario(key):
    """11 bytes pad to a single block: 16-byte IV + 16-byte ciphertext."""
    container = encrypt(key, b"hello world")
    assert len(container) == 32
    assert decrypt(derive_key(b"correct horse"), container) == b"hello world"


def test_empty_plaintext_is_one_full_padding_block(key):
    container = encrypt(key, b"")
    assert len(container) == 32
    assert decrypt(key, container) == b""


@pytest.mark.parametrize("size", [0, 5, 16, 40])
def test_container_length(key, size):
    # PKCS7 always adds between 1 and 16 bytes
    expected = IV_LENGTH + (size // 16 + 1) * 16
    assert len(encrypt(key, b"x" * size)) == expected


def test_container_starts_with_iv(key):
    fixed_iv = bytes(range(16))
    with patch("cryptify.security.container.os.urandom", return_value=fixed_iv) as mock_rand:
        container = encrypt(key, b"data")
    mock_rand.assert_called_once_with(16)
    assert container[:16] == fixed_iv


def test_fresh_iv_per_encryption(key):
    """Same key and plaintext twice must not give the same container."""
    first = encrypt(key, b"identical plaintext")
    second = encrypt(key, b"identical plaintext")
    assert first[:16] != second[:16]
    assert first[16:] != second[16:]


# ==============================================================================
# Tests: Error paths
# ==============================================================================

@pytest.mark.parametrize("length", range(16))
def test_decrypt_rejects_short_containers(key, length):
    with patch("cryptify.security.container.Cipher") as mock_cipher:
        with pytest.raises(MalformedContainer):
            decrypt(key, b"\x00" * length)
    # rejected before touching the cipher
    mock_cipher.assert_not_called()


def test_decrypt_iv_only_container_fails(key):
    """16 bytes is a well-formed length but carries no padding block."""
    with pytest.raises(DecryptionFailure):
        decrypt(key, os.urandom(16))


def test_decrypt_partial_block_fails(key):
    container = encrypt(key, b"hello world")
    with pytest.raises(DecryptionFailure):
        decrypt(key, container[:-3])


def test_decrypt_with_wrong_key_is_usually_rejected(key, other_key):
    """
    Without an authentication tag a wrong key is only caught by the padding
    check, which random garbage still passes about 1 time in 256.
    """
    rejected = 0
    for _ in range(32):
        container = encrypt(key, b"hello world")
        try:
            result = decrypt(other_key, container)
        except DecryptionFailure:
            rejected += 1
        else:
            assert result != b"hello world"
    assert rejected >= 28


@pytest.mark.parametrize("bad_key", [b"", b"k" * 16, b"k" * 24, b"k" * 33])
def test_encrypt_requires_256_bit_key(bad_key):
    with pytest.raises(EncryptionFailure):
        encrypt(bad_key, b"data")


def test_decrypt_requires_256_bit_key():
    with pytest.raises(DecryptionFailure):
        decrypt(b"k" * 16, os.urandom(32))


def test_encrypt_wraps_primitive_errors(key):
    with patch("cryptify.security.container.Cipher", side_effect=ValueError("nope")):
        with pytest.raises(EncryptionFailure, match="nope"):
            encrypt(key, b"data")


def test_encrypt_accepts_bytearray_key(key):
    data = b"from a wipeable buffer"
    assert decrypt(key, encrypt(bytearray(key), data)) == data
