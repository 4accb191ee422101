"""Unit tests for the Key Derivation Function (KDF) module."""

import hashlib

import pytest
from cryptify.security.kdf import (
    KEY_LENGTH,
    PBKDF2_ITERATIONS,
    derive_key,
    derive_sealed_key,
    generate_salt,
    kdf_params_to_dict,
)


def test_generate_salt_defaults():
    """Ensure salt generation returns bytes of the default length (16)."""
    salt = generate_salt()
    assert isinstance(salt, bytes)
    assert len(salt) == 16


def test_generate_salt_custom_length():
    salt = generate_salt(length=32)
    assert len(salt) == 32


def test_reference_parameters():
    assert PBKDF2_ITERATIONS == 15000
    assert KEY_LENGTH == 32


def test_derive_key_default_length():
    key = derive_key(b"correct horse")
    assert isinstance(key, bytes)
    assert len(key) == 32


def test_derive_key_is_deterministic():
    """Same password, salt, iterations and length always give the same key."""
    first = derive_key(b"correct horse", b"", 15000, 32)
    second = derive_key(b"correct horse", b"", 15000, 32)
    assert first == second


def test_derive_key_matches_hashlib_with_empty_salt():
    """The unsalted legacy derivation is plain PBKDF2-HMAC-SHA256."""
    expected = hashlib.pbkdf2_hmac("sha256", b"correct horse", b"", 15000, 32)
    assert derive_key(b"correct horse") == expected


def test_derive_key_rfc7914_vector():
    """PBKDF2-HMAC-SHA256 test vector from RFC 7914, section 11."""
    expected = bytes.fromhex(
        "55ac046e56e3089fec1691c22544b605f94185216dde0465e68b9d57c20dacbc"
        "49ca9cccf179b645991664b39d77ef317c71b845b1e30bd509112041d3a19783"
    )
    assert derive_key(b"passwd", b"salt", iterations=1, key_length=64) == expected


def test_derive_key_accepts_str_and_bytearray():
    key_from_bytes = derive_key(b"password123")
    assert derive_key("password123") == key_from_bytes
    assert derive_key(bytearray(b"password123")) == key_from_bytes


def test_derive_key_differs_per_password_and_salt():
    base = derive_key(b"password")
    assert derive_key(b"Password") != base
    assert derive_key(b"password", salt=b"pepper") != base
    assert derive_key(b"password", iterations=15001) != base


def test_derive_key_truncates_to_requested_length():
    long_key = derive_key(b"pw", key_length=48)
    assert len(long_key) == 48
    # PBKDF2 output blocks are concatenated, so a shorter key is a prefix.
    assert derive_key(b"pw", key_length=16) == long_key[:16]


@pytest.mark.parametrize("iterations, key_length", [(0, 32), (-5, 32), (1, 0)])
def test_derive_key_rejects_non_positive_parameters(iterations, key_length):
    with pytest.raises(ValueError):
        derive_key(b"pw", iterations=iterations, key_length=key_length)


def test_derive_sealed_key_custom_params():
    """Use very low Argon2 costs for speed in unit tests."""
    salt = generate_salt()
    key = derive_sealed_key(b"pass", salt, time_cost=1, memory_cost=8, parallelism=1)
    assert len(key) == 32
    assert key == derive_sealed_key("pass", salt, time_cost=1, memory_cost=8, parallelism=1)
    assert key != derive_sealed_key(b"pass", generate_salt(), time_cost=1, memory_cost=8)


def test_kdf_params_to_dict():
    result = kdf_params_to_dict("argon2id", b"\xaa" * 4, time=2, memory=1024, parallelism=4)
    assert result == {
        "algo": "argon2id",
        "salt": "aaaaaaaa",
        "time": 2,
        "memory": 1024,
        "parallelism": 4,
    }
