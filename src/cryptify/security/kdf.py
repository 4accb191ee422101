"""Password-based key derivation for cryptify."""
import os
from typing import Dict, Union

from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

PBKDF2_ITERATIONS = 15000
KEY_LENGTH = 32

ARGON2_TIME_COST = 3
ARGON2_MEMORY_COST = 65536
ARGON2_PARALLELISM = 1

Password = Union[str, bytes, bytearray]


def _as_bytes(password: Password) -> Union[bytes, bytearray]:
    if isinstance(password, str):
        return password.encode("utf-8")
    return password


def generate_salt(length: int = 16) -> bytes:
    """Return a cryptographically secure random salt."""
    return os.urandom(length)


def derive_key(
    password: Password,
    salt: bytes = b"",
    iterations: int = PBKDF2_ITERATIONS,
    key_length: int = KEY_LENGTH,
) -> bytes:
    """
    Derive a symmetric key from a password using PBKDF2-HMAC-SHA256.

    The legacy container derives with an empty salt, so the same password
    always yields the same key. That is what keeps old files decryptable;
    the sealed container uses a per-file salt instead.
    """
    if iterations < 1:
        raise ValueError("iterations must be a positive integer")
    if key_length < 1:
        raise ValueError("key_length must be a positive integer")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=key_length,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(_as_bytes(password))


def derive_sealed_key(
    password: Password,
    salt: bytes,
    time_cost: int = ARGON2_TIME_COST,
    memory_cost: int = ARGON2_MEMORY_COST,
    parallelism: int = ARGON2_PARALLELISM,
    key_length: int = KEY_LENGTH,
) -> bytes:
    """
    Derive the sealed-container key from a password using Argon2id.
    Returns raw derived key bytes.
    """
    return hash_secret_raw(
        secret=bytes(_as_bytes(password)),
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=key_length,
        type=Type.ID,
    )


def kdf_params_to_dict(algo: str, salt: bytes, **params: int) -> Dict:
    return {"algo": algo, "salt": salt.hex(), **params}
