"""AES-256-CBC container: the default cryptify on-disk format.

Layout (no magic, no version, no length field):
- 16 bytes: random IV
- rest: AES-256-CBC ciphertext of the PKCS7-padded plaintext

The container carries no authentication tag. Decrypting with the wrong key
is detected only through the padding check, which a random key passes with
roughly 1/256 probability; in that case garbage comes back silently. Use
the sealed container (:mod:`cryptify.security.sealed`) when tampering must
be detected.
"""
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..core.exceptions import DecryptionFailure, EncryptionFailure, MalformedContainer

IV_LENGTH = 16
KEY_LENGTH = 32
BLOCK_SIZE_BITS = 128


def generate_iv() -> bytes:
    return os.urandom(IV_LENGTH)


def _check_key(key: bytes, error: type) -> None:
    # AES would also accept 128 and 192-bit keys; the format is AES-256 only.
    if len(key) != KEY_LENGTH:
        raise error(f"expected a {KEY_LENGTH}-byte key, got {len(key)} bytes")


def encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt ``plaintext`` under ``key`` and return ``iv || ciphertext``."""
    _check_key(key, EncryptionFailure)
    iv = generate_iv()
    try:
        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except (ValueError, TypeError) as exc:
        raise EncryptionFailure(f"AES-256-CBC encryption failed: {exc}") from exc
    return iv + ciphertext


def decrypt(key: bytes, container: bytes) -> bytes:
    """Decrypt a container produced by :func:`encrypt`.

    Raises MalformedContainer when the input cannot even hold an IV, and
    DecryptionFailure when the cipher or the padding check rejects it.
    """
    if len(container) < IV_LENGTH:
        raise MalformedContainer(
            f"Bad file: {len(container)} bytes is shorter than the {IV_LENGTH}-byte IV."
        )

    _check_key(key, DecryptionFailure)
    iv, ciphertext = container[:IV_LENGTH], container[IV_LENGTH:]
    try:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except (ValueError, TypeError) as exc:
        # bad padding, or ciphertext not a whole number of blocks
        raise DecryptionFailure(f"AES-256-CBC decryption failed: {exc}") from exc
