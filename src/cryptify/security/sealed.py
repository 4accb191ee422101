"""Authenticated, salted container with a compact binary header.

Header layout (binary, all big-endian):
- 4 bytes: magic b'CFY1'
- 1 byte: version (1)
- 1 byte: kdf_id (1 = Argon2id)
- 4 bytes: time_cost
- 4 bytes: memory_cost (KiB)
- 1 byte: parallelism
- 1 byte: len_salt (S)
- S bytes: salt
- 12 bytes: AES-GCM nonce

Body: AES-256-GCM ciphertext followed by its 16-byte tag. The whole header
is bound in as associated data, so flipping any header byte (including the
KDF parameters) fails the tag check just like flipping a ciphertext byte.

Unlike the legacy container this format detects a wrong password or any
tampering, and a fresh salt per file means equal passwords no longer give
equal keys across files.
"""
import logging
import os
import struct
from typing import NamedTuple, Optional, Tuple

from argon2.exceptions import HashingError
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.exceptions import DecryptionFailure, EncryptionFailure, MalformedContainer
from .kdf import (
    ARGON2_MEMORY_COST,
    ARGON2_PARALLELISM,
    ARGON2_TIME_COST,
    Password,
    derive_sealed_key,
    generate_salt,
)
from .memory import sensitive

logger = logging.getLogger(__name__)

MAGIC = b"CFY1"
VERSION = 1
KDF_ID_ARGON2ID = 1
SALT_LENGTH = 16
NONCE_LENGTH = 12
TAG_LENGTH = 16
# Argon2 parameter bounds, enforced both when writing and when reading a header
MAX_TIME_COST = 64
MAX_MEMORY_COST = 4 * 1024 * 1024  # KiB
MAX_PARALLELISM = 255

_FIXED = struct.Struct(">4sBBIIBB")


class SealedHeader(NamedTuple):
    time_cost: int
    memory_cost: int
    parallelism: int
    salt: bytes
    nonce: bytes

    def pack(self) -> bytes:
        header = bytearray()
        header += _FIXED.pack(
            MAGIC,
            VERSION,
            KDF_ID_ARGON2ID,
            self.time_cost,
            self.memory_cost,
            self.parallelism,
            len(self.salt),
        )
        header += self.salt
        header += self.nonce
        return bytes(header)


def kdf_params_in_range(time_cost: int, memory_cost: int, parallelism: int) -> bool:
    return (
        1 <= time_cost <= MAX_TIME_COST
        and 1 <= parallelism <= MAX_PARALLELISM
        and 8 * parallelism <= memory_cost <= MAX_MEMORY_COST
    )


def parse_header(container: bytes) -> Tuple[SealedHeader, int]:
    """Parse the header and return it with the offset where the body starts."""
    if len(container) < _FIXED.size:
        raise MalformedContainer("Bad file: truncated sealed header.")
    magic, ver, kdf_id, time_cost, memory_cost, parallelism, salt_len = _FIXED.unpack_from(
        container
    )
    if magic != MAGIC:
        raise MalformedContainer("Bad file: not a sealed cryptify container (magic mismatch).")
    if ver != VERSION:
        raise MalformedContainer(f"Bad file: unsupported sealed container version {ver}.")
    if kdf_id != KDF_ID_ARGON2ID:
        raise MalformedContainer(f"Bad file: unsupported key derivation id {kdf_id}.")
    if not kdf_params_in_range(time_cost, memory_cost, parallelism):
        raise MalformedContainer("Bad file: key derivation parameters out of range.")

    offset = _FIXED.size
    salt = container[offset:offset + salt_len]
    offset += salt_len
    nonce = container[offset:offset + NONCE_LENGTH]
    offset += NONCE_LENGTH
    if len(salt) != salt_len or len(nonce) != NONCE_LENGTH:
        raise MalformedContainer("Bad file: truncated sealed header.")
    if len(container) - offset < TAG_LENGTH:
        raise MalformedContainer("Bad file: sealed body is shorter than the tag.")

    header = SealedHeader(time_cost, memory_cost, parallelism, bytes(salt), bytes(nonce))
    return header, offset


def seal(
    password: Password,
    plaintext: bytes,
    *,
    time_cost: int = ARGON2_TIME_COST,
    memory_cost: int = ARGON2_MEMORY_COST,
    parallelism: int = ARGON2_PARALLELISM,
    salt: Optional[bytes] = None,
) -> bytes:
    """Encrypt ``plaintext`` under a key derived from ``password``.

    Parameters that :func:`unseal` would refuse raise EncryptionFailure
    before anything is derived.
    """
    if not kdf_params_in_range(time_cost, memory_cost, parallelism):
        raise EncryptionFailure(
            f"Argon2 parameters out of range: t={time_cost} m={memory_cost} p={parallelism} "
            f"(limits t<={MAX_TIME_COST}, 8*p<=m<={MAX_MEMORY_COST}, p<={MAX_PARALLELISM})"
        )
    header = SealedHeader(
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        salt=salt if salt is not None else generate_salt(SALT_LENGTH),
        nonce=os.urandom(NONCE_LENGTH),
    )
    try:
        aad = header.pack()
        with sensitive(
            derive_sealed_key(password, header.salt, time_cost, memory_cost, parallelism)
        ) as key:
            ct = AESGCM(key).encrypt(header.nonce, plaintext, aad)
    except (ValueError, TypeError, struct.error, HashingError) as exc:
        raise EncryptionFailure(f"AES-256-GCM encryption failed: {exc}") from exc
    return aad + ct


def unseal(password: Password, container: bytes) -> bytes:
    """
    Decrypt a container produced by :func:`seal`.

    A wrong password and a tampered file are indistinguishable here: both
    fail the tag check and raise DecryptionFailure.
    """
    header, offset = parse_header(container)
    logger.debug(
        "sealed header: argon2id t=%d m=%d p=%d",
        header.time_cost,
        header.memory_cost,
        header.parallelism,
    )
    aad = bytes(container[:offset])
    try:
        with sensitive(
            derive_sealed_key(
                password, header.salt, header.time_cost, header.memory_cost, header.parallelism
            )
        ) as key:
            return AESGCM(key).decrypt(header.nonce, bytes(container[offset:]), aad)
    except InvalidTag as exc:
        raise DecryptionFailure("authentication failed (wrong password or tampered file)") from exc
    except (ValueError, HashingError) as exc:
        raise DecryptionFailure(f"AES-256-GCM decryption failed: {exc}") from exc
