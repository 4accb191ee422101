"""
File-level encrypt/decrypt: derive the key, read the input, run the
container cipher and write the output, in that order. The sealed format
stores its salt in the file, so there the input is read before deriving.

These functions are what the CLI calls once it holds a password. They know
nothing about prompts or argument parsing, so tests drive them directly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from cryptify.core.exceptions import DecryptionFailure, EncryptionFailure
from cryptify.core.fileio import read_file, write_file
from cryptify.core.config import FORMAT_SEALED, AppConfig
from cryptify.security import container, sealed
from cryptify.security.kdf import derive_key, kdf_params_to_dict
from cryptify.security.memory import sensitive

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _legacy_key(password: bytes, config: AppConfig):
    logger.debug(
        "deriving key: %s",
        kdf_params_to_dict("pbkdf2-hmac-sha256", b"", iterations=config.iterations),
    )
    return sensitive(derive_key(password, iterations=config.iterations))


def encrypt_file(
    in_path: PathLike, out_path: PathLike, password: bytes, config: AppConfig
) -> int:
    """Encrypt ``in_path`` into ``out_path``; returns the container size."""
    try:
        if config.container_format == FORMAT_SEALED:
            blob = sealed.seal(
                password,
                read_file(in_path),
                time_cost=config.argon2_time_cost,
                memory_cost=config.argon2_memory_cost,
                parallelism=config.argon2_parallelism,
            )
        else:
            with _legacy_key(password, config) as key:
                blob = container.encrypt(key, read_file(in_path))
    except EncryptionFailure as exc:
        raise EncryptionFailure(f'Could not encrypt "{in_path}".') from exc

    write_file(out_path, blob)
    logger.info(
        "encrypted %s -> %s (%s, %d bytes)", in_path, out_path, config.container_format, len(blob)
    )
    return len(blob)


def decrypt_file(
    in_path: PathLike, out_path: PathLike, password: bytes, config: AppConfig
) -> int:
    """Decrypt ``in_path`` into ``out_path``; returns the plaintext size.

    MalformedContainer propagates unchanged; cipher rejections are
    reported as DecryptionFailure naming the input file. Nothing is
    written unless decryption succeeded.
    """
    try:
        if config.container_format == FORMAT_SEALED:
            # salt and KDF parameters come from the file itself
            plain = sealed.unseal(password, read_file(in_path))
        else:
            with _legacy_key(password, config) as key:
                plain = container.decrypt(key, read_file(in_path))
    except DecryptionFailure as exc:
        raise DecryptionFailure(f'Could not decrypt "{in_path}".') from exc

    write_file(out_path, plain)
    logger.info(
        "decrypted %s -> %s (%s, %d bytes)", in_path, out_path, config.container_format, len(plain)
    )
    return len(plain)
