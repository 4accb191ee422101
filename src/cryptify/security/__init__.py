"""Security helpers: key derivation and container ciphers for cryptify.

This package provides:
- PBKDF2-HMAC-SHA256 key derivation (legacy, unsalted) and Argon2id (sealed)
- the legacy AES-256-CBC container: IV || ciphertext
- the sealed AES-256-GCM container with a salted, authenticated header
- best-effort wiping of in-memory secrets
"""

from .kdf import generate_salt, derive_key, derive_sealed_key
from .container import encrypt, decrypt
from .sealed import seal, unseal
from .memory import sensitive, wipe

__all__ = [
    "generate_salt",
    "derive_key",
    "derive_sealed_key",
    "encrypt",
    "decrypt",
    "seal",
    "unseal",
    "sensitive",
    "wipe",
]
