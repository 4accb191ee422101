"""Runtime configuration for cryptify, built from the environment and CLI flags."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import os
from typing import Mapping, Optional

from cryptify.core.exceptions import UsageError
from cryptify.security.kdf import (
    ARGON2_MEMORY_COST,
    ARGON2_PARALLELISM,
    ARGON2_TIME_COST,
    PBKDF2_ITERATIONS,
)
from cryptify.security.sealed import (
    MAX_MEMORY_COST,
    MAX_PARALLELISM,
    MAX_TIME_COST,
    kdf_params_in_range,
)

FORMAT_LEGACY = "legacy"
FORMAT_SEALED = "sealed"
CONTAINER_FORMATS = (FORMAT_LEGACY, FORMAT_SEALED)


@dataclass(frozen=True)
class AppConfig:
    """Settings for one encrypt/decrypt invocation."""

    container_format: str = FORMAT_LEGACY
    iterations: int = PBKDF2_ITERATIONS
    argon2_time_cost: int = ARGON2_TIME_COST
    argon2_memory_cost: int = ARGON2_MEMORY_COST
    argon2_parallelism: int = ARGON2_PARALLELISM
    log_level: int = logging.WARNING


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise UsageError(f'{name} must be an integer, got "{raw}".') from None
    if value < 1:
        raise UsageError(f"{name} must be positive, got {value}.")
    return value


def _env_level(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise UsageError(f'{name} is not a logging level: "{raw}".')
    return level


def build_config(env: Optional[Mapping[str, str]] = None, **overrides) -> AppConfig:
    """
    Build an AppConfig from the environment plus explicit overrides.

    Precedence, lowest first:

    - built-in defaults (PBKDF2 with 15000 iterations, legacy container)
    - ``CRYPTIFY_FORMAT``, ``CRYPTIFY_ITERATIONS``, ``CRYPTIFY_ARGON2_TIME``,
      ``CRYPTIFY_ARGON2_MEMORY``, ``CRYPTIFY_ARGON2_PARALLELISM`` and
      ``CRYPTIFY_LOG_LEVEL``
    - keyword ``overrides`` (command-line flags); ``None`` values are ignored

    Changing the iteration count changes the derived key, so a file must be
    decrypted with the same value it was encrypted with.
    """
    env = os.environ if env is None else env

    config = AppConfig(
        container_format=(env.get("CRYPTIFY_FORMAT") or FORMAT_LEGACY).strip().lower(),
        iterations=_env_int(env, "CRYPTIFY_ITERATIONS", PBKDF2_ITERATIONS),
        argon2_time_cost=_env_int(env, "CRYPTIFY_ARGON2_TIME", ARGON2_TIME_COST),
        argon2_memory_cost=_env_int(env, "CRYPTIFY_ARGON2_MEMORY", ARGON2_MEMORY_COST),
        argon2_parallelism=_env_int(env, "CRYPTIFY_ARGON2_PARALLELISM", ARGON2_PARALLELISM),
        log_level=_env_level(env, "CRYPTIFY_LOG_LEVEL", logging.WARNING),
    )
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    if config.container_format not in CONTAINER_FORMATS:
        raise UsageError(f'Invalid container format "{config.container_format}".')
    if config.iterations < 1:
        raise UsageError(f"Iterations must be positive, got {config.iterations}.")
    if not kdf_params_in_range(
        config.argon2_time_cost, config.argon2_memory_cost, config.argon2_parallelism
    ):
        raise UsageError(
            f"Argon2 settings out of range: time cost 1-{MAX_TIME_COST}, "
            f"memory {8 * config.argon2_parallelism}-{MAX_MEMORY_COST} KiB, "
            f"parallelism 1-{MAX_PARALLELISM}."
        )
    return config
