"""Command line entry point for cryptify.

    cryptify e INPUT_PATH OUTPUT_PATH    encrypt (password asked twice)
    cryptify d INPUT_PATH OUTPUT_PATH    decrypt
    cryptify --version

Failures print ``Error: <message>`` on standard output and exit non-zero.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, NoReturn, Optional

from cryptify import __version__
from cryptify.core.config import CONTAINER_FORMATS, build_config
from cryptify.core.exceptions import CryptifyError, UsageError
from cryptify.core.operations import decrypt_file, encrypt_file
from cryptify.frontend.cli.logging_config import configure_logging
from cryptify.frontend.cli.prompt import PasswordReader, collect_password, read_password
from cryptify.security.memory import wipe

logger = logging.getLogger(__name__)

PROG = "cryptify"
USAGE = f"Usage: {PROG} e|d INPUT_PATH OUTPUT_PATH"
MODES = ("e", "d")
EXIT_INTERRUPTED = 130


class _ArgumentParser(argparse.ArgumentParser):
    # argparse would print to stderr and exit(2); route through UsageError instead.
    def error(self, message: str) -> NoReturn:
        raise UsageError(USAGE)


def _build_option_parser() -> argparse.ArgumentParser:
    # Only the options after INPUT_PATH OUTPUT_PATH go through argparse, so
    # a mode like "-h" or a path like "-in.enc" is never read as a flag.
    parser = _ArgumentParser(prog=PROG, usage=USAGE, add_help=False)
    parser.add_argument(
        "--format",
        dest="container_format",
        choices=CONTAINER_FORMATS,
        default=None,
    )
    parser.add_argument("--iterations", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run(argv: Optional[List[str]] = None, reader: PasswordReader = read_password) -> None:
    """Parse ``argv``, collect the password and run one file operation.

    ``argv`` is ``MODE INPUT_PATH OUTPUT_PATH [--format F] [--iterations N]
    [-v]``, or ``--version`` alone. Raises CryptifyError subclasses;
    :func:`main` turns them into output.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv == ["--version"]:
        print(f"{PROG} {__version__}")
        return
    if len(argv) < 3:
        raise UsageError(USAGE)

    mode, input_path, output_path = argv[:3]
    if mode not in MODES:
        raise UsageError(f'Invalid mode "{mode}".')
    options = _build_option_parser().parse_args(argv[3:])

    config = build_config(
        container_format=options.container_format,
        iterations=options.iterations,
        log_level=logging.DEBUG if options.verbose else None,
    )
    configure_logging(config.log_level)

    password = collect_password(mode, reader=reader)
    try:
        if mode == "e":
            encrypt_file(input_path, output_path, password, config)
        else:
            decrypt_file(input_path, output_path, password, config)
    finally:
        wipe(password)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        run(argv)
    except CryptifyError as exc:
        logger.debug("%s failed", PROG, exc_info=True)
        print(f"Error: {exc}")
        return exc.exit_code
    except KeyboardInterrupt:
        print()
        print("Interrupted.")
        return EXIT_INTERRUPTED
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
