""" Whole-file binary I/O used on both sides of the cipher. """

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from .exceptions import FileReadError, FileWriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_file(path: PathLike) -> bytes:
    # Reads the whole file in binary mode, no text decoding.
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise FileReadError(f'Could not read "{path}".') from exc
    logger.debug("read %d bytes from %s", len(data), path)
    return data


def write_file(path: PathLike, data: bytes) -> None:
    """Write ``data`` to ``path`` atomically.

    The bytes go to a temporary file in the destination directory which is
    renamed over ``path`` only once fully written and synced, so a failure
    leaves any existing destination untouched and no partial output behind.
    """
    destination = Path(path)

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp", delete=False
        ) as tmpf:
            tmp_path = Path(tmpf.name)
            tmpf.write(data)
            tmpf.flush()
            os.fsync(tmpf.fileno())
        os.replace(tmp_path, destination)
    except OSError as exc:
        if tmp_path is not None:
            try:
                tmp_path.unlink()
            except OSError:
                pass
        raise FileWriteError(f'Could not write "{path}".') from exc
    logger.debug("wrote %d bytes to %s", len(data), destination)
