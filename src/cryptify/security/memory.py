"""Best-effort scrubbing of passwords and keys held in memory.

Only mutable buffers can be overwritten. Immutable ``bytes`` handed back by
a library stay alive until garbage collected, so callers copy them into a
``bytearray`` via :func:`sensitive` and drop the original reference
immediately.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Union

BytesLike = Union[bytes, bytearray, memoryview]


def wipe(buf: bytearray) -> None:
    """Overwrite ``buf`` in place with zero bytes."""
    buf[:] = bytes(len(buf))


@contextmanager
def sensitive(data: BytesLike) -> Iterator[bytearray]:
    """Yield a mutable copy of ``data`` and zero it on every exit path."""
    buf = bytearray(data)
    try:
        yield buf
    finally:
        wipe(buf)
