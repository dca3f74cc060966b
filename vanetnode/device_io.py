"""Owned file descriptor with raw read, write and vectored write."""

from __future__ import annotations

import os
from collections.abc import Iterable
from types import TracebackType


class DeviceIo:
    """Takes ownership of a file descriptor and closes it when done."""

    def __init__(self, fd: int) -> None:
        self._fd = fd

    @property
    def closed(self) -> bool:
        return self._fd < 0

    def _check_open(self) -> int:
        if self._fd < 0:
            raise ValueError("I/O operation on closed device")
        return self._fd

    def fileno(self) -> int:
        """The underlying file descriptor."""
        return self._check_open()

    def recv(self, size: int) -> bytes:
        """Read up to ``size`` bytes; ``b""`` means end of stream."""
        return os.read(self._check_open(), size)

    def send(self, data: bytes) -> int:
        """Write ``data`` once and return the number of bytes written."""
        return os.write(self._check_open(), data)

    def sendv(self, buffers: Iterable[bytes]) -> int:
        """Write several buffers in one call and return the bytes written."""
        return os.writev(self._check_open(), list(buffers))

    def flush(self) -> None:
        """Sync the descriptor to storage; raises OSError where unsupported."""
        os.fsync(self._check_open())

    def close(self) -> None:
        """Close the descriptor; closing twice is harmless."""
        if self._fd >= 0:
            fd, self._fd = self._fd, -1
            os.close(fd)

    def __enter__(self) -> DeviceIo:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except OSError:
            pass