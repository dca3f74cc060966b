"""Asynchronous raw link-layer device with traffic counters."""

from __future__ import annotations

import asyncio
import dataclasses
import errno
import fcntl
import os
import socket
import struct
from collections.abc import Callable, Iterable
from types import TracebackType
from typing import TypeVar

from vanetnode.device_io import DeviceIo
from vanetnode.network_interface import MacAddress, NetworkInterface
from vanetnode.stats import Stats

ETH_P_ALL = 0x0003
_SIOCGIFHWADDR = 0x8927
_IFNAMSIZ = 16

_T = TypeVar("_T")


class WriteZeroError(OSError):
    """A write call accepted no bytes while data remained to be sent."""


def _interface_mac(sock: socket.socket, interface: str) -> MacAddress:
    """Query the hardware address of ``interface``."""
    request = struct.pack("256s", interface.encode()[: _IFNAMSIZ - 1])
    reply = fcntl.ioctl(sock.fileno(), _SIOCGIFHWADDR, request)
    return MacAddress(reply[18:24])


class Device(NetworkInterface):
    """A non-blocking descriptor driven by the running event loop."""

    def __init__(self, mac_address: MacAddress, io: DeviceIo) -> None:
        os.set_blocking(io.fileno(), False)
        self._mac_address = mac_address
        self._io = io
        self._stats = Stats()

    @classmethod
    def open(cls, interface: str) -> Device:
        """Open a raw packet socket bound to the named interface."""
        family = getattr(socket, "AF_PACKET", None)
        if family is None:
            raise OSError(errno.EAFNOSUPPORT, "raw packet sockets are not supported here")
        sock = socket.socket(family, socket.SOCK_RAW, socket.htons(ETH_P_ALL))
        try:
            sock.setblocking(False)
            mac = _interface_mac(sock, interface)
            socket.if_nametoindex(interface)
            try:
                sock.bind((interface, 0))
            except OSError:
                pass
        except BaseException:
            sock.close()
            raise
        return cls(mac, DeviceIo(sock.detach()))

    def mac_address(self) -> MacAddress:
        """The hardware address of this device."""
        return self._mac_address

    async def _ready(self, for_write: bool) -> None:
        loop = asyncio.get_running_loop()
        fd = self._io.fileno()
        waiter = loop.create_future()

        def wake() -> None:
            if not waiter.done():
                waiter.set_result(None)

        if for_write:
            loop.add_writer(fd, wake)
        else:
            loop.add_reader(fd, wake)
        try:
            await waiter
        finally:
            if for_write:
                loop.remove_writer(fd)
            else:
                loop.remove_reader(fd)

    async def _perform(self, operation: Callable[[], _T], for_write: bool) -> _T:
        while True:
            try:
                return operation()
            except BlockingIOError:
                await self._ready(for_write)

    async def recv(self, size: int) -> bytes:
        """Receive up to ``size`` bytes, waiting until some are available."""
        data = await self._perform(lambda: self._io.recv(size), for_write=False)
        self._stats.record_received(len(data))
        return data

    async def send(self, data: bytes) -> int:
        """Send ``data`` once and return the number of bytes written."""
        written = await self._perform(lambda: self._io.send(data), for_write=True)
        self._stats.record_transmitted(written)
        return written

    async def send_all(self, data: bytes) -> None:
        """Send the whole of ``data``, retrying partial writes."""
        remaining = memoryview(data)
        while remaining:
            written = await self.send(remaining)
            if written == 0:
                raise WriteZeroError(errno.EIO, "failed to write whole buffer")
            remaining = remaining[written:]
        self._stats.record_transmitted(len(data))

    async def send_vectored(self, buffers: Iterable[bytes]) -> int:
        """Send several buffers in one write and return the bytes written."""
        parts = list(buffers)
        written = await self._perform(lambda: self._io.sendv(parts), for_write=True)
        self._stats.record_transmitted(written)
        return written

    async def flush(self) -> None:
        """Wait until writable and sync the descriptor; raises OSError if unsupported."""
        await self._perform(self._io.flush, for_write=True)

    def stats(self) -> Stats:
        """A snapshot of the traffic counters."""
        return dataclasses.replace(self._stats)

    def close(self) -> None:
        """Close the underlying descriptor."""
        self._io.close()

    def __enter__(self) -> Device:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> Device:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()