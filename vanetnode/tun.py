"""Virtual tunnel endpoints: an in-memory pair and a counting wrapper."""

from __future__ import annotations

import asyncio
import dataclasses
from collections import deque
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from vanetnode.stats import Stats

_CHANNEL_CAPACITY = 8


class _Channel:
    """Bounded one-way packet queue that knows when either end has gone away."""

    def __init__(self, capacity: int = _CHANNEL_CAPACITY) -> None:
        self._items: deque[bytes] = deque()
        self._capacity = capacity
        self._cond = asyncio.Condition()
        self._sender_closed = False
        self._receiver_closed = False

    async def put(self, packet: bytes) -> None:
        async with self._cond:
            while len(self._items) >= self._capacity and not self._receiver_closed:
                await self._cond.wait()
            if self._receiver_closed or self._sender_closed:
                raise BrokenPipeError("send failed")
            self._items.append(packet)
            self._cond.notify_all()

    async def get(self) -> bytes:
        async with self._cond:
            while not self._items and not self._sender_closed:
                await self._cond.wait()
            if self._items:
                packet = self._items.popleft()
                self._cond.notify_all()
                return packet
            raise EOFError("recv closed")

    async def close_sender(self) -> None:
        async with self._cond:
            self._sender_closed = True
            self._cond.notify_all()

    async def close_receiver(self) -> None:
        async with self._cond:
            self._receiver_closed = True
            self._cond.notify_all()


class TunShim:
    """One end of an in-memory tunnel pair; what one end sends the other receives."""

    def __init__(self, outgoing: _Channel, incoming: _Channel, name: str) -> None:
        self._outgoing = outgoing
        self._incoming = incoming
        self._recv_lock = asyncio.Lock()
        self._name = name

    @classmethod
    def new_pair(cls) -> tuple[TunShim, TunShim]:
        """Two connected endpoints named ``tun-a`` and ``tun-b``."""
        a_to_b = _Channel()
        b_to_a = _Channel()
        return cls(a_to_b, b_to_a, "tun-a"), cls(b_to_a, a_to_b, "tun-b")

    async def send_vectored(self, buffers: Iterable[bytes]) -> int:
        """Send the concatenated buffers as one packet; return its length."""
        packet = b"".join(bytes(b) for b in buffers)
        await self._outgoing.put(packet)
        return len(packet)

    async def recv(self, size: int) -> bytes:
        """Receive one packet, truncated to ``size`` bytes.

        Raises EOFError once the peer has closed and nothing is left.
        """
        async with self._recv_lock:
            packet = await self._incoming.get()
        return packet[:size]

    async def send_all(self, data: bytes) -> None:
        """Send ``data`` as one packet; raises BrokenPipeError if the peer is gone."""
        await self._outgoing.put(bytes(data))

    def name(self) -> str:
        """The name of this endpoint."""
        return self._name

    async def close(self) -> None:
        """Close both directions at this end."""
        await self._outgoing.close_sender()
        await self._incoming.close_receiver()


class TunBackend(Protocol):
    """What a tunnel device must offer to be wrapped by :class:`Tun`."""

    async def recv(self, size: int) -> bytes: ...

    async def send_all(self, data: bytes) -> None: ...

    def name(self) -> str: ...


@runtime_checkable
class VectoredTunBackend(Protocol):
    """A tunnel device that can send several buffers as one packet."""

    async def send_vectored(self, buffers: Iterable[bytes]) -> int: ...


class Tun:
    """Wraps a tunnel device and counts the traffic through it."""

    def __init__(self, backend: TunBackend) -> None:
        self._backend = backend
        self._stats = Stats()

    def stats(self) -> Stats:
        """A snapshot of the traffic counters."""
        return dataclasses.replace(self._stats)

    async def send_vectored(self, buffers: Iterable[bytes]) -> int:
        """Send the buffers as one packet and return the bytes sent."""
        parts = [bytes(b) for b in buffers]
        if isinstance(self._backend, VectoredTunBackend):
            size = await self._backend.send_vectored(parts)
        else:
            packet = b"".join(parts)
            await self._backend.send_all(packet)
            size = len(packet)
        self._stats.record_transmitted(size)
        return size

    async def recv(self, size: int) -> bytes:
        """Receive one packet of at most ``size`` bytes."""
        data = await self._backend.recv(size)
        self._stats.record_received(len(data))
        return data

    async def send_all(self, data: bytes) -> None:
        """Send ``data`` as one packet."""
        await self._backend.send_all(data)
        self._stats.record_transmitted(len(data))

    def name(self) -> str:
        """The name of the underlying device."""
        return self._backend.name()