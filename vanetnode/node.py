"""Dispatching of node replies to the tunnel and the wire."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field

from vanetnode.device import Device
from vanetnode.tun import Tun

logger = logging.getLogger(__name__)

BUFFER_SIZE = 1500


class ReplyKind(enum.Enum):
    """Where a reply goes: onto the wire or into the tunnel."""

    WIRE = "wire"
    TAP = "tap"


@dataclass(frozen=True)
class Reply:
    """A packet to send, split into buffers that are written together."""

    kind: ReplyKind
    buffers: list[bytes] = field(default_factory=list)

    @classmethod
    def wire(cls, buffers: Iterable[bytes]) -> Reply:
        return cls(ReplyKind.WIRE, [bytes(b) for b in buffers])

    @classmethod
    def tap(cls, buffers: Iterable[bytes]) -> Reply:
        return cls(ReplyKind.TAP, [bytes(b) for b in buffers])

    def payload(self) -> bytes:
        """The buffers joined into one packet."""
        return b"".join(self.buffers)


Handler = Callable[[bytes], Awaitable["list[Reply] | None"]]


def bytes_to_hex(data: bytes) -> str:
    """Compact hex form of ``data``, e.g. ``"01 02 aa"``."""
    return " ".join(f"{b:02x}" for b in data)


async def _dispatch(reply: Reply, tun: Tun, dev: Device) -> None:
    if reply.kind is ReplyKind.TAP:
        try:
            await tun.send_vectored(reply.buffers)
        except (OSError, EOFError):
            logger.exception("error sending to tap")
    else:
        try:
            await dev.send_vectored(reply.buffers)
        except OSError:
            logger.exception("error sending to dev")


async def handle_messages(messages: Iterable[Reply], tun: Tun, dev: Device) -> None:
    """Send every reply concurrently; send errors are logged, not raised."""
    await asyncio.gather(*(_dispatch(reply, tun, dev) for reply in messages))


async def wire_traffic(dev: Device, callable: Handler) -> list[Reply] | None:
    """Receive one frame from the wire and hand it to ``callable``."""
    data = await dev.recv(BUFFER_SIZE)
    logger.debug("wire_traffic recv n=%d raw=%s", len(data), bytes_to_hex(data))
    return await callable(data)


async def tap_traffic(tun: Tun, callable: Handler) -> list[Reply] | None:
    """Receive one packet from the tunnel and hand it to ``callable``."""
    data = await tun.recv(BUFFER_SIZE)
    return await callable(data)