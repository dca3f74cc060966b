import asyncio
import os

import pytest

from vanetnode.device import Device
from vanetnode.device_io import DeviceIo
from vanetnode.network_interface import MacAddress
from vanetnode.node import (
    Reply,
    ReplyKind,
    bytes_to_hex,
    handle_messages,
    tap_traffic,
    wire_traffic,
)
from vanetnode.tun import Tun, TunShim

MAC = MacAddress([0x02, 0, 0, 0, 0, 0x01])


def _pipe_device(use_writer=True):
    reader, writer = os.pipe()
    if use_writer:
        return Device(MAC, DeviceIo(writer)), reader
    return Device(MAC, DeviceIo(reader)), writer


@pytest.mark.asyncio
async def test_handle_messages_sends_to_tun_and_device():
    tun_end, peer = TunShim.new_pair()
    tun = Tun(tun_end)
    device, reader_fd = _pipe_device()
    try:
        msgs = [Reply.tap([bytes([1, 2, 3])]), Reply.wire([bytes(14)])]
        await handle_messages(msgs, tun, device)
        data = os.read(reader_fd, 64)
        assert len(data) > 0
        assert data == bytes(14)
        assert await peer.recv(64) == b"\x01\x02\x03"
    finally:
        os.close(reader_fd)
        device.close()


@pytest.mark.asyncio
async def test_handle_messages_joins_buffers():
    tun_end, peer = TunShim.new_pair()
    tun = Tun(tun_end)
    device, reader_fd = _pipe_device()
    try:
        await handle_messages(
            [Reply.wire([b"ab", b"cd"]), Reply.tap([b"x", b"yz"])], tun, device
        )
        assert os.read(reader_fd, 64) == b"abcd"
        assert await peer.recv(64) == b"xyz"
        assert tun.stats().transmitted_bytes == 3
        assert device.stats().transmitted_bytes == 4
    finally:
        os.close(reader_fd)
        device.close()


@pytest.mark.asyncio
async def test_handle_messages_survives_wire_error():
    tun_end, peer = TunShim.new_pair()
    tun = Tun(tun_end)
    device, reader_fd = _pipe_device()
    os.close(reader_fd)
    try:
        await handle_messages([Reply.wire([b"lost"]), Reply.tap([b"kept"])], tun, device)
        assert await peer.recv(64) == b"kept"
        assert device.stats().transmitted_packets == 0
    finally:
        device.close()


def test_bytes_to_hex():
    assert bytes_to_hex(b"\x01\x02\xaa") == "01 02 aa"
    assert bytes_to_hex(b"") == ""


def test_reply_constructors():
    reply = Reply.wire([b"a", b"b"])
    assert reply.kind is ReplyKind.WIRE
    assert reply.payload() == b"ab"
    assert Reply.tap([b"z"]).kind is ReplyKind.TAP


@pytest.mark.asyncio
async def test_wire_traffic_passes_received_frame():
    device, writer_fd = _pipe_device(use_writer=False)
    try:
        os.write(writer_fd, b"frame")
        seen = []

        async def handler(data):
            seen.append(data)
            return [Reply.tap([data])]

        result = await wire_traffic(device, handler)
        assert seen == [b"frame"]
        assert result == [Reply.tap([b"frame"])]
    finally:
        os.close(writer_fd)
        device.close()


@pytest.mark.asyncio
async def test_tap_traffic_passes_received_packet():
    tun_end, peer = TunShim.new_pair()
    tun = Tun(tun_end)

    async def handler(data):
        return None if data != b"packet" else [Reply.wire([data])]

    sender = asyncio.create_task(peer.send_all(b"packet"))
    result = await tap_traffic(tun, handler)
    await sender
    assert result == [Reply.wire([b"packet"])]
    assert tun.stats().received_packets == 1