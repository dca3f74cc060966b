import asyncio

import pytest

from vanetnode.tun import Tun, TunShim


@pytest.mark.asyncio
async def test_tun_send_and_recv_roundtrip():
    a, b = TunShim.new_pair()
    tun_a = Tun(a)
    receiver = asyncio.create_task(b.recv(128))
    payload = b"hello tun"
    await tun_a.send_all(payload)
    assert await receiver == payload


@pytest.mark.asyncio
async def test_tun_send_vectored_and_name():
    a, b = TunShim.new_pair()
    tun_a = Tun(a)
    part1, part2 = b"hello ", b"world"
    receiver = asyncio.create_task(b.recv(128))
    size = await tun_a.send_vectored([part1, part2])
    assert size == len(part1) + len(part2)
    assert await receiver == part1 + part2
    assert tun_a.name().startswith("tun-")


@pytest.mark.asyncio
async def test_tun_recv_reads_data():
    a, b = TunShim.new_pair()
    tun_a = Tun(a)
    sender = asyncio.create_task(b.send_all(b"reply"))
    data = await tun_a.recv(64)
    await sender
    assert data == b"reply"


@pytest.mark.asyncio
async def test_tun_stats_increment_on_send_and_recv():
    a, b = TunShim.new_pair()
    tun_a = Tun(a)
    before = tun_a.stats()
    assert before.transmitted_packets == 0
    assert before.transmitted_bytes == 0

    sent = await tun_a.send_vectored([b"hi ", b"there"])
    assert sent == 8
    after_send = tun_a.stats()
    assert after_send.transmitted_packets == before.transmitted_packets + 1
    assert after_send.transmitted_bytes == before.transmitted_bytes + sent

    await b.send_all(b"reply")
    data = await tun_a.recv(64)
    after_recv = tun_a.stats()
    assert after_recv.received_packets == before.received_packets + 1
    assert after_recv.received_bytes == before.received_bytes + len(data)


@pytest.mark.asyncio
async def test_send_all_counts_bytes():
    a, _b = TunShim.new_pair()
    tun_a = Tun(a)
    await tun_a.send_all(b"abcd")
    stats = tun_a.stats()
    assert (stats.transmitted_packets, stats.transmitted_bytes) == (1, 4)


@pytest.mark.asyncio
async def test_shim_names():
    a, b = TunShim.new_pair()
    assert (a.name(), b.name()) == ("tun-a", "tun-b")


@pytest.mark.asyncio
async def test_recv_truncates_to_size():
    a, b = TunShim.new_pair()
    await a.send_all(b"abcdefgh")
    assert await b.recv(3) == b"abc"


@pytest.mark.asyncio
async def test_packets_arrive_in_order():
    a, b = TunShim.new_pair()
    for packet in (b"one", b"two", b"three"):
        await a.send_all(packet)
    assert [await b.recv(16) for _ in range(3)] == [b"one", b"two", b"three"]


@pytest.mark.asyncio
async def test_recv_after_peer_closed_raises_eof():
    a, b = TunShim.new_pair()
    await a.send_all(b"last")
    await a.close()
    assert await b.recv(16) == b"last"
    with pytest.raises(EOFError):
        await b.recv(16)


@pytest.mark.asyncio
async def test_send_after_peer_closed_raises_broken_pipe():
    a, b = TunShim.new_pair()
    await b.close()
    with pytest.raises(BrokenPipeError):
        await a.send_all(b"nobody listening")


class _FlatBackend:
    """A backend without vectored sends."""

    def __init__(self):
        self.sent = []

    async def recv(self, size):
        return b"x" * size

    async def send_all(self, data):
        self.sent.append(data)

    def name(self):
        return "flat0"


@pytest.mark.asyncio
async def test_send_vectored_flattens_for_plain_backend():
    backend = _FlatBackend()
    tun = Tun(backend)
    size = await tun.send_vectored([b"ab", b"cd"])
    assert size == 4
    assert backend.sent == [b"abcd"]
    assert tun.name() == "flat0"