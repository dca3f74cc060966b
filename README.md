# vanetnode

Building blocks for nodes in a vehicular ad-hoc network, where road-side
units (RSUs) and on-board units (OBUs) exchange frames over a shared link
and hand payloads to a local TUN side.

The package provides:

- `vanetnode.channel_parameters.ChannelParameters`: the latency and loss of
  a simulated channel, built from a configuration mapping.
- `vanetnode.stats.Stats`: received and transmitted packet and byte counters.
- `vanetnode.network_interface.MacAddress` and `NetworkInterface`: hardware
  addresses and the abstract interface every link endpoint implements.
- `vanetnode.args`: node configuration (`Args`, `NodeParameters`,
  `NodeType`) and an `argparse` parser for it.
- `vanetnode.client_cache.ClientCache`: a map from client MAC addresses to
  the node that serves them.
- `vanetnode.device_io.DeviceIo`: an owned file descriptor with plain
  read, write, vectored write and fsync.
- `vanetnode.device.Device`: an asyncio link endpoint over a `DeviceIo`,
  with traffic counters.
- `vanetnode.tun.Tun` and `vanetnode.tun.TunShim`: a counting wrapper around
  a tunnel endpoint, and an in-memory pair of linked endpoints.
- `vanetnode.node`: dispatching replies to the link or to the TUN side, and
  reading one frame from either side for a handler.

Python 3.10 or later is required. There are no runtime dependencies.
Opening a real link device with `Device.open` needs Linux and the
privileges to create raw packet sockets.

## Channel parameters

Latency is given in milliseconds and loss as a fraction. Missing or
unusable values fall back to zero.

```python
from vanetnode.channel_parameters import ChannelParameters

params = ChannelParameters.from_mapping({"latency": 150, "loss": 0.125})
print(params.latency)  # 0:00:00.150000
print(params.loss)     # 0.125
```

## Node configuration

```python
from vanetnode.args import NodeType, parse_args

args = parse_args(["--bind", "eth0", "--node-type", "obu"])
assert args.node_params.node_type is NodeType.OBU
print(args.mtu)                            # 1459
print(args.node_params.hello_history)      # 10
print(args.node_params.cached_candidates)  # 3
```

The options are `-b/--bind` (required), `-t/--tap-name`, `-i/--ip`,
`-m/--mtu`, `-n/--node-type` (`rsu` or `obu`, required),
`--hello-history`, `--hello-periodicity` and `--cached-candidates`.
Invalid input makes `argparse` print an error and exit. `build_parser()`
returns the parser itself if you want to extend it.

## MAC addresses and the client cache

```python
from vanetnode.client_cache import ClientCache
from vanetnode.network_interface import MacAddress

cache = ClientCache()
client = MacAddress.parse("02:00:00:00:00:01")
node = MacAddress([2, 0, 0, 0, 0, 2])

cache.store_mac(client, node)
assert cache.get(client) == node
print(client)  # 02:00:00:00:00:01
```

`MacAddress` requires exactly six octets and accepts `:` or `-` as the
separator when parsing. `ClientCache` is copy-on-write: lookups never
block and storing a mapping that is already present does nothing.

## Counting traffic

```python
from vanetnode.stats import Stats

stats = Stats()
stats.record_transmitted(4)
stats.record_received(5)
print(stats.transmitted_packets, stats.transmitted_bytes)  # 1 4
```

`Device` and `Tun` keep such counters for what they send and receive;
their `stats()` method returns a copy.

## Link devices

`DeviceIo(fd)` takes ownership of a descriptor: `recv`, `send`, `sendv`
and `flush` call straight through to the operating system, and `close`
(or leaving a `with` block) closes it. `Device(mac, io)` makes the
descriptor non-blocking and offers `async` `recv`, `send`, `send_all`,
`send_vectored` and `flush`, waiting on the running event loop when the
descriptor is not ready. `send_all` raises `WriteZeroError` if a write
accepts no bytes. Any descriptor works, so a pipe or a socket pair can
stand in for a real interface:

```python
import asyncio, socket

from vanetnode.device import Device
from vanetnode.device_io import DeviceIo
from vanetnode.network_interface import MacAddress

async def demo():
    left, right = socket.socketpair()
    dev = Device(MacAddress.parse("02:00:00:00:00:0a"), DeviceIo(left.detach()))
    await dev.send(b"ping")
    print(right.recv(16))           # b'ping'
    print(dev.stats().transmitted_packets)  # 1
    dev.close()
    right.close()

asyncio.run(demo())
```

## In-memory TUN pairs

`TunShim.new_pair()` returns two linked endpoints named `tun-a` and
`tun-b`: what one sends, the other receives, one packet at a time.
`Tun(backend)` wraps any object with `recv`, `send_all` and `name` (and
uses `send_vectored` when the backend has it) and counts the traffic.

```python
import asyncio

from vanetnode.tun import Tun, TunShim

async def demo():
    a, b = TunShim.new_pair()
    tun = Tun(a)
    await tun.send_vectored([b"hello ", b"world"])
    print(await b.recv(128))   # b'hello world'
    print(tun.name())          # tun-a

asyncio.run(demo())
```

## Dispatching replies

Handlers return a list of `vanetnode.node.Reply` values, made with
`Reply.wire(buffers)` or `Reply.tap(buffers)`. `handle_messages(messages,
tun, dev)` sends them all concurrently; a failed send is logged and does
not stop the others. `wire_traffic(dev, handler)` and
`tap_traffic(tun, handler)` read one frame of up to 1500 bytes and await
`handler(frame)`. `bytes_to_hex(b"\x01\x02\xaa")` gives `"01 02 aa"`.

## What this package does not do

There is no command to start a node, and no routing logic or message
format: the package does not decide where frames go, discover upstream
nodes, send heartbeats or fail over between candidates. `handle_messages`
only logs a failed send. `Tun` does not create a kernel TUN interface
itself; it wraps an endpoint you supply, such as a `TunShim`.