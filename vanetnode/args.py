"""Command-line arguments of a vehicular network node."""

from __future__ import annotations

import argparse
import enum
from dataclasses import dataclass, field
from ipaddress import IPv4Address
from typing import Sequence


class NodeType(enum.Enum):
    """Role of a node: road-side unit or on-board unit."""

    RSU = "rsu"
    OBU = "obu"

    def __str__(self) -> str:
        return self.value


@dataclass
class NodeParameters:
    """Routing parameters of a node."""

    node_type: NodeType
    hello_history: int = 10
    hello_periodicity: int | None = None
    cached_candidates: int = 3


@dataclass
class Args:
    """Everything needed to start a node."""

    bind: str
    node_params: NodeParameters
    tap_name: str | None = None
    ip: IPv4Address | None = None
    mtu: int = 1459


def _unsigned(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid unsigned integer: {text!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"value must not be negative: {text!r}")
    return value


def _node_type(text: str) -> NodeType:
    try:
        return NodeType(text.lower())
    except ValueError as exc:
        choices = ", ".join(t.value for t in NodeType)
        raise argparse.ArgumentTypeError(f"invalid node type {text!r} (choose from {choices})") from exc


def _ipv4(text: str) -> IPv4Address:
    try:
        return IPv4Address(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid IPv4 address: {text!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the node command."""
    parser = argparse.ArgumentParser(description="Vehicular network node")
    parser.add_argument("-b", "--bind", required=True, help="Interface to bind to")
    parser.add_argument("-t", "--tap-name", default=None, help="Virtual device name")
    parser.add_argument("-i", "--ip", type=_ipv4, default=None, help="IP")
    parser.add_argument("-m", "--mtu", type=int, default=1459, help="MTU")
    group = parser.add_argument_group("node parameters")
    group.add_argument("-n", "--node-type", type=_node_type, required=True, help="Node type (rsu or obu)")
    group.add_argument("--hello-history", type=_unsigned, default=10, help="Hello history")
    group.add_argument("--hello-periodicity", type=_unsigned, default=None, help="Hello periodicity")
    group.add_argument(
        "--cached-candidates",
        type=_unsigned,
        default=3,
        help="Number of cached upstream candidates to keep for fast failover",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Args:
    """Parse command-line arguments; argparse exits on invalid input."""
    ns = build_parser().parse_args(argv)
    return Args(
        bind=ns.bind,
        tap_name=ns.tap_name,
        ip=ns.ip,
        mtu=ns.mtu,
        node_params=NodeParameters(
            node_type=ns.node_type,
            hello_history=ns.hello_history,
            hello_periodicity=ns.hello_periodicity,
            cached_candidates=ns.cached_candidates,
        ),
    )