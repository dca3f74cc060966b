"""MAC addresses and the interface every network endpoint exposes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

_MAC_LEN = 6


@dataclass(frozen=True, order=True)
class MacAddress:
    """A 48-bit hardware address."""

    octets: bytes

    def __init__(self, octets: Iterable[int] | bytes) -> None:
        raw = bytes(octets)
        if len(raw) != _MAC_LEN:
            raise ValueError(f"a MAC address has {_MAC_LEN} octets, got {len(raw)}")
        object.__setattr__(self, "octets", raw)

    @classmethod
    def parse(cls, text: str) -> MacAddress:
        """Parse ``aa:bb:cc:dd:ee:ff`` (or with ``-`` separators)."""
        parts = text.strip().replace("-", ":").split(":")
        if len(parts) != _MAC_LEN or any(len(p) not in (1, 2) for p in parts):
            raise ValueError(f"invalid MAC address: {text!r}")
        try:
            return cls(int(p, 16) for p in parts)
        except ValueError as exc:
            raise ValueError(f"invalid MAC address: {text!r}") from exc

    def bytes(self) -> bytes:
        """The six octets of the address."""
        return self.octets

    def __str__(self) -> str:
        return ":".join(f"{b:02X}" for b in self.octets)

    def __repr__(self) -> str:
        return f"MacAddress({str(self)!r})"


class NetworkInterface(ABC):
    """Anything that sends frames under a hardware address."""

    @abstractmethod
    def mac_address(self) -> MacAddress:
        """The hardware address of this interface."""