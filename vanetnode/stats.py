"""Traffic counters for network endpoints."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Stats:
    """Packet and byte counters for both directions."""

    received_packets: int = 0
    received_bytes: int = 0
    transmitted_packets: int = 0
    transmitted_bytes: int = 0

    def record_received(self, size: int) -> None:
        """Count one received packet of ``size`` bytes."""
        self.received_packets += 1
        self.received_bytes += size

    def record_transmitted(self, size: int) -> None:
        """Count one transmitted packet of ``size`` bytes."""
        self.transmitted_packets += 1
        self.transmitted_bytes += size