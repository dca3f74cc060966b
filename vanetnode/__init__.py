"""Building blocks for vehicular network nodes: link devices, TUN endpoints, counters and configuration."""

__version__ = "0.1.0"