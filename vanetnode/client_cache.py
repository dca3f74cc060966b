"""Mapping from client hardware addresses to the node that serves them."""

from __future__ import annotations

import threading
from types import MappingProxyType

from vanetnode.network_interface import MacAddress


class ClientCache:
    """Copy-on-write cache: readers never block, writers swap in a new map."""

    def __init__(self) -> None:
        self._cache: MappingProxyType[MacAddress, MacAddress] = MappingProxyType({})
        self._write_lock = threading.Lock()

    def store_mac(self, client: MacAddress, node: MacAddress) -> None:
        """Record that ``client`` is reached through ``node``."""
        if self.get(client) == node:
            return
        with self._write_lock:
            updated = dict(self._cache)
            updated[client] = node
            self._cache = MappingProxyType(updated)

    def get(self, client: MacAddress) -> MacAddress | None:
        """The node serving ``client``, if known."""
        return self._cache.get(client)