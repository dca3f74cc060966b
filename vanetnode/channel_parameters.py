"""Per-link channel characteristics: latency and packet loss."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any


def _as_uint(value: Any) -> int | None:
    """Interpret a loosely typed configuration value as an unsigned integer."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        if math.isfinite(value) and value >= 0:
            return int(value)
        return None
    if isinstance(value, str):
        text = value.strip()
        try:
            return _as_uint(int(text))
        except ValueError:
            try:
                return _as_uint(float(text))
            except ValueError:
                return None
    return None


def _as_float(value: Any) -> float | None:
    """Interpret a loosely typed configuration value as a float."""
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class ChannelParameters:
    """Latency and loss probability of a simulated channel."""

    latency: timedelta = timedelta(0)
    loss: float = 0.0

    @classmethod
    def from_mapping(cls, param: Mapping[str, Any]) -> ChannelParameters:
        """Build parameters from a config mapping; bad or missing keys fall back to zero."""
        latency = param.get("latency")
        loss = param.get("loss")
        latency_ms = _as_uint(latency) if latency is not None else None
        loss_value = _as_float(loss) if loss is not None else None
        return cls(
            latency=timedelta(milliseconds=latency_ms or 0),
            loss=loss_value if loss_value is not None else 0.0,
        )