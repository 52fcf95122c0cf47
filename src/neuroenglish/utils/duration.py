"""Human-readable durations."""

from __future__ import annotations

__all__ = ["UNITS", "format_duration"]

# Milliseconds per unit, largest first
UNITS: dict[str, int] = {
    "h": 60 * 60 * 1000,
    "min": 60 * 1000,
    "s": 1000,
    "ms": 1,
}


def format_duration(ms: float, unit: str | None = None, precision: int = 1) -> str:
    """Format ``ms`` milliseconds, e.g. ``format_duration(90_000) == "1.5min"``.

    Without ``unit`` the largest unit not exceeding the value is used.
    """

    if unit is not None:
        if unit not in UNITS:
            raise ValueError(f"Unknown unit: {unit}. Supported: {', '.join(UNITS)}")
        return f"{ms / UNITS[unit]:.{precision}f}{unit}"

    for name, size in UNITS.items():
        if ms >= size:
            return f"{ms / size:.{precision}f}{name}"
    return f"{ms:.{precision}f}ms"
