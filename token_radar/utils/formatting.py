"""Display formatting for USD amounts and percentages."""

from __future__ import annotations


def format_market_cap(value: float) -> str:
    """Compact USD string: ``$3.9B``, ``$45.0M``, ``$3.0K`` or ``$12``."""
    if value >= 1e9:
        return f"${value / 1e9:.1f}B"
    if value >= 1e6:
        return f"${value / 1e6:.1f}M"
    if value >= 1e3:
        return f"${value / 1e3:.1f}K"
    return f"${value:.0f}"


def format_percentage(value: float, decimals: int = 2) -> str:
    """Signed percent string, e.g. ``+12.50%`` / ``-3.10%``."""
    return f"{value:+.{decimals}f}%"
