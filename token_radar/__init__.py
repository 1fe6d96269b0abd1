"""Token Radar: crypto token scoring and breakout signal engine."""

__version__ = "0.1.0"
