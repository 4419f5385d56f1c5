"""cryptodash - technical analysis engine and price alerts for a crypto dashboard."""

__version__ = "0.1.0"
