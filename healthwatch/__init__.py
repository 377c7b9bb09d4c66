"""HealthWatch - uptime monitor with edge-triggered down alerts."""

__version__ = "1.0.0"
