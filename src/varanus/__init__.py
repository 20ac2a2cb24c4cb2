"""varanus – lightweight host telemetry agent."""

__version__ = "1.0.0"
