"""Transports for encoded snapshots."""
