"""Samplers that periodically refresh the shared snapshot."""
