"""Shared utilities: telemetry (logging) and datetime helpers. No business logic."""
