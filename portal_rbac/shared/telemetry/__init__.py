"""Shared telemetry: logging setup."""

from portal_rbac.shared.telemetry.logging import setup_logging

__all__ = [
    "setup_logging",
]
