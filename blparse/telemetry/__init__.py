"""Convenience exports for blparse telemetry utilities."""

from . import logger

__all__ = ["logger"]
