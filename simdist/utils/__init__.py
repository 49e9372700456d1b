"""Utility helpers."""

from .logging_setup import log_duration, log_operation, setup_logging

__all__ = ["log_duration", "log_operation", "setup_logging"]
