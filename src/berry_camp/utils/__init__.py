"""Utility helpers for Berry Camp."""

from .logging_config import setup_logging

__all__ = ["setup_logging"]
