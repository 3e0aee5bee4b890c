"""Teleport commands for a locally running game."""

from .client import TELEPORT_PATH, TeleportClient, TeleportTarget

__all__ = ["TELEPORT_PATH", "TeleportClient", "TeleportTarget"]
