"""Hypixel stats for the players listed by /who in the Minecraft client log."""

__version__ = "0.1.0"
