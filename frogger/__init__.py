"""Frogger-style crossing game: grid simulation core plus a pygame front end."""

from .world import World

__all__ = ["World"]
__version__ = "1.0.0"
