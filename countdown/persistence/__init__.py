"""
Persistence package: JSON snapshots of the timer set in the wire/storage shape.
"""

from .serializer import dumps, loads

__all__ = ["dumps", "loads"]
