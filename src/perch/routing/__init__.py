"""Routing: longest-prefix mount table.

Mounts are registered during setup and compiled into an immutable
ordered tuple when the app freezes.
"""

from perch.routing.mount import Mount, MountMatch
from perch.routing.router import MountRouter

__all__ = ["Mount", "MountMatch", "MountRouter"]
