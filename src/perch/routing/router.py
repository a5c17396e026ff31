"""Mount router with longest-prefix-first matching.

Mounts are registered during setup and compiled into an immutable,
ordered tuple when the app freezes.  Ordering is by mount path length,
longest first, then lexicographically, so ``/app/admin`` is always
tried before ``/app``.
"""

import logging

from perch.errors import ConfigurationError
from perch.routing.mount import Mount, MountMatch

logger = logging.getLogger("perch.routing")


def _order_key(mount: Mount) -> tuple[int, str]:
    return (-len(mount.path), mount.path)


class MountRouter:
    """Ordered set of mounts.

    Mutable until ``compile()``; read-only afterwards.  The first call
    to ``route()`` compiles implicitly so a router that has served a
    request can never change.
    """

    __slots__ = ("_compiled", "_mounts")

    def __init__(self, mounts: tuple[Mount, ...] = ()) -> None:
        self._mounts: tuple[Mount, ...] = ()
        self._compiled = False
        for mount in mounts:
            self.register(mount)

    def register(self, mount: Mount) -> None:
        """Add a mount. Must be called before compile().

        Raises:
            ConfigurationError: Another mount already uses the same path.
            RuntimeError: The router has been compiled.
        """
        if self._compiled:
            msg = "Cannot register mounts after compilation."
            raise RuntimeError(msg)

        for existing in self._mounts:
            if existing.path == mount.path:
                msg = f"Duplicate mount path {mount.path!r}"
                raise ConfigurationError(msg)

        self._mounts = tuple(sorted((*self._mounts, mount), key=_order_key))

    def compile(self) -> None:
        """Freeze the router. No more mounts can be registered."""
        if self._compiled:
            return
        self._compiled = True
        logger.debug("Mount order: %s", ", ".join(m.path for m in self._mounts) or "<none>")

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def mounts(self) -> tuple[Mount, ...]:
        """Registered mounts, in matching order."""
        return self._mounts

    def route(self, path: str) -> MountMatch | None:
        """Match *path* against the mount prefixes.

        Returns a ``MountMatch`` for the longest mount path that is a
        literal prefix of *path*, or ``None`` when no mount claims it.
        """
        if not self._compiled:
            self.compile()

        for mount in self._mounts:
            if path.startswith(mount.path):
                remainder = path[len(mount.path) :]
                if remainder.startswith("/"):
                    remainder = remainder[1:]
                return MountMatch(mount=mount, remainder=remainder)
        return None

    def __len__(self) -> int:
        return len(self._mounts)
