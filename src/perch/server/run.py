"""Serve a perch App with the pounce ASGI server.

pounce is an optional dependency (``pip install perch[server]``); it is
imported only when a server is actually started.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from perch.errors import ConfigurationError

if TYPE_CHECKING:
    from perch.app import App


def run_server(
    app: App,
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start a pounce server with the given perch App.

    Freezes the app first so manifest problems are reported before the
    server binds its socket.

    Args:
        app: ASGI callable (perch App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count (0 = auto-detect from CPU count).
        reload: Enable auto-reload on file changes.
        log_level: Log level (debug, info, warning, error, critical).
    """
    app.freeze()

    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "perch.server requires 'pounce' to serve requests. "
            "Install it with: pip install perch[server]"
        )
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app)
    server.run()
