"""``perch run``: serve mounted applications.

Builds an App from the descriptors on the command line, loads every
catalog up front, and starts the pounce server.
"""

import argparse
import logging
import sys

from perch.app import App
from perch.assets.sources import DirectorySource
from perch.cli._load import load_descriptors
from perch.config import AppConfig
from perch.errors import ConfigurationError


def run_app(args: argparse.Namespace) -> None:
    """Start the perch server for ``args.descriptors``.

    CLI flags override the ``AppConfig`` defaults.
    """
    defaults = AppConfig()
    config = AppConfig(
        host=args.host if args.host is not None else defaults.host,
        port=args.port if args.port is not None else defaults.port,
        debug=args.debug,
        log_level="debug" if args.debug else defaults.log_level,
        mounts=load_descriptors(args),
        cache_control=args.cache_control,
    )
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = App(config, source=DirectorySource(args.root))
    try:
        app.run()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
