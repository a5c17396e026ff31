"""``perch check``: descriptor and manifest validation command.

Loads every descriptor and its manifest exactly as the server would at
startup, printing one line per mount.  Exits with code 1 on the first
configuration error.
"""

import argparse
import sys

from perch.assets.sources import DirectorySource
from perch.cli._load import load_descriptors
from perch.errors import ConfigurationError
from perch.routing.mount import Mount
from perch.routing.router import MountRouter


def run_check(args: argparse.Namespace) -> None:
    """Validate the descriptors in ``args.descriptors`` against ``args.root``."""
    configs = load_descriptors(args)
    source = DirectorySource(args.root)

    router = MountRouter()
    try:
        for config in configs:
            router.register(Mount.from_config(config, source))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    router.compile()

    for mount in router.mounts:
        catalog = mount.catalog
        print(f"  -> {mount.path}  {len(catalog)} resources, index {catalog.index.path}")
    print(f"{len(router)} mount(s) OK")
