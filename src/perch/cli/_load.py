"""Shared descriptor loading for ``perch check`` and ``perch run``."""

import argparse
import sys

from perch.config import MountConfig, load_descriptor
from perch.errors import ConfigurationError


def load_descriptors(args: argparse.Namespace) -> tuple[MountConfig, ...]:
    """Read every descriptor named on the command line.

    Prints the first error and exits 1 if any descriptor is unusable.
    """
    try:
        return tuple(load_descriptor(path) for path in args.descriptors)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
