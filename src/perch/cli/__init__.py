"""Perch CLI: manifest validation and a standalone server.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def _add_descriptor_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "descriptors",
        nargs="+",
        metavar="DESCRIPTOR",
        help="Mount descriptor (.properties) file, one per application",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Directory that manifest and resource paths are relative to (default: .)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch: serve single-page applications from checksum manifests.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch check ------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate descriptors and manifests")
    _add_descriptor_args(check_parser)

    # -- perch run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve the mounted applications")
    _add_descriptor_args(run_parser)
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging and auto-reload",
    )
    run_parser.add_argument(
        "--cache-control",
        default=None,
        help="Cache-Control value sent with every asset response",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from perch.cli._check import run_check

        run_check(args)
    elif args.command == "run":
        from perch.cli._run import run_app

        run_app(args)
