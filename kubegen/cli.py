"""Command line entrypoint: ``kubegen run NAME --image=IMAGE [-- ARGS...]``."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

import httpx

from .client import APIClient
from .config import load_config
from .constants import EXPOSE_GROUP, RUN_GROUP
from .errors import KubegenError
from .flags import add_run_flags
from .generators import default_registry
from .pipeline import Factory, run

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubegen",
        description="Generate API resources from flags and create them on an API server",
    )
    parser.add_argument("-s", "--server", default="", help="API server URL")
    parser.add_argument("-n", "--namespace", default="", help="Namespace to create resources in")
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to the client config file (default ~/.kubegen/config.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="subcommand", metavar="COMMAND")

    run_parser = commands.add_parser("run", help="Run an image as a pod or replication controller")
    run_parser.add_argument("name", help="Name of the created resource")
    add_run_flags(run_parser)

    commands.add_parser("generators", help="List the available generators")
    return parser


def parse_args(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse ``argv``; everything after ``--`` becomes the container args."""
    argv = list(sys.argv[1:] if argv is None else argv)
    container_args: List[str] = []
    if "--" in argv:
        index = argv.index("--")
        argv, container_args = argv[:index], argv[index + 1:]
    args = parser.parse_args(argv)
    args.args = container_args
    return args


def execute(
    args: argparse.Namespace,
    out: TextIO,
    transport: Optional[httpx.BaseTransport] = None,
) -> None:
    """Run the parsed command; errors propagate to the caller."""
    if args.subcommand == "generators":
        registry = default_registry()
        for group in (RUN_GROUP, EXPOSE_GROUP):
            for name in registry.names(group):
                out.write(f"{group}\t{name}\n")
        return

    config = load_config(
        path=args.config,
        overrides={"server": args.server, "namespace": args.namespace},
    )
    log.debug("Using server %s, namespace %s", config.base_url, config.namespace)

    if args.dry_run:
        run(Factory(), args, config.namespace, out)
        return

    with APIClient.from_config(config, transport=transport) as client:
        run(Factory(client=client), args, config.namespace, out)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parse_args(parser, argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.subcommand:
        parser.print_help()
        return 0

    try:
        execute(args, sys.stdout)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except KubegenError as exc:
        log.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
