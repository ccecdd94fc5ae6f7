"""Command-line interface for cquver.

Usage::

    cquver <app-name> init
    cquver <app-name> create <kind> <name>

Exit status is 0 on success and 1 on invalid input or a fatal error.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from cquver import __version__
from cquver.config import Config
from cquver.scaffolder.errors import CquverError
from cquver.scaffolder.generator import ComponentGenerator
from cquver.scaffolder.kinds import kind_choices
from cquver.utils import print_error, print_success, print_summary_table


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``cquver`` command."""
    parser = argparse.ArgumentParser(
        prog="cquver",
        description="cquver - NestJS DDD/CQRS Boilerplate Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cquver user-service init\n"
            "  cquver user-service create command create-user\n"
            "  cquver user-service create query get-user\n"
            "  cquver user-service create event user-created\n"
            "  cquver user-service create service user-domain\n"
            "  cquver user-service create usecase register-user\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--apps-dir",
        default=None,
        help="Directory holding the apps (default: $CQUVER_APPS_DIR or ./apps)",
    )
    parser.add_argument("app_name", metavar="app-name", help="Name of the app to work on")

    actions = parser.add_subparsers(dest="action", metavar="action", required=True)
    actions.add_parser(
        "init",
        help="Create the DDD/CQRS folder structure inside an existing app",
    )
    create = actions.add_parser("create", help="Generate a component")
    create.add_argument("kind", choices=kind_choices(), help="Component kind")
    create.add_argument("name", help="Component name, e.g. create-user or CreateUser")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # --help and --version exit 0; usage errors exit 2 from argparse.
        return 0 if exc.code in (0, None) else 1

    if args.action == "create" and not args.name.strip():
        print_error("Component name must not be empty.")
        return 1

    try:
        config = Config.from_env(apps_dir=Path(args.apps_dir) if args.apps_dir else None)
    except ValueError as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    generator = ComponentGenerator(config)
    try:
        if args.action == "init":
            report = asyncio.run(generator.initialize_service(args.app_name))
            print_summary_table(
                {
                    "Created": str(len(report.created)),
                    "Already present": str(len(report.existing)),
                },
                title=f"{args.app_name} layout",
            )
            print_success(f"Successfully initialized service structure for {args.app_name}")
        else:
            result = asyncio.run(generator.generate(args.app_name, args.kind, args.name))
            print_success(
                f"Successfully generated {args.kind} {result.descriptor.class_name} "
                f"in {args.app_name}"
            )
    except CquverError as exc:
        print_error(str(exc))
        return 1

    return 0


def main_entry() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
