# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for buildvariant.

This is the single root command; every operation is a subcommand of
`buildvariant`. No interactive prompts: a build server runs this.

The global options (--config, --project-dir, --log-level, --dry-run) are
inherited by every subcommand through argparse's parent parser mechanism.

Usage:
    buildvariant resolve release --config buildvariant.yaml --output build/plan.json
    buildvariant resolve release --gradle-args-file build/signing.args
    buildvariant buildconfig release --config buildvariant.yaml --out-dir build/generated
    buildvariant check release --project-dir android
    buildvariant info
"""

import argparse
import sys
from typing import Optional, Sequence

from buildvariant.cli.commands import (
    handle_buildconfig,
    handle_check,
    handle_info,
    handle_resolve,
)
from buildvariant.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    Uses add_help=False so help text doesn't collide between the parent and
    the subcommand parsers.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--project-dir",
        type=str,
        default=None,
        dest="project_dir",
        help="Android root project directory (default: current directory).",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides config).",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Resolve and log, but write no files.",
    )
    return parent


def _add_variant_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("variant", help="Build type: debug or release.")
    parser.add_argument(
        "--properties",
        type=str,
        default=None,
        help="Path to key.properties (default: from config, relative to project dir).",
    )


def _add_allow_debug_signing(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--allow-debug-signing",
        action="store_true",
        default=False,
        dest="allow_debug_signing",
        help="Let a release build without key.properties fall back to the debug key.",
    )


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """Register all subcommands with their handler functions."""
    resolve = subparsers.add_parser(
        "resolve", parents=[parent], help="Resolve a variant into a build plan."
    )
    _add_variant_arguments(resolve)
    _add_allow_debug_signing(resolve)
    resolve.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the build plan JSON to this path.",
    )
    resolve.add_argument(
        "--gradle-args-file",
        type=str,
        default=None,
        dest="gradle_args_file",
        help="Write android.injected.signing.* -P arguments to this file (mode 0600).",
    )
    resolve.add_argument(
        "--reveal-secrets",
        action="store_true",
        default=False,
        dest="reveal_secrets",
        help="Put real passwords in the --gradle-args-file output instead of a mask.",
    )
    resolve.set_defaults(func=handle_resolve)

    buildconfig = subparsers.add_parser(
        "buildconfig", parents=[parent], help="Generate BuildConfig.java for a variant."
    )
    _add_variant_arguments(buildconfig)
    _add_allow_debug_signing(buildconfig)
    buildconfig.add_argument(
        "--out-dir",
        type=str,
        required=True,
        dest="out_dir",
        help="Generated sources root; the file lands under its package path.",
    )
    buildconfig.set_defaults(func=handle_buildconfig)

    check = subparsers.add_parser(
        "check", parents=[parent], help="Run pre-flight checks on signing inputs."
    )
    _add_variant_arguments(check)
    check.set_defaults(func=handle_check)

    info = subparsers.add_parser(
        "info", parents=[parent], help="Display environment and config info."
    )
    info.set_defaults(func=handle_info)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="buildvariant",
        description="buildvariant: signing and build-variant resolution for Android builds.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args(argv)

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
