"""CLI argument parsing and main entry point.

Provides two subcommands:

* ``flagwarden resolve`` — resolve a project's flags against a catalogue
  and print the explanation.
* ``flagwarden list``    — list every flag in a catalogue.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from flagwarden.constants import APP_NAME, APP_VERSION, SITE_ID_ENV
from flagwarden.errors import FlagWardenError

module_logger = logging.getLogger(__name__)


def _pick_renderer(plain: bool):
    from flagwarden.display.messages import PlainRenderer, TerminalRenderer

    if plain or not sys.stdout.isatty():
        return PlainRenderer()
    return TerminalRenderer()


def _resolve_site_id(cli_site_id: Optional[str], cfg_site_id: Optional[str], base_dir: str) -> str:
    """Site identity: CLI flag → project config → env var → project directory."""
    from flagwarden.core.rollout import site_id_for_path

    return cli_site_id or cfg_site_id or os.environ.get(SITE_ID_ENV) or site_id_for_path(base_dir)


# ── ``flagwarden resolve`` ──────────────────────────────────────────────


def _cmd_resolve(args: argparse.Namespace) -> int:
    """Entry-point for ``flagwarden resolve``."""
    from flagwarden.config.loader import load_catalogue, load_project_config, user_flags
    from flagwarden.core.models import ExecutionContext
    from flagwarden.core.resolver import resolve_flags
    from flagwarden.core.rollout import RecordingSampler, SiteSampler
    from flagwarden.environment import detect_context

    catalogue = load_catalogue(args.catalogue)

    config: dict = {}
    cfg_site_id = None
    base_dir = os.getcwd()
    if args.config:
        project = load_project_config(args.config)
        config = user_flags(project.flags)
        cfg_site_id = project.site_id
        base_dir = os.path.dirname(os.path.abspath(args.config))

    context = detect_context(command=args.exec_command)
    if args.ci is not None:
        context = ExecutionContext(executing_command=context.executing_command, is_ci=args.ci)

    sampler = RecordingSampler(SiteSampler(_resolve_site_id(args.site_id, cfg_site_id, base_dir)))

    result = resolve_flags(
        catalogue,
        config,
        context,
        sampler=sampler,
        renderer=_pick_renderer(args.plain),
    )

    if result.unknown_flag_message:
        print(result.unknown_flag_message, file=sys.stderr)
    if result.message:
        print(result.message, end="")
    elif not args.quiet:
        print("No flags are active.")
    return 0


# ── ``flagwarden list`` ─────────────────────────────────────────────────


def _cmd_list(args: argparse.Namespace) -> int:
    """Entry-point for ``flagwarden list``."""
    from flagwarden.config.loader import load_catalogue
    from flagwarden.display.messages import flag_line

    catalogue = load_catalogue(args.catalogue)
    if not catalogue:
        print("The catalogue defines no flags.")
        return 0

    renderer = _pick_renderer(args.plain)
    print(f"{len(catalogue)} flag(s) defined:", end="")
    for flag in catalogue:
        line = flag_line(flag, renderer)
        details = [f"command={flag.command}"]
        if flag.no_ci:
            details.append("no-ci")
        if flag.gradual_rollout is not None:
            details.append(f"rollout={flag.gradual_rollout.percentage:g}%")
        if flag.included_flags:
            details.append(f"includes={','.join(flag.included_flags)}")
        for dist_name, constraint in flag.compatibility.items():
            details.append(f"{dist_name}{constraint}")
        print(f"{line} [{'; '.join(details)}]", end="")
    print()
    return 0


# ── CLI parser construction ──────────────────────────────────────────────


def _add_common_arguments(sp: argparse.ArgumentParser) -> None:
    sp.add_argument(
        "--catalogue",
        type=str,
        required=True,
        metavar="PATH",
        help="Path to the flag catalogue (YAML)",
    )
    sp.add_argument(
        "--plain",
        action="store_true",
        default=False,
        help="Plain text output: no colours or terminal hyperlinks",
    )
    sp.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["debug", "info", "warning", "error", "critical"],
        help="Write a log file under logs/ at this level",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with resolve/list subcommands."""
    parser = argparse.ArgumentParser(
        prog="flagwarden",
        description=f"{APP_NAME} v{APP_VERSION}",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    subparsers = parser.add_subparsers(dest="command")

    # ── resolve ─────────────────────────────────────────────────
    sp_resolve = subparsers.add_parser(
        "resolve",
        help="Resolve the active flags for a project",
    )
    _add_common_arguments(sp_resolve)
    sp_resolve.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="Path to the project config (YAML) with a 'flags:' section",
    )
    sp_resolve.add_argument(
        "--command",
        dest="exec_command",
        type=str,
        default=None,
        metavar="NAME",
        help="Command being run (default: $FLAGWARDEN_EXECUTING_COMMAND or 'all')",
    )
    ci_group = sp_resolve.add_mutually_exclusive_group()
    ci_group.add_argument(
        "--ci",
        dest="ci",
        action="store_true",
        default=None,
        help="Treat this run as CI (default: auto-detect)",
    )
    ci_group.add_argument(
        "--no-ci",
        dest="ci",
        action="store_false",
        help="Treat this run as not CI",
    )
    sp_resolve.add_argument(
        "--site-id",
        type=str,
        default=None,
        metavar="ID",
        help="Site identity for gradual rollout sampling",
    )
    sp_resolve.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Print nothing when no flags are active",
    )
    sp_resolve.set_defaults(func=_cmd_resolve)

    # ── list ─────────────────────────────────────────────────────
    sp_list = subparsers.add_parser(
        "list",
        help="List every flag in a catalogue",
    )
    _add_common_arguments(sp_list)
    sp_list.set_defaults(func=_cmd_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Program entry point: parse arguments and dispatch to subcommand."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.log_level:
        from flagwarden.display.logging_config import setup_logging

        setup_logging(args.log_level, quiet=True)

    try:
        return args.func(args)
    except FlagWardenError as exc:
        module_logger.debug("Command %s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
