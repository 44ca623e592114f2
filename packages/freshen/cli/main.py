"""Command-line interface for freshen.

Runs a build command only when its inputs changed or its outputs are missing::

    freshen check --changed styles.scss --missing styles.css -- sassc styles.scss styles.css
    freshen run --config freshen.yaml styles
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from freshen.core.config.loader import configure_logging, load_freshen_config
from freshen.core.config.models import FreshenConfig, Rule, TrackedFile
from freshen.core.errors import CommandError, FreshenError
from freshen.core.store.factory import create_fingerprint_store
from freshen.core.store.models import FingerprintStoreConfig
from freshen.core.store.protocols import FingerprintStore
from freshen.core.tracker.engine import ChangeTracker
from freshen.core.tracker.fingerprint import make_fingerprint_fn
from freshen.core.utils.logging import get_logger
from freshen.core.utils.process import run_command

console = Console()
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ACTION_FAILED = 1
EXIT_ERROR = 2


def _parse_changed(value: str) -> TrackedFile:
    """Parse ``FILE`` or ``FILE=LOCATION``."""
    file, sep, location = value.partition("=")
    if not file:
        raise argparse.ArgumentTypeError(f"Invalid --changed value: {value!r}")
    return TrackedFile(file=Path(file), fingerprint=location if sep else None)


def _strip_separator(command: list[str]) -> list[str]:
    if command and command[0] == "--":
        return command[1:]
    return command


def _build_tracker(rule: Rule, store: FingerprintStore, config: FreshenConfig) -> ChangeTracker:
    tracker = ChangeTracker(
        store=store,
        fingerprint=make_fingerprint_fn(config.algorithm, config.chunk_size),
    )
    for tracked in rule.changed:
        tracker.changed(tracked.file, tracked.location)
    tracker.missing(*rule.missing)
    return tracker


def run_rule(
    rule: Rule,
    store: FingerprintStore,
    config: FreshenConfig,
    *,
    force: bool = False,
    dry_run: bool = False,
) -> int:
    """Evaluate one rule and run its command if needed.

    Returns:
        EXIT_OK if the command succeeded or did not need to run,
        EXIT_ACTION_FAILED if it ran and failed
    """
    rule_logger = get_logger(__name__, rule=rule.name)
    rule_logger.debug(
        f"Evaluating {len(rule.changed)} tracked file(s), {len(rule.missing)} must-exist path(s)"
    )
    tracker = _build_tracker(rule, store, config)

    if dry_run:
        evaluation = tracker.check()
        stale = force or evaluation.missing_detected or evaluation.change_detected
        state = "[yellow]stale[/yellow]" if stale else "[green]up to date[/green]"
        console.print(f"{escape(rule.name)}: {state}")
        return EXIT_OK

    evaluation = tracker.execute(
        lambda: run_command(*rule.command, cwd=rule.cwd),
        force=force,
    )

    if not evaluation.action_invoked:
        console.print(f"{escape(rule.name)}: [green]up to date[/green]")
        return EXIT_OK

    if evaluation.action_succeeded:
        console.print(f"{escape(rule.name)}: [green]rebuilt[/green]")
        return EXIT_OK

    console.print(f"[red]{escape(rule.name)}: command failed[/red]")
    error = evaluation.action_error
    if isinstance(error, CommandError) and error.stderr:
        console.print(error.stderr.rstrip(), markup=False, highlight=False)
    elif error is not None:
        console.print(str(error), markup=False, highlight=False)
    return EXIT_ACTION_FAILED


def _run_with_store(
    rules: list[Rule], config: FreshenConfig, *, force: bool, dry_run: bool
) -> int:
    store = create_fingerprint_store(config.store)
    try:
        exit_code = EXIT_OK
        for rule in rules:
            exit_code = max(exit_code, run_rule(rule, store, config, force=force, dry_run=dry_run))
        return exit_code
    finally:
        store.close()


def cmd_check(args: argparse.Namespace) -> int:
    """Run one ad-hoc rule described on the command line."""
    command = _strip_separator(args.command)
    if not command:
        console.print("[red]ERROR: no command given (use: freshen check ... -- COMMAND)[/red]")
        return EXIT_ERROR

    store_config = FingerprintStoreConfig(backend=args.store_backend, path=args.store_path)
    config = FreshenConfig(store=store_config, algorithm=args.algorithm)
    rule = Rule(
        name=args.name,
        changed=list(args.changed),
        missing=[Path(p) for p in args.missing],
        command=command,
    )
    return _run_with_store([rule], config, force=args.force, dry_run=args.dry_run)


def cmd_run(args: argparse.Namespace, config: FreshenConfig) -> int:
    """Run the rules declared in the config file."""
    if not config.rules:
        console.print("[yellow]No rules configured[/yellow]")
        return EXIT_OK

    if args.rules:
        try:
            rules = [config.get_rule(name) for name in args.rules]
        except KeyError as e:
            console.print(f"[red]ERROR: unknown rule {escape(repr(e.args[0]))}[/red]")
            return EXIT_ERROR
    else:
        rules = list(config.rules)

    return _run_with_store(rules, config, force=args.force, dry_run=args.dry_run)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="freshen",
        description="freshen - run a command only when its inputs changed or outputs are missing",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--force", action="store_true", help="Run even if nothing changed"
        )
        parser.add_argument(
            "--dry-run", action="store_true", help="Report what would run without running it"
        )

    check = sub.add_parser("check", help="Run one command if files changed or are missing")
    check.add_argument(
        "--changed",
        action="append",
        default=[],
        type=_parse_changed,
        metavar="FILE[=LOCATION]",
        help="Tracked input; LOCATION defaults to FILE.sha256",
    )
    check.add_argument(
        "--missing",
        action="append",
        default=[],
        metavar="PATH",
        help="Output whose absence forces the command",
    )
    check.add_argument(
        "--store-backend",
        default="sidecar",
        choices=["sidecar", "lines", "memory", "sqlite"],
        help="Fingerprint store backend (default: sidecar)",
    )
    check.add_argument("--store-path", default=None, type=Path, help="Store file path")
    check.add_argument("--algorithm", default="sha256", help="Hash algorithm (default: sha256)")
    check.add_argument("--name", default="check", help="Label used in output")
    add_common(check)
    check.add_argument("command", nargs=argparse.REMAINDER, help="Command to run after --")

    run = sub.add_parser("run", help="Run the rules from a config file")
    run.add_argument(
        "--config",
        default=None,
        type=Path,
        help="Path to config file (default: freshen.yaml)",
    )
    add_common(run)
    run.add_argument("rules", nargs="*", help="Rule names (default: all)")

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    try:
        config = load_freshen_config(getattr(args, "config", None))
        if args.log_level:
            config = config.model_copy(
                update={"logging": config.logging.model_copy(update={"level": args.log_level})}
            )
        configure_logging(config)

        if args.cmd == "check":
            return cmd_check(args)
        return cmd_run(args, config)
    except (FreshenError, ValidationError, ValueError, FileNotFoundError) as e:
        logger.debug("freshen failed", exc_info=True)
        console.print(f"[red]ERROR: {escape(str(e))}[/red]", highlight=False)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
