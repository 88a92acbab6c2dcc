"""Command line entry points for vantage."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from result import Err
from rich.console import Console
from rich.markup import escape

from vantage.config.loader import load_config
from vantage.config.schema import VantageConfig
from vantage.logging import configure_logging, get_logger
from vantage.services.checks import run_bundle_check
from vantage.services.comment import render_pr_comment
from vantage.services.runtime import evaluate_runtime, summarize_runs
from vantage.services.snapshots import load_chunks, load_runs
from vantage.services.summary import (
    render_bundle_diff,
    render_bundle_summary,
    render_budgets,
    render_metric_checks,
)
from vantage.services.threshold import calculate_score, should_block_pr

EXIT_OK = 0
EXIT_BLOCKED = 1
EXIT_USAGE = 2

log = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vantage",
        description="Enforce bundle-size and runtime performance budgets.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--config", type=Path, default=None, help="Path to the JSON config file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    bundle = subparsers.add_parser("bundle", help="Analyze a chunk snapshot against budgets.")
    bundle.add_argument("current", type=Path, help="JSON chunk snapshot of the current build.")
    bundle.add_argument("--previous", type=Path, default=None, help="JSON chunk snapshot of the base build.")
    bundle.add_argument("--comment", action="store_true", help="Print a pull-request comment instead of tables.")
    bundle.add_argument("--build-id", type=int, default=0, help="Build number shown in the comment header.")

    runtime = subparsers.add_parser("runtime", help="Evaluate recorded Lighthouse runs.")
    runtime.add_argument("runs", type=Path, help="JSON mapping of URL to Lighthouse runs.")

    return parser


def _config(path: Path | None, console: Console) -> VantageConfig | None:
    result = load_config(path)
    if isinstance(result, Err):
        console.print(f"[red]{escape(result.err_value)}[/red]")
        return None
    return result.ok_value


def _run_bundle(args: argparse.Namespace, config: VantageConfig, console: Console) -> int:
    current = load_chunks(args.current)
    if isinstance(current, Err):
        console.print(f"[red]{escape(current.err_value)}[/red]")
        return EXIT_USAGE

    previous = None
    if args.previous is not None:
        loaded = load_chunks(args.previous)
        if isinstance(loaded, Err):
            console.print(f"[red]{escape(loaded.err_value)}[/red]")
            return EXIT_USAGE
        previous = loaded.ok_value

    log.debug("Analyzing %d chunks", len(current.ok_value))
    report = run_bundle_check(current.ok_value, config.bundle, previous=previous)

    if args.comment:
        console.print(
            render_pr_comment([], report.diff, args.build_id, size_result=report.size_result),
            markup=False,
            highlight=False,
        )
    else:
        render_bundle_summary(console, report.analysis)
        if report.budgets:
            render_budgets(console, report.budgets)
        if report.diff is not None:
            render_bundle_diff(console, report.diff)
        if report.size_result is not None and report.size_result.message:
            console.print(report.size_result.message)

    if not report.passed:
        console.print("[bold red]Bundle checks failed.[/bold red]")
        return EXIT_BLOCKED
    console.print("[green]All bundle checks passed.[/green]")
    return EXIT_OK


def _run_runtime(args: argparse.Namespace, config: VantageConfig, console: Console) -> int:
    if config.runtime is None:
        console.print("[yellow]No runtime section in config; nothing to check.[/yellow]")
        return EXIT_OK

    loaded = load_runs(args.runs)
    if isinstance(loaded, Err):
        console.print(f"[red]{escape(loaded.err_value)}[/red]")
        return EXIT_USAGE

    summaries = [summarize_runs(runs) for runs in loaded.ok_value.values() if runs]
    checks = evaluate_runtime(summaries, config.runtime.thresholds)
    render_metric_checks(console, checks)

    results = [check.result for check in checks]
    console.print(f"Score: [bold]{calculate_score(results)}[/bold]")
    if should_block_pr(results):
        console.print("[bold red]Performance thresholds exceeded.[/bold red]")
        return EXIT_BLOCKED
    console.print("[green]All runtime checks passed.[/green]")
    return EXIT_OK


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=bool(args.verbose))
    console = console or Console()

    config = _config(args.config, console)
    if config is None:
        return EXIT_USAGE

    if args.command == "bundle":
        return _run_bundle(args, config, console)
    return _run_runtime(args, config, console)


if __name__ == "__main__":
    sys.exit(main())
