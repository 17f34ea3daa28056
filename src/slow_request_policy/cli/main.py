"""CLI entry point for slow-request-policy.

Invoked as::

    slow-request-policy [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m slow_request_policy.cli.main

Commands
--------
- version  — Show version information
- weights  — Show the effective point multipliers
- score    — Score a described batch of requests
"""
from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


def _load_policy(config_file: str | None) -> object:
    """Return the ``PolicyConfig`` from ``config_file``, or the defaults.

    Exits with status 1 when the file is invalid.
    """
    from slow_request_policy.config import ConfigError, PolicyConfig, load_config

    if config_file is None:
        return PolicyConfig()
    try:
        return load_config(config_file)
    except ConfigError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="slow-request-policy")
def cli() -> None:
    """Score completed requests for detailed capture"""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from slow_request_policy import __version__

    console.print(f"[bold]slow-request-policy[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# weights
# ---------------------------------------------------------------------------


@cli.command(name="weights")
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML or JSON policy configuration.",
)
def weights_command(config_file: str | None) -> None:
    """Show the point multipliers the scorer would use."""
    policy = _load_policy(config_file)

    table = Table(title="Scoring weights", show_lines=False)
    table.add_column("Signal", style="bold cyan")
    table.add_column("Multiplier", justify="right")
    table.add_column("Applied to")

    table.add_row("speed", f"{policy.weights.speed:g}", "ln(1 + duration seconds)")
    table.add_row("age", f"{policy.weights.age:g}", "minutes since last stored")
    table.add_row("percentile", f"{policy.weights.percentile:g}", "approximate percentile")

    console.print(table)
    limit = policy.max_tracked_keys if policy.max_tracked_keys is not None else "unbounded"
    console.print(f"[dim]unknown score: {policy.unknown_score:g} | tracked keys: {limit}[/dim]")


# ---------------------------------------------------------------------------
# score
# ---------------------------------------------------------------------------


@cli.command(name="score")
@click.argument("requests_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML or JSON policy configuration.",
)
@click.option(
    "--uptime",
    default=0.0,
    show_default=True,
    type=click.FloatRange(min=0.0),
    help="Seconds since the scorer started.",
)
@click.option("--json-output", is_flag=True, help="Output raw JSON instead of a table.")
def score_command(
    requests_file: str,
    config_file: str | None,
    uptime: float,
    json_output: bool,
) -> None:
    """Score every request described in REQUESTS_FILE.

    REQUESTS_FILE is a YAML or JSON document with ``percentiles`` and
    ``requests`` entries.  Results are listed highest score first.

    Example::

      slow-request-policy score requests.yaml --uptime 600
    """
    from slow_request_policy.config import ConfigError
    from slow_request_policy.simulation import load_document, simulate

    policy = _load_policy(config_file)

    try:
        document = load_document(requests_file)
        breakdowns = simulate(document, policy, uptime=uptime)
    except (ConfigError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    ranked = sorted(breakdowns, key=lambda b: b.total, reverse=True)

    if json_output:
        console.print_json(json.dumps([b.to_dict() for b in ranked]))
        return

    if not ranked:
        console.print("[yellow]No requests to score.[/yellow]")
        return

    table = Table(title=f"Request scores (uptime {uptime:g}s)", show_lines=False)
    table.add_column("Key", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Age (s)", justify="right")
    table.add_column("Percentile", justify="right")
    table.add_column("Speed", justify="right")
    table.add_column("Pctl pts", justify="right")
    table.add_column("Age pts", justify="right")
    table.add_column("Score", justify="right", style="bold")

    for breakdown in ranked:
        if breakdown.is_unknown:
            table.add_row(
                f"[red]{breakdown.key}[/red]",
                f"{breakdown.duration:.3f}",
                "-",
                "-",
                "-",
                "-",
                "-",
                f"{breakdown.total:.4f}",
            )
            continue
        table.add_row(
            breakdown.key,
            f"{breakdown.duration:.3f}",
            f"{breakdown.age:.1f}",
            f"{breakdown.percentile:.3f}",
            f"{breakdown.speed_points:.4f}",
            f"{breakdown.percentile_points:.4f}",
            f"{breakdown.age_points:.4f}",
            f"{breakdown.total:.4f}",
        )

    console.print(table)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    cli()
