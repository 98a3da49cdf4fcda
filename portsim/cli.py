"""
Command-Line Interface for PortSim.

Purpose
-------
Runs the multi-portfolio Monte Carlo simulation and prints its summary
table without writing Python code.

Commands
--------
- run: Simulate all portfolios under a time budget and print the results
- portfolios: List the portfolios a run would simulate
- config: Validate and display run configuration files

Example Usage
-------------
    # Classic run: two built-in portfolios, 20 years, 10,000 trajectories
    $ portsim run

    # Run from a config file with overrides
    $ portsim run --config run.json --years 30 --iterations 50000 --time-budget-ms 5000

    # Original fixed-width output
    $ portsim run --plain

    # Validate configuration
    $ portsim config validate run.json

Exit Codes
----------
0  every portfolio completed
1  invalid configuration or arguments
2  at least one portfolio timed out or failed
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
import pydantic
from rich.console import Console
from rich.table import Table

from .config import AppSettings, RunConfig, SimulationConfig
from .exceptions import PortSimError
from .logger import configure_logging

# Version
__version__ = "0.1.0"

EXIT_CONFIG_ERROR = 1
EXIT_INCOMPLETE = 2


def _resolve_config(config: Optional[Path], settings: AppSettings) -> RunConfig:
    """Load the run file, or build the built-in run with the settings' budget."""
    from .serialization import load_run_config

    if config is not None:
        return load_run_config(config)
    return RunConfig(time_budget_ms=settings.default_time_budget_ms)


@click.group()
@click.version_option(version=__version__, prog_name="portsim")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def main(ctx: click.Context, quiet: bool) -> None:
    """
    PortSim - Monte Carlo simulation of inflation-adjusted portfolio outcomes.

    Simulates many multi-year return trajectories per portfolio, in
    parallel, and reports median, best-case and worst-case ending values.

    Use 'portsim COMMAND --help' for command-specific help.
    """
    ctx.ensure_object(dict)
    settings = AppSettings()
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = Console()
    configure_logging("ERROR" if quiet else settings.log_level)


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to run configuration file (JSON). Defaults to the built-in portfolios."
)
@click.option("--amount", "-a", type=float, default=None,
              help="Starting amount per trajectory (default: 100000)")
@click.option("--years", "-y", type=int, default=None,
              help="Simulation horizon in years (default: 20)")
@click.option("--inflation", "-i", type=float, default=None,
              help="Annual inflation rate in percent (default: 3.5)")
@click.option("--iterations", "-n", type=click.IntRange(min=1), default=None,
              help="Monte Carlo trajectories per portfolio (default: 10000)")
@click.option("--time-budget-ms", "-t", type=click.IntRange(min=0), default=None,
              help="Wall-clock budget for the whole run in ms (default: 2000)")
@click.option("--max-workers", "-w", type=click.IntRange(min=1), default=None,
              help="Maximum simulation threads (default: one per portfolio)")
@click.option("--plain", is_flag=True,
              help="Print the fixed-width ASCII table instead of a rich table")
@click.pass_context
def run(
    ctx: click.Context,
    config: Optional[Path],
    amount: Optional[float],
    years: Optional[int],
    inflation: Optional[float],
    iterations: Optional[int],
    time_budget_ms: Optional[int],
    max_workers: Optional[int],
    plain: bool,
) -> None:
    """
    Run the Monte Carlo simulation.

    Command-line values override the run file, which overrides defaults.

    Example:
        portsim run -c run.json -y 30 -n 20000 -t 5000
    """
    console: Console = ctx.obj["console"]
    settings: AppSettings = ctx.obj["settings"]
    quiet = ctx.obj.get("quiet", False)

    # Import here to avoid slow startup
    from .orchestrator import SimulationOrchestrator
    from .reporting import build_table, format_elapsed, format_plain_table

    overrides = {
        "starting_amount": amount,
        "horizon_years": years,
        "inflation_rate_percent": inflation,
        "iterations_per_portfolio": iterations,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}

    try:
        run_config = _resolve_config(config, settings)
        simulation = SimulationConfig.model_validate(
            {**run_config.simulation.model_dump(), **overrides}
        )
        budget_ms = time_budget_ms if time_budget_ms is not None else run_config.time_budget_ms
        params = simulation.to_parameters()
        portfolios = run_config.to_portfolios()
        orchestrator = SimulationOrchestrator(max_workers=max_workers or settings.max_workers)
    except (PortSimError, pydantic.ValidationError) as e:
        click.echo(f"Error in configuration: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if not quiet:
        console.print(
            f"[bold]Simulating {len(portfolios)} portfolio(s): "
            f"{params.iterations_per_portfolio:,} trajectories x {params.horizon_years} years, "
            f"budget {budget_ms} ms[/bold]"
        )

    report = orchestrator.run_all(portfolios, params, time_budget=budget_ms / 1000.0)

    if plain:
        click.echo(format_plain_table(report))
    else:
        console.print(build_table(report))
    click.echo(format_elapsed(report))

    if not report.all_completed:
        if not quiet:
            click.echo(
                f"{len(report.timed_out)} timed out, {len(report.failed)} failed.",
                err=True,
            )
        sys.exit(EXIT_INCOMPLETE)


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Run configuration file (JSON). Defaults to the built-in portfolios."
)
@click.pass_context
def portfolios(ctx: click.Context, config: Optional[Path]) -> None:
    """List the portfolios a run would simulate."""
    console: Console = ctx.obj["console"]
    try:
        run_config = _resolve_config(config, ctx.obj["settings"])
    except PortSimError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    table = Table(title="Portfolios", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Mean Return", justify="right")
    table.add_column("Risk", justify="right")
    for p in run_config.portfolios:
        table.add_row(p.name, f"{p.mean_return:.4f}%", f"{p.risk:.4f}%")
    console.print(table)


@main.group()
def config() -> None:
    """Configuration file utilities."""
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def config_validate(config_file: Path) -> None:
    """Validate a run configuration file."""
    from .serialization import load_run_config

    try:
        cfg = load_run_config(config_file)
    except PortSimError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(
        f"Configuration is valid: {len(cfg.portfolios)} portfolio(s), "
        f"{cfg.simulation.iterations_per_portfolio} iterations, "
        f"{cfg.simulation.horizon_years} years, budget {cfg.time_budget_ms} ms"
    )


@config.command("show")
@click.argument("config_file", required=False,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def config_show(ctx: click.Context, config_file: Optional[Path]) -> None:
    """Print the resolved run configuration as JSON."""
    from .serialization import run_config_to_dict

    try:
        cfg = _resolve_config(config_file, ctx.obj["settings"])
    except PortSimError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(json.dumps(run_config_to_dict(cfg), indent=2))


if __name__ == "__main__":
    main()
