"""
Roulette Series Analyzer — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Feed outcomes through a ``SpinSession``.
  5. Report statistics and recommendations to stdout.

Install and run::

    pip install -e .
    roulette-analyzer --help
    roulette-analyzer validate-config
    roulette-analyzer simulate --spins 50 --seed 7
    roulette-analyzer analyze 1 3 5 17 0 32
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="roulette-analyzer",
    help="Roulette series analyzer — category streak statistics and bet recommendations.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from roulette_analyzer.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from roulette_analyzer.utils.logging import configure_logging
    configure_logging(config.logging)


def _build_session(config, seed: Optional[int], stake: Optional[float]):
    from roulette_analyzer.analysis.engine import AnalyzerEngine
    from roulette_analyzer.simulation.session import SpinSession

    if stake is not None and stake <= 0:
        typer.echo(f"[ERROR] --stake must be > 0, got {stake}.", err=True)
        raise typer.Exit(code=1)

    rng_seed = seed if seed is not None else config.simulation.seed
    return SpinSession(
        AnalyzerEngine(config.thresholds),
        rng=random.Random(rng_seed),
        history_size=config.simulation.history_size,
        base_stake=stake if stake is not None else config.staking.base_stake,
    )


def _report(session, show_stats: bool = True) -> None:
    from roulette_analyzer.reporting.formatters import (
        format_history,
        format_recommendations,
        format_stats_table,
    )

    engine = session.engine
    if show_stats:
        typer.echo(format_stats_table(engine.snapshot(), engine.thresholds))
    typer.echo(format_history(session.history))
    typer.echo(format_recommendations(engine.evaluate(session.base_stake)))


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    thresholds = ", ".join(f"{k}={v}" for k, v in config.thresholds.model_dump().items())
    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Thresholds:   {thresholds}")
    typer.echo(f"  Base stake:   {config.staking.base_stake:.2f}")
    typer.echo(f"  Spins:        {config.simulation.spins}")
    typer.echo(f"  Delay (ms):   {config.simulation.delay_ms}")
    typer.echo(f"  History size: {config.simulation.history_size}")
    typer.echo(f"  Seed:         {config.simulation.seed}")
    typer.echo(f"  Log level:    {config.logging.level}")
    typer.echo(f"  Debug mode:   {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")


@app.command("simulate")
def simulate(
    spins: Optional[int] = typer.Option(
        None,
        "--spins",
        help="Number of random spins (default from config).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for reproducible runs.",
    ),
    delay_ms: Optional[int] = typer.Option(
        None,
        "--delay-ms",
        help="Pause between spins in milliseconds (default from config).",
    ),
    stake: Optional[float] = typer.Option(
        None,
        "--stake",
        help="Base stake for recommendations (default from config).",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Skip the per-category statistics tables.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Run a timed series of random spins and print the final analysis."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    n_spins = spins if spins is not None else config.simulation.spins
    delay = delay_ms if delay_ms is not None else config.simulation.delay_ms
    if n_spins < 1:
        typer.echo(f"[ERROR] --spins must be >= 1, got {n_spins}.", err=True)
        raise typer.Exit(code=1)
    if delay < 0:
        typer.echo(f"[ERROR] --delay-ms must be >= 0, got {delay}.", err=True)
        raise typer.Exit(code=1)

    session = _build_session(config, seed, stake)
    typer.echo(f"Simulating {n_spins} spins ({delay} ms apart)...")
    try:
        session.run(n_spins, delay_ms=delay)
    except KeyboardInterrupt:
        session.stop()
        typer.echo("Interrupted.", err=True)

    _report(session, show_stats=not quiet)


@app.command("analyze")
def analyze(
    outcomes: list[str] = typer.Argument(
        ...,
        help="Observed outcomes (0-36), oldest first. Place them after -- "
        "so negative values are validated rather than read as options.",
    ),
    stake: Optional[float] = typer.Option(
        None,
        "--stake",
        help="Base stake for recommendations (default from config).",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Skip the per-category statistics tables.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Analyze a sequence of manually entered outcomes.

    All outcomes are validated before any is applied.  Pass them after
    ``--`` (e.g. ``analyze --quiet -- 1 -3``); otherwise a value such as
    ``-3`` is taken for an unknown option.
    """
    from roulette_analyzer.taxonomy.bet_taxonomy import InvalidOutcomeError
    from roulette_analyzer.simulation.session import parse_outcome

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        parsed = [parse_outcome(text) for text in outcomes]
    except InvalidOutcomeError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    session = _build_session(config, seed=None, stake=stake)
    for outcome in parsed:
        session.enter(outcome)

    _report(session, show_stats=not quiet)


if __name__ == "__main__":
    app()
