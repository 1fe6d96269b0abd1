"""
Token Radar — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the market snapshot.
  4. Run the engine (analyze / rank).
  5. Report result to stdout.

Install and run::

    pip install -e .
    token-radar --help
    token-radar validate-config
    token-radar analyze --export-dir data/outputs
    token-radar breakout --min-probability 55
    token-radar token render-token
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="token-radar",
    help="Crypto token scoring and breakout radar — local-first research CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from token_radar.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from token_radar.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_snapshot_or_exit(snapshot_path: Optional[str], config):
    """Load the snapshot named on the command line or in config."""
    from token_radar.ingestion.snapshot_loader import SnapshotFormatError, load_market_snapshot

    path = Path(snapshot_path) if snapshot_path else Path(config.data.snapshot_file)
    try:
        return load_market_snapshot(path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except SnapshotFormatError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


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

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Snapshot file:    {config.data.snapshot_file}")
    typer.echo(f"  Output dir:       {config.data.output_dir}")
    typer.echo(f"  Min breakout %:   {config.ranking.min_breakout_probability}")
    typer.echo(f"  Max candidates:   {config.ranking.max_candidates}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("analyze")
def analyze(
    snapshot_path: Optional[str] = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Snapshot JSON file. Defaults to config.data.snapshot_file.",
    ),
    export_dir: Optional[str] = typer.Option(
        None,
        "--export-dir",
        help="Write analysis_<date>.json and analysis_<date>.csv into this directory.",
    ),
    export: bool = typer.Option(
        False,
        "--export",
        help="Export into config.data.output_dir (ignored when --export-dir is given).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score every token in a snapshot and print the analysis table.

    \b
    Per token:
      overall score (0-100), risk tier, recommendation,
      breakout probability (5-95).

    Tokens with a non-positive market cap are skipped with a warning.
    """
    from token_radar.reporting.export import export_analysis
    from token_radar.reporting.formatters import format_analysis_table
    from token_radar.scoring.analyzer import analyze_snapshot

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    snapshot = _load_snapshot_or_exit(snapshot_path, config)
    results = analyze_snapshot(snapshot.entries)

    typer.echo(format_analysis_table(results, source=str(snapshot.path)))

    skipped = len(snapshot.entries) - len(results)
    if skipped:
        typer.echo("")
        typer.echo(f"  Skipped {skipped} token(s) with unusable market data (see log).")

    if export_dir or export:
        out_dir = Path(export_dir) if export_dir else Path(config.data.output_dir)
        json_path, csv_path = export_analysis(
            results, out_dir, datetime.now(tz=timezone.utc), source=str(snapshot.path),
        )
        typer.echo("")
        typer.echo(f"  Wrote {json_path}")
        typer.echo(f"  Wrote {csv_path}")

    typer.echo("")
    typer.echo(f"[OK] Analyzed {len(results)} token(s).")


@app.command("breakout")
def breakout(
    snapshot_path: Optional[str] = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Snapshot JSON file. Defaults to config.data.snapshot_file.",
    ),
    min_probability: Optional[int] = typer.Option(
        None,
        "--min-probability",
        help="Inclusive breakout probability threshold. Uses config default if omitted.",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        help="Maximum number of candidates. Uses config default if omitted.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the ranked breakout candidate shortlist with signals."""
    from token_radar.reporting.formatters import format_breakout_candidates
    from token_radar.scoring.analyzer import analyze_snapshot
    from token_radar.scoring.ranker import rank_breakout_candidates

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    threshold = (
        min_probability if min_probability is not None
        else config.ranking.min_breakout_probability
    )
    max_candidates = limit if limit is not None else config.ranking.max_candidates
    if max_candidates < 0:
        typer.echo("[ERROR] --limit must be non-negative.", err=True)
        raise typer.Exit(code=1)

    snapshot = _load_snapshot_or_exit(snapshot_path, config)
    results = analyze_snapshot(snapshot.entries)
    candidates = rank_breakout_candidates(
        results, min_probability=threshold, limit=max_candidates,
    )

    typer.echo(format_breakout_candidates(candidates, threshold))
    typer.echo("")
    typer.echo(f"[OK] {len(candidates)} of {len(results)} token(s) shortlisted.")


@app.command("token")
def token_detail(
    token_id: str = typer.Argument(..., help="Token id or symbol (e.g. render-token or RNDR)."),
    snapshot_path: Optional[str] = typer.Option(
        None,
        "--snapshot",
        "-s",
        help="Snapshot JSON file. Defaults to config.data.snapshot_file.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Show the detailed analysis of one token.

    \b
    Includes the per-category score breakdown, breakout signals, narrative
    catalysts and, when the snapshot carries the evidence, the social
    engagement sweet-spot check and token unlock risk.
    """
    from token_radar.reporting.formatters import format_token_detail
    from token_radar.scoring.analyzer import analyze_entry
    from token_radar.scoring.engagement import assess_sentiment
    from token_radar.scoring.narrative import classify_narrative
    from token_radar.scoring.ratios import InvalidInputError, is_unlock_risky
    from token_radar.scoring.scorer import compute_score_breakdown

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    snapshot = _load_snapshot_or_exit(snapshot_path, config)
    entry = snapshot.find(token_id)
    if entry is None:
        typer.echo(f"[ERROR] Token '{token_id}' not found in {snapshot.path}.", err=True)
        raise typer.Exit(code=1)

    try:
        result = analyze_entry(entry)
        narrative = classify_narrative(entry.token, entry.description, entry.categories)
        breakdown = compute_score_breakdown(entry.token, entry.developer_metrics, narrative)
    except InvalidInputError as exc:
        typer.echo(f"[ERROR] Cannot analyze '{token_id}': {exc}", err=True)
        raise typer.Exit(code=1)

    engagement = assess_sentiment(entry.sentiment) if entry.sentiment is not None else None
    unlock_risky = None
    if entry.tokenomics is not None:
        unlock_risky = is_unlock_risky(
            entry.tokenomics.next_unlock_date,
            entry.tokenomics.next_unlock_percentage,
        )

    typer.echo(format_token_detail(result, breakdown, engagement, unlock_risky))
    typer.echo("")
    typer.echo("[OK] Done.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
