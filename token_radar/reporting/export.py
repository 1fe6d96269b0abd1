"""
Analysis export: one dated JSON document and one flat CSV per ``analyze`` run.

Files land in the chosen output directory as::

    analysis_<YYYYMMDD>.json   full nested AnalysisResult dumps plus run metadata
    analysis_<YYYYMMDD>.csv    one row per token, columns in EXPORT_FIELDNAMES

A second run on the same UTC day overwrites that day's pair.  The CSV always
carries its header row, so an empty batch still opens as a valid sheet.
Signals are joined into a single ``"; "``-separated column in ranked order.
"""

from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

from token_radar.models.analysis import AnalysisResult

EXPORT_FIELDNAMES: list[str] = [
    "token_id",
    "symbol",
    "name",
    "price",
    "market_cap",
    "volume_24h",
    "price_change_24h",
    "price_change_7d",
    "price_change_30d",
    "narrative",
    "overall_score",
    "risk_level",
    "recommendation",
    "breakout_probability",
    "signal_count",
    "signals",
    "has_developer_metrics",
]


def analysis_export_paths(out_dir: Path, generated_at: datetime) -> tuple[Path, Path]:
    """Return the ``(json_path, csv_path)`` pair for a run at ``generated_at``."""
    stem = f"analysis_{generated_at.strftime('%Y%m%d')}"
    return out_dir / f"{stem}.json", out_dir / f"{stem}.csv"


def flatten_results_for_export(results: Iterable[AnalysisResult]) -> list[dict]:
    """One flat row per analyzed token, columns as in ``EXPORT_FIELDNAMES``."""
    rows: list[dict] = []
    for r in results:
        t = r.token
        rows.append(
            {
                "token_id":              t.id,
                "symbol":                t.symbol,
                "name":                  t.name,
                "price":                 t.price,
                "market_cap":            t.market_cap,
                "volume_24h":            t.volume_24h,
                "price_change_24h":      t.price_change_24h,
                "price_change_7d":       t.price_change_7d,
                "price_change_30d":      t.price_change_30d,
                "narrative":             r.narrative.tag.value if r.narrative else "",
                "overall_score":         r.overall_score,
                "risk_level":            r.risk_level,
                "recommendation":        r.recommendation,
                "breakout_probability":  r.breakout_probability,
                "signal_count":          len(r.signals),
                "signals":               "; ".join(s.description for s in r.signals),
                "has_developer_metrics": r.developer_metrics is not None,
            }
        )
    return rows


def results_to_json_payload(
    results: Iterable[AnalysisResult],
    generated_at: str,
    source: str = "",
) -> dict:
    """Build the ``analysis_<date>.json`` document (full nested results)."""
    items = [r.model_dump(mode="json") for r in results]
    return {
        "generated_at": generated_at,
        "source":       source,
        "count":        len(items),
        "results":      items,
    }


def write_analysis_csv(results: Sequence[AnalysisResult], path: Path) -> Path:
    """Write the flat per-token sheet; parent directories are created."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=EXPORT_FIELDNAMES)
        writer.writeheader()
        writer.writerows(flatten_results_for_export(results))
    return path


def write_analysis_json(
    results: Sequence[AnalysisResult],
    path: Path,
    generated_at: str,
    source: str = "",
) -> Path:
    """Write the nested JSON document; parent directories are created."""
    payload = results_to_json_payload(results, generated_at, source=source)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def export_analysis(
    results: Sequence[AnalysisResult],
    out_dir: Path,
    generated_at: datetime,
    source: str = "",
) -> tuple[Path, Path]:
    """Write the JSON and CSV pair for one run.

    Args:
        results:      Analysis results in display order.
        out_dir:      Target directory (created if missing).
        generated_at: Run timestamp; its UTC date names the files.
        source:       Snapshot path recorded in the JSON document.

    Returns:
        ``(json_path, csv_path)`` as written.
    """
    json_path, csv_path = analysis_export_paths(out_dir, generated_at)
    write_analysis_json(results, json_path, generated_at.isoformat(), source=source)
    write_analysis_csv(results, csv_path)
    return json_path, csv_path
