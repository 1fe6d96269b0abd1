"""
Tests for the Typer CLI (token_radar/cli.py).

What we test
------------
validate-config:
  - Exit 0 with the parsed values; --full prints JSON.
  - Exit 1 with an [ERROR] line on an invalid config.

analyze:
  - Scores the sample snapshot, reports the skipped token.
  - Missing, malformed or non-UTF-8 snapshots exit 1 with an [ERROR] line.
  - --export-dir writes analysis_<date>.json and .csv; --export uses data.output_dir.

breakout:
  - Default threshold shortlists only the micro-cap breakout token.
  - --limit caps the list; a negative limit is rejected.

token:
  - Detail view with engagement and unlock sections.
  - Unknown or unscorable token exits 1.

All invocations pass --config pointing at a tmp TOML so log files land in
tmp_path, never in the repository.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from token_radar.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    log_file = (tmp_path / "logs" / "token_radar.log").as_posix()
    output_dir = (tmp_path / "outputs").as_posix()
    path = tmp_path / "test.toml"
    path.write_text(
        f"[data]\noutput_dir = \"{output_dir}\"\n\n"
        "[ranking]\nmin_breakout_probability = 60\nmax_candidates = 10\n\n"
        f"[logging]\nlevel = \"WARNING\"\nlog_file = \"{log_file}\"\n",
        encoding="utf-8",
    )
    return path


def _invoke(*args: str):
    return runner.invoke(app, list(args))


# ── validate-config ───────────────────────────────────────────────────────────


def test_validate_config_ok(config_path: Path) -> None:
    result = _invoke("validate-config", "--config", str(config_path))
    assert result.exit_code == 0, result.output
    assert "Min breakout %:   60" in result.output
    assert "[OK] Config valid." in result.output


def test_validate_config_full(config_path: Path) -> None:
    result = _invoke("validate-config", "--config", str(config_path), "--full")
    assert result.exit_code == 0
    assert '"max_candidates": 10' in result.output


def test_validate_config_invalid(tmp_path: Path) -> None:
    bad = tmp_path / "bad.toml"
    bad.write_text("[ranking]\nmax_candidates = 0\n", encoding="utf-8")
    result = _invoke("validate-config", "--config", str(bad))
    assert result.exit_code == 1
    assert "[ERROR] Config validation failed" in result.output


def test_validate_config_missing_file(tmp_path: Path) -> None:
    result = _invoke("validate-config", "--config", str(tmp_path / "nope.toml"))
    assert result.exit_code == 1
    assert "[ERROR]" in result.output


# ── analyze ───────────────────────────────────────────────────────────────────


def test_analyze_sample(config_path: Path, sample_snapshot_path: Path) -> None:
    result = _invoke(
        "analyze", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
    )
    assert result.exit_code == 0, result.output
    assert "=== Token Analysis ===" in result.output
    for symbol in ("RNDR", "FET", "LINK", "HNT", "NXC"):
        assert symbol in result.output
    assert "Skipped 1 token(s)" in result.output
    assert "[OK] Analyzed 5 token(s)." in result.output


def test_analyze_export(
    config_path: Path, sample_snapshot_path: Path, tmp_path: Path
) -> None:
    out_dir = tmp_path / "exports"
    result = _invoke(
        "analyze", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
        "--export-dir", str(out_dir),
    )
    assert result.exit_code == 0, result.output

    json_files = list(out_dir.glob("analysis_*.json"))
    csv_files = list(out_dir.glob("analysis_*.csv"))
    assert len(json_files) == 1
    assert len(csv_files) == 1

    payload = json.loads(json_files[0].read_text(encoding="utf-8"))
    assert payload["count"] == 5
    assert {r["token"]["id"] for r in payload["results"]} >= {"render-token", "nexa-compute"}


def test_analyze_export_to_config_output_dir(
    config_path: Path, sample_snapshot_path: Path, tmp_path: Path
) -> None:
    result = _invoke(
        "analyze", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
        "--export",
    )
    assert result.exit_code == 0, result.output
    assert len(list((tmp_path / "outputs").glob("analysis_*.csv"))) == 1


def test_analyze_missing_snapshot(config_path: Path, tmp_path: Path) -> None:
    result = _invoke(
        "analyze", "--config", str(config_path), "--snapshot", str(tmp_path / "none.json"),
    )
    assert result.exit_code == 1
    assert "[ERROR] Snapshot file not found" in result.output


def test_analyze_malformed_snapshot(config_path: Path, tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")
    result = _invoke("analyze", "--config", str(config_path), "--snapshot", str(bad))
    assert result.exit_code == 1
    assert "Malformed snapshot" in result.output


def test_analyze_non_utf8_snapshot(config_path: Path, tmp_path: Path) -> None:
    bad = tmp_path / "latin1.json"
    bad.write_bytes(b'{"tokens": []}\xff')
    result = _invoke("analyze", "--config", str(config_path), "--snapshot", str(bad))
    assert result.exit_code == 1
    assert "[ERROR] Malformed snapshot" in result.output
    assert "not UTF-8" in result.output


# ── breakout ──────────────────────────────────────────────────────────────────


def test_breakout_default_threshold(config_path: Path, sample_snapshot_path: Path) -> None:
    result = _invoke(
        "breakout", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
    )
    assert result.exit_code == 0, result.output
    assert "NXC (Nexa Compute)" in result.output
    assert "RNDR (Render)" not in result.output
    assert "[OK] 1 of 5 token(s) shortlisted." in result.output


def test_breakout_limit(config_path: Path, sample_snapshot_path: Path) -> None:
    result = _invoke(
        "breakout", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
        "--min-probability", "5", "--limit", "2",
    )
    assert result.exit_code == 0, result.output
    assert " 1. NXC" in result.output
    assert " 3. " not in result.output
    assert "[OK] 2 of 5 token(s) shortlisted." in result.output


def test_breakout_negative_limit(config_path: Path, sample_snapshot_path: Path) -> None:
    result = _invoke(
        "breakout", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
        "--limit", "-1",
    )
    assert result.exit_code == 1
    assert "[ERROR]" in result.output


# ── token ─────────────────────────────────────────────────────────────────────


def test_token_detail(config_path: Path, sample_snapshot_path: Path) -> None:
    result = _invoke(
        "token", "rndr", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
    )
    assert result.exit_code == 0, result.output
    assert "=== Render (RNDR) ===" in result.output
    assert "[SWEET SPOT]" in result.output
    assert "Unlock risk: none within 6 months" in result.output
    assert "tier 1: Binance, Coinbase" in result.output
    assert "Catalysts:" in result.output


def test_token_detail_unlock_warning(config_path: Path, sample_snapshot_path: Path) -> None:
    result = _invoke(
        "token", "fetch-ai", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
    )
    assert result.exit_code == 0, result.output
    assert "[WARN]" in result.output
    assert "Engagement" not in result.output


def test_token_not_found(config_path: Path, sample_snapshot_path: Path) -> None:
    result = _invoke(
        "token", "doge", "--config", str(config_path), "--snapshot", str(sample_snapshot_path),
    )
    assert result.exit_code == 1
    assert "not found" in result.output


def test_token_unscorable(config_path: Path, sample_snapshot_path: Path) -> None:
    result = _invoke(
        "token", "ghost-protocol", "--config", str(config_path),
        "--snapshot", str(sample_snapshot_path),
    )
    assert result.exit_code == 1
    assert "Cannot analyze" in result.output
