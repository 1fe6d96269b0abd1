"""
token_radar.reporting — Terminal formatting and flat-file export.

Modules:
  formatters — ASCII terminal formatters for Typer CLI commands.
  export     — CSV/JSON export helpers for analysis results.
"""
