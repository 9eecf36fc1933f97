"""
woo_optimizer.reporting — CLI text output and file export.

Consumes the output record; never derives or renders anything itself.

Modules:
  formatters — Plain-text formatters for Typer CLI commands.
  export     — Document, recommendations.json and manifest.json writers.
"""
