"""UI module for LocalWork.

Provides the Typer-based developer CLI. Run it directly:
    python -m localwork.ui.cli tools

CLI components are not exported here to avoid module loading issues when
running as a script.
"""

__all__ = []  # CLI is run directly, no exports needed
