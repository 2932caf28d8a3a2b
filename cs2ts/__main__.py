# File: cs2ts/__main__.py
"""
cs2ts - Module entry point.

Allows running the translator directly via::

    python -m cs2ts -s Models.cs -o models.ts

This module simply delegates to the CLI entry point defined in ``cs2ts.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from cs2ts.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
