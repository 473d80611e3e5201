"""Allow ``python -m selectkit`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m selectkit`` behaves identically to the ``selectkit``
console script.
"""

from __future__ import annotations

from selectkit.cli.app import cli

if __name__ == "__main__":
    cli()
