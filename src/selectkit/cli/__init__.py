"""CLI layer — argument parsing, rendering of results, error boundary.

Only this layer prints messages for the user, and only
:func:`selectkit.cli.app.cli` turns exceptions into exit codes.
"""
