"""CLI application entry point and command routing for selectkit.

This module is the **sole error boundary** for the entire application.
It catches :class:`~selectkit.exceptions.SelectKitError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No selection logic lives here — all work is delegated to the public
  API in :mod:`selectkit.api` and to :mod:`selectkit.cli.text_prompt`.
* Widgets and messages go to stderr; only answers are written to stdout,
  so ``choice=$(selectkit select a b c)`` works.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from rich.markup import escape

from selectkit.cli import exit_codes
from selectkit.cli.console import console, get_rich_console
from selectkit.core.models import Option
from selectkit.exceptions import CancelledError, SelectKitError, TerminatedError
from selectkit.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def parse_option(text: str) -> Option:
    """Parse ``LABEL`` or ``LABEL=VALUE`` from the command line."""
    label, sep, value = text.partition("=")
    if not label:
        raise argparse.ArgumentTypeError(f"option {text!r} has an empty label")
    return Option(label=label, value=value if sep else "")


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "options",
        nargs="+",
        type=parse_option,
        metavar="OPTION",
        help="An option as LABEL or LABEL=VALUE.",
    )
    parser.add_argument("--label", default="Select an option", help="Question shown above the list.")
    parser.add_argument("--default", default=None, help="Preselected value, label or 1-based number.")
    parser.add_argument("--page-size", type=_positive_int, default=None, help="Visible rows.")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``selectkit select OPTION...``  — pick one option
    * ``selectkit multi OPTION...``   — pick one or more options
    * ``selectkit ask LABEL``         — free-text answer
    * ``selectkit confirm LABEL``     — yes/no answer via exit code
    * ``selectkit doctor``            — terminal diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="selectkit",
        description="Interactive selection prompts for shell scripts.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log engine decisions to stderr.",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    select_parser = commands.add_parser("select", help="Choose exactly one option.")
    _add_selection_arguments(select_parser)

    multi_parser = commands.add_parser("multi", help="Choose one or more options.")
    _add_selection_arguments(multi_parser)
    multi_parser.add_argument(
        "--continue-text",
        default="Continue",
        help="Name of the confirm action shown in the hint.",
    )

    ask_parser = commands.add_parser("ask", help="Ask for a line of text.")
    ask_parser.add_argument("label", help="Question to ask.")
    ask_parser.add_argument("--default", default="", help="Pre-filled answer.")
    ask_parser.add_argument("--required", action="store_true", help="Refuse an empty answer.")

    confirm_parser = commands.add_parser("confirm", help="Ask a yes/no question.")
    confirm_parser.add_argument("label", help="Question to ask.")
    confirm_parser.add_argument(
        "--default-no",
        action="store_true",
        help="Make 'no' the default answer.",
    )

    commands.add_parser("doctor", help="Show terminal diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _emit(answer: str) -> None:
    """Write an answer to stdout, unstyled."""
    get_rich_console(stderr=False).print(answer, markup=False, soft_wrap=True)


def _handle_select(args: argparse.Namespace, *, multi: bool) -> int:
    from selectkit.api import multi_select, select

    if multi:
        answer = multi_select(
            args.label,
            args.options,
            default=args.default,
            continue_text=args.continue_text,
            page_size=args.page_size,
        )
    else:
        answer = select(
            args.label,
            args.options,
            default=args.default,
            page_size=args.page_size,
        )
    _emit(answer)
    return exit_codes.SUCCESS


def _handle_ask(args: argparse.Namespace) -> int:
    from selectkit.cli.text_prompt import prompt_text

    _emit(prompt_text(args.label, default=args.default, required=args.required))
    return exit_codes.SUCCESS


def _handle_confirm(args: argparse.Namespace) -> int:
    from selectkit.cli.text_prompt import prompt_confirm

    if prompt_confirm(args.label, default=not args.default_no):
        return exit_codes.SUCCESS
    return exit_codes.DECLINED


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from selectkit.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the selectkit CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from selectkit.cli.logging_setup import setup_logging

    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS
    if args.command == "select":
        return _handle_select(args, multi=False)
    if args.command == "multi":
        return _handle_select(args, multi=True)
    if args.command == "ask":
        return _handle_ask(args)
    if args.command == "confirm":
        return _handle_confirm(args)
    return _handle_doctor()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except TerminatedError as exc:
        console.print(f"[yellow]{escape(str(exc))}[/yellow]")
        sys.exit(exit_codes.terminated_by(exc.signum))
    except CancelledError:
        console.print("[yellow]Cancelled.[/yellow]")
        sys.exit(exit_codes.CANCELLED)
    except SelectKitError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
