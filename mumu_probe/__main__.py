"""
Main entry point for the mumu-probe application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import os
import sys

import typer
from rich.console import Console

from mumu_probe.cli.app import app
from mumu_probe.cli.formatters import format_error_with_suggestions
from mumu_probe.exceptions import MumuProbeError

# Exit status typer uses after printing usage for bad arguments
USAGE_ERROR_EXIT_CODE = 2


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("mumu_probe")
    console = Console(stderr=True)

    try:
        app(prog_name="mumu-probe")
    except SystemExit as e:
        # Usage has already been printed to stderr; wrong arity exits 1
        if e.code == USAGE_ERROR_EXIT_CODE:
            sys.exit(1)
        raise
    except (KeyboardInterrupt, asyncio.CancelledError, typer.Abort):
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(1)
    except MumuProbeError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        console.print()
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
