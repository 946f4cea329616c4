"""Main Typer application.

Entry point: ``seaforge`` (configured via pyproject.toml scripts).

The command defines no options of its own: everything after argv[0],
``--help`` included, is handed to the packaged executable.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from seaforge.config import ForgeSettings
from seaforge.core.orchestrator import Orchestrator
from seaforge.core.pipeline import StageFailedError

err_console = Console(stderr=True)

app = typer.Typer(
    name="seaforge",
    help="Build the packaged single executable if it changed, register it, and run it.",
    add_completion=False,
    rich_markup_mode="rich",
)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    }
)
def forge_cmd(
    args: Optional[List[str]] = typer.Argument(
        None, help="Arguments forwarded verbatim to the packaged executable."
    ),
) -> None:
    """Build, register and launch the packaged executable."""
    settings = ForgeSettings()
    configure_logging(settings.log_level)

    orchestrator = Orchestrator(settings)
    try:
        report = orchestrator.run(args or [])
    except StageFailedError as exc:
        err_console.print(f"[bold red]{escape(exc.stage)} failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=exc.exit_code)

    raise typer.Exit(code=report.exit_code)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
