"""CLI commands: one module per mode (worklist, thread actions, serve, validate-config)."""

import typer
from typer import Typer

from inbox_triage.cli import serve_mode, thread_mode, worklist_mode, validate_config as validate_config_module
from inbox_triage.utils.logger import configure_logging

app = Typer(help="Real-estate inbox triage")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level (one event per triage pass)"),
) -> None:
    if verbose:
        configure_logging(verbose=True)


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(worklist_mode.worklist)
    app.command(name="open")(thread_mode.open_thread)
    app.command()(thread_mode.archive)
    app.command()(thread_mode.star)
    app.command()(serve_mode.serve)
    app.command(name="validate-config")(validate_config_module.validate_config)


register_commands()
