"""
Analyze command for partyhunt CLI.

This module provides the analyze command for parsing a party hunt report and
showing who gets paid what.
"""

from __future__ import annotations

import click
from rich.console import Console

from ..persistence import get_storage
from ..services.display import filter_transfers
from ..services.settlement import calculate_transfers, summarize_settlement
from .utils import OUTPUT_FORMATS, load_report, render_analysis


@click.command()
@click.argument("report_file", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option(
    "--format",
    "output_format",
    type=OUTPUT_FORMATS,
    default="table",
    show_default=True,
    help="Output format",
)
@click.option("--save", is_flag=True, help="Store the session in the history database")
@click.option("--skip-zero", is_flag=True, help="Hide transfers with a zero amount")
def analyze(report_file, output_format, save, skip_zero):
    """Analyze a party hunt report and compute the leader's transfers."""
    console = Console()
    session = load_report(report_file)
    transfers = calculate_transfers(session)
    summary = summarize_settlement(session, transfers)

    render_analysis(
        console,
        session,
        filter_transfers(transfers, skip_zero=skip_zero),
        summary,
        output_format=output_format,
        source=report_file,
    )

    if save:
        result = get_storage().save_session(session)
        # JSON output must stay machine-readable.
        if output_format == "json":
            return
        if result.status == "skipped":
            console.print(f"[yellow]Session already saved as #{result.session_id}[/yellow]")
        else:
            console.print(f"[green]Saved session #{result.session_id}[/green]")