"""
Export command for partyhunt CLI.

Writes the parsed session, transfers and settlement summary as JSON.
"""

from __future__ import annotations

import json

import click

from ..services.json_serializer import build_analysis_payload
from ..services.settlement import calculate_transfers, summarize_settlement
from .utils import load_report


@click.command()
@click.argument("report_file", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write JSON to this file instead of stdout",
)
def export(report_file, output_file):
    """Export a report analysis as JSON."""
    session = load_report(report_file)
    transfers = calculate_transfers(session)
    payload = build_analysis_payload(
        source=report_file,
        session=session,
        transfers=transfers,
        summary=summarize_settlement(session, transfers),
    )
    text = json.dumps(payload, indent=2)
    if output_file is None:
        click.echo(text)
        return
    with open(output_file, "w", encoding="utf-8") as handle:
        handle.write(text + "\n")
    click.echo(f"Wrote {output_file}", err=True)
