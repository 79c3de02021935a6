"""
Command‑line interface for gestcalc.
Estimates the effective LMP, current gestation and milestone dates from a
reference date and a dating method, for one date or a whole table of patients.
"""

import click
import datetime
import json
import logging
import sys
import typing

from stairval.notepad import create_notepad

from .calculator import MAX_REFERENCE_DATE, MIN_REFERENCE_DATE, estimate_pregnancy
from .dating import DATING_OFFSETS, DatingMethod
from .loader import load_sheets_as_tables
from .mapper import DefaultMapper
from .milestone import MILESTONES
from .report import estimate_to_dict, estimates_to_frame, format_estimate

LOGGER = logging.getLogger(__name__)

ISO_DATE = click.DateTime(formats=["%Y-%m-%d"])


@click.group()
@click.option(
    "--verbose-logging",
    is_flag=True,
    help="Also emit debug logs to stderr",
)
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def main(verbose_logging: bool, log_file_path: typing.Optional[str]):
    """gestcalc: pregnancy dates from an LMP, OPK, IUI/transfer or embryo-transfer date."""
    _configure_logging(verbose_logging, log_file_path)


def _configure_logging(verbose_logging: bool, log_file_path: typing.Optional[str]) -> None:
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose_logging:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose_logging else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=True,
        )


def _resolve_as_of(as_of: typing.Optional[datetime.datetime]) -> datetime.date:
    # the host clock is read here, never inside the calculator
    return as_of.date() if as_of else datetime.date.today()


@main.command(name="estimate")
@click.option(
    "-d",
    "--date",
    "reference_date",
    required=True,
    type=ISO_DATE,
    help="reference date (YYYY-MM-DD) measured with the chosen method",
)
@click.option(
    "-m",
    "--method",
    default=DatingMethod.LMP.label,
    show_default=True,
    help="dating method: LMP, OPK, 'TVOR/IUI', 'Day 3' or 'Day 5' (unknown values count as LMP)",
)
@click.option(
    "--as-of",
    type=ISO_DATE,
    default=None,
    help="date to measure gestation at (default: today)",
)
@click.option("-r", "--raw", is_flag=True, help="Print JSON instead of text")
def estimate(reference_date: datetime.datetime, method: str, as_of: typing.Optional[datetime.datetime], raw: bool):
    """
    Show the effective LMP, current gestation and milestone dates for one date.
    """
    if not MIN_REFERENCE_DATE <= reference_date.date() <= MAX_REFERENCE_DATE:
        raise click.BadParameter(
            f"must be between {MIN_REFERENCE_DATE} and {MAX_REFERENCE_DATE}", param_hint="'--date'"
        )
    if DatingMethod.parse(method) is None:
        LOGGER.warning(f"Unrecognized dating method {method!r}; using LMP")

    result = estimate_pregnancy(reference_date.date(), method, _resolve_as_of(as_of))
    LOGGER.info(
        f"Estimated {result.method.name} {result.reference_date} -> effective LMP {result.effective_lmp}"
    )

    if raw:
        click.echo(json.dumps(estimate_to_dict(result), indent=2))
        return
    for line in format_estimate(result):
        click.echo(line)


@main.command(name="methods")
def methods():
    """List dating methods and their day offsets from the LMP."""
    click.echo(f"{'METHOD':12}{'OFFSET':>8}")
    for method, offset in DATING_OFFSETS.items():
        click.echo(f"{method.label:12}{offset:>8}")


@main.command(name="milestones")
def milestones():
    """List the milestones and their day offsets from the LMP."""
    click.echo(f"{'MILESTONE':24}{'DAYS':>6}")
    for milestone in MILESTONES:
        click.echo(f"{milestone.label:24}{milestone.day_offset:>6}")


@main.command(name="estimate-table")
@click.option(
    "-i",
    "--input",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="path to a CSV file or Excel workbook (first column = patient ID)",
)
@click.option(
    "--as-of",
    type=ISO_DATE,
    default=None,
    help="date to measure gestation at (default: today)",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    help="write the estimates to this CSV file",
)
@click.option("-r", "--raw", is_flag=True, help="Print JSON records instead of a table")
def estimate_table(
    input_path: str,
    as_of: typing.Optional[datetime.datetime],
    output_path: typing.Optional[str],
    raw: bool,
):
    """
    Estimate every row of a table of patients.
    Rows need a reference date; the dating method column is optional.
    """
    LOGGER.info(f"Beginning estimate of '{input_path}'")
    try:
        tables = load_sheets_as_tables(input_path)
    except Exception as e:
        LOGGER.error(f"Failed to read '{input_path}': {e}")
        click.echo(f"Error: cannot read {input_path}: {e}", err=True)
        sys.exit(1)
    LOGGER.debug(f"Loaded sheets: {list(tables.keys())}")

    notepad = create_notepad("estimates")
    mapper = DefaultMapper(_resolve_as_of(as_of))
    records = mapper.apply_mapping(tables, notepad)

    _report_issues(notepad)

    if not records and notepad.has_errors(include_subsections=True):
        click.echo("No estimates could be produced.", err=True)
        sys.exit(1)

    frame = estimates_to_frame(records)
    if output_path:
        frame.to_csv(output_path, index=False)
        click.echo(f"Wrote {len(frame)} estimates to {output_path}")
    elif raw:
        click.echo(frame.to_json(orient="records", indent=2))
    else:
        click.echo(frame.to_string(index=False))


def _report_issues(notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in mapping:", err=True)
        for err in notepad.errors():
            click.echo(f"- {err.message}", err=True)
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in mapping:", err=True)
        for w in notepad.warnings():
            click.echo(f"- {w.message}", err=True)


if __name__ == "__main__":
    main()
