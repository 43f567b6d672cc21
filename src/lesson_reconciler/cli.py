"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from lesson_reconciler.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from lesson_reconciler.run_execution import (
    AlignmentRequest,
    RunExecutionError,
    RunRequest,
    execute_alignment_run,
    execute_reconciliation_run,
)
from lesson_reconciler.template_generation import generate_source_templates

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="lesson-reconciler")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level for diagnostics written to stderr",
)
def cli(log_level: str) -> None:
    """Reconcile scheduled lessons against the staff lesson sheet."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate-templates")
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    default=".",
    show_default=True,
    type=click.Path(path_type=str),
    help="Directory receiving the blank lessons and sheet workbooks",
)
def generate_templates(output_dir: str) -> None:
    """Generate blank lessons and sheet workbooks with their header rows."""
    try:
        database_path, sheet_path = generate_source_templates(output_dir)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(database_path))
    click.echo(str(sheet_path))


@cli.command(name="reconcile")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML configuration file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for storing result workbooks",
)
def reconcile(config_path: str, output_dir: str | None) -> None:
    """Reconcile database lessons with the sheet and write a results workbook."""
    try:
        outcome = execute_reconciliation_run(
            RunRequest(config_path=config_path, output_dir=output_dir)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        f"matched={outcome.matched} mismatched={outcome.mismatched} "
        f"missing_in_database={outcome.missing_in_database} "
        f"missing_in_sheet={outcome.missing_in_sheet}"
    )
    click.echo(str(outcome.output_path))


@cli.command(name="align")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML configuration file",
)
@click.option(
    "--lesson-id",
    "lesson_id",
    required=True,
    type=str,
    help="ID of the mismatched database lesson to overwrite with sheet data",
)
def align(config_path: str, lesson_id: str) -> None:
    """Overwrite one mismatched database lesson with its sheet counterpart."""
    try:
        outcome = execute_alignment_run(
            AlignmentRequest(config_path=config_path, lesson_id=lesson_id)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    if not outcome.success:
        raise CliError(outcome.message)
    click.echo(outcome.message)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
