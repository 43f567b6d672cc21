"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Reconciliation configuration template for lesson-reconciler.
# Replace every <REQUIRED> placeholder before running reconcile or align.
# Replace <OPTIONAL> placeholders only when your setup needs them.
# Relative paths are resolved against the directory of this file.

# Tenant whose lessons are reconciled; other tenants' rows are ignored.
tenant_id: "<REQUIRED>"

database:
  # Lessons workbook with Lessons, Teachers and Subjects sheets.
  path: "<REQUIRED>"

sheet:
  # Lesson sheet maintained by staff (columns Student, Duration, Teacher, StartDate, Subject).
  path: "<REQUIRED>"
  # Defaults to the first worksheet.
  # sheet_name: "<OPTIONAL>"

reconciliation:
  # Lessons ending before this YYYY-MM-DD date are skipped. Defaults to today (UTC).
  # active_on: "<OPTIONAL>"

results:
  # Defaults to the directory of the sheet workbook.
  # output_dir: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
