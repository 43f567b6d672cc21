"""Boundary tests for reconciliation core dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_reconciliation_core_does_not_import_io_or_alignment_layers() -> None:
    reconciliation_dir = _project_root() / "src" / "lesson_reconciler" / "reconciliation"
    forbidden_import_fragments = (
        "openpyxl",
        "yaml",
        "lesson_reconciler.alignment",
        "lesson_reconciler.source_loading",
        "lesson_reconciler.results_writing",
        "lesson_reconciler.run_execution",
    )

    for module_path in sorted(reconciliation_dir.glob("*.py")):
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"
