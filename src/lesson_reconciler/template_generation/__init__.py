"""Template generation exports."""

from .constants import (
    LESSON_COLUMNS,
    LESSONS_SHEET_NAME,
    SHEET_LESSON_COLUMNS,
    SHEET_LESSONS_SHEET_NAME,
    SUBJECT_COLUMNS,
    SUBJECTS_SHEET_NAME,
    TEACHER_COLUMNS,
    TEACHERS_SHEET_NAME,
)
from .template_workbook_builder import generate_source_templates, write_header_row

__all__ = [
    "LESSONS_SHEET_NAME",
    "TEACHERS_SHEET_NAME",
    "SUBJECTS_SHEET_NAME",
    "SHEET_LESSONS_SHEET_NAME",
    "LESSON_COLUMNS",
    "TEACHER_COLUMNS",
    "SUBJECT_COLUMNS",
    "SHEET_LESSON_COLUMNS",
    "generate_source_templates",
    "write_header_row",
]
