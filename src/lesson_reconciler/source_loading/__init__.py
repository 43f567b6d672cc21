"""Source loading exports."""

from .cell_values import SourceValidationError
from .lesson_workbook_store import WorkbookLessonStore
from .sheet_lesson_reader import read_sheet_lessons

__all__ = [
    "SourceValidationError",
    "WorkbookLessonStore",
    "read_sheet_lessons",
]
