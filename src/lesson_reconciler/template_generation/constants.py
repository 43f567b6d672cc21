"""Shared workbook layout constants."""

from __future__ import annotations

LESSONS_SHEET_NAME = "Lessons"
TEACHERS_SHEET_NAME = "Teachers"
SUBJECTS_SHEET_NAME = "Subjects"
SHEET_LESSONS_SHEET_NAME = "Sheet"

LESSON_COLUMNS: tuple[str, ...] = (
    "ID",
    "Tenant",
    "Student",
    "Duration",
    "TeacherID",
    "DayOfWeek",
    "StartTime",
    "SubjectID",
    "StartDate",
    "EndDate",
)
TEACHER_COLUMNS: tuple[str, ...] = ("ID", "Name")
SUBJECT_COLUMNS: tuple[str, ...] = ("ID", "Name")
SHEET_LESSON_COLUMNS: tuple[str, ...] = ("Student", "Duration", "Teacher", "StartDate", "Subject")

DATABASE_TEMPLATE_FILENAME = "lessons.xlsx"
SHEET_TEMPLATE_FILENAME = "sheet.xlsx"
