"""
Services module containing the record stores and grade computation.
"""

from .record_service import JsonRecordService
from .course_service import CourseService
from .assignment_service import AssignmentService
from .grades_service import GradesService, GradesState
from .grade_calculator import build_course_report, calculate_category_grades, summarize

__all__ = [
    "JsonRecordService",
    "CourseService",
    "AssignmentService",
    "GradesService",
    "GradesState",
    "build_course_report",
    "calculate_category_grades",
    "summarize",
]
