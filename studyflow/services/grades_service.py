"""
Grades overview: loads courses and assignments together and builds reports.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..core.entities import CourseGradeReport
from ..core.enums import IdLookupPolicy
from ..core.interfaces import Record, RecordService
from ..core.validation import parse_record_id
from .grade_calculator import build_course_report

logger = logging.getLogger(__name__)

DEFAULT_LOAD_ERROR = "Failed to load grades"


@dataclass
class GradesState:
    """Data behind the grades overview."""
    courses: List[Record] = field(default_factory=list)
    assignments: List[Record] = field(default_factory=list)
    selected_course_id: Optional[int] = None
    loading: bool = False
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.loading and self.error is None and not self.courses


class GradesService:
    """Loads both collections and computes the selected course's report.

    Failures from either read are caught here once and kept as the state's
    ``error``; calling ``retry`` loads again. Course ids given to
    ``select_course`` and ``report_for`` are parsed under ``id_policy``.
    """

    def __init__(self, course_service: RecordService, assignment_service: RecordService,
                 id_policy: IdLookupPolicy = IdLookupPolicy.NOT_FOUND):
        self._course_service = course_service
        self._assignment_service = assignment_service
        self._id_policy = id_policy
        self._state = GradesState()

    @property
    def state(self) -> GradesState:
        return self._state

    async def load(self) -> GradesState:
        """Fetch courses and assignments concurrently."""
        self._state.loading = True
        self._state.error = None
        try:
            courses, assignments = await asyncio.gather(
                self._course_service.get_all(),
                self._assignment_service.get_all(),
            )
            self._state.courses = courses
            self._state.assignments = assignments
            if courses and self._state.selected_course_id is None:
                self._state.selected_course_id = courses[0].get("Id")
        except Exception as e:
            logger.error(f"Loading grades failed: {e}")
            self._state.error = str(e) or DEFAULT_LOAD_ERROR
        finally:
            self._state.loading = False
        return self._state

    async def retry(self) -> GradesState:
        return await self.load()

    def select_course(self, course_id: Union[int, str]) -> Optional[int]:
        """Select a loaded course; unknown ids leave the selection unchanged."""
        parsed = parse_record_id(course_id, self._id_policy)
        if parsed is not None and any(c.get("Id") == parsed for c in self._state.courses):
            self._state.selected_course_id = parsed
        return self._state.selected_course_id

    def current_course(self) -> Optional[Record]:
        for course in self._state.courses:
            if course.get("Id") == self._state.selected_course_id:
                return course
        return None

    def current_report(self) -> Optional[CourseGradeReport]:
        """Grade report for the selected course, or None when nothing is selected."""
        course = self.current_course()
        if course is None:
            return None
        return build_course_report(course, self._state.assignments)

    def report_for(self, course_id: Union[int, str]) -> Optional[CourseGradeReport]:
        parsed = parse_record_id(course_id, self._id_policy)
        for course in self._state.courses:
            if parsed is not None and course.get("Id") == parsed:
                return build_course_report(course, self._state.assignments)
        return None
