"""
Assignment record store.
"""

from typing import List, Union

from ..core.interfaces import Record
from .record_service import JsonRecordService


class AssignmentService(JsonRecordService):
    """Delayed CRUD over the stored assignment collection."""

    record_name = "assignment"

    async def get_by_course(self, course_id: Union[int, str]) -> List[Record]:
        """Return the assignments belonging to one course."""
        await self._delay()
        parsed = self._parse_id(course_id)
        if parsed is None:
            return []
        return [dict(a) for a in await self._load() if a.get("courseId") == parsed]
