"""
Course record store.
"""

from ..core.enums import IdLookupPolicy, DEFAULT_LATENCY_SECONDS
from ..core.interfaces import Record, StorageSlot
from ..core.validation import validate_course
from .record_service import JsonRecordService


class CourseService(JsonRecordService):
    """Delayed CRUD over the stored course collection.

    New courses get an empty ``gradeCategories`` list when none is given.
    Field shapes are only checked when ``validate_records`` is enabled.
    """

    record_name = "course"

    def __init__(self, storage: StorageSlot, latency: float = DEFAULT_LATENCY_SECONDS,
                 serialize_writes: bool = True,
                 id_policy: IdLookupPolicy = IdLookupPolicy.NOT_FOUND,
                 validate_records: bool = False):
        super().__init__(storage, latency=latency, serialize_writes=serialize_writes, id_policy=id_policy)
        self._validate_records = validate_records

    def _prepare_new(self, data: Record, new_id: int) -> Record:
        return {
            **data,
            "Id": new_id,
            "gradeCategories": data.get("gradeCategories") or [],
        }

    def _validate(self, record: Record) -> None:
        if self._validate_records:
            validate_course(record)
