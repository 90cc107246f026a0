"""
Core module containing the record model, interfaces and exceptions.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *
from .validation import parse_record_id, validate_course

__all__ = [
    # Entities
    "GradeCategory",
    "Course",
    "Assignment",
    "CategoryGrade",
    "CourseGradeReport",

    # Interfaces
    "Record",
    "StorageSlot",
    "RecordService",

    # Enums
    "IdLookupPolicy",
    "StorageType",

    # Exceptions
    "StudyFlowException",
    "ValidationError",
    "PersistenceError",
    "ConfigurationError",

    # Validation
    "parse_record_id",
    "validate_course",
]
