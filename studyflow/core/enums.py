"""
Enumerations and constants for the StudyFlow platform.
"""

from enum import Enum


class IdLookupPolicy(Enum):
    """What to do with a record id that does not parse as an integer."""
    NOT_FOUND = "not_found"
    REJECT = "reject"


class StorageType(Enum):
    """Available storage slot backends."""
    MEMORY = "memory"
    FILE = "file"
    SQLITE = "sqlite"


COURSES_STORAGE_KEY = "studyflow_courses"
ASSIGNMENTS_STORAGE_KEY = "studyflow_assignments"

DEFAULT_LATENCY_SECONDS = 0.3
RECENT_ASSIGNMENTS_LIMIT = 10
