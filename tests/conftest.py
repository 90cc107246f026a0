import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from studyflow.core.enums import COURSES_STORAGE_KEY, ASSIGNMENTS_STORAGE_KEY
from studyflow.persistence import InMemoryStorage
from studyflow.services import CourseService, AssignmentService


@pytest.fixture
def course_storage():
    return InMemoryStorage(COURSES_STORAGE_KEY)


@pytest.fixture
def assignment_storage():
    return InMemoryStorage(ASSIGNMENTS_STORAGE_KEY)


@pytest.fixture
def course_service(course_storage):
    return CourseService(course_storage, latency=0)


@pytest.fixture
def assignment_service(assignment_storage):
    return AssignmentService(assignment_storage, latency=0)


@pytest.fixture
def empty_course_service():
    return CourseService(InMemoryStorage(COURSES_STORAGE_KEY, initial="[]"), latency=0)
