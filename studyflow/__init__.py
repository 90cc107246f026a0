"""
StudyFlow: course, assignment and grade tracking for students.

Provides a delayed, storage-backed record store for courses and assignments,
a weighted grade aggregator, and a REST surface over both.
"""

__version__ = "1.0.0"
__author__ = "StudyFlow Development Team"
__description__ = "Course, assignment and grade tracking service"
