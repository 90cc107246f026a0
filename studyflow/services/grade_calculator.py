"""
Weighted grade aggregation per course.

Pure functions; nothing here performs I/O or mutates its inputs.
"""

import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..core.entities import Assignment, CategoryGrade, Course, CourseGradeReport
from ..core.enums import RECENT_ASSIGNMENTS_LIMIT


# ------------------------
# Rounding
# ------------------------
def round_half_up(x: float) -> int:
    """Nearest integer, halves rounded toward positive infinity."""
    return int(math.floor(x + 0.5))


def round_1dp_half_up(x: float) -> float:
    """Round to one decimal place, halves on the tenths digit going up."""
    return math.floor(x * 10 + 0.5) / 10


# ------------------------
# Aggregation
# ------------------------
def graded_assignments_for(course_id: Optional[int], assignments: Iterable[Assignment]) -> List[Assignment]:
    """Assignments of one course that are completed and carry a grade."""
    return [a for a in assignments if a.course_id == course_id and a.is_graded]


def calculate_category_grades(course: Course, graded: Sequence[Assignment]) -> List[CategoryGrade]:
    """
    Per-category breakdown, in the course's category order.

    ``graded`` must already be restricted to the course's completed, graded
    assignments. The average is rounded to one decimal; the weighted score
    is computed from the unrounded mean and then rounded.
    """
    results = []
    for category in course.grade_categories:
        grades = [a.grade for a in graded if a.category == category.name]
        if not grades:
            results.append(CategoryGrade(
                name=category.name,
                weight=category.weight,
                average=0,
                count=0,
                weighted_score=0,
            ))
            continue

        mean = sum(grades) / len(grades)
        weighted = mean * category.weight / 100
        results.append(CategoryGrade(
            name=category.name,
            weight=category.weight,
            average=round_1dp_half_up(mean),
            count=len(grades),
            weighted_score=round_1dp_half_up(weighted),
        ))
    return results


def summarize(category_grades: Sequence[CategoryGrade]) -> Tuple[float, float, float]:
    """
    returns: (current grade, total weight with data, adjusted grade)

    Categories without graded work are left out of the weight, so the
    adjusted grade is renormalised to the categories that have data.
    """
    current = sum(c.weighted_score for c in category_grades)
    total_weight = sum(c.weight for c in category_grades if c.count > 0)
    adjusted = current / total_weight * 100 if total_weight > 0 else 0
    return current, total_weight, adjusted


def build_course_report(course: Union[Course, Dict[str, Any]],
                        assignments: Iterable[Union[Assignment, Dict[str, Any]]]) -> CourseGradeReport:
    """Filter, aggregate and roll up the grades of one course."""
    if isinstance(course, dict):
        course = Course.from_dict(course)
    assignments = [Assignment.from_dict(a) if isinstance(a, dict) else a for a in assignments]

    graded = graded_assignments_for(course.id, assignments)
    categories = calculate_category_grades(course, graded)
    current, total_weight, adjusted = summarize(categories)

    return CourseGradeReport(
        course_id=course.id,
        code=course.code,
        color=course.color,
        target_grade=course.target_grade,
        categories=categories,
        current_grade=current,
        total_weight=total_weight,
        adjusted_grade=adjusted,
        display_grade=round_half_up(adjusted),
        graded_count=len(graded),
        recent_assignments=graded[:RECENT_ASSIGNMENTS_LIMIT],
    )
