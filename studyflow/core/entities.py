"""
Core entities for the StudyFlow platform.

Courses and assignments are persisted as plain JSON objects with camelCase
keys. The classes here are typed views over those records, used by the
grade aggregator and the API layer; ``from_dict`` tolerates missing keys so
that unvalidated records never break a read.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class GradeCategory:
    """A named, weighted component of a course grade."""
    name: str
    weight: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GradeCategory":
        return cls(name=data.get("name", ""), weight=data.get("weight") or 0)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "weight": self.weight}


@dataclass
class Course:
    """Course with its grading categories and target grade."""
    id: Optional[int]
    code: str
    color: str = ""
    target_grade: Optional[float] = None
    grade_categories: List[GradeCategory] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        categories = data.get("gradeCategories") or []
        return cls(
            id=data.get("Id"),
            code=data.get("code", ""),
            color=data.get("color", ""),
            target_grade=data.get("targetGrade"),
            grade_categories=[GradeCategory.from_dict(c) for c in categories],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Id": self.id,
            "code": self.code,
            "color": self.color,
            "targetGrade": self.target_grade,
            "gradeCategories": [c.to_dict() for c in self.grade_categories],
        }


@dataclass
class Assignment:
    """A gradable unit of work belonging to a course."""
    id: Optional[int]
    course_id: Optional[int]
    title: str = ""
    category: Optional[str] = None
    completed: bool = False
    grade: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Assignment":
        return cls(
            id=data.get("Id"),
            course_id=data.get("courseId"),
            title=data.get("title", ""),
            category=data.get("category"),
            completed=bool(data.get("completed", False)),
            grade=data.get("grade"),
        )

    @property
    def is_graded(self) -> bool:
        """Completed and carrying a grade."""
        return self.completed and self.grade is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Id": self.id,
            "courseId": self.course_id,
            "title": self.title,
            "category": self.category,
            "completed": self.completed,
            "grade": self.grade,
        }


@dataclass
class CategoryGrade:
    """Derived per-category result of the grade aggregator."""
    name: str
    weight: float
    average: float
    count: int
    weighted_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "weight": self.weight,
            "average": self.average,
            "count": self.count,
            "weightedScore": self.weighted_score,
        }


@dataclass
class CourseGradeReport:
    """Grade breakdown and rollup for one course."""
    course_id: Optional[int]
    code: str
    color: str
    target_grade: Optional[float]
    categories: List[CategoryGrade]
    current_grade: float
    total_weight: float
    adjusted_grade: float
    display_grade: int
    graded_count: int
    recent_assignments: List[Assignment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "courseId": self.course_id,
            "code": self.code,
            "color": self.color,
            "targetGrade": self.target_grade,
            "categories": [c.to_dict() for c in self.categories],
            "currentGrade": self.current_grade,
            "totalWeight": self.total_weight,
            "adjustedGrade": self.adjusted_grade,
            "displayGrade": self.display_grade,
            "gradedCount": self.graded_count,
            "recentAssignments": [a.to_dict() for a in self.recent_assignments],
        }
