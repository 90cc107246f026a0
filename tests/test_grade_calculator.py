import pytest

from studyflow.core.entities import Assignment, Course, GradeCategory
from studyflow.services.grade_calculator import (
    build_course_report, calculate_category_grades, graded_assignments_for,
    round_1dp_half_up, round_half_up, summarize,
)


def _course(categories, course_id=1):
    return Course(
        id=course_id,
        code="CS 101",
        color="#4F46E5",
        target_grade=90,
        grade_categories=[GradeCategory(name, weight) for name, weight in categories],
    )


def _graded(category, grade, course_id=1, completed=True):
    return Assignment(id=None, course_id=course_id, title=category, category=category,
                      completed=completed, grade=grade)


def test_homework_and_exams_example():
    course = _course([("Homework", 40), ("Exams", 60)])
    graded = [_graded("Homework", 90), _graded("Homework", 80), _graded("Exams", 70)]

    categories = calculate_category_grades(course, graded)
    current, total_weight, adjusted = summarize(categories)

    homework, exams = categories
    assert (homework.average, homework.count, homework.weighted_score) == (85.0, 2, 34.0)
    assert (exams.average, exams.count, exams.weighted_score) == (70.0, 1, 42.0)
    assert total_weight == 100
    assert adjusted == pytest.approx(76.0)
    assert round_half_up(adjusted) == 76


def test_no_graded_work_gives_zero_without_dividing():
    course = _course([("Homework", 40), ("Exams", 60)])

    categories = calculate_category_grades(course, [])
    current, total_weight, adjusted = summarize(categories)

    assert all(c.count == 0 and c.average == 0 and c.weighted_score == 0 for c in categories)
    assert (current, total_weight, adjusted) == (0, 0, 0)


def test_unmatched_category_is_ignored():
    course = _course([("Homework", 50), ("Exams", 50)])
    graded = [_graded("Homework", 80), _graded("Extra Credit", 100)]

    categories = calculate_category_grades(course, graded)
    current, total_weight, adjusted = summarize(categories)

    assert [c.count for c in categories] == [1, 0]
    assert total_weight == 50
    assert adjusted == pytest.approx(80.0)


def test_course_without_categories_has_empty_breakdown():
    report = build_course_report(_course([]), [_graded("Homework", 80)])

    assert report.categories == []
    assert report.adjusted_grade == 0
    assert report.display_grade == 0
    assert report.graded_count == 1


def test_weight_is_renormalised_to_categories_with_data():
    course = _course([("Essays", 50), ("Participation", 20), ("Portfolio", 30)])
    graded = [_graded("Essays", 90), _graded("Participation", 100)]

    report = build_course_report(course, graded)

    assert report.current_grade == pytest.approx(65.0)
    assert report.total_weight == 70
    assert report.display_grade == 93


def test_category_match_is_exact():
    course = _course([("Homework", 100)])

    categories = calculate_category_grades(course, [_graded("homework", 50), _graded("Homework ", 60)])

    assert categories[0].count == 0


def test_rounding_happens_before_the_sum():
    course = _course([("A", 50), ("B", 50)])
    graded = [_graded("A", 80.04), _graded("B", 80.04)]

    report = build_course_report(course, graded)

    assert [c.weighted_score for c in report.categories] == [40.0, 40.0]
    assert report.current_grade == pytest.approx(80.0)
    assert report.adjusted_grade == pytest.approx(80.0)


def test_average_rounds_half_up_on_tenths():
    course = _course([("Problem Sets", 25)])
    graded = [_graded("Problem Sets", 84), _graded("Problem Sets", 84.5)]

    category = calculate_category_grades(course, graded)[0]

    assert category.average == 84.3
    assert category.weighted_score == 21.1


def test_weighted_score_rounds_half_up_on_tenths():
    course = _course([("Problem Sets", 25)])

    category = calculate_category_grades(course, [_graded("Problem Sets", 73)])[0]

    assert category.average == 73.0
    assert category.weighted_score == 18.3


def test_partial_and_overfull_weights():
    overfull = _course([("A", 80), ("B", 80)])
    report = build_course_report(overfull, [_graded("A", 50), _graded("B", 100)])

    assert report.total_weight == 160
    assert report.adjusted_grade == pytest.approx(75.0)


def test_filter_keeps_completed_graded_work_of_the_course():
    assignments = [
        _graded("Homework", 90),
        _graded("Homework", None),
        _graded("Homework", 70, completed=False),
        _graded("Homework", 60, course_id=2),
        _graded("Homework", 0),
    ]

    graded = graded_assignments_for(1, assignments)

    assert [a.grade for a in graded] == [90, 0]


def test_report_from_records():
    course = {
        "Id": 7,
        "code": "PHYS 201",
        "color": "#F59E0B",
        "targetGrade": 80,
        "gradeCategories": [{"name": "Labs", "weight": 25}, {"name": "Exams", "weight": 75}],
    }
    assignments = [
        {"Id": 1, "courseId": 7, "category": "Labs", "completed": True, "grade": 86},
        {"Id": 2, "courseId": 7, "category": "Exams", "completed": False, "grade": None},
        {"Id": 3, "courseId": 8, "category": "Labs", "completed": True, "grade": 10},
    ]

    data = build_course_report(course, assignments).to_dict()

    assert data["courseId"] == 7
    assert data["categories"][0] == {
        "name": "Labs", "weight": 25, "average": 86.0, "count": 1, "weightedScore": 21.5,
    }
    assert data["displayGrade"] == 86
    assert [a["Id"] for a in data["recentAssignments"]] == [1]


def test_recent_assignments_are_capped_at_ten():
    course = _course([("Homework", 100)])
    graded = [_graded("Homework", 80 + n) for n in range(12)]

    report = build_course_report(course, graded)

    assert report.graded_count == 12
    assert len(report.recent_assignments) == 10


def test_course_without_category_key():
    report = build_course_report({"Id": 1, "code": "X"}, [])

    assert report.categories == []


@pytest.mark.parametrize("value, expected", [
    (84.25, 84.3),
    (84.24, 84.2),
    (85.0, 85.0),
    (0, 0),
])
def test_round_1dp_half_up(value, expected):
    assert round_1dp_half_up(value) == expected


@pytest.mark.parametrize("value, expected", [(76.5, 77), (76.49, 76), (0, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_null_category_weight_counts_as_zero():
    course = {"Id": 1, "code": "X", "gradeCategories": [{"name": "H", "weight": None}, {"name": "E"}]}
    assignments = [{"Id": 1, "courseId": 1, "category": "H", "completed": True, "grade": 90}]

    report = build_course_report(course, assignments)

    homework, exams = report.categories
    assert (homework.weight, homework.average, homework.count, homework.weighted_score) == (0, 90.0, 1, 0)
    assert exams.weight == 0
    assert report.total_weight == 0
    assert report.adjusted_grade == 0
