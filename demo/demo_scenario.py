#!/usr/bin/env python3
"""
Demo scenario for the StudyFlow platform.
"""

import asyncio
import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from studyflow.main import StudyFlowPlatform
from studyflow.services import GradesService


async def run_demo():
    """Run a walkthrough of the StudyFlow services."""
    print("=" * 60)
    print("STUDYFLOW GRADE TRACKER - DEMO")
    print("=" * 60)

    config = {
        'storage_type': 'memory',
        'latency_seconds': 0.05,
        'log_level': 'warning',
    }
    platform = StudyFlowPlatform(config)

    try:
        print("\n1. Managing courses...")
        await demonstrate_courses(platform)

        print("\n2. Concurrent course creation...")
        await demonstrate_concurrency(platform)

        print("\n3. Grade breakdowns...")
        await demonstrate_grades(platform)

        print("\n" + "=" * 60)
        print("DEMO COMPLETED SUCCESSFULLY!")
        print("=" * 60)

    except Exception as e:
        print(f"\nDemo failed with error: {e}")
        import traceback
        traceback.print_exc()


async def demonstrate_courses(platform):
    """Create, update, look up and delete a course."""
    courses = platform.course_service

    seeded = await courses.get_all()
    print(f"  Seed dataset has {len(seeded)} courses")

    course = await courses.create({
        "code": "CHEM 101",
        "color": "#EF4444",
        "targetGrade": 85,
    })
    print(f"  ✓ Created {course['code']} with Id {course['Id']} "
          f"and categories {course['gradeCategories']}")

    updated = await courses.update(course["Id"], {
        "gradeCategories": [{"name": "Labs", "weight": 40}, {"name": "Exams", "weight": 60}],
    })
    print(f"  ✓ Updated categories: {[c['name'] for c in updated['gradeCategories']]}")

    print(f"  Lookup of 'abc': {await courses.get_by_id('abc')}")
    print(f"  Lookup of '{course['Id']}': {(await courses.get_by_id(str(course['Id'])))['code']}")

    print(f"  ✓ Delete: {await courses.delete(course['Id'])}")
    print(f"  ✓ Delete again: {await courses.delete(course['Id'])}")


async def demonstrate_concurrency(platform):
    """Issue several creates at once; serialized writes keep every one."""
    courses = platform.course_service
    before = len(await courses.get_all())

    created = await asyncio.gather(*[
        courses.create({"code": f"SEM {n}", "targetGrade": 80}) for n in range(1, 6)
    ])
    after = len(await courses.get_all())

    print(f"  Assigned ids: {[c['Id'] for c in created]}")
    print(f"  ✓ Collection grew from {before} to {after}")


async def demonstrate_grades(platform):
    """Load everything and print a report for each course."""
    grades = GradesService(platform.course_service, platform.assignment_service)
    state = await grades.load()
    if state.error:
        print(f"  ✗ {state.error}")
        return

    print(f"  Default selection: course {state.selected_course_id}")
    for course in state.courses:
        report = grades.report_for(course["Id"])
        if not report.categories:
            print(f"  {report.code}: no grade categories")
            continue
        print(f"  {report.code}: {report.display_grade}% over {report.total_weight}% of weight "
              f"({report.graded_count} graded)")


if __name__ == "__main__":
    asyncio.run(run_demo())
