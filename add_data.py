"""
Script to add sample data to the StudyFlow platform via REST API.
Make sure the server is running before executing this script.

Usage:
    python add_data.py
"""

import requests
import sys
import os


def _console_supports_utf8() -> bool:
    enc = getattr(sys.stdout, "encoding", None)
    return enc is not None and "utf" in enc.lower()


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"


def _detect_base_url() -> str:
    """Determine a reachable BASE_URL.

    Priority: environment variable `STUDYFLOW_BASE_URL`, then common local ports.
    If nothing responds, fall back to http://127.0.0.1:8000.
    """
    env = os.environ.get("STUDYFLOW_BASE_URL")
    if env:
        return env

    candidates = [
        "http://127.0.0.1:8000",
        "http://127.0.0.1:8888",
        "http://localhost:8000",
        "http://localhost:8888",
    ]

    for c in candidates:
        try:
            resp = requests.get(f"{c}/health", timeout=0.5)
            if resp.status_code == 200:
                return c
        except requests.exceptions.RequestException:
            continue

    return candidates[0]


BASE_URL = _detect_base_url()


def check_server():
    """Check if the server is running."""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=2)
        if response.status_code == 200:
            print(f"{_OK_CHAR} Server is running")
            return True
    except requests.exceptions.RequestException:
        pass
    print(f"{_FAIL_CHAR} Server is not running!")
    print("\nPlease start the server first:")
    print("  python -m studyflow.main --rest-port 8000")
    return False


def create_course(code, color, target_grade, categories):
    """Create a new course."""
    url = f"{BASE_URL}/courses"
    data = {
        "code": code,
        "color": color,
        "targetGrade": target_grade,
        "gradeCategories": [{"name": name, "weight": weight} for name, weight in categories],
    }
    try:
        response = requests.post(url, json=data)
        if response.status_code == 201:
            course = response.json()
            print(f"{_OK_CHAR} Created course: {code} (Id {course['Id']})")
            return course
        print(f"{_FAIL_CHAR} Failed to create course: {response.text}")
        return None
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error creating course: {e}")
        return None


def create_assignment(course_id, title, category, grade=None):
    """Create an assignment; a grade marks it completed."""
    url = f"{BASE_URL}/assignments"
    data = {
        "courseId": course_id,
        "title": title,
        "category": category,
        "completed": grade is not None,
        "grade": grade,
    }
    try:
        response = requests.post(url, json=data)
        if response.status_code == 201:
            print(f"{_OK_CHAR} Created assignment: {title}")
            return response.json()
        print(f"{_FAIL_CHAR} Failed to create assignment: {response.text}")
        return None
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error creating assignment: {e}")
        return None


def show_grades(course_id):
    """Print the grade breakdown of a course."""
    url = f"{BASE_URL}/courses/{course_id}/grades"
    try:
        response = requests.get(url)
        if response.status_code != 200:
            print(f"{_FAIL_CHAR} Failed to get grades: {response.text}")
            return None
        report = response.json()
        print(f"\n{'='*60}")
        print(f"{report['code']}: {report['displayGrade']}% (target {report['targetGrade']}%)")
        print(f"{'='*60}")
        for category in report["categories"]:
            average = f"{category['average']}%" if category["count"] > 0 else "N/A"
            print(f"  {category['name']:15} | {category['weight']:>5}% | avg {average:8} | "
                  f"weighted {category['weightedScore']}")
        return report
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error getting grades: {e}")
        return None


def main():
    """Main execution."""
    print("="*60)
    print("StudyFlow - Data Addition Script")
    print("="*60)
    print()

    # Check if server is running
    if not check_server():
        sys.exit(1)

    print("\n" + "="*60)
    print("Adding Sample Data...")
    print("="*60 + "\n")

    print("Creating courses...")
    courses = [
        create_course("BIO 110", "#EC4899", 85, [("Labs", 30), ("Quizzes", 20), ("Exams", 50)]),
        create_course("HIST 205", "#8B5CF6", 90, [("Essays", 60), ("Participation", 40)]),
    ]

    print("\nCreating assignments...")
    if courses[0]:
        bio = courses[0]["Id"]
        create_assignment(bio, "Lab 1: Microscopy", "Labs", 91)
        create_assignment(bio, "Lab 2: Cell Membranes", "Labs", 84)
        create_assignment(bio, "Quiz 1", "Quizzes", 78)
        create_assignment(bio, "Midterm", "Exams")

    if courses[1]:
        hist = courses[1]["Id"]
        create_assignment(hist, "Primary Source Analysis", "Essays", 88)
        create_assignment(hist, "Seminar Discussion", "Participation", 95)

    for course in courses:
        if course:
            show_grades(course["Id"])

    print("\n" + "="*60)
    print(f"{_OK_CHAR} Sample data added successfully!")
    print("="*60)
    print("\nYou can now:")
    print(f"  - View API docs: {BASE_URL}/docs")
    print(f"  - List courses: curl {BASE_URL}/courses")
    print(f"  - Grades overview: curl {BASE_URL}/grades")
    print()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n\n{_FAIL_CHAR} Interrupted by user")
        sys.exit(1)
