"""
Main entry point for the StudyFlow platform.
"""

import asyncio
import logging
from typing import Optional

from .core.enums import (
    IdLookupPolicy, COURSES_STORAGE_KEY, ASSIGNMENTS_STORAGE_KEY, DEFAULT_LATENCY_SECONDS
)
from .core.exceptions import ConfigurationError
from .persistence import StorageFactory
from .services import CourseService, AssignmentService, GradesService
from .api.rest_api import StudyFlowRestAPI


class StudyFlowPlatform:
    """Main platform class that wires storage, services and the REST API."""

    def __init__(self, config: Optional[dict] = None):
        self._config = config or {}
        self._slots = {}
        self._course_service = None
        self._assignment_service = None
        self._rest_api = None

        # Initialize platform
        self._initialize_platform()

    @property
    def course_service(self) -> CourseService:
        return self._course_service

    @property
    def assignment_service(self) -> AssignmentService:
        return self._assignment_service

    @property
    def app(self):
        return self._rest_api.app

    def _initialize_platform(self):
        """Initialize the platform with all services."""
        print("Initializing StudyFlow platform...")

        log_level = self._config.get('log_level', 'info')
        logging.basicConfig(
            level=log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        # Initialize storage
        storage_type = self._config.get('storage_type', 'file')
        storage_config = self._config.get('storage_config', {})
        self._slots = StorageFactory.create_slots(
            storage_type, [COURSES_STORAGE_KEY, ASSIGNMENTS_STORAGE_KEY], **storage_config
        )
        print(f"✓ Storage initialized: {storage_type}")

        # Initialize services
        policy_name = self._config.get('id_lookup_policy', IdLookupPolicy.NOT_FOUND.value)
        try:
            id_policy = IdLookupPolicy(policy_name)
        except ValueError:
            raise ConfigurationError(f"Unsupported id lookup policy: {policy_name}")

        latency = self._config.get('latency_seconds', DEFAULT_LATENCY_SECONDS)
        serialize_writes = self._config.get('serialize_writes', True)

        self._course_service = CourseService(
            self._slots[COURSES_STORAGE_KEY],
            latency=latency,
            serialize_writes=serialize_writes,
            id_policy=id_policy,
            validate_records=self._config.get('validate_records', False),
        )
        self._assignment_service = AssignmentService(
            self._slots[ASSIGNMENTS_STORAGE_KEY],
            latency=latency,
            serialize_writes=serialize_writes,
            id_policy=id_policy,
        )
        print("✓ Services initialized")

        self._rest_api = StudyFlowRestAPI(self._course_service, self._assignment_service)
        print("✓ API initialized")

        print("✓ StudyFlow platform initialized successfully!")

    def start_rest_server(self, host: str = "0.0.0.0", port: int = 8000):
        """Run the REST server until interrupted."""
        import uvicorn

        print(f"✓ REST server starting on {host}:{port}")
        print(f"  - API Docs: http://localhost:{port}/docs")
        uvicorn.run(
            self._rest_api.app,
            host=host,
            port=port,
            log_level=self._config.get('log_level', 'info')
        )

    async def run_demo(self):
        """Print the grade breakdown of every course."""
        print("Running StudyFlow demonstration...")

        grades = GradesService(self._course_service, self._assignment_service,
                               id_policy=self._course_service.id_policy)
        state = await grades.load()
        if state.error:
            print(f"✗ Failed to load grades: {state.error}")
            return
        if state.is_empty:
            print("No courses yet")
            return

        for course in state.courses:
            report = grades.report_for(course["Id"])
            print(f"\n=== {report.code} ===")
            print(f"Current grade: {report.display_grade}%  (target {report.target_grade}%)")
            print(f"Graded assignments: {report.graded_count}")
            for category in report.categories:
                average = f"{category.average}%" if category.count > 0 else "N/A"
                print(f"  {category.name:<15} {category.weight:>5}%  avg {average:<7} "
                      f"weighted {category.weighted_score}")

        print("\n✓ Demo completed")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="StudyFlow course and grade tracker")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="REST server host")
    parser.add_argument("--rest-port", type=int, default=8000, help="REST server port")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")

    args = parser.parse_args()

    # Load configuration
    config = {}
    if args.config:
        import json
        with open(args.config, 'r') as f:
            config = json.load(f)

    platform = StudyFlowPlatform(config)

    try:
        if args.demo:
            asyncio.run(platform.run_demo())
        else:
            platform.start_rest_server(args.host, args.rest_port)
    except KeyboardInterrupt:
        print("\nShutting down...")


if __name__ == "__main__":
    main()
