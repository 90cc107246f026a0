"""
REST API implementation for the StudyFlow platform using FastAPI.
"""

from typing import Optional, Dict, Any, List
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from ..core.exceptions import ValidationError, PersistenceError
from ..services import CourseService, AssignmentService, GradesService
from ..services.grade_calculator import build_course_report


# Pydantic models for API
class _RecordModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class GradeCategoryModel(BaseModel):
    name: str
    weight: float


class CourseCreate(_RecordModel):
    code: str
    color: str = ""
    target_grade: Optional[float] = Field(None, alias="targetGrade")
    grade_categories: Optional[List[GradeCategoryModel]] = Field(None, alias="gradeCategories")


class CourseUpdate(_RecordModel):
    code: Optional[str] = None
    color: Optional[str] = None
    target_grade: Optional[float] = Field(None, alias="targetGrade")
    grade_categories: Optional[List[GradeCategoryModel]] = Field(None, alias="gradeCategories")


class CourseResponse(_RecordModel):
    id: int = Field(..., alias="Id")
    code: Any = None
    color: Any = None
    target_grade: Any = Field(None, alias="targetGrade")
    grade_categories: List[Dict[str, Any]] = Field(default_factory=list, alias="gradeCategories")


class AssignmentCreate(_RecordModel):
    course_id: int = Field(..., alias="courseId")
    title: str
    category: Optional[str] = None
    completed: bool = False
    grade: Optional[float] = None


class AssignmentUpdate(_RecordModel):
    course_id: Optional[int] = Field(None, alias="courseId")
    title: Optional[str] = None
    category: Optional[str] = None
    completed: Optional[bool] = None
    grade: Optional[float] = None


class AssignmentResponse(_RecordModel):
    id: int = Field(..., alias="Id")
    course_id: Any = Field(None, alias="courseId")
    title: Any = None
    category: Any = None
    completed: Any = None
    grade: Any = None


class CategoryGradeResponse(BaseModel):
    name: str
    weight: float
    average: float
    count: int
    weightedScore: float


class CourseGradeResponse(BaseModel):
    courseId: Optional[int] = None
    code: Any = None
    color: Any = None
    targetGrade: Optional[float] = None
    categories: List[CategoryGradeResponse]
    currentGrade: float
    totalWeight: float
    adjustedGrade: float
    displayGrade: int
    gradedCount: int
    recentAssignments: List[Dict[str, Any]] = []


class DeleteResponse(BaseModel):
    success: bool


class GradesOverviewResponse(BaseModel):
    courses: List[Dict[str, Any]]
    selectedCourseId: Optional[int] = None
    error: Optional[str] = None
    report: Optional[CourseGradeResponse] = None


def _payload(model: BaseModel) -> Dict[str, Any]:
    """Request body as stored keys, keeping only the fields that were sent."""
    return model.model_dump(by_alias=True, exclude_unset=True)


class StudyFlowRestAPI:
    """REST API implementation for the StudyFlow platform."""

    def __init__(self, course_service: CourseService, assignment_service: AssignmentService):
        self._course_service = course_service
        self._assignment_service = assignment_service

        # Create FastAPI app
        self.app = FastAPI(
            title="StudyFlow API",
            description="Courses, assignments and weighted grade breakdowns",
            version="1.0.0",
            docs_url="/docs",
            redoc_url="/redoc"
        )

        # Add CORS middleware
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        # Setup routes
        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "StudyFlow API",
                "version": "1.0.0",
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Course endpoints
        @self.app.get("/courses", response_model=List[CourseResponse])
        async def list_courses():
            """List all courses."""
            try:
                return await self._course_service.get_all()
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)

        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        async def create_course(course_data: CourseCreate):
            """Create a new course."""
            try:
                return await self._course_service.create(_payload(course_data))
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)

        @self.app.get("/courses/{course_id}", response_model=CourseResponse)
        async def get_course(course_id: str):
            """Get a course by ID."""
            try:
                course = await self._course_service.get_by_id(course_id)
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)
            if course is None:
                raise HTTPException(status_code=404, detail="Course not found")
            return course

        @self.app.put("/courses/{course_id}", response_model=CourseResponse)
        async def update_course(course_id: str, course_data: CourseUpdate):
            """Merge fields into an existing course."""
            try:
                course = await self._course_service.update(course_id, _payload(course_data))
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)
            if course is None:
                raise HTTPException(status_code=404, detail="Course not found")
            return course

        @self.app.delete("/courses/{course_id}", response_model=DeleteResponse)
        async def delete_course(course_id: str):
            """Delete a course; deleting a missing course still succeeds."""
            try:
                return {"success": await self._course_service.delete(course_id)}
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)

        @self.app.get("/courses/{course_id}/grades", response_model=CourseGradeResponse)
        async def get_course_grades(course_id: str):
            """Weighted grade breakdown for one course."""
            try:
                course = await self._course_service.get_by_id(course_id)
                if course is None:
                    raise HTTPException(status_code=404, detail="Course not found")
                assignments = await self._assignment_service.get_all()
                return build_course_report(course, assignments).to_dict()
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)

        # Assignment endpoints
        @self.app.get("/assignments", response_model=List[AssignmentResponse])
        async def list_assignments(course_id: Optional[str] = None):
            """List assignments, optionally for one course."""
            try:
                if course_id is not None:
                    return await self._assignment_service.get_by_course(course_id)
                return await self._assignment_service.get_all()
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)

        @self.app.post("/assignments", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
        async def create_assignment(assignment_data: AssignmentCreate):
            """Create a new assignment."""
            try:
                return await self._assignment_service.create(_payload(assignment_data))
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)

        @self.app.get("/assignments/{assignment_id}", response_model=AssignmentResponse)
        async def get_assignment(assignment_id: str):
            """Get an assignment by ID."""
            try:
                assignment = await self._assignment_service.get_by_id(assignment_id)
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)
            if assignment is None:
                raise HTTPException(status_code=404, detail="Assignment not found")
            return assignment

        @self.app.put("/assignments/{assignment_id}", response_model=AssignmentResponse)
        async def update_assignment(assignment_id: str, assignment_data: AssignmentUpdate):
            """Merge fields into an existing assignment."""
            try:
                assignment = await self._assignment_service.update(assignment_id, _payload(assignment_data))
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)
            if assignment is None:
                raise HTTPException(status_code=404, detail="Assignment not found")
            return assignment

        @self.app.delete("/assignments/{assignment_id}", response_model=DeleteResponse)
        async def delete_assignment(assignment_id: str):
            """Delete an assignment."""
            try:
                return {"success": await self._assignment_service.delete(assignment_id)}
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=e.message)
            except PersistenceError as e:
                raise HTTPException(status_code=500, detail=e.message)

        # Grades overview
        @self.app.get("/grades", response_model=GradesOverviewResponse)
        async def grades_overview(course_id: Optional[str] = None):
            """Load everything once and report on the selected course.

            Load failures come back as ``error`` rather than an HTTP error.
            """
            grades = GradesService(self._course_service, self._assignment_service,
                                   id_policy=self._course_service.id_policy)
            state = await grades.load()
            if course_id is not None:
                try:
                    grades.select_course(course_id)
                except ValidationError as e:
                    raise HTTPException(status_code=400, detail=e.message)
            report = grades.current_report() if state.error is None else None
            return {
                "courses": state.courses,
                "selectedCourseId": state.selected_course_id,
                "error": state.error,
                "report": report.to_dict() if report else None,
            }
