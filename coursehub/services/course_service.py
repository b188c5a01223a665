"""
Course Service Module
Handles reading courses from Supabase and decorating them for display
"""
from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from coursehub.models import Course, CourseWithDisplayInfo
from coursehub.services.metrics_provider import MetricsProvider
from coursehub.utils.logger import custom_logger

logger = logging.getLogger(__name__)

COURSES_TABLE = 'courses'

# Course row joined with the instructor's display name and the category name
COURSE_WITH_RELATIONS = """
    *,
    profiles:instructor_id (full_name),
    categories (name)
"""


class CourseService:
    """
    Service class for course reads.
    @param backend: SupabaseBackend (or any object with the same select methods)
    @param metrics: MetricsProvider supplying rating and student_count
    """

    def __init__(self, backend, metrics: MetricsProvider, featured_limit: int = 6):
        self.backend = backend
        self.metrics = metrics
        self.featured_limit = featured_limit

    def _decorate(self, row: Dict[str, Any]) -> Optional[CourseWithDisplayInfo]:
        """
        Turn a joined course row into a display model
        @returns: CourseWithDisplayInfo, or None when the row is malformed
        """
        instructor = row.get('profiles')
        if isinstance(instructor, list):
            instructor = instructor[0] if instructor else None

        data = {key: value for key, value in row.items() if key != 'profiles'}
        data['instructor_name'] = instructor.get('full_name') if isinstance(instructor, dict) else None

        try:
            course = CourseWithDisplayInfo.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Skipping malformed course row {row.get('id')}: {e.error_count()} error(s)")
            return None

        course.rating = self.metrics.rating(course)
        course.student_count = self.metrics.student_count(course)
        return course

    def _decorate_all(self, rows: List[Dict[str, Any]]) -> List[CourseWithDisplayInfo]:
        courses = []
        for row in rows:
            course = self._decorate(row)
            if course is not None:
                courses.append(course)
        return courses

    @custom_logger.log_function_call
    def list_published(self) -> List[CourseWithDisplayInfo]:
        """Every published course, in backend order"""
        rows = self.backend.select(
            COURSES_TABLE,
            columns=COURSE_WITH_RELATIONS,
            filters={'is_published': True},
        )
        return self._decorate_all(rows)

    @custom_logger.log_function_call
    def list_featured(self, limit: Optional[int] = None) -> List[CourseWithDisplayInfo]:
        """The first few published courses for the home page"""
        rows = self.backend.select(
            COURSES_TABLE,
            columns=COURSE_WITH_RELATIONS,
            filters={'is_published': True},
            limit=limit if limit is not None else self.featured_limit,
        )
        return self._decorate_all(rows)

    @custom_logger.log_function_call
    def get_course(self, course_id: str) -> Optional[CourseWithDisplayInfo]:
        """
        Fetch one course with instructor and category
        @param course_id: str - Course primary key
        @returns: CourseWithDisplayInfo or None if the course does not exist
        """
        row = self.backend.select_one(
            COURSES_TABLE,
            columns=COURSE_WITH_RELATIONS,
            filters={'id': course_id},
        )
        if row is None:
            logger.info(f"Course {course_id} not found")
            return None
        return self._decorate(row)

    @custom_logger.log_function_call
    def list_all(self) -> List[Course]:
        """Every course regardless of publication, newest first (admin view)"""
        rows = self.backend.select(COURSES_TABLE, order=('created_at', True))
        courses = []
        for row in rows:
            try:
                courses.append(Course.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed course row {row.get('id')}: {e.error_count()} error(s)")
        return courses
