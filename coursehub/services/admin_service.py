"""
Admin Service Module
Validates the course creation form and inserts new course rows
"""
import math
import re
from typing import Any, Dict, Mapping, Optional
import logging

from coursehub.models import AuthSession, Course, CourseInsert, CourseLevel
from coursehub.utils.logger import custom_logger

logger = logging.getLogger(__name__)

DEFAULT_FORM: Dict[str, Any] = {
    'title': '',
    'short_description': '',
    'description': '',
    'price': 0,
    'level': CourseLevel.BEGINNER.value,
    'duration_hours': 1,
    'is_published': False,
}


class CourseValidationError(Exception):
    """A form value was rejected before anything was sent to the backend"""

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title
        self.message = message


def default_form() -> Dict[str, Any]:
    return dict(DEFAULT_FORM)


def _text(form: Mapping[str, Any], name: str) -> str:
    value = form.get(name)
    return str(value).strip() if value is not None else ''


# Leading numeric prefix of a form value; trailing text is ignored ("5h" is 5)
LEADING_FLOAT = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
LEADING_INT = re.compile(r'^[+-]?\d+')


def _number(text: str) -> Optional[float]:
    match = LEADING_FLOAT.match(text)
    if match is None:
        return None
    number = float(match.group())
    return number if math.isfinite(number) else None


def _integer(text: str) -> Optional[int]:
    match = LEADING_INT.match(text)
    return int(match.group()) if match else None


def _parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'on', 'yes')


def validate_course_form(form: Mapping[str, Any], instructor_id: str = '') -> CourseInsert:
    """
    Check the submitted course form
    @param form: Mapping of field name to submitted value
    @param instructor_id: str - user id recorded as the course instructor
    @returns: CourseInsert ready to be written
    @raises: CourseValidationError describing the first invalid field
    """
    title = _text(form, 'title')
    description = _text(form, 'description')
    short_description = _text(form, 'short_description')
    if not title or not description or not short_description:
        raise CourseValidationError('Validation Error', 'Please fill in all required fields.')

    price = _number(_text(form, 'price'))
    if price is None or price < 0:
        raise CourseValidationError('Invalid Price', 'Price must be a non-negative number.')

    duration_hours = _integer(_text(form, 'duration_hours'))
    if duration_hours is None or duration_hours <= 0:
        raise CourseValidationError('Invalid Duration', 'Duration must be a positive number of hours.')

    level_value = _text(form, 'level') or CourseLevel.BEGINNER.value
    try:
        level = CourseLevel(level_value)
    except ValueError:
        raise CourseValidationError('Invalid Level', 'Level must be beginner, intermediate or advanced.')

    return CourseInsert(
        title=title,
        short_description=short_description,
        description=description,
        level=level,
        is_published=_parse_flag(form.get('is_published', False)),
        price=price,
        duration_hours=duration_hours,
        instructor_id=instructor_id,
    )


class AdminService:
    """Course creation on behalf of the signed-in user"""

    def __init__(self, backend):
        self.backend = backend

    @custom_logger.log_function_call
    def create_course(self, form: Mapping[str, Any], session: Optional[AuthSession]) -> Optional[Course]:
        """
        Validate the form and insert the course with the acting user as instructor
        @param form: submitted form values
        @param session: AuthSession of the acting user, None when signed out
        @returns: The inserted Course (None if the backend returned no row)
        @raises: CourseValidationError, BackendError
        """
        course_insert = validate_course_form(form)

        user = self.backend.get_user(session.access_token) if session is not None else None
        if user is None:
            raise CourseValidationError('Authentication Error', 'You must be logged in to create a course.')

        course_insert = course_insert.model_copy(update={'instructor_id': user['id']})
        rows = self.backend.insert('courses', course_insert.to_row())
        logger.info(f"Course '{course_insert.title}' created by {user['id']}")
        return Course.model_validate(rows[0]) if rows else None
