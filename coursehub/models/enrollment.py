"""
Enrollment Model Module
Defines enrollment rows joined with the course fields the dashboard needs
"""
import math
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _number_or_none(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class EnrolledCourse(BaseModel):
    """The courses (id, title, thumbnail_url, duration_hours) projection"""
    model_config = ConfigDict(extra='ignore')

    id: Optional[str] = None
    title: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_hours: Optional[float] = None

    @field_validator('duration_hours', mode='before')
    @classmethod
    def coerce_duration(cls, value):
        return _number_or_none(value)


class Enrollment(BaseModel):
    """
    Row of the enrollments table.

    Enrollments are created outside this application and are read-only here.
    The joined course arrives under the relation name "courses".
    """
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    id: str
    student_id: Optional[str] = None
    course_id: Optional[str] = None
    progress_percentage: Optional[float] = None
    # Unparseable timestamps are kept as text so the row still counts
    completed_at: Optional[Union[datetime, str]] = Field(default=None, union_mode='left_to_right')
    enrolled_at: Optional[Union[datetime, str]] = Field(default=None, union_mode='left_to_right')
    course: Optional[EnrolledCourse] = Field(default=None, alias='courses')

    @field_validator('progress_percentage', mode='before')
    @classmethod
    def coerce_progress(cls, value):
        return _number_or_none(value)

    @field_validator('course', mode='before')
    @classmethod
    def unwrap_course(cls, value):
        if isinstance(value, list):
            return value[0] if value else None
        return value

    @field_validator('completed_at', 'enrolled_at', mode='before')
    @classmethod
    def normalize_timestamp(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, bool):
            return 'true' if value else None
        return value

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def progress(self) -> float:
        return self.progress_percentage or 0


class DashboardStats(BaseModel):
    """Summary figures shown on the student dashboard"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_courses: int = 0
    completed_courses: int = 0
    total_hours: float = 0
    avg_progress: int = 0
