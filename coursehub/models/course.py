"""
Course Model Module
Defines the course row shapes read from and written to Supabase
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CourseLevel(str, Enum):
    """Difficulty levels accepted by the courses.level column"""
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'


class Category(BaseModel):
    """Row of the categories table (or the name-only join projection)"""
    model_config = ConfigDict(extra='ignore')

    id: Optional[str] = None
    name: str
    description: Optional[str] = None


class Course(BaseModel):
    """
    Course Model
    Represents a row of the courses table. Only title and instructor_id are
    required by the schema, every other column is nullable.
    """
    model_config = ConfigDict(extra='ignore')

    id: str
    title: str
    instructor_id: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    price: Optional[float] = None
    level: Optional[str] = None
    duration_hours: Optional[float] = None
    is_published: Optional[bool] = None
    thumbnail_url: Optional[str] = None
    category_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_free(self) -> bool:
        return not self.price or self.price <= 0


class CourseInsert(BaseModel):
    """Insert payload produced by the admin form"""
    title: str
    short_description: str
    description: str
    level: CourseLevel = CourseLevel.BEGINNER
    is_published: bool = False
    price: float = Field(ge=0)
    duration_hours: int = Field(gt=0)
    instructor_id: str

    def to_row(self) -> dict:
        return self.model_dump(mode='json')


class CourseWithDisplayInfo(Course):
    """
    Course decorated for display.

    rating and student_count are placeholders supplied by a metrics
    provider at fetch time; they are never persisted.
    """
    instructor_name: Optional[str] = None
    categories: List[Category] = Field(default_factory=list)
    rating: Optional[float] = None
    student_count: Optional[int] = None

    @field_validator('categories', mode='before')
    @classmethod
    def flatten_categories(cls, value):
        # A many-to-one join comes back as a single object (or null)
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value
