"""Catalog search over an already fetched course list"""
from typing import List, Optional, Sequence, TypeVar

from coursehub.models import Course

C = TypeVar('C', bound=Course)


def filter_courses(courses: Sequence[C], term: Optional[str]) -> List[C]:
    """
    Keep the courses whose title or short description contains the term,
    ignoring case. A blank term returns every course. Order is preserved.
    """
    if term is None or term.strip() == '':
        return list(courses)

    needle = term.lower()
    return [
        course for course in courses
        if needle in (course.title or '').lower()
        or needle in (course.short_description or '').lower()
    ]
