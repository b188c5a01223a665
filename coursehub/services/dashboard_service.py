"""
Dashboard Service Module
Loads a student's enrollments and derives the dashboard summary
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import logging

from pydantic import ValidationError

from coursehub.models import AuthSession, DashboardStats, Enrollment, Profile
from coursehub.utils.logger import custom_logger
from coursehub.utils.supabase_client import BackendError

logger = logging.getLogger(__name__)

ENROLLMENT_WITH_COURSE = """
    *,
    courses (
        id,
        title,
        thumbnail_url,
        duration_hours
    )
"""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize_enrollments(enrollments: Sequence[Enrollment]) -> DashboardStats:
    """
    Derive the four dashboard figures from a student's enrollments.

    Missing progress or course duration counts as zero. The average of an
    empty list is 0.
    """
    total_courses = len(enrollments)
    completed_courses = sum(1 for e in enrollments if e.completed_at is not None)
    total_hours = sum(
        (e.course.duration_hours or 0) if e.course is not None else 0
        for e in enrollments
    )

    avg_progress = 0
    if total_courses > 0:
        average = sum(e.progress for e in enrollments) / total_courses
        avg_progress = min(100, max(0, _round_half_up(average)))

    return DashboardStats(
        total_courses=total_courses,
        completed_courses=completed_courses,
        total_hours=total_hours,
        avg_progress=avg_progress,
    )


@dataclass
class DashboardData:
    """Everything the dashboard page renders"""
    profile: Optional[Profile] = None
    enrollments: List[Enrollment] = field(default_factory=list)
    stats: DashboardStats = field(default_factory=DashboardStats)


class DashboardService:
    """Reads the profile and enrollments of the signed-in student"""

    def __init__(self, backend):
        self.backend = backend

    def get_profile(self, session: AuthSession) -> Optional[Profile]:
        """The student's profile, or None when it is missing or unreadable"""
        try:
            row = self.backend.select_one('profiles', filters={'user_id': session.user_id})
        except BackendError as e:
            logger.warning(f"Could not read profile for user {session.user_id}: {e.message}")
            return None
        if row is None:
            return None
        try:
            return Profile.model_validate(row)
        except ValidationError as e:
            logger.warning(f"Malformed profile for user {session.user_id}: {e.error_count()} error(s)")
            return None

    def get_enrollments(self, session: AuthSession) -> List[Enrollment]:
        rows = self.backend.select(
            'enrollments',
            columns=ENROLLMENT_WITH_COURSE,
            filters={'student_id': session.user_id},
        )
        enrollments = []
        for row in rows:
            try:
                enrollments.append(Enrollment.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed enrollment {row.get('id')}: {e.error_count()} error(s)")
        return enrollments

    @custom_logger.log_function_call
    def load(self, session: AuthSession) -> DashboardData:
        """
        Fetch profile and enrollments, then compute the summary
        @param session: AuthSession of the student
        @returns: DashboardData
        """
        profile = self.get_profile(session)
        enrollments = self.get_enrollments(session)
        return DashboardData(
            profile=profile,
            enrollments=enrollments,
            stats=summarize_enrollments(enrollments),
        )
