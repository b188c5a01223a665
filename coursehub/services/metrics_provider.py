"""
Course metrics shown next to catalog entries.

No ratings or enrollment counts are computed from real records yet; the
mock provider fills the display fields with plausible random values on
every fetch. Replace MockMetricsProvider with a real implementation to
change what the views show.
"""
import random
from typing import Optional

from coursehub.models import Course


class MetricsProvider:
    """Interface for rating and student count lookups"""

    def rating(self, course: Course) -> Optional[float]:
        raise NotImplementedError

    def student_count(self, course: Course) -> Optional[int]:
        raise NotImplementedError


class MockMetricsProvider(MetricsProvider):
    """
    Random placeholder metrics.
    @param rating_min: lowest rating produced
    @param rating_span: ratings fall in [rating_min, rating_min + rating_span)
    @param students_min: lowest student count produced
    @param students_span: counts fall in [students_min, students_min + students_span - 1]
    @param rng: random.Random instance, injectable for deterministic tests
    """

    def __init__(
        self,
        rating_min: float = 4.5,
        rating_span: float = 0.5,
        students_min: int = 50,
        students_span: int = 1000,
        rng: Optional[random.Random] = None,
    ):
        self.rating_min = rating_min
        self.rating_span = rating_span
        self.students_min = students_min
        self.students_span = students_span
        self.rng = rng or random.Random()

    def rating(self, course: Course) -> float:
        return self.rating_min + self.rng.random() * self.rating_span

    def student_count(self, course: Course) -> int:
        return int(self.rng.random() * self.students_span) + self.students_min
