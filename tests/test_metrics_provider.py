"""
Metrics Provider Unit Tests
"""
import random

import pytest

from coursehub.models import Course
from coursehub.services.metrics_provider import MetricsProvider, MockMetricsProvider


@pytest.fixture
def course():
    return Course(id='c1', title='Intro to Go', instructor_id='instructor-1')


def test_mock_values_stay_in_range(course):
    provider = MockMetricsProvider(rng=random.Random(7))

    for _ in range(200):
        rating = provider.rating(course)
        students = provider.student_count(course)
        assert 4.5 <= rating < 5.0
        assert 50 <= students <= 1049
        assert isinstance(students, int)


def test_same_seed_gives_same_values(course):
    first = MockMetricsProvider(rng=random.Random(3))
    second = MockMetricsProvider(rng=random.Random(3))

    assert [first.rating(course) for _ in range(5)] == [second.rating(course) for _ in range(5)]


def test_custom_ranges_are_honoured(course):
    provider = MockMetricsProvider(rating_min=1.0, rating_span=1.0, students_min=10, students_span=5,
                                   rng=random.Random(1))

    for _ in range(50):
        assert 1.0 <= provider.rating(course) < 2.0
        assert 10 <= provider.student_count(course) <= 14


def test_base_provider_is_abstract(course):
    provider = MetricsProvider()

    with pytest.raises(NotImplementedError):
        provider.rating(course)
    with pytest.raises(NotImplementedError):
        provider.student_count(course)
