"""
Dashboard Summary Unit Tests

Tests for summarize_enrollments and the enrollment loader feeding it.
"""
import itertools

import pytest

from coursehub.models import AuthSession, Enrollment
from coursehub.services.dashboard_service import DashboardService, summarize_enrollments
from coursehub.utils.supabase_client import BackendError
from tests.conftest import FakeBackend


_ids = itertools.count(1)


def enrollment(progress, completed_at=None, duration=None, with_course=True):
    index = next(_ids)
    row = {
        'id': f'e{index}',
        'student_id': 'user-1',
        'progress_percentage': progress,
        'completed_at': completed_at,
    }
    if with_course:
        row['courses'] = {'id': f'c{index}', 'title': 'Course', 'duration_hours': duration}
    return Enrollment.model_validate(row)


class TestSummarizeEnrollments:
    """Tests for the dashboard aggregation."""

    def test_empty_list_reports_zeroes(self):
        stats = summarize_enrollments([])

        assert stats.total_courses == 0
        assert stats.completed_courses == 0
        assert stats.total_hours == 0
        assert stats.avg_progress == 0

    def test_reference_scenario(self):
        stats = summarize_enrollments([
            enrollment(40, None, 2),
            enrollment(100, '2024-01-01', 3),
        ])

        assert stats.total_courses == 2
        assert stats.completed_courses == 1
        assert stats.total_hours == 5
        assert stats.avg_progress == 70

    def test_average_rounds_half_up(self):
        stats = summarize_enrollments([enrollment(0), enrollment(1)])

        assert stats.avg_progress == 1

    def test_average_rounds_down_below_half(self):
        stats = summarize_enrollments([enrollment(33), enrollment(33), enrollment(34)])

        assert stats.avg_progress == 33

    def test_missing_fields_count_as_zero(self):
        stats = summarize_enrollments([
            enrollment(None, None, None),
            enrollment(50, None, 4, with_course=False),
            enrollment(100, None, 'not-a-number'),
        ])

        assert stats.total_courses == 3
        assert stats.total_hours == 0
        assert stats.avg_progress == 50

    def test_blank_completion_timestamp_is_not_completed(self):
        stats = summarize_enrollments([enrollment(10, '')])

        assert stats.completed_courses == 0

    @pytest.mark.parametrize('progresses', [
        [0],
        [100],
        [0, 100, 55.5],
        [99.9, 99.9, 100],
        [12.5, 37.5, 62.5, 87.5],
    ])
    def test_bounds_hold_for_in_range_progress(self, progresses):
        enrollments = [
            enrollment(p, '2024-02-02T10:00:00+00:00' if p == 100 else None, 1)
            for p in progresses
        ]

        stats = summarize_enrollments(enrollments)

        assert stats.completed_courses <= stats.total_courses
        assert 0 <= stats.avg_progress <= 100
        assert stats.total_hours == len(progresses)

    def test_serializes_with_camel_case_keys(self):
        stats = summarize_enrollments([enrollment(40, None, 2)])

        assert stats.model_dump(by_alias=True) == {
            'totalCourses': 1,
            'completedCourses': 0,
            'totalHours': 2,
            'avgProgress': 40,
        }

    def test_full_timestamp_counts_as_completed(self):
        stats = summarize_enrollments([enrollment(100, '2024-01-01T09:30:00+00:00', 3)])

        assert stats.completed_courses == 1

    @pytest.mark.parametrize('completed_at', ['done', 'yesterday', '2024-13-45', True])
    def test_unparseable_completion_marker_still_counts(self, completed_at):
        stats = summarize_enrollments([enrollment(100, completed_at, 3)])

        assert stats.total_courses == 1
        assert stats.completed_courses == 1
        assert stats.total_hours == 3

    def test_false_completion_marker_is_not_completed(self):
        stats = summarize_enrollments([enrollment(20, False, 1)])

        assert stats.completed_courses == 0


class TestDashboardServiceLoad:
    """Tests for DashboardService.load against the in-memory backend."""

    @pytest.fixture
    def session(self):
        return AuthSession(user_id='user-1', email='student@example.com', access_token='token-1')

    def test_every_enrollment_row_is_counted(self, session):
        backend = FakeBackend()
        backend.tables['enrollments'] = [
            {'id': 'e1', 'student_id': 'user-1', 'progress_percentage': 40, 'completed_at': None,
             'courses': {'id': 'c1', 'title': 'Intro to Go', 'duration_hours': 2}},
            {'id': 'e2', 'student_id': 'user-1', 'progress_percentage': 100, 'completed_at': 'done',
             'courses': {'id': 'c2', 'title': 'Advanced Rust', 'duration_hours': 3}},
        ]

        data = DashboardService(backend).load(session)

        assert data.stats.model_dump(by_alias=True) == {
            'totalCourses': 2,
            'completedCourses': 1,
            'totalHours': 5,
            'avgProgress': 70,
        }
        assert [e.id for e in data.enrollments] == ['e1', 'e2']

    def test_profile_read_failure_still_loads_enrollments(self, session):
        backend = FakeBackend()
        backend.table_errors['profiles'] = BackendError('permission denied for table profiles', '42501')
        backend.tables['enrollments'] = [
            {'id': 'e1', 'student_id': 'user-1', 'progress_percentage': 50,
             'courses': {'id': 'c1', 'title': 'Intro to Go', 'duration_hours': 4}},
        ]

        data = DashboardService(backend).load(session)

        assert data.profile is None
        assert data.stats.total_courses == 1
        assert data.stats.total_hours == 4
        assert data.stats.avg_progress == 50

    def test_enrollment_read_failure_propagates(self, session):
        backend = FakeBackend()
        backend.table_errors['enrollments'] = BackendError('connection reset')

        with pytest.raises(BackendError):
            DashboardService(backend).load(session)
