"""
Pytest Configuration and Fixtures

Provides an in-memory backend standing in for Supabase and a Flask app
wired to it.
"""
import random
from typing import Any, Dict, List, Optional

import pytest

from coursehub import create_app
from coursehub.models import AuthSession
from coursehub.services.metrics_provider import MockMetricsProvider
from coursehub.utils.auth_context import SESSION_KEY
from coursehub.utils.supabase_client import AuthenticationError, BackendError


class FakeBackend:
    """
    In-memory replacement for SupabaseBackend.

    Rows are stored already joined, the way PostgREST returns them for the
    projections the services request. Every call is recorded in `calls`.
    """

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            'courses': [],
            'enrollments': [],
            'profiles': [],
        }
        self.users: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        self.error: Optional[BackendError] = None
        self.table_errors: Dict[str, BackendError] = {}
        self.access_tokens: List[Optional[str]] = []

    def _maybe_fail(self, table=None):
        if self.error is not None:
            raise self.error
        if table in self.table_errors:
            raise self.table_errors[table]

    def _matching(self, table, filters):
        return [
            row for row in self.tables.get(table, [])
            if all(row.get(column) == value for column, value in (filters or {}).items())
        ]

    def select(self, table, columns='*', filters=None, order=None, limit=None):
        self.calls.append(('select', table, filters, order, limit))
        self._maybe_fail(table)
        rows = self._matching(table, filters)
        if order:
            column, descending = order
            rows = sorted(rows, key=lambda row: row.get(column) or '', reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [dict(row) for row in rows]

    def select_one(self, table, columns='*', filters=None):
        self.calls.append(('select_one', table, filters))
        self._maybe_fail(table)
        rows = self._matching(table, filters)
        return dict(rows[0]) if rows else None

    def insert(self, table, row):
        self.calls.append(('insert', table, row))
        self._maybe_fail(table)
        stored = dict(row)
        stored.setdefault('id', f'{table}-{len(self.tables.setdefault(table, [])) + 1}')
        self.tables[table].append(stored)
        return [stored]

    def add_user(self, user_id, email, password, access_token):
        self.users[email] = {
            'id': user_id,
            'email': email,
            'password': password,
            'access_token': access_token,
        }

    def sign_in(self, email, password):
        self.calls.append(('sign_in', email))
        self._maybe_fail()
        user = self.users.get(email)
        if user is None or user['password'] != password:
            raise AuthenticationError('Invalid login credentials')
        return AuthSession(
            user_id=user['id'],
            email=email,
            access_token=user['access_token'],
            refresh_token='refresh-' + user['id'],
        )

    def sign_up(self, email, password, full_name=None, redirect_to=None):
        self.calls.append(('sign_up', email, full_name))
        self._maybe_fail()
        if email in self.users:
            raise AuthenticationError('User already registered')
        return None

    def get_user(self, access_token):
        self.calls.append(('get_user', access_token))
        self._maybe_fail()
        for user in self.users.values():
            if user['access_token'] == access_token:
                return {'id': user['id'], 'email': user['email']}
        return None

    def sign_out(self, session):
        self.calls.append(('sign_out', session.user_id))
        self._maybe_fail()

    def calls_named(self, name):
        return [call for call in self.calls if call[0] == name]


# ==================== Data Fixtures ====================

def make_course(course_id, title, short_description='', **overrides) -> Dict[str, Any]:
    row = {
        'id': course_id,
        'title': title,
        'short_description': short_description,
        'description': f'All about {title}',
        'price': 0,
        'level': 'beginner',
        'duration_hours': 2,
        'is_published': True,
        'thumbnail_url': None,
        'instructor_id': 'instructor-1',
        'category_id': 'category-1',
        'created_at': '2024-01-01T00:00:00+00:00',
        'profiles': {'full_name': 'Ada Lovelace'},
        'categories': {'name': 'Programming'},
    }
    row.update(overrides)
    return row


@pytest.fixture
def backend() -> FakeBackend:
    fake = FakeBackend()
    fake.tables['courses'] = [
        make_course('c1', 'Intro to Go', 'Learn the Go language', price=49.99),
        make_course('c2', 'Advanced Rust', 'Ownership and lifetimes', duration_hours=3),
        make_course('c3', 'Draft Course', 'Not visible yet', is_published=False,
                    created_at='2024-03-01T00:00:00+00:00'),
    ]
    fake.add_user('user-1', 'student@example.com', 'secret', 'token-1')
    return fake


@pytest.fixture
def metrics() -> MockMetricsProvider:
    return MockMetricsProvider(rng=random.Random(42))


@pytest.fixture
def app(backend, metrics):
    def factory(access_token=None):
        backend.access_tokens.append(access_token)
        return backend

    flask_app = create_app('testing', backend_factory=factory, metrics_provider=metrics)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signed_in_client(client):
    """Test client carrying the session of user-1"""
    with client.session_transaction() as session:
        session[SESSION_KEY] = AuthSession(
            user_id='user-1',
            email='student@example.com',
            access_token='token-1',
            refresh_token='refresh-user-1',
        ).model_dump()
    return client
