"""
Per-request construction of the backend adapter and the services using it
"""
from flask import current_app, g

from coursehub.services.admin_service import AdminService
from coursehub.services.course_service import CourseService
from coursehub.services.dashboard_service import DashboardService
from coursehub.utils.auth_context import current_session

BACKEND_FACTORY_KEY = 'coursehub.backend_factory'
METRICS_PROVIDER_KEY = 'coursehub.metrics_provider'


def get_backend():
    """
    Backend for the current request, created on first use.
    Requests with a signed-in user run as that user.
    """
    if 'backend' not in g:
        factory = current_app.extensions[BACKEND_FACTORY_KEY]
        auth_session = current_session()
        g.backend = factory(auth_session.access_token if auth_session else None)
    return g.backend


def release_backend(exception=None) -> None:
    """teardown hook: drop the request's backend"""
    g.pop('backend', None)


def course_service() -> CourseService:
    return CourseService(
        get_backend(),
        current_app.extensions[METRICS_PROVIDER_KEY],
        featured_limit=current_app.config['FEATURED_COURSE_LIMIT'],
    )


def dashboard_service() -> DashboardService:
    return DashboardService(get_backend())


def admin_service() -> AdminService:
    return AdminService(get_backend())
