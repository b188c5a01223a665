"""
API Controller Module
JSON renditions of the catalog and dashboard read models
"""
from flask import Blueprint, jsonify, request
import logging

from coursehub.services.search import filter_courses
from coursehub.utils.auth_context import current_session
from coursehub.utils.services import course_service, dashboard_service
from coursehub.utils.supabase_client import BackendError

logger = logging.getLogger(__name__)
api_bp = Blueprint('api', __name__)


def _backend_error(e: BackendError):
    return jsonify({
        'status': 'error',
        'message': e.message,
        'error_code': 'BACKEND_ERROR'
    }), 502


@api_bp.route('/courses', methods=['GET'])
def list_courses():
    """
    Published courses, optionally filtered
    @query q: case-insensitive search over title and short description
    @returns: JSON list of courses with display info
    """
    try:
        courses = course_service().list_published()
    except BackendError as e:
        logger.error(f"Error fetching courses: {e.message}")
        return _backend_error(e)

    courses = filter_courses(courses, request.args.get('q', ''))
    return jsonify({
        'message': 'Courses fetched successfully',
        'data': [course.model_dump(mode='json') for course in courses]
    }), 200


@api_bp.route('/courses/<course_id>', methods=['GET'])
def get_course(course_id):
    """
    One course with instructor and categories
    @param course_id: str - Course primary key
    """
    try:
        course = course_service().get_course(course_id)
    except BackendError as e:
        logger.error(f"Error fetching course {course_id}: {e.message}")
        return _backend_error(e)

    if course is None:
        return jsonify({
            'status': 'error',
            'message': f'Course not found: {course_id}',
            'error_code': 'COURSE_NOT_FOUND'
        }), 404

    return jsonify({
        'message': 'Course fetched successfully',
        'data': course.model_dump(mode='json')
    }), 200


@api_bp.route('/dashboard', methods=['GET'])
def get_dashboard():
    """
    The signed-in student's enrollments and summary statistics
    @returns: JSON with stats (camelCase keys) and enrollments
    """
    auth_session = current_session()
    if auth_session is None:
        return jsonify({
            'status': 'error',
            'message': 'You must be logged in to view the dashboard.',
            'error_code': 'NOT_AUTHENTICATED'
        }), 401

    try:
        data = dashboard_service().load(auth_session)
    except BackendError as e:
        logger.error(f"Error fetching dashboard data for {auth_session.user_id}: {e.message}")
        return _backend_error(e)

    return jsonify({
        'message': 'Dashboard fetched successfully',
        'data': {
            'profile': data.profile.model_dump(mode='json') if data.profile else None,
            'stats': data.stats.model_dump(mode='json', by_alias=True),
            'enrollments': [e.model_dump(mode='json') for e in data.enrollments],
        }
    }), 200
