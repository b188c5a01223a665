"""
Course Controller Module
Catalog listing with search, and the course detail page
"""
from flask import Blueprint, flash, render_template, request
import logging

from coursehub.services.search import filter_courses
from coursehub.utils.services import course_service
from coursehub.utils.supabase_client import BackendError

logger = logging.getLogger(__name__)
course_bp = Blueprint('course', __name__)


@course_bp.route('/courses', methods=['GET'])
def list_courses():
    """
    Render published courses, filtered by the optional ?q= search term
    @returns: HTML course grid
    """
    search_term = request.args.get('q', '')
    courses = []
    try:
        courses = course_service().list_published()
    except BackendError as e:
        logger.error(f"Error fetching courses: {e.message}")
        flash(f"Error fetching courses: {e.message}", 'error')

    filtered_courses = filter_courses(courses, search_term)
    return render_template(
        'courses.html',
        courses=filtered_courses,
        search_term=search_term,
        total_count=len(courses),
    )


@course_bp.route('/courses/<course_id>', methods=['GET'])
def course_detail(course_id):
    """
    Render one course, or the not-found page when it does not exist
    @param course_id: str - Course primary key from the URL
    """
    course = None
    try:
        course = course_service().get_course(course_id)
    except BackendError as e:
        logger.error(f"Error fetching course details for {course_id}: {e.message}")
        flash(f"Error fetching course details: {e.message}", 'error')

    if course is None:
        return render_template('course_not_found.html', course_id=course_id), 404

    return render_template('course_detail.html', course=course)
