"""
Admin Controller Module
Course creation form and the list of existing courses
"""
from flask import Blueprint, flash, render_template, request
import logging

from coursehub.services.admin_service import CourseValidationError, default_form
from coursehub.utils.auth_context import current_session
from coursehub.utils.services import admin_service, course_service
from coursehub.utils.supabase_client import BackendError

logger = logging.getLogger(__name__)
admin_bp = Blueprint('admin', __name__)


def _existing_courses():
    try:
        return course_service().list_all()
    except BackendError as e:
        logger.error(f"Error fetching courses: {e.message}")
        flash(f"Error fetching courses: {e.message}", 'error')
        return []


@admin_bp.route('/admin', methods=['GET'])
def admin_page():
    """
    Render the course creation form and all existing courses, newest first
    """
    return render_template('admin.html', form=default_form(), courses=_existing_courses())


@admin_bp.route('/admin', methods=['POST'])
def create_course():
    """
    Create a course from the submitted form
    @body: title, short_description, description, price, duration_hours, level, is_published
    @returns: The admin page; the form is reset on success and kept on failure
    """
    form = default_form()
    form.update(request.form.to_dict())
    form['is_published'] = 'is_published' in request.form

    try:
        admin_service().create_course(form, current_session())
    except CourseValidationError as e:
        logger.warning(f"Course form rejected: {e.title}: {e.message}")
        flash(f"{e.title}: {e.message}", 'error')
        return render_template('admin.html', form=form, courses=_existing_courses()), 400
    except BackendError as e:
        logger.error(f"Error creating course: {e.message}")
        flash(f"Error creating course: {e.message}", 'error')
        return render_template('admin.html', form=form, courses=_existing_courses()), 502

    flash('Course created successfully: the new course has been added to the database.', 'success')
    return render_template('admin.html', form=default_form(), courses=_existing_courses())
