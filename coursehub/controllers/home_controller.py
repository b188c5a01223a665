"""
Home Controller Module
Landing page with the featured course grid
"""
from flask import Blueprint, flash, render_template
import logging

from coursehub.utils.services import course_service
from coursehub.utils.supabase_client import BackendError

logger = logging.getLogger(__name__)
home_bp = Blueprint('home', __name__)


@home_bp.route('/', methods=['GET'])
def index():
    """
    Render the landing page
    @returns: HTML page with up to FEATURED_COURSE_LIMIT published courses
    """
    courses = []
    try:
        courses = course_service().list_featured()
    except BackendError as e:
        logger.error(f"Error fetching featured courses: {e.message}")
        flash(f"Error fetching courses: {e.message}", 'error')

    return render_template('index.html', courses=courses)
