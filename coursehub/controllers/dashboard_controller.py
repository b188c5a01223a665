"""
Dashboard Controller Module
Student dashboard with enrollment progress
"""
from flask import Blueprint, flash, render_template
import logging

from coursehub.services.dashboard_service import DashboardData
from coursehub.utils.auth_context import current_session, login_required
from coursehub.utils.services import dashboard_service
from coursehub.utils.supabase_client import BackendError

logger = logging.getLogger(__name__)
dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/dashboard', methods=['GET'])
@login_required
def dashboard():
    """
    Render the signed-in student's dashboard
    @returns: HTML page with summary cards and per-course progress
    """
    auth_session = current_session()
    data = DashboardData()
    try:
        data = dashboard_service().load(auth_session)
    except BackendError as e:
        logger.error(f"Error fetching dashboard data for {auth_session.user_id}: {e.message}")
        flash(f"Error fetching dashboard data: {e.message}", 'error')

    display_name = (data.profile.full_name if data.profile else None) or auth_session.display_name
    return render_template(
        'dashboard.html',
        display_name=display_name,
        enrollments=data.enrollments,
        stats=data.stats,
    )
