"""
Auth Controller Module
Email/password sign-in, sign-up and sign-out against Supabase auth
"""
from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
import logging

from coursehub.utils.auth_context import clear_session, current_session, establish_session
from coursehub.utils.logger import custom_logger
from coursehub.utils.services import get_backend
from coursehub.utils.supabase_client import AuthenticationError, BackendError

logger = logging.getLogger(__name__)
auth_bp = Blueprint('auth', __name__)

MODES = ('signin', 'signup')


def _safe_next(target):
    """Only follow redirects to local paths"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return url_for('dashboard.dashboard')


@auth_bp.route('/auth', methods=['GET'])
def auth_page():
    """
    Render the sign-in (default) or sign-up form
    @query mode: 'signin' or 'signup'
    """
    if current_session() is not None:
        return redirect(url_for('dashboard.dashboard'))

    mode = request.args.get('mode', 'signin')
    if mode not in MODES:
        mode = 'signin'
    return render_template('auth.html', mode=mode, next=request.args.get('next', ''), email='')


@auth_bp.route('/auth', methods=['POST'])
@custom_logger.log_function_call
def submit_auth():
    """
    Handle the sign-in or sign-up form
    @body: email, password, full_name (sign-up only), mode, next
    """
    mode = request.form.get('mode', 'signin')
    if mode not in MODES:
        mode = 'signin'
    email = request.form.get('email', '').strip()
    password = request.form.get('password', '')
    next_url = request.form.get('next', '')

    if not email or not password:
        flash('Email and password are required.', 'error')
        return render_template('auth.html', mode=mode, next=next_url, email=email), 400

    backend = get_backend()
    try:
        if mode == 'signup':
            auth_session = backend.sign_up(
                email,
                password,
                full_name=request.form.get('full_name', '').strip(),
                redirect_to=current_app.config['SITE_URL'],
            )
            if auth_session is None:
                flash('Check your email to confirm your account, then sign in.', 'success')
                return redirect(url_for('auth.auth_page'))
        else:
            auth_session = backend.sign_in(email, password)

    except AuthenticationError as e:
        flash(e.message, 'error')
        return render_template('auth.html', mode=mode, next=next_url, email=email), 401
    except BackendError as e:
        logger.error(f"Auth request failed: {e.message}")
        flash(f"Could not reach the authentication service: {e.message}", 'error')
        return render_template('auth.html', mode=mode, next=next_url, email=email), 502

    establish_session(auth_session)
    flash('Signed in successfully.', 'success')
    return redirect(_safe_next(next_url))


@auth_bp.route('/auth/signout', methods=['POST'])
def sign_out():
    """
    Revoke the backend session and clear the local one
    The local session is cleared even when the backend call fails.
    """
    auth_session = current_session()
    if auth_session is not None:
        try:
            get_backend().sign_out(auth_session)
        except BackendError as e:
            logger.warning(f"Backend sign-out failed for {auth_session.user_id}: {e.message}")
    clear_session()
    return redirect(url_for('home.index'))
