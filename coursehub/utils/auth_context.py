"""
Request-scoped auth session.

The signed-in user's AuthSession lives in Flask's signed session cookie.
It is loaded into g.auth_session before each request and handed to
services explicitly; nothing else reads the cookie.
"""
import functools
import logging
from typing import Optional

from flask import flash, g, redirect, request, session, url_for
from pydantic import ValidationError

from coursehub.models import AuthSession

logger = logging.getLogger(__name__)

SESSION_KEY = 'auth_session'


def establish_session(auth_session: AuthSession) -> None:
    """Store a freshly signed-in session"""
    session[SESSION_KEY] = auth_session.model_dump()
    g.auth_session = auth_session


def clear_session() -> None:
    session.pop(SESSION_KEY, None)
    g.auth_session = None
    g.pop('backend', None)


def load_auth_session() -> None:
    """before_request hook: expose the current session as g.auth_session"""
    data = session.get(SESSION_KEY)
    g.auth_session = None
    if not data:
        return
    try:
        g.auth_session = AuthSession.model_validate(data)
    except ValidationError:
        logger.warning("Discarding unreadable auth session cookie")
        session.pop(SESSION_KEY, None)


def current_session() -> Optional[AuthSession]:
    return g.get('auth_session')


def login_required(view):
    """Redirect anonymous visitors to the sign-in page"""
    @functools.wraps(view)
    def wrapped(*args, **kwargs):
        if current_session() is None:
            flash('Please sign in to continue.', 'info')
            return redirect(url_for('auth.auth_page', next=request.path))
        return view(*args, **kwargs)
    return wrapped
