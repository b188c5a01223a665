"""
Thin adapter over the Supabase client.
Every row read/write and auth call made by the application goes through
SupabaseBackend so failures surface as BackendError with a readable message.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from supabase import AuthApiError, Client, create_client

from coursehub.models import AuthSession

logger = logging.getLogger(__name__)

# PostgREST codes meaning "no row" for a single-row read. 22P02 is the
# invalid-uuid error raised for ids that cannot exist.
NOT_FOUND_CODES = {'204', 'PGRST116', '22P02'}

# Auth API statuses meaning the access token itself was rejected
INVALID_TOKEN_STATUSES = {401, 403}


class BackendError(Exception):
    """Raised when the backend rejects a request or cannot be reached"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class AuthenticationError(BackendError):
    """Raised when sign-in or sign-up is refused"""


def _error_code(error: Exception) -> Optional[str]:
    code = getattr(error, 'code', None)
    return str(code) if code is not None else None


def _error_message(error: Exception) -> str:
    return getattr(error, 'message', None) or str(error)


class SupabaseBackend:
    """
    Request-scoped wrapper around a supabase Client.

    When an access token is supplied, row requests run as that user so
    row-level security applies.
    """

    def __init__(self, client: Client, access_token: Optional[str] = None):
        self.client = client
        if access_token:
            self.client.postgrest.auth(access_token)

    @classmethod
    def from_config(cls, url: str, key: str, access_token: Optional[str] = None) -> 'SupabaseBackend':
        """
        Create a backend from project credentials
        @param url: str - Supabase project URL
        @param key: str - anon (public) API key
        @param access_token: Optional[str] - JWT of the signed-in user
        @returns: SupabaseBackend
        """
        try:
            if not url or not key:
                raise ValueError("Supabase URL or key is missing in configuration")
            client: Client = create_client(url, key)
            return cls(client, access_token)
        except Exception as e:
            logger.error(f"Error initializing Supabase client: {str(e)}")
            raise

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def _build_select(
        self,
        table: str,
        columns: str,
        filters: Optional[Dict[str, Any]],
        order: Optional[Tuple[str, bool]],
        limit: Optional[int],
    ):
        query = self.client.table(table).select(columns)
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if order:
            column, descending = order
            query = query.order(column, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        return query

    def select(
        self,
        table: str,
        columns: str = '*',
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[Tuple[str, bool]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Read rows with optional equality filters, ordering and limit
        @param order: (column, descending) pair
        @returns: List of row dicts (empty when nothing matches)
        """
        try:
            response = self._build_select(table, columns, filters, order, limit).execute()
        except Exception as e:
            logger.error(f"Error reading from {table}: {str(e)}")
            raise BackendError(_error_message(e), _error_code(e)) from e
        return response.data or []

    def select_one(
        self,
        table: str,
        columns: str = '*',
        filters: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Read a single row
        @returns: Row dict, or None when no row matches
        """
        try:
            response = self._build_select(table, columns, filters, None, None).maybe_single().execute()
        except Exception as e:
            if _error_code(e) in NOT_FOUND_CODES:
                logger.info(f"No row in {table} for {filters}")
                return None
            logger.error(f"Error reading single row from {table}: {str(e)}")
            raise BackendError(_error_message(e), _error_code(e)) from e

        if response is None or not response.data:
            return None
        return response.data

    def insert(self, table: str, row: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Insert one row
        @returns: Inserted rows as returned by the backend
        """
        try:
            response = self.client.table(table).insert(row).execute()
        except Exception as e:
            logger.error(f"Error inserting into {table}: {str(e)}")
            raise BackendError(_error_message(e), _error_code(e)) from e

        logger.info(f"Inserted {len(response.data or [])} record(s) into {table}")
        return response.data or []

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    @staticmethod
    def _to_session(auth_response) -> Optional[AuthSession]:
        session = getattr(auth_response, 'session', None)
        user = getattr(auth_response, 'user', None)
        if session is None or user is None:
            return None
        return AuthSession(
            user_id=str(user.id),
            email=getattr(user, 'email', None),
            access_token=session.access_token,
            refresh_token=session.refresh_token,
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self.client.auth.sign_in_with_password({'email': email, 'password': password})
        except Exception as e:
            logger.warning(f"Sign-in refused for {email}: {str(e)}")
            raise AuthenticationError(_error_message(e), _error_code(e)) from e

        session = self._to_session(response)
        if session is None:
            raise AuthenticationError("Sign-in did not return a session")
        return session

    def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        redirect_to: Optional[str] = None,
    ) -> Optional[AuthSession]:
        """
        Register a new user
        @returns: AuthSession when the project signs users in immediately,
                  None when email confirmation is pending
        """
        options: Dict[str, Any] = {'data': {'full_name': full_name or ''}}
        if redirect_to:
            options['email_redirect_to'] = redirect_to
        try:
            response = self.client.auth.sign_up({'email': email, 'password': password, 'options': options})
        except Exception as e:
            logger.warning(f"Sign-up refused for {email}: {str(e)}")
            raise AuthenticationError(_error_message(e), _error_code(e)) from e
        return self._to_session(response)

    def get_user(self, access_token: str) -> Optional[Dict[str, Any]]:
        """
        Resolve the user behind an access token
        @returns: {'id', 'email'} or None when the token is not valid
        @raises: BackendError when the auth service fails for any other reason
        """
        try:
            response = self.client.auth.get_user(access_token)
        except AuthApiError as e:
            if getattr(e, 'status', None) in INVALID_TOKEN_STATUSES:
                logger.warning(f"Access token rejected: {_error_message(e)}")
                return None
            logger.error(f"Error resolving user from token: {str(e)}")
            raise BackendError(_error_message(e), _error_code(e)) from e
        except Exception as e:
            logger.error(f"Error resolving user from token: {str(e)}")
            raise BackendError(_error_message(e), _error_code(e)) from e

        user = getattr(response, 'user', None) if response is not None else None
        if user is None:
            return None
        return {'id': str(user.id), 'email': getattr(user, 'email', None)}

    def sign_out(self, session: AuthSession) -> None:
        try:
            self.client.auth.set_session(session.access_token, session.refresh_token or '')
            self.client.auth.sign_out()
        except Exception as e:
            raise BackendError(_error_message(e), _error_code(e)) from e


