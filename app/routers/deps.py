import logging
from typing import Optional

from fastapi import Depends, Header, Request

from app.core.errors import AuthenticationError
from app.core.security import decode_access_token
from app.db.session import Database, get_database
from app.services.auth_service import AuthService
from app.services.category_store import CategoryStore
from app.services.credential_store import CredentialStore
from app.services.expense_store import ExpenseStore

logger = logging.getLogger(__name__)


def get_settings(request: Request):
    return request.app.state.settings


def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> int:
    """Authorization gate: resolve ``Authorization: Bearer <token>`` to a user id.

    Raises AuthenticationError (401) before the route body runs when the header
    is missing, not a bearer credential, or fails verification.
    """
    if not authorization:
        raise AuthenticationError("Authentication required")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authentication required")

    settings = get_settings(request)
    try:
        user_id = decode_access_token(token.strip(), settings.JWT_SECRET, settings.JWT_ALGORITHM)
    except AuthenticationError:
        logger.warning("Rejected bearer token on %s %s", request.method, request.url.path)
        raise

    request.state.user_id = user_id
    return user_id


def get_credential_store(database: Database = Depends(get_database)) -> CredentialStore:
    return CredentialStore(database)


def get_auth_service(request: Request, users: CredentialStore = Depends(get_credential_store)) -> AuthService:
    return AuthService(users, get_settings(request))


def get_expense_store(database: Database = Depends(get_database)) -> ExpenseStore:
    return ExpenseStore(database)


def get_category_store(database: Database = Depends(get_database)) -> CategoryStore:
    return CategoryStore(database)
