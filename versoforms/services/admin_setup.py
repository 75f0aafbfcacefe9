import logging
import uuid
from dataclasses import dataclass

from .backend import BackendClient, normalize_email
from ..config import ADMIN_ROLE

logger = logging.getLogger(__name__)

@dataclass
class AdminSetupResult:
    user_id: uuid.UUID
    created: bool

def ensure_admin(backend: BackendClient, email: str, password: str) -> AdminSetupResult:
    """Make sure ``email`` has an account holding the admin role.

    Safe to call repeatedly: an existing account only gets the role added if it
    is missing. Two concurrent first calls for the same email can still race on
    account creation; the loser surfaces the backend's duplicate-email error.
    Backend failures propagate as BackendError.
    """
    email = normalize_email(email)
    user = next((u for u in backend.list_users() if normalize_email(u.email) == email), None)

    if user is not None:
        if backend.find_role(user.id, ADMIN_ROLE) is None:
            backend.insert_role(user.id, ADMIN_ROLE)
            logger.info("Granted admin role to existing user %s", user.id)
        return AdminSetupResult(user_id=user.id, created=False)

    user = backend.create_user(email, password, email_confirm=True)
    backend.insert_role(user.id, ADMIN_ROLE)
    logger.info("Created admin user %s", user.id)
    return AdminSetupResult(user_id=user.id, created=True)
