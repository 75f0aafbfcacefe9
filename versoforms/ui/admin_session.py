import logging
import uuid
from typing import Optional

from ..services.auth import create_tokens, is_admin
from ..services.backend import BackendClient

logger = logging.getLogger(__name__)

class AdminSession:
    """Signed-in state of the dashboard operator."""

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.user_id: Optional[uuid.UUID] = None
        self.email: Optional[str] = None
        self.access_token: Optional[str] = None
        self.refresh_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def sign_in(self, email: str, password: str) -> bool:
        user = self.backend.authenticate(email, password)
        if user is None or not is_admin(self.backend, user.id):
            logger.info("Rejected dashboard sign-in for %s", email)
            return False
        tokens = create_tokens(user.id)
        self.user_id = user.id
        self.email = user.email
        self.access_token = tokens["access_token"]
        self.refresh_token = tokens["refresh_token"]
        return True

    def sign_out(self) -> None:
        self.user_id = None
        self.email = None
        self.access_token = None
        self.refresh_token = None
