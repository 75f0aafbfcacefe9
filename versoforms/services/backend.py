"""Single entry point to the hosted side of the application.

Everything that persists state goes through :class:`BackendClient`: the
account store used for admin sign-in and bootstrap, the ``submissions`` and
``user_roles`` tables, and the object storage bucket that holds photos.
One client is built when the app is created and handed to every router and
view-model that needs it.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Protocol

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select

from .database import open_session
from .security import hash_password, verify_password
from .storage import StorageError
from ..models.submission import Submission
from ..models.user import User
from ..models.user_role import UserRole

logger = logging.getLogger(__name__)

class BackendError(Exception):
    """A backend call failed; ``message`` is safe to show to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class UploadError(BackendError):
    pass

class InsertError(BackendError):
    pass

class QueryError(BackendError):
    pass

class AuthAdminError(BackendError):
    pass

class ObjectStorage(Protocol):
    def upload(self, key: str, file_content: bytes, content_type: str) -> None: ...

    def get_public_url(self, key: str) -> str: ...

class BackendClient:
    def __init__(self, engine: Engine, storage: ObjectStorage):
        self.engine = engine
        self.storage = storage

    # Object storage

    def upload_photo(self, key: str, file_content: bytes, content_type: str) -> str:
        """Store the bytes under ``key`` and return their public URL."""
        try:
            self.storage.upload(key, file_content, content_type)
        except StorageError as e:
            raise UploadError(str(e)) from e
        return self.storage.get_public_url(key)

    # Submissions table

    def insert_submission(self, submission: Submission) -> Submission:
        try:
            with open_session(self.engine) as session:
                session.add(submission)
                session.commit()
                session.refresh(submission)
                return submission
        except SQLAlchemyError as e:
            raise InsertError(f"Failed to save submission: {e}") from e

    def list_submissions(self) -> List[Submission]:
        try:
            with open_session(self.engine) as session:
                return list(session.exec(
                    select(Submission).order_by(Submission.created_at.desc())
                ).all())
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to load submissions: {e}") from e

    def get_submission(self, submission_id: uuid.UUID) -> Optional[Submission]:
        try:
            with open_session(self.engine) as session:
                return session.get(Submission, submission_id)
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to load submission: {e}") from e

    # Roles table

    def find_role(self, user_id: uuid.UUID, role: str) -> Optional[UserRole]:
        try:
            with open_session(self.engine) as session:
                return session.exec(
                    select(UserRole).where(
                        (UserRole.user_id == user_id) &
                        (UserRole.role == role)
                    )
                ).first()
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to check user role: {e}") from e

    def insert_role(self, user_id: uuid.UUID, role: str) -> UserRole:
        """Insert the role if absent; an existing (user, role) row is returned as is."""
        try:
            with open_session(self.engine) as session:
                user_role = UserRole(user_id=user_id, role=role)
                session.add(user_role)
                try:
                    session.commit()
                except IntegrityError:
                    session.rollback()
                    existing = self.find_role(user_id, role)
                    if existing is None:
                        raise
                    return existing
                session.refresh(user_role)
                return user_role
        except SQLAlchemyError as e:
            raise InsertError(f"Failed to assign {role} role: {e}") from e

    # Accounts

    def list_users(self) -> List[User]:
        try:
            with open_session(self.engine) as session:
                return list(session.exec(select(User)).all())
        except SQLAlchemyError as e:
            raise AuthAdminError(f"Failed to list users: {e}") from e

    def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        try:
            with open_session(self.engine) as session:
                return session.get(User, user_id)
        except SQLAlchemyError as e:
            raise AuthAdminError(f"Failed to load user: {e}") from e

    def create_user(self, email: str, password: str, email_confirm: bool = False) -> User:
        user = User(
            email=normalize_email(email),
            password_hash=hash_password(password),
            email_confirmed_at=datetime.now(timezone.utc) if email_confirm else None
        )
        try:
            with open_session(self.engine) as session:
                session.add(user)
                session.commit()
                session.refresh(user)
                logger.info("Created user %s", user.id)
                return user
        except IntegrityError as e:
            raise AuthAdminError("A user with this email address has already been registered") from e
        except SQLAlchemyError as e:
            raise AuthAdminError(f"Failed to create user: {e}") from e

    def authenticate(self, email: str, password: str) -> Optional[User]:
        try:
            with open_session(self.engine) as session:
                user = session.exec(select(User).where(User.email == normalize_email(email))).first()
        except SQLAlchemyError as e:
            raise AuthAdminError(f"Failed to sign in: {e}") from e
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

def normalize_email(email: str) -> str:
    return email.strip().lower()

def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend
