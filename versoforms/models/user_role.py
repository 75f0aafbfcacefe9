from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from typing import Optional
from datetime import datetime, timezone
import uuid

class UserRole(SQLModel, table=True):
    __tablename__ = "user_roles"
    # One row per (user, role); a second insert of the same pair is rejected
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_id_role"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    role: str = Field(max_length=30)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
