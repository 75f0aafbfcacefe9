from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
import uuid

class SubmissionBase(SQLModel):
    name: str = Field(max_length=100)
    description: str = Field(max_length=2000)
    photo_url: str = Field(max_length=500)
    location_city: Optional[str] = Field(default=None, max_length=255)
    location_state: Optional[str] = Field(default=None, max_length=255)
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)

class Submission(SubmissionBase, table=True):
    __tablename__ = "submissions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
