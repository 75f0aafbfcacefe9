from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..models.submission import Submission

DESCRIPTION_PREVIEW_LENGTH = 120

def location_text(city: Optional[str], state: Optional[str]) -> str:
    return ", ".join(part for part in (city, state) if part)

def format_short_date(value: datetime) -> str:
    # Oct 18, 2026
    return f"{value:%b} {value.day}, {value.year}"

class SubmissionCard(BaseModel):
    id: str
    name: str
    description: str
    photo_url: str
    location: Optional[str]
    created: str

def render_card(submission: Submission) -> SubmissionCard:
    description = submission.description
    if len(description) > DESCRIPTION_PREVIEW_LENGTH:
        description = description[:DESCRIPTION_PREVIEW_LENGTH].rstrip() + "…"
    return SubmissionCard(
        id=str(submission.id),
        name=submission.name,
        description=description,
        photo_url=submission.photo_url,
        location=location_text(submission.location_city, submission.location_state) or None,
        created=format_short_date(submission.created_at)
    )
