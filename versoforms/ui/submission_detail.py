"""Read-only detail view of one submission."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .submission_card import location_text
from ..models.submission import Submission

NO_LOCATION = "No location provided"

def format_timestamp(value: datetime) -> str:
    # October 18, 2026 at 3:05 PM
    hour = value.hour % 12 or 12
    return f"{value:%B} {value.day}, {value.year} at {hour}:{value:%M} {value:%p}"

class SubmissionDetail(BaseModel):
    title: str
    photo_url: str
    description: str
    location: Optional[str] = None
    coordinates: Optional[str] = None
    no_location: Optional[str] = None
    submitted_on: str

def render_detail(submission: Optional[Submission], open: bool = True) -> Optional[SubmissionDetail]:
    if submission is None or not open:
        return None

    location = location_text(submission.location_city, submission.location_state) or None
    coordinates = None
    if submission.latitude is not None and submission.longitude is not None:
        coordinates = f"{submission.latitude:.6f}, {submission.longitude:.6f}"

    return SubmissionDetail(
        title=submission.name,
        photo_url=submission.photo_url,
        description=submission.description,
        location=location,
        coordinates=coordinates,
        no_location=NO_LOCATION if location is None and coordinates is None else None,
        submitted_on=f"Submitted on {format_timestamp(submission.created_at)}"
    )
