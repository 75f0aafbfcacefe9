"""Validation and the create pipeline shared by the form and the HTTP router.

Photo checks run when a file is picked (:func:`validate_photo`); field checks
run on submit (:func:`validate_submission`) and stop at the first failure.
:func:`create_submission` then uploads the photo, resolves its public URL and
inserts the row, strictly in that order.
"""
import logging
import os
import time
import uuid
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from .backend import BackendClient
from .storage import detect_image_format
from ..config import (
    NAME_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    MAX_PHOTO_SIZE,
    ALLOWED_PHOTO_TYPES,
)
from ..models.submission import Submission

logger = logging.getLogger(__name__)

# Formats Pillow must recognise in the uploaded bytes
ALLOWED_IMAGE_FORMATS = {"JPEG", "PNG"}

EXTENSION_BY_TYPE = {"image/jpeg": "jpg", "image/jpg": "jpg", "image/png": "png"}

class SubmissionValidationError(Exception):
    """User-correctable input problem, reported before any backend call."""

    def __init__(self, message: str, title: str = "Invalid submission"):
        super().__init__(message)
        self.message = message
        self.title = title

@dataclass
class PhotoUpload:
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

class SubmissionInput(BaseModel):
    name: str = ""
    description: str = ""
    location_city: Optional[str] = None
    location_state: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

def validate_photo(photo: PhotoUpload) -> None:
    if photo.content_type not in ALLOWED_PHOTO_TYPES:
        raise SubmissionValidationError("Please upload a JPG or PNG image.", title="Invalid file type")
    if photo.size > MAX_PHOTO_SIZE:
        raise SubmissionValidationError("Please upload an image smaller than 5MB.", title="File too large")
    if detect_image_format(photo.content) not in ALLOWED_IMAGE_FORMATS:
        raise SubmissionValidationError("Please upload a JPG or PNG image.", title="Invalid file type")

def validate_submission(data: SubmissionInput, photo: Optional[PhotoUpload]) -> None:
    name = data.name.strip()
    description = data.description.strip()

    if not name:
        raise SubmissionValidationError("Name is required")
    # Limits apply to the raw input; the stored value is trimmed
    if len(data.name) > NAME_MAX_LENGTH:
        raise SubmissionValidationError(f"Name must be less than {NAME_MAX_LENGTH} characters")
    if not description:
        raise SubmissionValidationError("Description is required")
    if len(data.description) > DESCRIPTION_MAX_LENGTH:
        raise SubmissionValidationError(f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters")
    if photo is None:
        raise SubmissionValidationError("Photo is required")

    if (data.latitude is None) != (data.longitude is None):
        raise SubmissionValidationError("Latitude and longitude must be provided together")
    if data.latitude is not None and not -90 <= data.latitude <= 90:
        raise SubmissionValidationError("Latitude must be between -90 and 90")
    if data.longitude is not None and not -180 <= data.longitude <= 180:
        raise SubmissionValidationError("Longitude must be between -180 and 180")

def clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None

def build_photo_key(photo: PhotoUpload) -> str:
    # <epoch millis>-<random>.<original extension>
    _, ext = os.path.splitext(photo.filename)
    ext = ext.lstrip(".") or EXTENSION_BY_TYPE.get(photo.content_type, "jpg")
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:7]}.{ext}"

def create_submission(backend: BackendClient, data: SubmissionInput, photo: Optional[PhotoUpload]) -> Submission:
    """Validate, upload the photo and insert the row.

    Raises SubmissionValidationError, UploadError or InsertError. A photo that
    was uploaded before a failed insert stays in storage.
    """
    validate_submission(data, photo)

    key = build_photo_key(photo)
    photo_url = backend.upload_photo(key, photo.content, photo.content_type)

    submission = backend.insert_submission(Submission(
        name=data.name.strip(),
        description=data.description.strip(),
        photo_url=photo_url,
        location_city=clean_optional(data.location_city),
        location_state=clean_optional(data.location_state),
        latitude=data.latitude,
        longitude=data.longitude
    ))
    logger.info("Created submission %s", submission.id)
    return submission
