from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, status
from typing import Optional, List
import logging
import uuid

from ..models.submission import Submission
from ..services.auth import require_admin
from ..services.backend import BackendClient, BackendError, get_backend
from ..services.search import filter_submissions
from ..services.submissions import (
    PhotoUpload,
    SubmissionInput,
    SubmissionValidationError,
    create_submission,
    validate_photo,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/submissions",
    tags=["Submissions"]
)

@router.post("", response_model=Submission, status_code=status.HTTP_201_CREATED)
def submit_entry(
    name: str = Form(""),
    description: str = Form(""),
    location_city: Optional[str] = Form(None),
    location_state: Optional[str] = Form(None),
    latitude: Optional[float] = Form(None),
    longitude: Optional[float] = Form(None),
    photo: Optional[UploadFile] = File(None),
    backend: BackendClient = Depends(get_backend)
):
    upload = None
    try:
        if photo is not None and photo.filename:
            upload = PhotoUpload(
                filename=photo.filename,
                content_type=photo.content_type or "",
                content=photo.file.read()
            )
            validate_photo(upload)

        data = SubmissionInput(
            name=name,
            description=description,
            location_city=location_city,
            location_state=location_state,
            latitude=latitude,
            longitude=longitude
        )
        return create_submission(backend, data, upload)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except BackendError as e:
        logger.error("Submission error: %s", e.message)
        raise HTTPException(status_code=502, detail=e.message)


@router.get("", response_model=List[Submission])
def list_submissions(
    q: str = "",
    backend: BackendClient = Depends(get_backend),
    admin_id: uuid.UUID = Depends(require_admin)
):
    try:
        submissions = backend.list_submissions()
    except BackendError as e:
        logger.warning("Error fetching submissions: %s", e.message)
        raise HTTPException(status_code=502, detail=e.message)
    return filter_submissions(submissions, q)


@router.get("/{submission_id}", response_model=Submission)
def read_submission(
    submission_id: uuid.UUID,
    backend: BackendClient = Depends(get_backend),
    admin_id: uuid.UUID = Depends(require_admin)
):
    try:
        submission = backend.get_submission(submission_id)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=e.message)
    if not submission:
        raise HTTPException(status_code=404, detail="Submission not found")
    return submission
