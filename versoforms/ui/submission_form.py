"""State and actions behind the public submission form."""
import logging
from enum import Enum
from typing import Callable, Optional, Tuple

from .notifications import Toaster, Variant
from ..services.backend import BackendClient, BackendError
from ..services.geocoding import ReverseGeocodeResult, reverse_geocode
from ..services.submissions import (
    PhotoUpload,
    SubmissionInput,
    SubmissionValidationError,
    create_submission,
    validate_photo,
)
from ..models.submission import Submission

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to submit. Please try again."

class SubmitStatus(str, Enum):
    IDLE = "idle"
    SUCCESS = "success"
    ERROR = "error"

class LocationUnavailable(Exception):
    """The geolocation capability refused or failed to produce a position."""

Locator = Callable[[], Tuple[float, float]]
Geocoder = Callable[[float, float], Optional[ReverseGeocodeResult]]

class SubmissionForm:
    def __init__(self, backend: BackendClient, toaster: Optional[Toaster] = None):
        self.backend = backend
        self.toaster = toaster or Toaster()
        self.status = SubmitStatus.IDLE
        self.error_message = ""
        self.is_loading = False
        self.is_locating = False
        self.last_submission: Optional[Submission] = None
        self.reset()

    def reset(self) -> None:
        self.name = ""
        self.description = ""
        self.location_city = ""
        self.location_state = ""
        self.latitude: Optional[float] = None
        self.longitude: Optional[float] = None
        self.photo: Optional[PhotoUpload] = None

    def select_photo(self, photo: PhotoUpload) -> bool:
        """Accept a picked file, or keep the previous one and toast the reason."""
        try:
            validate_photo(photo)
        except SubmissionValidationError as e:
            self.toaster.toast(e.title, e.message, Variant.DESTRUCTIVE)
            return False
        self.photo = photo
        return True

    def detect_location(self, locate: Optional[Locator], geocoder: Optional[Geocoder] = None) -> bool:
        if locate is None:
            self.toaster.toast("Geolocation not supported", "Please enter your location manually.", Variant.DESTRUCTIVE)
            return False

        self.is_locating = True
        try:
            latitude, longitude = locate()
        except LocationUnavailable:
            self.is_locating = False
            self.toaster.toast("Location access denied", "Please enter your location manually.", Variant.DESTRUCTIVE)
            return False

        self.latitude, self.longitude = latitude, longitude
        try:
            place = (geocoder or reverse_geocode)(latitude, longitude)
        except Exception as e:
            # Prefill is best effort; coordinates alone are enough
            logger.warning("Reverse geocoding failed, using coordinates only: %s", e)
            place = None
        finally:
            self.is_locating = False
        if place is not None:
            self.location_city = place.city or ""
            self.location_state = place.state or ""
        self.toaster.toast("Location captured", "Your location has been detected automatically.")
        return True

    def to_input(self) -> SubmissionInput:
        return SubmissionInput(
            name=self.name,
            description=self.description,
            location_city=self.location_city,
            location_state=self.location_state,
            latitude=self.latitude,
            longitude=self.longitude
        )

    def submit(self) -> bool:
        # The submit control is disabled while a request is pending
        if self.is_loading:
            return False

        self.error_message = ""
        self.status = SubmitStatus.IDLE

        self.is_loading = True
        try:
            self.last_submission = create_submission(self.backend, self.to_input(), self.photo)
        except SubmissionValidationError as e:
            self.status = SubmitStatus.ERROR
            self.error_message = e.message
            return False
        except BackendError as e:
            logger.error("Submission error: %s", e.message)
            self.status = SubmitStatus.ERROR
            self.error_message = e.message or GENERIC_FAILURE
            self.toaster.toast("Submission failed", e.message or "Please try again later.", Variant.DESTRUCTIVE)
            return False
        finally:
            self.is_loading = False

        self.status = SubmitStatus.SUCCESS
        self.toaster.toast("Submission successful!", "Your entry has been submitted for review.")
        self.reset()
        return True
