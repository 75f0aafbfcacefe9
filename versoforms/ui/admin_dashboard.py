import logging
from typing import List, Optional

from .admin_session import AdminSession
from .notifications import Toaster, Variant
from .submission_card import SubmissionCard, render_card
from .submission_detail import SubmissionDetail, render_detail
from ..models.submission import Submission
from ..services.backend import BackendClient, BackendError
from ..services.search import filter_submissions

logger = logging.getLogger(__name__)

class AdminDashboard:
    def __init__(self, backend: BackendClient, session: AdminSession, toaster: Optional[Toaster] = None):
        self.backend = backend
        self.session = session
        self.toaster = toaster or Toaster()
        self.submissions: List[Submission] = []
        self.filtered: List[Submission] = []
        self.query = ""
        self.is_loading = False
        self.error_message = ""
        self.selected: Optional[Submission] = None
        self.detail_open = False

    def load(self) -> None:
        self.is_loading = True
        self.error_message = ""
        try:
            self.submissions = self.backend.list_submissions()
        except BackendError as e:
            logger.warning("Error fetching submissions: %s", e.message)
            self.submissions = []
            self.error_message = e.message
            self.toaster.toast("Could not load submissions", e.message, Variant.DESTRUCTIVE)
        finally:
            self.is_loading = False
        self.filtered = filter_submissions(self.submissions, self.query)

    refresh = load

    def search(self, query: str) -> List[Submission]:
        self.query = query
        self.filtered = filter_submissions(self.submissions, query)
        return self.filtered

    def clear_search(self) -> None:
        self.search("")

    @property
    def cards(self) -> List[SubmissionCard]:
        return [render_card(s) for s in self.filtered]

    @property
    def summary(self) -> str:
        return f"Showing {len(self.filtered)} of {len(self.submissions)} submissions"

    @property
    def empty_message(self) -> Optional[str]:
        if self.is_loading or self.filtered:
            return None
        return "No matching submissions" if self.query else "No submissions yet"

    def open_detail(self, submission: Submission) -> None:
        self.selected = submission
        self.detail_open = True

    def close_detail(self) -> None:
        # The last selection is kept; the view renders nothing while closed
        self.detail_open = False

    @property
    def detail(self) -> Optional[SubmissionDetail]:
        return render_detail(self.selected, open=self.detail_open)

    def sign_out(self) -> None:
        self.session.sign_out()
