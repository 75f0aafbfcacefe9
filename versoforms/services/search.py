from typing import Iterable, List, Optional

from ..models.submission import Submission

def _contains(value: Optional[str], query: str) -> bool:
    return value is not None and query in value.lower()

def filter_submissions(submissions: Iterable[Submission], query: str) -> List[Submission]:
    """Case-insensitive substring match on name, description, city and state.

    A blank query returns everything, in the original order.
    """
    submissions = list(submissions)
    if query.strip() == "":
        return submissions
    query = query.lower()
    return [
        s for s in submissions
        if _contains(s.name, query)
        or _contains(s.description, query)
        or _contains(s.location_city, query)
        or _contains(s.location_state, query)
    ]
