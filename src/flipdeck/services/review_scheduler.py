"""Due date computation for graded entries."""
from datetime import date, datetime, timedelta
from typing import Optional

from flipdeck.config import DAY_OFFSETS
from flipdeck.models.card_models import Outcome


def day_offset(outcome: Outcome | str) -> int:
    """Number of days until the next review for an outcome."""
    return DAY_OFFSETS[Outcome.parse(outcome).value]


def local_date(now: datetime) -> date:
    """Calendar date of `now` in local time. Naive datetimes are taken as local."""
    if now.tzinfo is not None:
        now = now.astimezone()
    return now.date()


def compute_due_date(outcome: Outcome | str, now: Optional[datetime] = None) -> date:
    """Compute the next due date from the grading moment.

    The offset is fixed per outcome and never depends on earlier reviews.
    Only the local calendar day of `now` matters, not its time of day.
    """
    if now is None:
        now = datetime.now()
    return local_date(now) + timedelta(days=day_offset(outcome))


def format_due_date(due_date: date) -> str:
    """Format a due date as YYYY-MM-DD."""
    return due_date.isoformat()
