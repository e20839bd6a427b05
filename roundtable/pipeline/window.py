from datetime import datetime, timezone
from ..utils import date_to_epoch_seconds

NOT_STARTED = "not_started"
ACTIVE = "active"
COMPLETE = "complete"

def competition_status(now: datetime, start, end) -> str:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    ts = now.timestamp()
    if ts < date_to_epoch_seconds(start):
        return NOT_STARTED
    # The end date is inclusive through its last second.
    if ts >= date_to_epoch_seconds(end) + 86400:
        return COMPLETE
    return ACTIVE
