from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

CREATION_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def creation_stamp(timezone: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """Wall-clock creation stamp, in ``timezone`` or the server's local zone."""
    if now is None:
        now = datetime.now(ZoneInfo(timezone)) if timezone else datetime.now()
    elif timezone:
        now = now.astimezone(ZoneInfo(timezone))
    return now.strftime(CREATION_DATE_FORMAT)
