"""Banner date parsing for ROMS run transcripts.

Dates are handled as day numbers: floating-point days since
1970-01-01T00:00, the same epoch matplotlib uses, so that differences
multiply straight into seconds with 86400.
"""

import math
import re
from datetime import datetime, timedelta
from typing import Optional

EPOCH = datetime(1970, 1, 1)
SECONDS_PER_DAY = 86400.0

# Tried in order; first that fits wins
BANNER_DATE_FORMATS = [
    "%Y-%m-%d %I:%M:%S %p",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%A - %B %d, %Y - %I:%M:%S %p",
    "%B %d, %Y - %I:%M:%S %p",
]

RE_SPACES = re.compile(r'\s+')


def parse_banner_date(text: str) -> float:
    """Return the day number for a banner date, or NaN if it does not parse."""
    cleaned = RE_SPACES.sub(" ", text).strip()
    for fmt in BANNER_DATE_FORMATS:
        try:
            moment = datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
        return (moment - EPOCH).total_seconds() / SECONDS_PER_DAY
    return math.nan


def day_number_to_datetime(days: float) -> Optional[datetime]:
    if math.isnan(days):
        return None
    return EPOCH + timedelta(days=days)
