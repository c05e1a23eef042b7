from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

ONE_DAY = timedelta(days=1)


def whole_days_until(today: date, target: date, tz: ZoneInfo) -> int:
    """
    ceil((target - today) / 1 day) over midnight-aligned datetimes in `tz`.

    Both ends share the same tzinfo, so the difference is wall-clock and a
    DST transition in between never adds or removes an hour.
    """
    start = datetime.combine(today, time.min, tzinfo=tz)
    end = datetime.combine(target, time.min, tzinfo=tz)
    return math.ceil((end - start) / ONE_DAY)
