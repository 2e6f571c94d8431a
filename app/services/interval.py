# app/services/interval.py
"""
Resolve the (duration, start, end) triple of a time log.

Clients may send any subset of an explicit duration in minutes, a start instant
and an end instant. A running stopwatch only knows the elapsed duration, a
resumed session knows the duration and where it started, and manual entry
sends either a duration or a full range. ``resolve_interval`` turns all of
these into one canonical interval, checking the inputs in a fixed order:

1. a positive duration wins and fills in whichever end is missing
   (the current instant closes an interval that has neither end);
2. otherwise a start/end pair yields a duration of at least one minute;
3. anything else is missing input.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple, Union

from app.services.exceptions import (
    InvalidDurationError,
    InvalidIntervalError,
    MissingTimeInputError,
)

Number = Union[int, float]


@dataclass(frozen=True)
class ResolvedInterval:
    start_time: datetime
    end_time: datetime
    duration: int  # minutes


def round_minutes(delta: timedelta) -> int:
    """Whole minutes in ``delta``, halves rounded up"""
    return math.floor(delta.total_seconds() / 60 + 0.5)


def _extend(
    duration: Number,
    start_time: Optional[datetime],
    end_time: Optional[datetime],
    now: datetime,
) -> Tuple[datetime, datetime, int]:
    """Fill in the missing end(s) of an interval of ``duration`` minutes"""
    try:
        minutes = int(duration)
        length = timedelta(minutes=minutes)
        if start_time is not None:
            return start_time, start_time + length, minutes
        if end_time is not None:
            return end_time - length, end_time, minutes
        return now - length, now, minutes
    except OverflowError:
        raise InvalidDurationError("Duration places the time log outside the supported date range")


def resolve_interval(
    duration: Optional[Number],
    start_time: Optional[datetime],
    end_time: Optional[datetime],
    now: datetime,
) -> ResolvedInterval:
    if duration is not None and duration > 0:
        if start_time is not None and end_time is not None:
            # The explicit duration is trusted as sent, not checked against the range
            if end_time <= start_time:
                raise InvalidIntervalError()
            try:
                minutes = int(duration)
            except OverflowError:
                raise InvalidDurationError("Duration is not a finite number of minutes")
        else:
            start_time, end_time, minutes = _extend(duration, start_time, end_time, now)
    elif start_time is not None and end_time is not None:
        if end_time <= start_time:
            raise InvalidIntervalError()
        minutes = max(1, round_minutes(end_time - start_time))
    else:
        raise MissingTimeInputError()

    if minutes <= 0:
        raise InvalidDurationError()

    return ResolvedInterval(start_time=start_time, end_time=end_time, duration=minutes)
