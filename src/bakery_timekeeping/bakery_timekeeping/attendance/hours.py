from __future__ import annotations

from datetime import time
from typing import Optional


def hours_worked(clock_in: Optional[time], clock_out: Optional[time]) -> float:
    """Hours between clock-in and clock-out, rounded to 2 decimals.

    A clock-out earlier than the clock-in is read as the next day.
    """
    if clock_in is None or clock_out is None:
        return 0.0
    start = clock_in.hour * 3600 + clock_in.minute * 60 + clock_in.second
    end = clock_out.hour * 3600 + clock_out.minute * 60 + clock_out.second
    if end < start:
        end += 24 * 3600
    return round((end - start) / 3600, 2)
