from __future__ import annotations

import pandas as pd


def month_name(month: int) -> str:
    """
    Full English month name for a zero-based month index,
    e.g. 0 -> 'January', 11 -> 'December'. Independent of the process locale.
    """
    if not 0 <= int(month) <= 11:
        raise ValueError(f"Month index out of range: {month!r}")
    return pd.Timestamp(2000, int(month) + 1, 1).month_name()
