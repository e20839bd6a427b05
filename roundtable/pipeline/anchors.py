from __future__ import annotations

from typing import Sequence, Tuple

from ..errors import AnchorResolutionError
from ..utils import date_to_epoch_seconds, now_utc_iso

Sample = Tuple[int, float]

def start_index(series: Sequence[Sample], start_ts: int) -> int:
    for idx, (ts, _close) in enumerate(series):
        if ts >= start_ts:
            return idx
    # Whole series precedes the start date.
    return 0

def resolve_anchor(series: Sequence[Sample], start_date, resolved_at: str | None = None) -> dict:
    """Pin a close series to the competition start date.

    The start price is the first close at or after ``start_date`` and the
    current price is the last close. Lookbacks are fetched wider than the
    competition, so the series usually begins before the start date.
    """
    if not series:
        raise AnchorResolutionError("empty close series")
    idx = start_index(series, date_to_epoch_seconds(start_date))
    start_price = series[idx][1] or series[0][1]
    current_price = series[-1][1]
    if not start_price or not current_price or start_price <= 0 or current_price <= 0:
        raise AnchorResolutionError("missing price data")
    return {
        "sp": start_price,
        "cp": current_price,
        "u": resolved_at or now_utc_iso(),
    }

def anchor_return_pct(anchor: dict) -> float | None:
    sp = anchor.get("sp")
    cp = anchor.get("cp")
    if not sp or cp is None:
        return None
    return (cp - sp) / sp * 100.0
