import pandas as pd

def _usable_close(value) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return not pd.isna(value)
    except (TypeError, ValueError):
        return False

def normalize_series(timestamps, closes) -> list[tuple[int, float]]:
    """Pair timestamps with closes, dropping samples without a close.

    Pairs are filtered together so a missing close never shifts later
    closes onto earlier timestamps.
    """
    out = []
    for ts, close in zip(timestamps or [], closes or []):
        if ts is None or not _usable_close(close):
            continue
        out.append((int(ts), float(close)))
    out.sort(key=lambda sample: sample[0])
    return out

def frame_to_series(df) -> list[tuple[int, float]]:
    if df is None or not isinstance(df, pd.DataFrame) or df.empty:
        return []
    d = df.copy()
    if isinstance(d.columns, pd.MultiIndex):
        d.columns = [col[0] for col in d.columns]
    if "Close" not in d.columns and "close" in d.columns:
        d = d.rename(columns={"close": "Close"})
    if "Close" not in d.columns:
        return []
    if not isinstance(d.index, pd.DatetimeIndex):
        for col in ("Date", "Datetime", "date"):
            if col in d.columns:
                d = d.set_index(pd.to_datetime(d[col]))
                break
        else:
            return []
    index = d.index
    if index.tz is None:
        index = index.tz_localize("UTC")
    else:
        index = index.tz_convert("UTC")
    timestamps = [int(ts.timestamp()) for ts in index]
    closes = pd.to_numeric(d["Close"], errors="coerce").tolist()
    return normalize_series(timestamps, closes)
