from __future__ import annotations

from datetime import datetime, timezone

def build_snapshot(now: datetime | str, returns: dict) -> dict | None:
    if not returns:
        return None
    if isinstance(now, datetime):
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        stamp = now.astimezone(timezone.utc).isoformat()
    else:
        stamp = str(now)
    return {"d": stamp, "r": dict(returns)}

def latest_snapshot(history: dict | None) -> dict | None:
    if not history:
        return None
    snapshots = [s for s in history.values() if isinstance(s, dict) and s.get("d")]
    if not snapshots:
        return None
    return max(snapshots, key=lambda s: _stamp(s["d"]))

def _stamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
