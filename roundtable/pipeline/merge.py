def merge_prices(existing: dict | None, fresh: dict | None) -> dict:
    """Overlay freshly resolved anchors on the stored price map.

    Refreshed symbols are replaced whole, every other stored anchor is
    carried over as the same object, and no key is ever dropped.
    """
    merged = dict(existing or {})
    for symbol, anchor in (fresh or {}).items():
        merged[symbol] = anchor
    return merged
