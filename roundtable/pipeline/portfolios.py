import structlog
from ..store.keys import decode_keys

log = structlog.get_logger()

def _index_order(key):
    text = str(key)
    return (not text.isdigit(), int(text) if text.isdigit() else 0, text)

def _entry_prices(pid, raw) -> dict:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        log.warning("portfolio_entry_prices_malformed", portfolio_id=pid)
        return {}
    out = {}
    for ticker, value in decode_keys(raw).items():
        try:
            price = float(value)
        except (TypeError, ValueError):
            log.warning("portfolio_entry_price_invalid", portfolio_id=pid, symbol=ticker, value=str(value))
            continue
        out[ticker] = price
    return out

def load_portfolios(raw: dict | None) -> list[dict]:
    if not raw:
        return []
    out = []
    for pid, data in raw.items():
        if not isinstance(data, dict):
            log.warning("portfolio_malformed", portfolio_id=pid)
            continue
        tickers = data.get("tickers") or []
        if isinstance(tickers, dict):
            # Sparse arrays come back from the store as index-keyed objects.
            tickers = [tickers[k] for k in sorted(tickers, key=_index_order)]
        elif not isinstance(tickers, list):
            log.warning("portfolio_tickers_malformed", portfolio_id=pid)
            tickers = []
        out.append({
            **data,
            "id": pid,
            "advisorName": data.get("advisorName") or pid,
            "tickers": [t for t in tickers if t and isinstance(t, str)],
            "entryPrices": _entry_prices(pid, data.get("entryPrices")),
        })
    return out

def collect_universe(portfolios: list[dict]) -> list[str]:
    seen = {}
    for portfolio in portfolios:
        for ticker in portfolio.get("tickers") or []:
            seen.setdefault(ticker, None)
    return list(seen)
