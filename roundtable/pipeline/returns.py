from __future__ import annotations

from typing import Iterable

import structlog

log = structlog.get_logger()

# Five equally weighted positions per portfolio.
HOLDING_WEIGHT = 0.2

def holding_return(anchor: dict | None, entry_price: float | None = None) -> float | None:
    if not anchor or not isinstance(anchor, dict):
        return None
    sp = anchor.get("sp")
    cp = anchor.get("cp")
    if not sp or not cp:
        return None
    base = entry_price or sp
    return (cp - base) / base

def portfolio_return(portfolio: dict, prices: dict) -> float | None:
    """Weighted return of a portfolio against the competition start.

    Swapped-in tickers use the portfolio's own entry price instead of the
    universe start price. ``None`` means no holding could be priced yet,
    which is not the same as a flat 0.0.
    """
    entry_prices = portfolio.get("entryPrices") or {}
    total = 0.0
    priced = 0
    for ticker in portfolio.get("tickers") or []:
        ret = holding_return(prices.get(ticker), entry_prices.get(ticker))
        if ret is None:
            continue
        total += ret * HOLDING_WEIGHT
        priced += 1
    return total if priced > 0 else None

def compute_returns(portfolios: Iterable[dict], prices: dict):
    returns: dict[str, float] = {}
    pending: list[str] = []
    for portfolio in portfolios:
        try:
            ret = portfolio_return(portfolio, prices)
        except (TypeError, ValueError, AttributeError, ZeroDivisionError) as exc:
            log.warning("portfolio_malformed", portfolio_id=portfolio.get("id"), err=str(exc))
            ret = None
        if ret is None:
            pending.append(portfolio["id"])
        else:
            returns[portfolio["id"]] = ret
    return returns, pending
