import time, uuid
from datetime import datetime, timezone
import structlog
from ..config import settings
from ..store.firebase import FirebaseStore
from ..store.keys import encode_keys, decode_keys
from ..errors import AnchorResolutionError
from .anchors import resolve_anchor, anchor_return_pct
from .market import PriceHistory
from .merge import merge_prices
from .portfolios import load_portfolios, collect_universe
from .returns import compute_returns
from .snapshots import build_snapshot
from .window import competition_status, ACTIVE

log = structlog.get_logger()

PORTFOLIOS_PATH = "portfolios"
PRICES_PATH = "prices"
HISTORY_PATH = "history"

def trigger_update(background) -> str:
    run_id = str(uuid.uuid4())
    background.add_task(_update_impl, run_id)
    return run_id

def build_store() -> FirebaseStore:
    return FirebaseStore(
        settings.require_store_url(),
        timeout=settings.http_timeout_seconds,
        retry_attempts=settings.http_retry_attempts,
        retry_backoff_seconds=settings.http_retry_backoff_seconds,
    )

def _update_impl(run_id: str):
    store = build_store()
    try:
        return run_update(
            store,
            PriceHistory(),
            start=settings.competition_start,
            end=settings.competition_end,
            run_id=run_id,
        )
    finally:
        store.close()

def run_update(store, history, now: datetime | None = None, start=None, end=None, run_id: str | None = None) -> dict:
    now = now or datetime.now(timezone.utc)
    start = start or settings.competition_start
    end = end or settings.competition_end
    run_id = run_id or str(uuid.uuid4())
    log.info("update_started", run_id=run_id, now=now.isoformat(), competition_start=str(start), competition_end=str(end))

    def _step_start(step: str):
        log.info("update_step_start", run_id=run_id, step=step)
        return time.monotonic()

    def _step_done(step: str, started: float, **fields):
        log.info(
            "update_step_done",
            run_id=run_id,
            step=step,
            elapsed_sec=round(time.monotonic() - started, 2),
            **fields,
        )

    status = competition_status(now, start, end)
    if status != ACTIVE:
        log.info("update_skipped", run_id=run_id, reason=status)
        return {"run_id": run_id, "status": status}

    try:
        # 1) Portfolios and the security universe they hold
        started = _step_start("load_portfolios")
        portfolios = load_portfolios(store.read(PORTFOLIOS_PATH))
        if not portfolios:
            log.info("update_skipped", run_id=run_id, reason="no_portfolios")
            return {"run_id": run_id, "status": "no_portfolios"}
        universe = collect_universe(portfolios)
        _step_done("load_portfolios", started, portfolios_count=len(portfolios), symbols_count=len(universe))

        # 2) Last persisted prices
        started = _step_start("load_prices")
        existing = decode_keys(store.read(PRICES_PATH)) or {}
        _step_done("load_prices", started, stored_count=len(existing))

        # 3) Fetch histories and pin each to the competition start
        started = _step_start("fetch_prices")
        series_by_symbol, failures = history.load(universe)
        fresh = {}
        resolved_at = datetime.now(timezone.utc).isoformat()
        for sym in universe:
            series = series_by_symbol.get(sym)
            if series is None:
                log.warning("price_fetch_failed", run_id=run_id, symbol=sym, reason=failures.get(sym))
                continue
            try:
                anchor = resolve_anchor(series, start, resolved_at=resolved_at)
            except AnchorResolutionError as exc:
                failures[sym] = str(exc)
                log.warning("price_resolution_failed", run_id=run_id, symbol=sym, reason=str(exc))
                continue
            fresh[sym] = anchor
            pct = anchor_return_pct(anchor)
            log.info(
                "price_updated",
                run_id=run_id,
                symbol=sym,
                start_price=round(anchor["sp"], 2),
                current_price=round(anchor["cp"], 2),
                return_pct=round(pct, 2) if pct is not None else None,
            )
        _step_done("fetch_prices", started, updated=len(fresh), failed=len(universe) - len(fresh))

        # 4) Merge and score every portfolio
        started = _step_start("compute_returns")
        prices = merge_prices(existing, fresh)
        returns, pending = compute_returns(portfolios, prices)
        names = {p["id"]: p["advisorName"] for p in portfolios}
        for pid, ret in returns.items():
            log.info("portfolio_return", run_id=run_id, portfolio_id=pid, advisor=names.get(pid), return_pct=round(ret * 100, 2))
        for pid in pending:
            log.info("portfolio_pending", run_id=run_id, portfolio_id=pid, advisor=names.get(pid), reason="missing price data")
        _step_done("compute_returns", started, priced=len(returns), pending=len(pending))

        # 5) Persist once all computation is done
        started = _step_start("persist")
        store.write(PRICES_PATH, encode_keys(prices))
        snapshot = build_snapshot(now, returns)
        snapshot_key = None
        if snapshot is not None:
            snapshot_key = store.append(HISTORY_PATH, snapshot)
        _step_done("persist", started, prices_count=len(prices), snapshot_appended=snapshot is not None)
    except Exception as e:
        log.error("update_failed", run_id=run_id, err=str(e))
        raise

    log.info("update_finished", run_id=run_id, status="succeeded")
    return {
        "run_id": run_id,
        "status": "succeeded",
        "symbols_count": len(universe),
        "updated_count": len(fresh),
        "failed": failures,
        "priced_count": len(returns),
        "pending": pending,
        "snapshot_key": snapshot_key,
    }
