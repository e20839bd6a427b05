from datetime import datetime, timezone
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from .schemas import UpdateRun, PriceAnchor, ReturnsResponse
from ..config import settings
from ..errors import ConfigError, TransportError
from ..store.keys import decode_keys
from ..pipeline.orchestrator import trigger_update, build_store, PORTFOLIOS_PATH, PRICES_PATH, HISTORY_PATH
from ..pipeline.portfolios import load_portfolios
from ..pipeline.returns import compute_returns
from ..pipeline.snapshots import latest_snapshot
from ..pipeline.window import competition_status

router = APIRouter()

def get_store():
    try:
        store = build_store()
    except ConfigError as e:
        raise HTTPException(503, str(e))
    try:
        yield store
    finally:
        store.close()

def _read(store, path: str):
    try:
        return store.read(path)
    except TransportError as e:
        raise HTTPException(502, f'store_error: {e}')

@router.get(
    '/health',
    summary="Health check",
    description="Returns service status and the configured competition window.",
    tags=["Health"],
)
def health():
    now = datetime.now(timezone.utc)
    return {
        'ok': True,
        'store_configured': bool(settings.firebase_db_url),
        'competition': {
            'start': settings.competition_start,
            'end': settings.competition_end,
            'status': competition_status(now, settings.competition_start, settings.competition_end),
        },
    }

@router.post(
    '/update',
    response_model=UpdateRun,
    status_code=202,
    summary="Trigger price update",
    description="Refreshes prices and appends a returns snapshot in the background.",
    tags=["Update"],
)
def update(background: BackgroundTasks):
    try:
        settings.require_store_url()
    except ConfigError as e:
        raise HTTPException(503, str(e))
    return UpdateRun(run_id=trigger_update(background))

@router.get(
    '/prices',
    response_model=dict[str, PriceAnchor],
    summary="Stored prices",
    description="Start and current price per security, keyed by ticker.",
    tags=["Prices"],
)
def prices(store=Depends(get_store)):
    return decode_keys(_read(store, PRICES_PATH)) or {}

@router.get(
    '/returns',
    response_model=ReturnsResponse,
    summary="Portfolio returns",
    description="Returns recomputed from stored prices, plus the latest history snapshot.",
    tags=["Returns"],
)
def returns(store=Depends(get_store)):
    portfolios = load_portfolios(_read(store, PORTFOLIOS_PATH))
    stored = decode_keys(_read(store, PRICES_PATH)) or {}
    computed, pending = compute_returns(portfolios, stored)
    snapshot = latest_snapshot(_read(store, HISTORY_PATH))
    return ReturnsResponse(
        as_of=snapshot.get('d') if snapshot else None,
        returns=computed,
        pending=pending,
        latest_snapshot=snapshot,
    )
