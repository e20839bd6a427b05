from typing import Dict, List
import time
import structlog
from ..config import settings
from ..errors import TransportError, UpdateError
from ..utils import retry_call, RateLimiter
from ..providers.yahoo_chart_adapter import YahooChartAdapter
from ..providers.yfinance_adapter import YFinanceAdapter

log = structlog.get_logger()

def build_providers(names: List[str] | None = None):
    names = names if names is not None else settings.provider_names()
    out = []
    for name in names:
        if name == "chart":
            out.append((name, YahooChartAdapter(
                base_url=settings.yahoo_chart_url,
                lookback_range=settings.price_range,
                interval=settings.price_interval,
                timeout=settings.http_timeout_seconds,
            )))
        elif name == "yfinance":
            out.append((name, YFinanceAdapter(
                lookback_range=settings.price_range,
                interval=settings.price_interval,
            )))
        else:
            log.warning("unknown_price_provider", provider=name)
    return out

def is_transient(exc: Exception) -> bool:
    # Connection errors, throttling and server errors can clear up; bad symbols and payloads cannot.
    if isinstance(exc, TransportError):
        return exc.status is None or exc.status == 429 or exc.status >= 500
    return False

class PriceHistory:
    """Sequential, rate limited close-history loader.

    Providers are tried in order for each symbol; the first one that
    returns a non-empty series wins. Failures are collected per symbol
    and never abort the batch.
    """

    def __init__(self, providers=None, rate_limiter: RateLimiter | None = None,
                 retry_attempts: int | None = None, retry_backoff_seconds: float | None = None):
        self.providers = providers if providers is not None else build_providers()
        self.rate_limiter = rate_limiter or RateLimiter(settings.market_rate_limit_seconds)
        self.retry_attempts = max(1, retry_attempts if retry_attempts is not None else settings.market_retry_attempts)
        self.retry_backoff_seconds = (
            retry_backoff_seconds if retry_backoff_seconds is not None else settings.http_retry_backoff_seconds
        )

    def _fetch(self, provider, symbol: str, deadline: float | None):
        def _call():
            return provider.history(symbol)

        return retry_call(
            _call,
            attempts=self.retry_attempts,
            base_delay=self.retry_backoff_seconds,
            deadline=deadline,
            retry_on_exception=is_transient,
        )

    def load(self, symbols: List[str], deadline: float | None = None):
        series: Dict[str, list] = {}
        failures: Dict[str, str] = {}
        for sym in symbols:
            if not sym or sym in series:
                continue
            reasons = []
            for name, provider in self.providers:
                if deadline is not None and time.monotonic() >= deadline:
                    raise TimeoutError("time_budget_exceeded")
                self.rate_limiter.wait(deadline)
                try:
                    samples = self._fetch(provider, sym, deadline)
                except (UpdateError, ValueError, KeyError, TypeError, AttributeError) as exc:
                    reasons.append(f"{name}: {exc}")
                    log.debug("price_history_provider_failed", symbol=sym, provider=name, err=str(exc))
                    continue
                if samples:
                    series[sym] = samples
                    break
                reasons.append(f"{name}: empty series")
            if sym not in series:
                failures[sym] = "; ".join(reasons) or "no providers configured"
        return series, failures
