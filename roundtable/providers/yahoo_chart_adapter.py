from __future__ import annotations

from urllib.parse import quote

import httpx

from ..errors import DataShapeError, TransportError
from .common import normalize_series

DEFAULT_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart"

class YahooChartAdapter:
    def __init__(
        self,
        base_url: str = DEFAULT_CHART_URL,
        lookback_range: str = "1y",
        interval: str = "1d",
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.lookback_range = lookback_range
        self.interval = interval
        self.timeout = timeout
        self.client = client
        self.headers = {
            "user-agent": "Mozilla/5.0 (compatible; PriceBot/1.0)",
            "accept": "application/json",
        }

    def _get(self, url: str, params: dict):
        try:
            if self.client is not None:
                return self.client.get(url, params=params, headers=self.headers)
            return httpx.get(url, params=params, headers=self.headers, timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise TransportError(f"chart request failed: {exc}") from exc

    def history(self, symbol: str) -> list[tuple[int, float]]:
        url = f"{self.base_url}/{quote(symbol, safe='')}"
        resp = self._get(url, {"range": self.lookback_range, "interval": self.interval})
        if resp.status_code != 200:
            raise TransportError(f"HTTP {resp.status_code}", status=resp.status_code)
        try:
            payload = resp.json()
        except ValueError as exc:
            raise DataShapeError("chart response is not JSON") from exc
        return parse_chart(payload)

def _dict_at(obj, key):
    value = obj.get(key) if isinstance(obj, dict) else None
    return value if isinstance(value, dict) else None

def parse_chart(payload) -> list[tuple[int, float]]:
    results = (_dict_at(payload, "chart") or {}).get("result") or []
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        raise DataShapeError("no chart data")
    result = results[0]
    timestamps = result.get("timestamp")
    quotes = (_dict_at(result, "indicators") or {}).get("quote") or []
    if not isinstance(timestamps, list) or not isinstance(quotes, list) or not quotes or not isinstance(quotes[0], dict):
        raise DataShapeError("chart data has no closes")
    closes = quotes[0].get("close")
    if not isinstance(closes, list):
        raise DataShapeError("chart data has no closes")
    return normalize_series(timestamps, closes)
