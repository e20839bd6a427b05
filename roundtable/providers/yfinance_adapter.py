import yfinance as yf

from ..errors import DataShapeError, TransportError
from .common import frame_to_series


class YFinanceAdapter:
    def __init__(self, lookback_range: str = "1y", interval: str = "1d"):
        self.lookback_range = lookback_range
        self.interval = interval

    def history(self, symbol: str) -> list[tuple[int, float]]:
        try:
            df = yf.Ticker(symbol).history(
                period=self.lookback_range,
                interval=self.interval,
                auto_adjust=False,
            )
        except Exception as exc:
            raise TransportError(f"yfinance history failed: {exc}") from exc
        series = frame_to_series(df)
        if not series:
            raise DataShapeError("no close history")
        return series
