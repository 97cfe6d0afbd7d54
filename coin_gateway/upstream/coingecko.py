from __future__ import annotations

import logging
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from coin_gateway.upstream.base import FetchResult, UpstreamClient, UpstreamReadError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
# Delimiters stay as given; spaces and non-ASCII text are percent-encoded
URL_SAFE_CHARS = ":/?&=,%+@;$!*'()~"


class CoinGeckoClient(UpstreamClient):
    """Single-shot GET client for the CoinGecko public API. No retries, no caching."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, user_agent: str = "coin-gateway/1.0", timeout_seconds: float | None = None):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds

    # Parameters are interpolated as given; the query layer has already checked their types.
    def price_url(self, coin: str) -> str:
        return f"{self.base_url}/simple/price?ids={coin}&vs_currencies=usd"

    def coins_list_url(self) -> str:
        return f"{self.base_url}/coins/list"

    def history_url(self, coin: str, date: int) -> str:
        return f"{self.base_url}/coins/{coin}/history?date={date}"

    def trending_url(self) -> str:
        return f"{self.base_url}/search/trending"

    def exchange_url(self, from_coin: str, to_currency: str) -> str:
        return f"{self.base_url}/simple/price?ids={from_coin}&vs_currencies={to_currency}"

    def _open(self, request: Request):
        if self.timeout_seconds is None:
            return urlopen(request)
        return urlopen(request, timeout=self.timeout_seconds)

    def fetch(self, url: str) -> FetchResult:
        try:
            request = Request(quote(url, safe=URL_SAFE_CHARS), headers={"User-Agent": self.user_agent})
            response = self._open(request)
        except HTTPError as exc:
            # Non-2xx statuses still carry a body that is passed through
            response = exc
        except (URLError, HTTPException, OSError, ValueError) as exc:
            logger.warning(f"Upstream request to {url} failed: {exc}")
            return FetchResult.failed(UpstreamUnavailableError(str(exc)))

        try:
            with response:
                payload = response.read()
        except (HTTPException, OSError) as exc:
            logger.warning(f"Failed to read upstream response from {url}: {exc}")
            return FetchResult.failed(UpstreamReadError(str(exc)))

        return FetchResult.ok(payload.decode("utf-8", errors="replace"))
