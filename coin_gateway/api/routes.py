from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from coin_gateway.api.dependencies import get_upstream, get_usage_counter
from coin_gateway.translator import EMPTY_MARKER, classify
from coin_gateway.upstream.base import UpstreamClient
from coin_gateway.usage_counter import UsageCounter

logger = logging.getLogger(__name__)
router = APIRouter()


def _proxy(upstream: UpstreamClient, url: str, not_found_message: str | None = None) -> Response:
    result = upstream.fetch(url)
    outcome = classify(result, EMPTY_MARKER, not_found_message)
    if result.is_error:
        logger.error(f"Upstream call failed: {result.error!r}", extra={"url": url})
    return outcome.to_response()


@router.get("/hello/{name}", response_class=PlainTextResponse)
def hello(name: str):
    return f"hello {name}"


@router.get("/fetch")
def fetch_price(
    coin: str = Query(...),
    counter: UsageCounter = Depends(get_usage_counter),
    upstream: UpstreamClient = Depends(get_upstream),
):
    counter.increment("fetch")
    return _proxy(upstream, upstream.price_url(coin), f"Coin '{coin}' not found")


@router.get("/coins")
def list_coins(
    counter: UsageCounter = Depends(get_usage_counter),
    upstream: UpstreamClient = Depends(get_upstream),
):
    counter.increment("coins")
    return _proxy(upstream, upstream.coins_list_url())


@router.get("/fetchwithdate")
def historical(
    coin: str = Query(...),
    date: int = Query(..., ge=0, le=4294967295, description="Date as ddmmyyyy"),
    counter: UsageCounter = Depends(get_usage_counter),
    upstream: UpstreamClient = Depends(get_upstream),
):
    counter.increment("fetchwithdate")
    return _proxy(
        upstream,
        upstream.history_url(coin, date),
        f"No historical data found for coin '{coin}' on date '{date}'",
    )


@router.get("/trending")
def trending(
    counter: UsageCounter = Depends(get_usage_counter),
    upstream: UpstreamClient = Depends(get_upstream),
):
    counter.increment("trending")
    return _proxy(upstream, upstream.trending_url())


@router.get("/exchange")
def exchange(
    from_coin: str = Query(..., alias="from"),
    to_currency: str = Query(..., alias="to"),
    counter: UsageCounter = Depends(get_usage_counter),
    upstream: UpstreamClient = Depends(get_upstream),
):
    counter.increment("exchange")
    return _proxy(
        upstream,
        upstream.exchange_url(from_coin, to_currency),
        f"Exchange rate from '{from_coin}' to '{to_currency}' not found",
    )


@router.get("/metrics")
def usage_metrics(counter: UsageCounter = Depends(get_usage_counter)) -> dict[str, int]:
    return counter.snapshot()
