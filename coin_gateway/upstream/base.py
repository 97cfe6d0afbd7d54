from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class TransportError(Exception):
    """The upstream provider could not be reached or its body could not be read."""


class UpstreamUnavailableError(TransportError):
    pass


class UpstreamReadError(TransportError):
    pass


@dataclass(frozen=True)
class FetchResult:
    body: str | None = None
    error: TransportError | None = None

    @classmethod
    def ok(cls, body: str) -> FetchResult:
        return cls(body=body)

    @classmethod
    def failed(cls, error: TransportError) -> FetchResult:
        return cls(error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None


class UpstreamClient(ABC):
    @abstractmethod
    def fetch(self, url: str) -> FetchResult:
        raise NotImplementedError

    @abstractmethod
    def price_url(self, coin: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def coins_list_url(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def history_url(self, coin: str, date: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def trending_url(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def exchange_url(self, from_coin: str, to_currency: str) -> str:
        raise NotImplementedError
