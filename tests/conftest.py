import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from coin_gateway.config import Settings
from coin_gateway.database import build_session_factory, init_db
from coin_gateway.security.credentials import CredentialManager
from coin_gateway.store import UserStore
from coin_gateway.upstream.base import FetchResult, UpstreamClient


class FakeUpstream(UpstreamClient):
    """Records requested URLs and answers from a canned result."""

    def __init__(self, result: FetchResult):
        self.result = result
        self.urls: list[str] = []

    def fetch(self, url: str) -> FetchResult:
        self.urls.append(url)
        return self.result

    def price_url(self, coin):
        return f"fake://price/{coin}"

    def coins_list_url(self):
        return "fake://coins"

    def history_url(self, coin, date):
        return f"fake://history/{coin}/{date}"

    def trending_url(self):
        return "fake://trending"

    def exchange_url(self, from_coin, to_currency):
        return f"fake://exchange/{from_coin}/{to_currency}"


@pytest.fixture
def settings():
    return Settings(address="127.0.0.1", port=8080, database_url="sqlite://")


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return UserStore(build_session_factory(engine))


@pytest.fixture
def credentials():
    # Minimum Argon2 cost keeps the suite fast
    return CredentialManager(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def make_upstream():
    return FakeUpstream
