from fastapi.testclient import TestClient

from coin_gateway.api.app import create_app
from coin_gateway.upstream.base import FetchResult


def _client(settings, engine, credentials, upstream):
    return TestClient(create_app(settings, upstream=upstream, engine=engine, credentials=credentials))


def test_hello_and_empty_metrics(settings, engine, credentials, make_upstream):
    with _client(settings, engine, credentials, make_upstream(FetchResult.ok("{}"))) as client:
        assert client.get("/metrics").json() == {}

        response = client.get("/hello/Alice")
        assert response.status_code == 200
        assert response.text == "hello Alice"
        assert "x-request-id" in response.headers


def test_market_routes_are_counted(settings, engine, credentials, make_upstream):
    upstream = make_upstream(FetchResult.ok('{"bitcoin":{"usd":1}}'))
    with _client(settings, engine, credentials, upstream) as client:
        assert client.get("/fetch", params={"coin": "bitcoin"}).status_code == 200
        assert client.get("/fetch", params={"coin": "bitcoin"}).status_code == 200
        assert client.get("/coins").status_code == 200
        assert client.get("/fetchwithdate", params={"coin": "bitcoin", "date": 30122023}).status_code == 200
        assert client.get("/trending").status_code == 200
        assert client.get("/exchange", params={"from": "bitcoin", "to": "eur"}).status_code == 200

        assert client.get("/metrics").json() == {
            "fetch": 2,
            "coins": 1,
            "fetchwithdate": 1,
            "trending": 1,
            "exchange": 1,
        }
        assert upstream.urls[-1] == "fake://exchange/bitcoin/eur"


def test_invalid_query_is_rejected_before_counting(settings, engine, credentials, make_upstream):
    with _client(settings, engine, credentials, make_upstream(FetchResult.ok("{}"))) as client:
        assert client.get("/fetchwithdate", params={"coin": "bitcoin", "date": "-1"}).status_code == 422
        assert client.get("/fetchwithdate", params={"coin": "bitcoin", "date": "4294967296"}).status_code == 422
        assert client.get("/fetchwithdate", params={"coin": "bitcoin", "date": "4294967295"}).status_code == 404
        assert client.get("/fetch").status_code == 422
        assert client.get("/metrics").json() == {"fetchwithdate": 1}


def test_register_and_login_over_http(settings, engine, credentials, make_upstream):
    with _client(settings, engine, credentials, make_upstream(FetchResult.ok("{}"))) as client:
        params = {"username": "alice", "email": "alice@example.com", "password": "pw"}
        response = client.post("/register", params=params)
        assert response.status_code == 200
        assert response.json() == "User alice, registered"

        assert client.post("/register", params=params).status_code == 500

        response = client.post("/login", params={"username": "alice", "password": "pw"})
        assert response.json() == "User alice logged in"
        assert "set-cookie" not in response.headers

        response = client.post("/login", params={"username": "alice", "password": "bad"})
        assert response.status_code == 401
