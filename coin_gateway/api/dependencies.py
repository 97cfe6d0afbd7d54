from fastapi import Request

from coin_gateway.security.credentials import CredentialManager
from coin_gateway.store import UserStore
from coin_gateway.upstream.base import UpstreamClient
from coin_gateway.usage_counter import UsageCounter


def get_usage_counter(request: Request) -> UsageCounter:
    return request.app.state.usage_counter


def get_upstream(request: Request) -> UpstreamClient:
    return request.app.state.upstream


def get_credentials(request: Request) -> CredentialManager:
    return request.app.state.credentials


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store
