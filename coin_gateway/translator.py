"""
Maps upstream fetch results onto the gateway's local HTTP contract.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fastapi.responses import JSONResponse, Response

from coin_gateway.schemas import ErrorResponse
from coin_gateway.upstream.base import FetchResult, UpstreamReadError

EMPTY_MARKER = "{}"
FETCH_FAILED = "Failed to fetch data"
PARSE_FAILED = "Failed to parse response"


class OutcomeKind(str, Enum):
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_STATUS_CODES = {
    OutcomeKind.OK: 200,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.INTERNAL_ERROR: 500,
}


@dataclass(frozen=True)
class GatewayOutcome:
    kind: OutcomeKind
    body: str
    media_type: str = "application/json"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.kind]

    def to_response(self) -> Response:
        if self.kind == OutcomeKind.OK:
            return Response(content=self.body, media_type=self.media_type)
        payload = ErrorResponse(error=self.body)
        return JSONResponse(status_code=self.status_code, content=payload.model_dump())


def classify(result: FetchResult, empty_marker: str = EMPTY_MARKER, not_found_message: str | None = None) -> GatewayOutcome:
    """
    Classify an upstream result.

    The empty check is an exact string comparison against the provider's
    marker: ``"{}"`` is not found, ``"{} "`` or ``"{ }"`` are data. Passing no
    ``not_found_message`` disables the check and every body passes through.
    """
    if result.is_error:
        message = PARSE_FAILED if isinstance(result.error, UpstreamReadError) else FETCH_FAILED
        return GatewayOutcome(OutcomeKind.INTERNAL_ERROR, message)
    if not_found_message is not None and result.body == empty_marker:
        return GatewayOutcome(OutcomeKind.NOT_FOUND, not_found_message)
    return GatewayOutcome(OutcomeKind.OK, result.body)
