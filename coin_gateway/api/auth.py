"""
Registration and login routes.

Neither route issues a session or token; success is reported only through
the status code and body.
"""
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from coin_gateway.api.dependencies import get_credentials, get_user_store
from coin_gateway.schemas import ErrorResponse
from coin_gateway.security.credentials import CredentialManager, HashError
from coin_gateway.store import StoreError, UserStore

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_LOGIN = "Invalid username or password"


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post("/register")
def register(
    username: str = Query(...),
    email: str = Query(...),
    password: str = Query(...),
    credentials: CredentialManager = Depends(get_credentials),
    store: UserStore = Depends(get_user_store),
):
    try:
        hashed = credentials.hash(password)
    except HashError as e:
        logger.error(f"Failed to hash password: {e}")
        return _error("Failed to hash password", 500)

    try:
        store.create(username, email, hashed.hash, hashed.salt)
    except StoreError as e:
        # Duplicate usernames share this response with other store failures
        logger.error(f"Failed to register user: {e}")
        return _error("Failed to register user", 500)

    logger.info("User registered", extra={"username": username})
    return JSONResponse(content=f"User {username}, registered")


@router.post("/login")
def login(
    username: str = Query(...),
    password: str = Query(...),
    credentials: CredentialManager = Depends(get_credentials),
    store: UserStore = Depends(get_user_store),
):
    try:
        user = store.find_by_username(username)
    except StoreError as e:
        logger.error(f"Failed to fetch user: {e}")
        return _error("Failed to fetch user", 500)

    if user is None:
        logger.info("Login rejected: unknown user", extra={"username": username})
        return _error(INVALID_LOGIN, 401)

    if not credentials.verify(password, user.password_hash):
        logger.info("Login rejected: password mismatch", extra={"username": username})
        return _error(INVALID_LOGIN, 401)

    return JSONResponse(content=f"User {username} logged in")
