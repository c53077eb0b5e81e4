"""API key verification for engine endpoints."""

import logging
import secrets

from fastapi import Header, HTTPException

from vitalis.config import settings

logger = logging.getLogger(__name__)


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Check X-API-Key (or Authorization: Bearer) against VITALIS_API_KEY.

    Auth is off while VITALIS_API_KEY is unset.
    """
    expected = settings.vitalis_api_key
    if expected is None:
        return ""

    key = x_api_key if x_api_key is not None else _bearer_token(authorization)
    if key is None or not secrets.compare_digest(key.encode(), expected.encode()):
        logger.warning("Rejected engine request with %s API key", "missing" if key is None else "invalid")
        raise HTTPException(status_code=401, detail="Invalid or missing API key")

    return key
