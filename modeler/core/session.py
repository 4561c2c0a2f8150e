"""
Session resolution for every HTTP request.

The middleware never rejects a request: it attaches a CurrentUser to
request.state and lets each handler decide whether a caller is required.
"""

import logging
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from typing import Optional

from modeler.core.security import verify_access_token
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.users.models import User
from modeler.modules.users.service import UserService

logger = logging.getLogger(__name__)

AUTHORIZATION_QUERY_PARAM = "AUTHORIZATION"


class CurrentUser(BaseModel):
    authorized: bool = False
    user: Optional[User] = None


def extract_credential(request: Request) -> Optional[str]:
    """Authorization header first, then the AUTHORIZATION query parameter.
    "Bearer " is stripped wherever it appears; a missing prefix is accepted."""
    credential = request.headers.get("authorization")
    if credential is None:
        credential = request.query_params.get(AUTHORIZATION_QUERY_PARAM)
    if credential is None:
        return None
    return credential.replace("Bearer ", "")


async def resolve_current_user(request: Request) -> CurrentUser:
    token = extract_credential(request)
    if token is None:
        return CurrentUser()

    user_id = verify_access_token(token)
    if user_id is None:
        logger.debug("Authorization: JWT verify failed")
        return CurrentUser()

    try:
        user = await run_in_threadpool(UserService(get_dynamo()).find_by_id, user_id)
    except Exception as e:
        logger.warning("Authorization: user lookup failed: %s", e)
        return CurrentUser()

    if user is None:
        logger.debug("Authorization: user %s not found", user_id)
        return CurrentUser()

    return CurrentUser(authorized=True, user=user)


class SessionMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        current_user = await resolve_current_user(Request(scope))
        scope.setdefault("state", {})["current_user"] = current_user
        await self.app(scope, receive, send)
