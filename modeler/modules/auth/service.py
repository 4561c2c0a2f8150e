import httpx
from fastapi import HTTPException
import logging
from modeler.config import settings
from modeler.core.security import issue_access_token, verify_password
from modeler.modules.auth.schemas import LoginRequest, LoginResponse
from modeler.modules.users.service import UserService
from typing import Optional

logger = logging.getLogger(__name__)

GITHUB_ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_USER_URL = "https://api.github.com/user"
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class AuthService:
    def __init__(self, dynamo):
        self.users = UserService(dynamo)

    def login(self, login_data: LoginRequest) -> LoginResponse:
        """Password login. Unknown email or wrong password yields success=False."""
        user = self.users.find_by_email(login_data.email)
        if user is None or not verify_password(login_data.password, user.password_salt, user.password):
            return LoginResponse(success=False)
        return LoginResponse(success=True, access_token=issue_access_token(user.id))

    async def exchange_github_code(self, code: str) -> Optional[str]:
        """Trade an OAuth code for a GitHub access token; None when GitHub refuses it."""
        body = {
            "client_id": settings.github_client_id,
            "client_secret": settings.github_client_secret,
            "code": code,
        }
        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.post(GITHUB_ACCESS_TOKEN_URL, json=body, headers=DEFAULT_HEADERS)
        response.raise_for_status()
        access_token = response.json().get("access_token")
        if not access_token:
            logger.info("GitHub refused code exchange: %s", response.json().get("error"))
            return None
        return access_token

    async def get_github_user_id(self, access_token: str) -> Optional[str]:
        """The numeric GitHub account id behind access_token, as a string."""
        headers = {
            **DEFAULT_HEADERS,
            "Authorization": f"Bearer {access_token}",
            "User-Agent": settings.app_name,
        }
        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.get(GITHUB_USER_URL, headers=headers)
        if response.status_code != 200:
            logger.info("GitHub user lookup failed with status %s", response.status_code)
            return None
        github_id = response.json().get("id")
        return str(github_id) if github_id is not None else None

    async def login_github(self, access_token: str) -> Optional[str]:
        """Session token for the user linked to this GitHub identity.
        None when no user is linked to it yet."""
        github_id = await self.get_github_user_id(access_token)
        if github_id is None:
            raise HTTPException(status_code=400, detail="Invalid GitHub access token")
        user = self.users.find_by_github_id(github_id)
        if user is None:
            return None
        return issue_access_token(user.id)
