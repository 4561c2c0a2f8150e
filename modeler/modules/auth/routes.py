from fastapi import APIRouter, Depends, HTTPException
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.auth.schemas import (
    LoginRequest, LoginResponse, GithubLoginRequest, GithubLoginResponse,
    GithubAccessTokenRequest, GithubAccessTokenResponse
)
from modeler.modules.auth.service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(dynamo=Depends(get_dynamo)) -> AuthService:
    return AuthService(dynamo)


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login with email and password"""
    return service.login(login_data)


@router.post("/login/github", response_model=GithubLoginResponse)
async def login_github(
    body: GithubLoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login with a GitHub access token; need_signup=true when no account is linked"""
    access_token = await service.login_github(body.access_token)
    if access_token is None:
        return GithubLoginResponse(success=False, need_signup=True)
    return GithubLoginResponse(success=True, access_token=access_token)


@router.post("/access-token/github", response_model=GithubAccessTokenResponse)
async def get_github_access_token(
    body: GithubAccessTokenRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange a GitHub OAuth code for an access token"""
    access_token = await service.exchange_github_code(body.code)
    if access_token is None:
        raise HTTPException(status_code=400, detail="GitHub rejected the authorization code")
    return GithubAccessTokenResponse(access_token=access_token)
