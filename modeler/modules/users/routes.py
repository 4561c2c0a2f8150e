from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from modeler.core.dependencies import get_current_user
from modeler.core.security import generate_salt, hash_password, issue_access_token
from modeler.database.dynamo_client import get_dynamo
from modeler.modules.auth.service import AuthService
from modeler.modules.users.models import User
from modeler.modules.users.schemas import (
    SignupRequest, SignupGithubRequest, SignupResponse,
    MyInfoResponse, EmailDuplicateResponse
)
from modeler.modules.users.service import UserService
import logging
import uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


def get_user_service(dynamo=Depends(get_dynamo)) -> UserService:
    return UserService(dynamo)


def get_auth_service(dynamo=Depends(get_dynamo)) -> AuthService:
    return AuthService(dynamo)


def _duplicate_email_response() -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=SignupResponse(success=False, email_duplicate=True).model_dump()
    )


@router.post("/signup", response_model=SignupResponse)
async def signup(
    body: SignupRequest,
    service: UserService = Depends(get_user_service)
):
    """Local signup. Email uniqueness is checked before the write, not enforced by the store."""
    if service.exists_email(body.email):
        logger.info("Signup rejected, email already registered")
        return _duplicate_email_response()

    password_salt = generate_salt()
    user = User(
        id=str(uuid.uuid4()),
        nickname=body.nickname,
        email=body.email,
        password=hash_password(body.password, password_salt),
        password_salt=password_salt,
        thumbnail_url=body.thumbnail_url,
    )
    user_id = service.create_user(user)
    return SignupResponse(success=True, access_token=issue_access_token(user_id))


@router.post("/signup/github", response_model=SignupResponse)
async def signup_github(
    body: SignupGithubRequest,
    service: UserService = Depends(get_user_service),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Signup linked to the GitHub identity behind body.access_token"""
    if service.exists_email(body.email):
        return _duplicate_email_response()

    github_id = await auth_service.get_github_user_id(body.access_token)
    if github_id is None:
        raise HTTPException(status_code=400, detail="Invalid GitHub access token")

    password_salt = generate_salt()
    user = User(
        id=str(uuid.uuid4()),
        nickname=body.nickname,
        email=body.email,
        password=hash_password(str(uuid.uuid4()), password_salt),  # GitHub-only account, no usable password
        password_salt=password_salt,
        github_id=github_id,
        thumbnail_url=body.thumbnail_url,
    )
    user_id = service.create_user(user)
    return SignupResponse(success=True, access_token=issue_access_token(user_id))


@router.get("/my/info", response_model=MyInfoResponse)
async def get_my_info(current_user: User = Depends(get_current_user)):
    return MyInfoResponse(
        id=current_user.id,
        nickname=current_user.nickname,
        email=current_user.email,
        thumbnail_url=current_user.thumbnail_url,
    )


@router.get("/email/duplicate", response_model=EmailDuplicateResponse)
async def get_email_duplicate(
    email: str,
    service: UserService = Depends(get_user_service)
):
    return EmailDuplicateResponse(duplicate=service.exists_email(email))
