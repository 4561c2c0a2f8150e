from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, field_validator
from typing import Optional


def check_email_format(value: str) -> str:
    """Reject malformed addresses; the address is stored exactly as typed."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e))
    return value


class SignupRequest(BaseModel):
    nickname: str
    email: str
    password: str
    thumbnail_url: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        return check_email_format(value)


class SignupGithubRequest(BaseModel):
    nickname: str
    email: str
    access_token: str
    thumbnail_url: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        return check_email_format(value)


class SignupResponse(BaseModel):
    success: bool = False
    email_duplicate: bool = False
    access_token: str = ""


class MyInfoResponse(BaseModel):
    id: str
    nickname: str
    email: str
    thumbnail_url: Optional[str] = None


class EmailDuplicateResponse(BaseModel):
    duplicate: bool
