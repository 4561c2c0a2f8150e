from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    success: bool = False
    access_token: str = ""


class GithubLoginRequest(BaseModel):
    access_token: str


class GithubLoginResponse(BaseModel):
    success: bool = False
    access_token: str = ""
    need_signup: bool = False


class GithubAccessTokenRequest(BaseModel):
    code: str


class GithubAccessTokenResponse(BaseModel):
    access_token: str
