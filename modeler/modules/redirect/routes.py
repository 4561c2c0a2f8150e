from fastapi import APIRouter
from fastapi.responses import RedirectResponse
from modeler.config import settings
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

router = APIRouter(prefix="/redirect", tags=["redirect"])


def with_code(base_url: str, code: str) -> str:
    """Append code to base_url, keeping any query it already carries"""
    parts = urlsplit(base_url)
    query = parse_qsl(parts.query, keep_blank_values=True) + [("code", code)]
    return urlunsplit(parts._replace(query=urlencode(query)))


@router.get("/github")
async def redirect_github_code(code: str, redirect_url: Optional[str] = None):
    """Bounce a GitHub OAuth callback to the front-end, forwarding the code"""
    base_url = redirect_url or settings.github_redirect_url
    return RedirectResponse(url=with_code(base_url, code), status_code=307)
