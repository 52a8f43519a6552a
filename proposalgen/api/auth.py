"""Login routes."""

from typing import Optional
from fastapi import APIRouter, Header
from pydantic import BaseModel

from proposalgen.services.auth import access_gate

router = APIRouter(prefix="/api", tags=["auth"])


class LoginRequest(BaseModel):
    """Login body."""
    password: Optional[str] = None


class LoginResponse(BaseModel):
    """Successful login."""
    success: bool
    token: str


class AuthCheckResponse(BaseModel):
    """Token status."""
    authenticated: bool


@router.post("/login", response_model=LoginResponse, summary="Exchange Password for Token")
async def login(body: LoginRequest) -> LoginResponse:
    """Issue an access token for the shared password."""
    token = access_gate.issue(body.password)
    return LoginResponse(success=True, token=token)


@router.get("/auth-check", response_model=AuthCheckResponse, summary="Check Token")
async def auth_check(x_auth_token: Optional[str] = Header(None)) -> AuthCheckResponse:
    """Report whether the supplied token is still valid."""
    return AuthCheckResponse(authenticated=access_gate.verify(x_auth_token))
