"""Shared route dependencies."""

from typing import Optional
from fastapi import Header

from proposalgen.core.errors import Unauthorized
from proposalgen.services.auth import access_gate


def require_auth(x_auth_token: Optional[str] = Header(None)) -> str:
    """Reject requests without a valid X-Auth-Token header."""
    if not access_gate.verify(x_auth_token):
        raise Unauthorized()
    return x_auth_token
