"""Access gate - shared-password login with signed, expiring tokens."""

import hmac
import logging
import time
from typing import Callable, List, Optional

from jose import JWTError, jwt

from proposalgen.core.config import get_settings
from proposalgen.core.errors import InvalidCredentials, ValidationError

logger = logging.getLogger(__name__)

TOKEN_SCOPE = "proposal-gen"


class AccessGate:
    """
    Issues and verifies access tokens.

    Tokens are stateless JWTs carrying the issue time, an expiry and a fixed
    scope marker. Nothing is stored server-side, so a token stays valid for
    its whole window. Tokens signed with the previous secret keep working
    after a rotation until they expire.
    """

    def __init__(
        self,
        password: Optional[str] = None,
        secret: Optional[str] = None,
        previous_secret: Optional[str] = None,
        ttl_hours: Optional[int] = None,
        clock: Callable[[], float] = time.time
    ):
        """Initialize gate; unset values are read from settings."""
        self._password = password
        self._secret = secret
        self._previous_secret = previous_secret
        self._ttl_hours = ttl_hours
        self._clock = clock
        self._settings = None

    @property
    def settings(self):
        """Lazy load settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def password(self) -> str:
        return self._password if self._password is not None else self.settings.ACCESS_PASSWORD

    @property
    def secret(self) -> str:
        return self._secret if self._secret is not None else self.settings.TOKEN_SECRET

    @property
    def ttl_seconds(self) -> int:
        hours = self._ttl_hours if self._ttl_hours is not None else self.settings.TOKEN_TTL_HOURS
        return hours * 3600

    @property
    def verification_secrets(self) -> List[str]:
        previous = (
            self._previous_secret
            if self._previous_secret is not None
            else self.settings.TOKEN_SECRET_PREVIOUS
        )
        return [s for s in (self.secret, previous) if s]

    def issue(self, password: Optional[str]) -> str:
        """
        Exchange the shared password for an access token.

        Raises:
            ValidationError: no password supplied
            InvalidCredentials: password does not match
        """
        if not password:
            raise ValidationError("Password is required")

        if not self.password or not hmac.compare_digest(
            password.encode("utf-8"), self.password.encode("utf-8")
        ):
            logger.warning("Login rejected: invalid password")
            raise InvalidCredentials()

        issued_at = int(self._clock())
        claims = {
            "scope": TOKEN_SCOPE,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }

        logger.info("Access token issued")
        return jwt.encode(claims, self.secret, algorithm=self.settings.TOKEN_ALGORITHM)

    def verify(self, token: Optional[str]) -> bool:
        """True for a well-signed, unexpired token with the right scope."""
        if not token:
            return False

        for secret in self.verification_secrets:
            try:
                claims = jwt.decode(
                    token,
                    secret,
                    algorithms=[self.settings.TOKEN_ALGORITHM],
                    options={"verify_exp": False, "verify_iat": False}
                )
            except JWTError:
                continue

            if claims.get("scope") != TOKEN_SCOPE:
                return False

            expires_at = claims.get("exp")
            if not isinstance(expires_at, (int, float)):
                return False

            return self._clock() < expires_at

        return False


# Singleton instance
access_gate = AccessGate()
