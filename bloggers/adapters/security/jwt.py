"""
JWT token signer adapter - Implements TokenSigner protocol.

Access tokens carry the user id in a "userId" claim and expire after a
configured number of minutes.
"""

from collections.abc import Callable
from datetime import datetime, timedelta

from jose import JWTError, jwt

from bloggers.domain.models import utc_now


class JwtTokenSigner:
    """Implements TokenSigner protocol via python-jose."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(minutes=40),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in
        self._clock = clock

    def sign(self, user_id: str) -> str:
        now = self._clock()
        claims = {
            "userId": user_id,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str | None:
        """Return the userId claim of a valid, unexpired token."""
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            return None
        user_id = claims.get("userId")
        return user_id if isinstance(user_id, str) else None
