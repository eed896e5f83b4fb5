"""
Authentication gate - Bearer identity resolution and admin check.

Two independent schemes:
- Bearer: signed access token -> user id -> existing account
- Basic: single configured admin credential pair

Every failure of a scheme collapses to the same "not authenticated"
outcome (None / False) so callers cannot tell which check failed.
"""

import secrets
from dataclasses import dataclass

from .models import CurrentUser, is_valid_id
from .ports import Collection, TokenSigner


@dataclass
class Authenticator:
    users: Collection
    signer: TokenSigner
    admin_username: str
    admin_password: str

    def resolve_bearer(self, token: str) -> CurrentUser | None:
        """Return the identity behind an access token, None if unusable."""
        if not token:
            return None
        user_id = self.signer.verify(token)
        if user_id is None or not is_valid_id(user_id):
            return None
        record = self.users.find_by_id(user_id)
        if record is None:
            return None
        return CurrentUser(id=record["id"], login=record["login"], email=record["email"])

    def is_admin(self, username: str, password: str) -> bool:
        """Constant-time comparison against the configured admin pair."""
        username_ok = secrets.compare_digest(username.encode(), self.admin_username.encode())
        password_ok = secrets.compare_digest(password.encode(), self.admin_password.encode())
        return username_ok and password_ok
