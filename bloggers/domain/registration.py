"""
Registration domain service - Confirmation token state machine.

This module contains the business logic for account registration and
email confirmation.

Confirmation Token Lifecycle
============================

States:
- PENDING: token stored, account unconfirmed
- CONSUMED: token deleted after a successful confirmation
- EXPIRED: confirmation attempted after expiration_date (token kept)
- SUPERSEDED: a resend stored a newer token; the older one stays valid

Account Transition (exactly once):
    is_confirmed false -> true   (valid, unexpired token, account unconfirmed)

The transition is a conditional update (is_confirmed = false in the
filter), so concurrent confirmations of the same account produce a single
SUCCESS without any application-level lock.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .models import ConfirmationToken, UserAccount, to_record, utc_now
from .ports import Collection, ConfirmResult, EmailSender, Filter, ResendResult
from .security import hash_password

logger = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = "Registration confirmation"
CONFIRMATION_TEXT = "Welcome! Follow the link to confirm registration and activate your account."
CONFIRMATION_HTML = (
    '<p>Welcome! Follow the <a href="{link}">verification link</a> '
    "to confirm registration and activate your account.</p>"
)


@dataclass
class RegistrationService:
    """
    Domain service for registration and confirmation.

    Orchestrates account creation, token issuance, confirmation email
    dispatch and token consumption.
    """

    users: Collection
    tokens: Collection
    email_sender: EmailSender
    confirmation_url: str = "https://localhost:3003/auth/confirm-registration"
    ttl: timedelta = timedelta(minutes=1)
    bcrypt_cost: int = 10
    clock: Callable[[], datetime] = field(default=utc_now)

    def register(self, login: str, email: str, password: str) -> UserAccount:
        """
        Create an unconfirmed account and send its confirmation token.

        Args:
            login: Validated, unique login
            email: Validated, unique email
            password: Plaintext password (will be hashed)

        Returns:
            The stored account

        Raises:
            DuplicateRecord: If login or email was taken concurrently
        """
        salt, password_hash = hash_password(password, self.bcrypt_cost)
        account = UserAccount(
            id="",
            login=login,
            email=email,
            password_salt=salt,
            password_hash=password_hash,
            is_confirmed=False,
            created_at=self.clock(),
        )
        account.id = self.users.insert(to_record(account))
        logger.info("Registered account %s", account.id)

        token = self._issue_token(account.id)
        self._send_confirmation(email, token.token)
        return account

    def resend(self, email: str) -> ResendResult:
        """
        Issue a fresh confirmation token for an unconfirmed account.

        Earlier tokens are left in place and remain usable until they
        expire or the account gets confirmed.
        """
        record = self.users.find_one(Filter(equals={"email": email}))
        if record is None:
            return ResendResult.NOT_FOUND

        account = UserAccount(**record)
        if account.is_confirmed:
            return ResendResult.ALREADY_CONFIRMED

        token = self._issue_token(account.id)
        self._send_confirmation(email, token.token)
        return ResendResult.SUCCESS

    def confirm(self, code: str) -> ConfirmResult:
        """
        Consume a confirmation token.

        Checks run in order and the first failure wins:
        1. Token exists (INVALID_TOKEN)
        2. now is not after expiration_date (EXPIRED)
        3. Owning account is not confirmed yet (ALREADY_CONFIRMED)

        On success the account is confirmed and the token deleted, so a
        second submission of the same code yields INVALID_TOKEN.
        """
        now = self.clock()
        record = self.tokens.find_one(Filter(equals={"token": code}))
        if record is None:
            return ConfirmResult.INVALID_TOKEN

        token = ConfirmationToken(**record)
        if now > token.expiration_date:
            logger.info("Confirmation token for account %s expired", token.user_id)
            return ConfirmResult.EXPIRED

        account = self.users.find_by_id(token.user_id)
        if account is None:
            return ConfirmResult.INVALID_TOKEN
        if account["is_confirmed"]:
            return ConfirmResult.ALREADY_CONFIRMED

        result = self.users.update_where(
            Filter(equals={"id": token.user_id, "is_confirmed": False}),
            {"is_confirmed": True},
        )
        if result.matched_count == 0:
            return ConfirmResult.ALREADY_CONFIRMED

        self.tokens.delete_by_id(token.id)
        logger.info("Account %s confirmed", token.user_id)
        return ConfirmResult.SUCCESS

    def _issue_token(self, user_id: str) -> ConfirmationToken:
        token = ConfirmationToken(
            id="",
            user_id=user_id,
            token=self._generate_token(),
            expiration_date=self.clock() + self.ttl,
        )
        token.id = self.tokens.insert(to_record(token))
        return token

    def _generate_token(self) -> str:
        """32 hex characters from 16 cryptographically random bytes."""
        return secrets.token_hex(16)

    def _send_confirmation(self, email: str, code: str) -> None:
        link = f"{self.confirmation_url}?code={code}"
        sent = self.email_sender.send(
            email,
            CONFIRMATION_SUBJECT,
            CONFIRMATION_TEXT,
            CONFIRMATION_HTML.format(link=link),
        )
        if not sent:
            logger.warning("Confirmation email to %s was not dispatched", email)
