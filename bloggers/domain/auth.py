"""
Auth service - login, identity and the registration endpoints.

Validates request bodies, delegates the confirmation state machine to
RegistrationService and maps its outcomes to tagged results.
"""

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from .exceptions import DuplicateRecord
from .models import CurrentUser, FieldError, UserAccount
from .ports import Collection, ConfirmResult, Filter, ResendResult, TokenSigner
from .registration import RegistrationService
from .results import NO_CONTENT, UNAUTHORIZED, Ok, Result, bad_request
from .security import verify_password
from .users import duplicate_error, uniqueness_error
from .validation import ConfirmationInput, LoginInput, ResendInput, UserInput, validate_input

logger = logging.getLogger(__name__)

CONFIRM_ERRORS = {
    ConfirmResult.INVALID_TOKEN: FieldError(
        field="code",
        message="the confirmation code is either incorrect or had already been applied",
    ),
    ConfirmResult.EXPIRED: FieldError(field="code", message="the confirmation code is expired"),
    ConfirmResult.ALREADY_CONFIRMED: FieldError(
        field="code", message="the account had already been confirmed"
    ),
}

RESEND_ERRORS = {
    ResendResult.NOT_FOUND: FieldError(field="email", message="no user with that email address"),
    ResendResult.ALREADY_CONFIRMED: FieldError(field="email", message="the user is already confirmed"),
}


@dataclass
class AuthService:
    users: Collection
    signer: TokenSigner
    registration: RegistrationService

    def login(self, payload: Any) -> Result:
        """Check credentials (by email or by login) and issue an access token."""
        login_input, errors = validate_input(LoginInput, payload)
        if login_input is None:
            return bad_request(errors)

        record = self.users.find_one(
            Filter(equals={login_input.lookup_field: login_input.login_or_email})
        )
        if record is None:
            return UNAUTHORIZED
        account = UserAccount(**record)
        if not verify_password(login_input.password, account.password_hash):
            return UNAUTHORIZED

        return Ok(HTTPStatus.OK, {"accessToken": self.signer.sign(account.id)})

    def me(self, user: CurrentUser) -> Result:
        return Ok(HTTPStatus.OK, {"email": user.email, "login": user.login, "userId": user.id})

    def register(self, payload: Any) -> Result:
        user_input, errors = validate_input(UserInput, payload)
        if user_input is None:
            return bad_request(errors)

        conflict = uniqueness_error(self.users, user_input.email, user_input.login)
        if conflict is not None:
            return bad_request([conflict])

        try:
            self.registration.register(user_input.login, user_input.email, user_input.password)
        except DuplicateRecord as exc:
            return bad_request([duplicate_error(exc.field)])
        return NO_CONTENT

    def resend(self, payload: Any) -> Result:
        resend_input, errors = validate_input(ResendInput, payload)
        if resend_input is None:
            return bad_request(errors)

        outcome = self.registration.resend(resend_input.email)
        if outcome is ResendResult.SUCCESS:
            return NO_CONTENT
        return bad_request([RESEND_ERRORS[outcome]])

    def confirm(self, payload: Any) -> Result:
        confirmation, errors = validate_input(ConfirmationInput, payload)
        if confirmation is None:
            return bad_request(errors)

        outcome = self.registration.confirm(confirmation.code)
        if outcome is ConfirmResult.SUCCESS:
            return NO_CONTENT
        logger.info("Confirmation rejected: %s", outcome.value)
        return bad_request([CONFIRM_ERRORS[outcome]])
