"""User service - admin management of user accounts."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from typing import Any

from .exceptions import DuplicateRecord
from .models import FieldError, UserAccount, is_valid_id, to_record, utc_now
from .pagination import fetch_page
from .ports import Collection, Filter
from .query import USER_SEARCH_TERMS, USER_SORT_FIELDS, normalize_query
from .results import NO_CONTENT, NOT_FOUND, Ok, Result, bad_request
from .security import hash_password
from .validation import UserInput, validate_input

logger = logging.getLogger(__name__)


def uniqueness_error(users: Collection, email: str, login: str) -> FieldError | None:
    """
    Check login/email uniqueness.

    At most one error is produced: email is reported unless the email is
    unique, in which case the login is.
    """
    email_taken = users.count(Filter(equals={"email": email})) > 0
    login_taken = users.count(Filter(equals={"login": login})) > 0
    if not email_taken and not login_taken:
        return None
    return duplicate_error("email" if email_taken else "login")


def duplicate_error(field: str) -> FieldError:
    return FieldError(field=field, message=f"{field} should be unique")


@dataclass
class UserService:
    users: Collection
    bcrypt_cost: int = 10
    clock: Callable[[], datetime] = field(default=utc_now)

    def list_users(self, raw_query: Mapping[str, Any]) -> Result:
        """
        List accounts.

        searchLoginTerm and searchEmailTerm are OR-ed; a term that is not
        given places no constraint.
        """
        spec = normalize_query(raw_query, USER_SORT_FIELDS, USER_SEARCH_TERMS)
        terms = {
            "login": spec.search("searchLoginTerm"),
            "email": spec.search("searchEmailTerm"),
        }
        filter = Filter(contains_any={name: term for name, term in terms.items() if term})
        page = fetch_page(self.users, spec, filter, USER_SORT_FIELDS, UserAccount)
        return Ok(HTTPStatus.OK, page.to_view())

    def create_user(self, payload: Any) -> Result:
        user_input, errors = validate_input(UserInput, payload)
        if user_input is None:
            return bad_request(errors)

        conflict = uniqueness_error(self.users, user_input.email, user_input.login)
        if conflict is not None:
            return bad_request([conflict])

        salt, password_hash = hash_password(user_input.password, self.bcrypt_cost)
        account = UserAccount(
            id="",
            login=user_input.login,
            email=user_input.email,
            password_salt=salt,
            password_hash=password_hash,
            is_confirmed=False,
            created_at=self.clock(),
        )
        try:
            account.id = self.users.insert(to_record(account))
        except DuplicateRecord as exc:
            return bad_request([duplicate_error(exc.field)])

        logger.info("Admin created user %s", account.id)
        return Ok(HTTPStatus.CREATED, account.to_view())

    def delete_user(self, id: str) -> Result:
        if not is_valid_id(id) or self.users.delete_by_id(id) == 0:
            return NOT_FOUND
        logger.info("Deleted user %s", id)
        return NO_CONTENT
