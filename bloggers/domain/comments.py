"""Comment service - comments under posts, editable by their authors only."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from typing import Any

from .models import Comment, CurrentUser, is_valid_id, to_record, utc_now
from .pagination import fetch_page
from .ports import Collection, Filter
from .posts import PostService
from .query import COMMENT_SORT_FIELDS, normalize_query
from .results import FORBIDDEN, NO_CONTENT, NOT_FOUND, Ok, Result, bad_request
from .validation import CommentInput, validate_input

logger = logging.getLogger(__name__)


@dataclass
class CommentService:
    comments: Collection
    posts: PostService
    clock: Callable[[], datetime] = field(default=utc_now)

    def list_comments_of_post(self, post_id: str, raw_query: Mapping[str, Any]) -> Result:
        if self.posts.find_post(post_id) is None:
            return NOT_FOUND
        spec = normalize_query(raw_query, COMMENT_SORT_FIELDS)
        filter = Filter(equals={"post_id": post_id})
        page = fetch_page(self.comments, spec, filter, COMMENT_SORT_FIELDS, Comment)
        return Ok(HTTPStatus.OK, page.to_view())

    def create_comment(self, user: CurrentUser, post_id: str, payload: Any) -> Result:
        if self.posts.find_post(post_id) is None:
            return NOT_FOUND
        comment_input, errors = validate_input(CommentInput, payload)
        if comment_input is None:
            return bad_request(errors)

        comment = Comment(
            id="",
            post_id=post_id,
            content=comment_input.content,
            commentator_user_id=user.id,
            commentator_user_login=user.login,
            created_at=self.clock(),
        )
        comment.id = self.comments.insert(to_record(comment))
        logger.info("User %s commented post %s", user.id, post_id)
        return Ok(HTTPStatus.CREATED, comment.to_view())

    def find_comment(self, id: str) -> Comment | None:
        if not is_valid_id(id):
            return None
        record = self.comments.find_by_id(id)
        return Comment(**record) if record else None

    def get_comment(self, id: str) -> Result:
        comment = self.find_comment(id)
        if comment is None:
            return NOT_FOUND
        return Ok(HTTPStatus.OK, comment.to_view())

    def update_comment(self, user: CurrentUser, id: str, payload: Any) -> Result:
        """Existence is checked first, then ownership, then the body."""
        comment = self.find_comment(id)
        if comment is None:
            return NOT_FOUND
        if comment.commentator_user_id != user.id:
            return FORBIDDEN
        comment_input, errors = validate_input(CommentInput, payload)
        if comment_input is None:
            return bad_request(errors)

        self.comments.update_by_id(id, {"content": comment_input.content})
        return NO_CONTENT

    def delete_comment(self, user: CurrentUser, id: str) -> Result:
        comment = self.find_comment(id)
        if comment is None:
            return NOT_FOUND
        if comment.commentator_user_id != user.id:
            return FORBIDDEN

        self.comments.delete_by_id(id)
        logger.info("User %s deleted comment %s", user.id, id)
        return NO_CONTENT
