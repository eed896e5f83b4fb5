"""Post service - posts, globally and within a blog."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from typing import Any

from .blogs import BlogService
from .models import Blog, FieldError, Post, is_valid_id, to_record, utc_now
from .pagination import fetch_page
from .ports import Collection, Filter
from .query import POST_SORT_FIELDS, normalize_query
from .results import NO_CONTENT, NOT_FOUND, Ok, Result, bad_request
from .validation import BlogPostInput, PostInput, validate_input

logger = logging.getLogger(__name__)

MISSING_BLOG_ERROR = FieldError(
    field="blogId",
    message="there is no blog with an id value of blogId in the database",
)


@dataclass
class PostService:
    posts: Collection
    blogs: BlogService
    clock: Callable[[], datetime] = field(default=utc_now)

    def list_posts(self, raw_query: Mapping[str, Any]) -> Result:
        spec = normalize_query(raw_query, POST_SORT_FIELDS)
        page = fetch_page(self.posts, spec, Filter(), POST_SORT_FIELDS, Post)
        return Ok(HTTPStatus.OK, page.to_view())

    def list_posts_of_blog(self, blog_id: str, raw_query: Mapping[str, Any]) -> Result:
        if self.blogs.find_blog(blog_id) is None:
            return NOT_FOUND
        spec = normalize_query(raw_query, POST_SORT_FIELDS)
        filter = Filter(equals={"blog_id": blog_id})
        page = fetch_page(self.posts, spec, filter, POST_SORT_FIELDS, Post)
        return Ok(HTTPStatus.OK, page.to_view())

    def create_post(self, payload: Any) -> Result:
        """
        Create a post for the blog named in the body.

        Field errors and a missing blog are reported together.
        """
        post_input, errors = validate_input(PostInput, payload)
        blog = self.blogs.find_blog(self._requested_blog_id(payload))
        if blog is None:
            errors = [*errors, MISSING_BLOG_ERROR]
        if post_input is None or blog is None:
            return bad_request(errors)
        return self._insert(post_input, blog)

    def create_post_of_blog(self, blog_id: str, payload: Any) -> Result:
        """Create a post for the blog in the path; a missing blog is 404."""
        blog = self.blogs.find_blog(blog_id)
        if blog is None:
            return NOT_FOUND
        post_input, errors = validate_input(BlogPostInput, payload)
        if post_input is None:
            return bad_request(errors)
        return self._insert(post_input, blog)

    def find_post(self, id: str) -> Post | None:
        if not is_valid_id(id):
            return None
        record = self.posts.find_by_id(id)
        return Post(**record) if record else None

    def get_post(self, id: str) -> Result:
        post = self.find_post(id)
        if post is None:
            return NOT_FOUND
        return Ok(HTTPStatus.OK, post.to_view())

    def update_post(self, id: str, payload: Any) -> Result:
        post_input, errors = validate_input(PostInput, payload)
        blog = self.blogs.find_blog(self._requested_blog_id(payload))
        if blog is None:
            errors = [*errors, MISSING_BLOG_ERROR]
        if post_input is None or blog is None:
            return bad_request(errors)
        if not is_valid_id(id):
            return NOT_FOUND

        result = self.posts.update_by_id(
            id,
            {
                "title": post_input.title,
                "short_description": post_input.short_description,
                "content": post_input.content,
                "blog_id": blog.id,
                "blog_name": blog.name,
            },
        )
        if result.matched_count == 0:
            return NOT_FOUND
        return NO_CONTENT

    def delete_post(self, id: str) -> Result:
        if not is_valid_id(id) or self.posts.delete_by_id(id) == 0:
            return NOT_FOUND
        logger.info("Deleted post %s", id)
        return NO_CONTENT

    def _insert(self, post_input: BlogPostInput, blog: Blog) -> Ok:
        post = Post(
            id="",
            title=post_input.title,
            short_description=post_input.short_description,
            content=post_input.content,
            blog_id=blog.id,
            blog_name=blog.name,
            created_at=self.clock(),
        )
        post.id = self.posts.insert(to_record(post))
        logger.info("Created post %s in blog %s", post.id, blog.id)
        return Ok(HTTPStatus.CREATED, post.to_view())

    @staticmethod
    def _requested_blog_id(payload: Any) -> str:
        blog_id = payload.get("blogId") if isinstance(payload, Mapping) else None
        return blog_id.strip() if isinstance(blog_id, str) else ""
