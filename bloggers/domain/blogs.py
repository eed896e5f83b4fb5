"""Blog service - listing, creation, update and removal of blogs."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from typing import Any

from .models import Blog, is_valid_id, to_record, utc_now
from .pagination import fetch_page
from .ports import Collection, Filter
from .query import BLOG_SEARCH_TERMS, BLOG_SORT_FIELDS, normalize_query
from .results import NO_CONTENT, NOT_FOUND, Ok, Result, bad_request
from .validation import BlogInput, validate_input

logger = logging.getLogger(__name__)


@dataclass
class BlogService:
    blogs: Collection
    clock: Callable[[], datetime] = field(default=utc_now)

    def list_blogs(self, raw_query: Mapping[str, Any]) -> Result:
        spec = normalize_query(raw_query, BLOG_SORT_FIELDS, BLOG_SEARCH_TERMS)
        name_term = spec.search("searchNameTerm")
        filter = Filter(contains_any={"name": name_term} if name_term else {})
        page = fetch_page(self.blogs, spec, filter, BLOG_SORT_FIELDS, Blog)
        return Ok(HTTPStatus.OK, page.to_view())

    def create_blog(self, payload: Any) -> Result:
        blog_input, errors = validate_input(BlogInput, payload)
        if blog_input is None:
            return bad_request(errors)

        blog = Blog(
            id="",
            name=blog_input.name,
            description=blog_input.description,
            website_url=blog_input.website_url,
            created_at=self.clock(),
            is_membership=False,
        )
        blog.id = self.blogs.insert(to_record(blog))
        logger.info("Created blog %s", blog.id)
        return Ok(HTTPStatus.CREATED, blog.to_view())

    def find_blog(self, id: str) -> Blog | None:
        """Look up a blog; malformed ids are simply absent."""
        if not is_valid_id(id):
            return None
        record = self.blogs.find_by_id(id)
        return Blog(**record) if record else None

    def get_blog(self, id: str) -> Result:
        blog = self.find_blog(id)
        if blog is None:
            return NOT_FOUND
        return Ok(HTTPStatus.OK, blog.to_view())

    def update_blog(self, id: str, payload: Any) -> Result:
        blog_input, errors = validate_input(BlogInput, payload)
        if blog_input is None:
            return bad_request(errors)
        if not is_valid_id(id):
            return NOT_FOUND

        result = self.blogs.update_by_id(
            id,
            {
                "name": blog_input.name,
                "description": blog_input.description,
                "website_url": blog_input.website_url,
            },
        )
        if result.matched_count == 0:
            return NOT_FOUND
        return NO_CONTENT

    def delete_blog(self, id: str) -> Result:
        if not is_valid_id(id) or self.blogs.delete_by_id(id) == 0:
            return NOT_FOUND
        logger.info("Deleted blog %s", id)
        return NO_CONTENT
