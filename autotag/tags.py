"""List remote tags and look up the tag for the current version."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from . import output
from .errors import GitHubAPIError
from .github import TAGS_PER_PAGE

if typ.TYPE_CHECKING:
    from .github import GitHubClient, Tag

__all__ = ["fetch_tags", "find_existing_tag"]

logger = logging.getLogger(__name__)


def fetch_tags(client: GitHubClient, *, per_page: int = TAGS_PER_PAGE) -> list[Tag]:
    """Return every tag in listing order, stopping at the first empty page.

    A failed page request ends pagination early with a warning; the tags
    collected so far are returned.
    """
    tags: list[Tag] = []
    page = 1
    while True:
        try:
            batch = client.list_tags(page, per_page=per_page)
        except GitHubAPIError as exc:
            output.warning(f"Unable to retrieve all tags ERROR:{exc}")
            break
        if not batch:
            break
        logger.debug("Fetched %d tag(s) from page %d", len(batch), page)
        tags.extend(batch)
        page += 1
    return tags


def find_existing_tag(tags: cabc.Iterable[Tag], tag_name: str) -> Tag | None:
    """Return the first tag named ``tag_name``, warning when one exists."""
    for tag in tags:
        if tag.name == tag_name:
            output.warning(f'"{tag.name.strip()}" tag already exists.')
            return tag
    return None
