"""Story access layer.

The ``get_*`` functions never raise: a failed fetch is logged and reported
as an empty list or ``None``, the same as "no stories" or "not found".
Callers that need to tell the two apart use the ``fetch_*`` variants, which
let the underlying error propagate.
"""

import logging
from typing import Protocol

from storyhub.models import Story, StoryContent, StoryImage
from storyhub.query import DEFAULT_ORDER_BY, StoriesQuery

logger = logging.getLogger(__name__)


class QueryClient(Protocol):
    def query(self, document: str) -> dict:
        ...


def _text(item: dict, key: str) -> str:
    value = item.get(key)
    return "" if value is None else str(value)


def story_from_item(item: dict) -> Story:
    """Map one item of the CMS ``stories`` collection to a Story."""
    story_id = item.get("_id")
    slug = item.get("_slug")
    if not story_id or not slug:
        raise ValueError(f"Story item is missing _id or _slug: {item!r}")

    image = None
    raw_image = item.get("image")
    if raw_image and raw_image.get("url"):
        image = StoryImage(url=raw_image["url"], alt=raw_image.get("alt"))

    raw_content = item.get("content") or {}
    reading_time = raw_content.get("readingTime")
    content = StoryContent(
        markdown=_text(raw_content, "markdown"),
        plain_text=_text(raw_content, "plainText"),
        reading_time=int(reading_time) if reading_time is not None else None,
    )

    return Story(
        id=str(story_id),
        slug=str(slug),
        title=_text(item, "_title"),
        virtue=_text(item, "virtue"),
        summary=_text(item, "summary"),
        virtue_description=_text(item, "virtueDescription"),
        image=image,
        audio_url=item.get("audioUrl") or None,
        content=content,
    )


def _run(client: QueryClient, query: StoriesQuery) -> list[dict]:
    data = client.query(query.to_graphql())
    return data["stories"]["items"]


def fetch_all_stories(
    client: QueryClient, order_by: str | None = DEFAULT_ORDER_BY
) -> list[Story]:
    """Fetch every story in the CMS's default page, in the requested order."""
    items = _run(client, StoriesQuery.all(order_by=order_by))
    stories = [story_from_item(item) for item in items]
    logger.info("Fetched %d stories from BaseHub", len(stories))
    return stories


def fetch_story_by_slug(client: QueryClient, slug: str) -> Story | None:
    """Fetch the story whose slug equals ``slug``, or None if there is none."""
    items = _run(client, StoriesQuery.by_slug(slug))
    if not items:
        return None
    # Only the first item is mapped, whatever the upstream returns
    return story_from_item(items[0])


def get_all_stories(
    client: QueryClient, order_by: str | None = DEFAULT_ORDER_BY
) -> list[Story]:
    try:
        return fetch_all_stories(client, order_by=order_by)
    except Exception:
        logger.exception("Error fetching stories from BaseHub")
        return []


def get_story_by_slug(client: QueryClient, slug: str) -> Story | None:
    try:
        return fetch_story_by_slug(client, slug)
    except Exception:
        logger.exception("Error fetching story %r from BaseHub", slug)
        return None
