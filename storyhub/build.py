"""Export entry point: fetch every story and write it out as JSON.

Usage:
    python -m storyhub.build

Environment variables:
    BASEHUB_TOKEN     required
    BASEHUB_API_URL   default: https://api.basehub.com/graphql
    BASEHUB_DRAFT     default: false
    STORIES_ORDER_BY  default: _sys_createdAt__DESC
    OUTPUT_DIR        default: output
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from storyhub.client import DEFAULT_API_URL, BaseHubClient
from storyhub.models import Story
from storyhub.query import DEFAULT_ORDER_BY
from storyhub.stories import get_all_stories

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


def get_config() -> dict:
    """Read configuration from environment variables."""
    token = os.environ.get("BASEHUB_TOKEN")
    if not token:
        raise RuntimeError("BASEHUB_TOKEN environment variable is required")
    return {
        "token": token,
        "api_url": os.environ.get("BASEHUB_API_URL", DEFAULT_API_URL),
        "draft": os.environ.get("BASEHUB_DRAFT", "false").strip().lower() in TRUTHY,
        "order_by": os.environ.get("STORIES_ORDER_BY", DEFAULT_ORDER_BY),
        "output_dir": Path(os.environ.get("OUTPUT_DIR", "output")),
    }


def make_client(config: dict) -> BaseHubClient:
    return BaseHubClient(
        token=config["token"],
        api_url=config["api_url"],
        draft=config["draft"],
    )


def story_to_dict(story: Story) -> dict:
    """Convert a Story to a JSON-serializable dict."""
    return {
        "id": story.id,
        "slug": story.slug,
        "title": story.title,
        "virtue": story.virtue,
        "summary": story.summary,
        "virtue_description": story.virtue_description,
        "image": (
            {"url": story.image.url, "alt": story.image.alt}
            if story.image
            else None
        ),
        "audio_url": story.audio_url,
        "content": {
            "markdown": story.content.markdown,
            "plain_text": story.content.plain_text,
            "reading_time": story.content.reading_time,
        },
    }


def build_index(stories: list[Story], generated_at: str) -> dict:
    """Build the stories.json structure."""
    return {
        "schema_version": 1,
        "generated_at": generated_at,
        "stories": [story_to_dict(s) for s in stories],
    }


def write_export(index: dict, output_dir: Path) -> None:
    """Write stories.json and one stories/<slug>.json per story."""
    story_dir = output_dir / "stories"
    story_dir.mkdir(parents=True, exist_ok=True)

    index_path = output_dir / "stories.json"
    with open(index_path, "w", encoding="utf-8") as f:
        json.dump(index, f, ensure_ascii=False, indent=2)
    logger.info("Wrote %s", index_path)

    for story in index["stories"]:
        story_path = story_dir / f"{story['slug']}.json"
        with open(story_path, "w", encoding="utf-8") as f:
            json.dump(story, f, ensure_ascii=False, indent=2)
    logger.info("Wrote %d story files to %s", len(index["stories"]), story_dir)


def run_export(config: dict) -> None:
    """Fetch all stories and write the export."""
    client = make_client(config)

    logger.info("Fetching stories from BaseHub...")
    stories = get_all_stories(client, order_by=config["order_by"])
    # An empty list is also what a failed fetch looks like; never publish it
    if not stories:
        raise RuntimeError("No stories fetched from BaseHub. Aborting.")

    generated_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    index = build_index(stories, generated_at)
    write_export(index, config["output_dir"])

    logger.info("Export complete: %d stories", len(stories))


def main() -> None:
    """Entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = get_config()
    run_export(config)


if __name__ == "__main__":
    main()
