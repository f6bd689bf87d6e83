"""GraphQL query construction for the BaseHub stories collection.

Both story operations request the same projection (STORY_FIELDS); a
StoriesQuery only varies the collection arguments around it.
"""

import json
from dataclasses import dataclass, field

STORY_FIELDS = {
    "_id": True,
    "_slug": True,
    "_title": True,
    "virtue": True,
    "image": {
        "url": True,
        "alt": True,
    },
    "summary": True,
    "virtueDescription": True,
    "audioUrl": True,
    "content": {
        "markdown": True,
        "plainText": True,
        "readingTime": True,
    },
}

DEFAULT_ORDER_BY = "_sys_createdAt__DESC"


@dataclass(frozen=True, slots=True)
class EnumValue:
    """A bare GraphQL enum value, e.g. an orderBy key."""

    name: str


def render_selection(fields: dict) -> str:
    """Render a projection tree as a GraphQL selection set body."""
    parts = []
    for name, value in fields.items():
        if isinstance(value, dict):
            parts.append(f"{name} {{ {render_selection(value)} }}")
        elif value:
            parts.append(name)
    return " ".join(parts)


def render_value(value) -> str:
    """Render a Python value as a GraphQL input literal."""
    if isinstance(value, EnumValue):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        # JSON string escaping is valid GraphQL string syntax
        return json.dumps(value)
    if isinstance(value, dict):
        inner = ", ".join(f"{k}: {render_value(v)}" for k, v in value.items())
        return f"{{{inner}}}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(v) for v in value) + "]"
    raise TypeError(f"Cannot render {type(value).__name__} as a GraphQL value")


@dataclass(frozen=True, slots=True)
class StoriesQuery:
    filter: dict | None = None
    first: int | None = None
    order_by: str | None = None
    fields: dict = field(default_factory=lambda: STORY_FIELDS)

    def __post_init__(self):
        if self.first is not None and (
            isinstance(self.first, bool)
            or not isinstance(self.first, int)
            or self.first < 1
        ):
            raise ValueError(f"first must be a positive integer, got {self.first!r}")

    @classmethod
    def all(cls, order_by: str | None = DEFAULT_ORDER_BY) -> "StoriesQuery":
        return cls(order_by=order_by)

    @classmethod
    def by_slug(cls, slug: str, order_by: str | None = None) -> "StoriesQuery":
        """Equality match on the unique slug, capped at a single item."""
        return cls(filter={"_slug": {"eq": slug}}, first=1, order_by=order_by)

    def arguments(self) -> dict:
        """Collection arguments that are actually set, in GraphQL naming."""
        args = {}
        if self.filter:
            args["filter"] = self.filter
        if self.first is not None:
            args["first"] = self.first
        if self.order_by:
            args["orderBy"] = EnumValue(self.order_by)
        return args

    def to_graphql(self) -> str:
        args = self.arguments()
        rendered_args = ""
        if args:
            rendered_args = "(" + ", ".join(
                f"{name}: {render_value(value)}" for name, value in args.items()
            ) + ")"
        selection = render_selection(self.fields)
        return f"query {{ stories{rendered_args} {{ items {{ {selection} }} }} }}"
