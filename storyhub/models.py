from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class StoryImage:
    url: str
    alt: str | None = None


@dataclass(frozen=True, slots=True)
class StoryContent:
    markdown: str = ""
    plain_text: str = ""
    reading_time: int | None = None


@dataclass(frozen=True, slots=True)
class Story:
    id: str
    slug: str
    title: str
    virtue: str
    summary: str
    virtue_description: str
    image: StoryImage | None = None
    audio_url: str | None = None
    content: StoryContent = field(default_factory=StoryContent)
