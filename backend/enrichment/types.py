from dataclasses import dataclass, asdict

DEFAULT_TITLE = "Untitled"
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_TAG = "Article"


@dataclass
class LinkMetadata:
    """Best-effort annotations for a link. Every field may be missing."""

    title: str | None = None
    description: str | None = None
    suggested_tag: str | None = None
    favicon: str | None = None

    def with_defaults(self) -> dict:
        d = asdict(self)
        d["title"] = self.title or DEFAULT_TITLE
        d["description"] = self.description or DEFAULT_DESCRIPTION
        d["suggested_tag"] = self.suggested_tag or DEFAULT_TAG
        return d
