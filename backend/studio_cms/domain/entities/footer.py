"""Domain entity — the site footer, a single object with two keyed sub-collections."""

from dataclasses import dataclass, field
from typing import Any

from studio_cms.domain.paths import record_children

DEFAULT_FOOTER_TEXT = "© 2024 PixelPunk Studio. Design that hits different."


@dataclass
class FooterLink:
    key: str
    label: str
    url: str


@dataclass
class SocialLink:
    key: str
    platform: str
    url: str


@dataclass
class Footer:
    """Footer content. ``links`` and ``social`` are unordered keyed collections."""

    text: str = DEFAULT_FOOTER_TEXT
    links: list[FooterLink] = field(default_factory=list)
    social: list[SocialLink] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> "Footer":
        """Build a footer from a raw store snapshot; absent or malformed data yields defaults."""
        if not isinstance(raw, dict):
            return cls()

        text = raw.get("text")
        links = [
            FooterLink(key=key, label=str(value.get("label", "")), url=str(value.get("url", "")))
            for key, value in record_children(raw.get("links"))
        ]
        social = [
            SocialLink(key=key, platform=str(value.get("platform", "")), url=str(value.get("url", "")))
            for key, value in record_children(raw.get("social"))
        ]
        return cls(
            text=text if isinstance(text, str) else DEFAULT_FOOTER_TEXT,
            links=links,
            social=social,
        )
