"""Ordering-domain definitions for every editable content collection.

Each schema binds one ordering domain (a store path, optionally narrowed by a
discriminant field) to its editable fields, add defaults and the wording of
its change notifications.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    TEXT = "text"
    URL = "url"
    RATING = "rating"


@dataclass(frozen=True)
class FieldSpec:
    """An editable field and the constraints applied at the input boundary."""

    name: str
    kind: FieldKind = FieldKind.TEXT
    max_length: int | None = None

    def coerce(self, value: Any) -> Any:
        if self.kind is FieldKind.RATING:
            return clamp_rating(value)
        text = "" if value is None else str(value)
        if self.max_length is not None:
            text = text[: self.max_length]
        return text


def clamp_rating(value: Any) -> int:
    """Clamp a star rating to 1–5; unparseable input becomes 5."""
    try:
        rating = int(float(value))
    except (TypeError, ValueError):
        return 5
    return max(1, min(5, rating))


@dataclass(frozen=True)
class CollectionSchema:
    """Static description of one ordering domain."""

    domain: str
    path: str
    section: str
    fields: tuple[FieldSpec, ...]
    defaults: dict[str, Any] = field(default_factory=dict)
    partition_field: str | None = None
    partition_value: str | None = None
    add_message: str | None = None
    delete_message: str = "Deleted item"
    reorder_message: str = "Reordered items"

    @property
    def allows_add(self) -> bool:
        return self.add_message is not None

    def field_spec(self, name: str) -> FieldSpec | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None

    def new_record(self, order: int) -> dict[str, Any]:
        """Default fields for a freshly added record at rank ``order``."""
        record = dict(self.defaults)
        if self.partition_field is not None:
            record[self.partition_field] = self.partition_value
        record["order"] = order
        return record


FEATURES = CollectionSchema(
    domain="features",
    path="features",
    section="Features",
    fields=(FieldSpec("name"), FieldSpec("description")),
    defaults={"name": "New Feature", "description": "Feature description"},
    add_message="Added new feature",
    delete_message="Deleted feature",
    reorder_message="Reordered features",
)

SERVICES = CollectionSchema(
    domain="services",
    path="services",
    section="Services",
    fields=(FieldSpec("name"), FieldSpec("description"), FieldSpec("whatsappLink", FieldKind.URL)),
    defaults={
        "name": "New Service",
        "description": "Service description",
        "whatsappLink": "https://wa.me/",
    },
    add_message="Added new service",
    delete_message="Deleted service",
    reorder_message="Reordered services",
)

PORTFOLIO_GRAPHICS = CollectionSchema(
    domain="portfolio-graphic",
    path="portfolio",
    section="Portfolio",
    fields=(FieldSpec("title"), FieldSpec("imageUrl", FieldKind.URL)),
    defaults={"title": "New Graphic", "imageUrl": ""},
    partition_field="type",
    partition_value="graphic",
    add_message="Added new graphic",
    delete_message="Deleted item",
    reorder_message="Reordered graphics",
)

PORTFOLIO_VIDEOS = CollectionSchema(
    domain="portfolio-video",
    path="portfolio",
    section="Portfolio",
    fields=(FieldSpec("title"), FieldSpec("videoUrl", FieldKind.URL)),
    defaults={"title": "New Video", "videoUrl": ""},
    partition_field="type",
    partition_value="video",
    add_message="Added new video",
    delete_message="Deleted item",
    reorder_message="Reordered videos",
)

_PLAN_FIELDS = (
    FieldSpec("title"),
    FieldSpec("price"),
    FieldSpec("description"),
    FieldSpec("discount"),
)
_PLAN_DEFAULTS = {
    "title": "New Plan",
    "description": "Plan description",
    "price": "$99",
    "discount": "",
}

PRICING_MONTHLY = CollectionSchema(
    domain="pricing-monthly",
    path="pricing/monthly",
    section="Pricing",
    fields=_PLAN_FIELDS,
    defaults=_PLAN_DEFAULTS,
    add_message="Added new monthly plan",
    delete_message="Deleted monthly plan",
    reorder_message="Reordered monthly plans",
)

PRICING_INDIVIDUAL = CollectionSchema(
    domain="pricing-individual",
    path="pricing/individual",
    section="Pricing",
    fields=_PLAN_FIELDS,
    defaults=_PLAN_DEFAULTS,
    add_message="Added new individual plan",
    delete_message="Deleted individual plan",
    reorder_message="Reordered individual plans",
)

# Reviews come only from public submissions, so there is no add action.
REVIEWS = CollectionSchema(
    domain="reviews",
    path="reviews",
    section="Reviews",
    fields=(
        FieldSpec("username", max_length=50),
        FieldSpec("rating", FieldKind.RATING),
        FieldSpec("description", max_length=500),
    ),
    delete_message="Deleted review",
    reorder_message="Reordered reviews",
)

ALL_SCHEMAS: tuple[CollectionSchema, ...] = (
    FEATURES,
    SERVICES,
    PORTFOLIO_GRAPHICS,
    PORTFOLIO_VIDEOS,
    PRICING_MONTHLY,
    PRICING_INDIVIDUAL,
    REVIEWS,
)

SCHEMAS_BY_DOMAIN: dict[str, CollectionSchema] = {s.domain: s for s in ALL_SCHEMAS}
