"""Domain entity — one record of an ordered, keyed collection."""

import time
from dataclasses import dataclass, field, replace
from typing import Any


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class OrderedRecord:
    """A keyed record with a display rank inside one ordering domain.

    ``order`` is ``None`` when the stored record carries no usable rank;
    such records sort after every ranked one. ``fields`` holds every stored
    attribute except ``order``.
    """

    key: str
    order: int | float | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def timestamp(self) -> int | None:
        value = self.fields.get("timestamp")
        return value if isinstance(value, (int, float)) and not isinstance(value, bool) else None

    def get(self, name: str, default: Any = None) -> Any:
        if name == "order":
            return self.order
        return self.fields.get(name, default)

    def with_order(self, order: int) -> "OrderedRecord":
        return replace(self, order=order)

    def to_dict(self) -> dict[str, Any]:
        """Flat representation: key, fields and order side by side."""
        data: dict[str, Any] = {"id": self.key, **self.fields}
        if self.order is not None:
            data["order"] = self.order
        return data
