"""Footer editor — free text plus two unordered keyed collections."""

import logging
from dataclasses import dataclass

from studio_cms.application.interfaces import ChangeNotifier, RecordStore
from studio_cms.application.services.notifications import (
    format_content_change_alert,
    notify_in_background,
)
from studio_cms.domain.entities import Footer
from studio_cms.domain.exceptions import (
    ConfirmationRequiredError,
    EntityNotFoundError,
    InvalidFieldError,
)
from studio_cms.domain.paths import join_path

logger = logging.getLogger(__name__)

FOOTER_PATH = "footer"
SECTION = "Footer"


@dataclass(frozen=True)
class FooterGroup:
    name: str
    fields: tuple[str, ...]
    defaults: dict[str, str]
    noun: str


FOOTER_GROUPS: dict[str, FooterGroup] = {
    "links": FooterGroup(
        name="links",
        fields=("label", "url"),
        defaults={"label": "New Link", "url": "#"},
        noun="link",
    ),
    "social": FooterGroup(
        name="social",
        fields=("platform", "url"),
        defaults={"platform": "facebook", "url": "#"},
        noun="social link",
    ),
}


class FooterService:
    """Reads and edits the single ``footer`` object."""

    def __init__(self, store: RecordStore, notifier: ChangeNotifier | None = None):
        self._store = store
        self._notifier = notifier

    def _notify(self, action: str) -> None:
        notify_in_background(
            self._notifier,
            format_content_change_alert(SECTION, action),
            section=SECTION,
            action=action,
        )

    @staticmethod
    def _group(name: str) -> FooterGroup:
        group = FOOTER_GROUPS.get(name)
        if group is None:
            raise EntityNotFoundError("Footer group", name)
        return group

    async def get_footer(self) -> Footer:
        return Footer.from_raw(await self._store.read_tree(FOOTER_PATH))

    async def update_text(self, text: str) -> None:
        await self._store.write_field(join_path(FOOTER_PATH, "text"), text)
        self._notify("Updated text")

    async def add_entry(self, group_name: str) -> str:
        group = self._group(group_name)
        pending = self._store.append_record(join_path(FOOTER_PATH, group.name), dict(group.defaults))
        await pending
        self._notify(f"Added {group.noun}")
        return pending.key

    async def update_entry(self, group_name: str, key: str, field: str, value: str) -> None:
        group = self._group(group_name)
        if field not in group.fields:
            raise InvalidFieldError(SECTION, field)
        await self._require(group, key)
        await self._store.write_field(join_path(FOOTER_PATH, group.name, key, field), value)

    async def delete_entry(self, group_name: str, key: str, *, confirmed: bool = False) -> None:
        group = self._group(group_name)
        if not confirmed:
            raise ConfirmationRequiredError(f"Deleting footer {group.noun}")
        await self._require(group, key)
        await self._store.delete_record(join_path(FOOTER_PATH, group.name, key))
        self._notify(f"Deleted {group.noun}")

    async def _require(self, group: FooterGroup, key: str) -> None:
        existing = await self._store.read_tree(join_path(FOOTER_PATH, group.name, key))
        if not isinstance(existing, dict):
            raise EntityNotFoundError(f"Footer {group.noun}", key)
