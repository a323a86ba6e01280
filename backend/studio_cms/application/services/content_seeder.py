"""Content seeder — writes default site content on first start.

The seed file is YAML. Ordered collections are lists of records; their list
position becomes ``order``. ``footer`` is a single object whose ``links`` and
``social`` lists become keyed children. A namespace that already has content
in the store is left alone.

Example::

    features:
      - name: Brand Identity
        description: Logos and style guides
    pricing:
      monthly:
        - title: Starter
          price: $99
    footer:
      text: "© 2024 PixelPunk Studio. Design that hits different."
      links:
        - label: Home
          url: "#"
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from studio_cms.application.interfaces import RecordStore
from studio_cms.application.services.footer_service import FOOTER_PATH
from studio_cms.domain.push_keys import generate_push_key

logger = logging.getLogger(__name__)

ORDERED_NAMESPACES = ("features", "services", "portfolio", "pricing/monthly", "pricing/individual", "reviews")


class ContentSeeder:
    """Applies a seed document to namespaces that are still empty."""

    def __init__(self, store: RecordStore):
        self._store = store

    @staticmethod
    def load(seed_file: str | Path) -> dict[str, Any]:
        path = Path(seed_file)
        if not path.is_file():
            logger.info("No seed file at %s — skipping seeding", path)
            return {}
        with path.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Seed file {path} must contain a mapping at the top level")
        return data

    async def seed_file(self, seed_file: str | Path) -> list[str]:
        return await self.seed(self.load(seed_file))

    async def seed(self, document: dict[str, Any]) -> list[str]:
        """Seed every absent namespace; returns the namespaces written."""
        seeded: list[str] = []

        for namespace in ORDERED_NAMESPACES:
            items = _lookup(document, namespace)
            if not isinstance(items, list) or not items:
                continue
            if await self._store.read_tree(namespace) is not None:
                logger.debug("Namespace '%s' already has content — not seeding", namespace)
                continue
            await self._store.write_field(namespace, _ordered_records(items))
            seeded.append(namespace)

        footer = document.get("footer")
        if isinstance(footer, dict) and await self._store.read_tree(FOOTER_PATH) is None:
            await self._store.write_field(FOOTER_PATH, _footer_tree(footer))
            seeded.append(FOOTER_PATH)

        if seeded:
            logger.info("Seeded %s", ", ".join(seeded))
        return seeded


def _lookup(document: dict[str, Any], namespace: str) -> Any:
    node: Any = document
    for segment in namespace.split("/"):
        if not isinstance(node, dict):
            return None
        node = node.get(segment)
    return node


def _ordered_records(items: list[Any]) -> dict[str, dict[str, Any]]:
    """Key each item; ``order`` counts separately per ``type`` (portfolio partitions)."""
    tree: dict[str, dict[str, Any]] = {}
    counters: dict[Any, int] = {}
    for item in items:
        if not isinstance(item, dict):
            logger.warning("Ignoring non-mapping seed entry %r", item)
            continue
        partition = item.get("type")
        order = counters.get(partition, 0)
        counters[partition] = order + 1
        tree[generate_push_key()] = {**item, "order": order}
    return tree


def _footer_tree(footer: dict[str, Any]) -> dict[str, Any]:
    tree: dict[str, Any] = {}
    if isinstance(footer.get("text"), str):
        tree["text"] = footer["text"]
    for group in ("links", "social"):
        entries = footer.get(group)
        if isinstance(entries, list):
            tree[group] = {generate_push_key(): dict(e) for e in entries if isinstance(e, dict)}
    return tree
