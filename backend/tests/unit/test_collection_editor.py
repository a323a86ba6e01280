"""Unit tests for the collection editor and editor registry."""

import asyncio

import pytest

from studio_cms.application.interfaces import ChangeNotifier
from studio_cms.application.services import (
    CollectionEditor,
    EditorMode,
    EditorRegistry,
    ReorderCoordinator,
    SyncState,
)
from studio_cms.domain.collections import (
    FEATURES,
    PORTFOLIO_GRAPHICS,
    PORTFOLIO_VIDEOS,
    PRICING_INDIVIDUAL,
    PRICING_MONTHLY,
    REVIEWS,
    SERVICES,
)
from studio_cms.domain.exceptions import (
    ActionNotAllowedError,
    ConfirmationRequiredError,
    EntityNotFoundError,
    InvalidFieldError,
)
from studio_cms.infrastructure.store import InMemoryRecordStore


class RecordingNotifier(ChangeNotifier):
    def __init__(self):
        self.actions: list[tuple[str | None, str | None]] = []

    @property
    def sink_name(self) -> str:
        return "recording"

    async def send(self, text: str, *, section: str | None = None, action: str | None = None) -> None:
        self.actions.append((section, action))


async def settle(turns: int = 5) -> None:
    for _ in range(turns):
        await asyncio.sleep(0)


def _editor(schema, store, notifier=None) -> CollectionEditor:
    return CollectionEditor(schema, store, ReorderCoordinator(store, notifier), notifier)


@pytest.mark.asyncio
async def test_add_uses_defaults_and_count_as_order():
    store = InMemoryRecordStore()
    notifier = RecordingNotifier()

    async with _editor(FEATURES, store, notifier) as editor:
        first = await editor.add()
        second = await editor.add()
        await settle()

        assert [r.key for r in editor.records] == [first, second]
        assert [r.order for r in editor.records] == [0, 1]
        assert editor.records[0].fields == {"name": "New Feature", "description": "Feature description"}

    assert notifier.actions == [("Features", "Added new feature")] * 2


@pytest.mark.asyncio
async def test_services_default_includes_whatsapp_link():
    store = InMemoryRecordStore()
    async with _editor(SERVICES, store) as editor:
        key = await editor.add()
    assert await store.read_tree(f"services/{key}/whatsappLink") == "https://wa.me/"


@pytest.mark.asyncio
async def test_delete_leaves_a_gap_that_the_next_reorder_closes():
    store = InMemoryRecordStore()
    async with _editor(FEATURES, store) as editor:
        keys = [await editor.add() for _ in range(3)]
        await editor.delete(keys[1], confirmed=True)
        await settle()
        assert [r.order for r in editor.records] == [0, 2]

        await editor.reorder(0, 0)
        await settle()
        assert [r.order for r in editor.records] == [0, 1]


@pytest.mark.asyncio
async def test_delete_requires_confirmation():
    store = InMemoryRecordStore()
    async with _editor(FEATURES, store) as editor:
        key = await editor.add()
        with pytest.raises(ConfirmationRequiredError):
            await editor.delete(key)
        await settle()
        assert editor.view.find(key) is not None


@pytest.mark.asyncio
async def test_update_field_rejects_unknown_fields_and_keys():
    store = InMemoryRecordStore()
    async with _editor(FEATURES, store) as editor:
        key = await editor.add()
        await settle()

        with pytest.raises(InvalidFieldError):
            await editor.update_field(key, "price", "$5")
        with pytest.raises(EntityNotFoundError):
            await editor.update_field("missing", "name", "X")

        stored = await editor.update_field(key, "name", "Brand Identity")
        await settle()
        assert stored == "Brand Identity"
        assert editor.records[0].get("name") == "Brand Identity"


@pytest.mark.asyncio
async def test_review_edits_are_constrained():
    store = InMemoryRecordStore({"reviews": {"r1": {"username": "jane", "rating": 5, "description": "ok", "order": 0}}})
    async with _editor(REVIEWS, store) as editor:
        assert await editor.update_field("r1", "rating", 9) == 5
        assert await editor.update_field("r1", "rating", 0) == 1
        assert len(await editor.update_field("r1", "username", "x" * 80)) == 50

        with pytest.raises(ActionNotAllowedError):
            await editor.add()


@pytest.mark.asyncio
async def test_portfolio_partitions_are_independent():
    store = InMemoryRecordStore()
    graphics = _editor(PORTFOLIO_GRAPHICS, store)
    videos = _editor(PORTFOLIO_VIDEOS, store)
    async with graphics, videos:
        g = [await graphics.add() for _ in range(2)]
        v = [await videos.add() for _ in range(2)]
        await settle()

        assert [r.get("type") for r in graphics.records] == ["graphic", "graphic"]
        assert [r.order for r in videos.records] == [0, 1]

        await graphics.reorder(0, 1)
        await settle()

        assert [r.key for r in graphics.records] == [g[1], g[0]]
        assert [r.key for r in videos.records] == v
        assert await store.read_tree(f"portfolio/{v[0]}/order") == 0


@pytest.mark.asyncio
async def test_pricing_tiers_are_independent():
    store = InMemoryRecordStore()
    monthly = _editor(PRICING_MONTHLY, store)
    individual = _editor(PRICING_INDIVIDUAL, store)
    async with monthly, individual:
        await monthly.add()
        await monthly.add()
        key = await individual.add()
        await settle()

        assert len(monthly.records) == 2
        assert [r.key for r in individual.records] == [key]
        assert individual.records[0].order == 0
        assert individual.records[0].get("price") == "$99"


@pytest.mark.asyncio
async def test_sync_state_returns_to_synced_after_echo():
    store = InMemoryRecordStore()
    async with _editor(FEATURES, store) as editor:
        assert editor.sync_state is SyncState.SYNCED

        key = await editor.add()
        await settle()
        assert editor.sync_state is SyncState.SYNCED

        await editor.update_field(key, "name", "Renamed")
        assert editor.sync_state is SyncState.SYNCING
        await settle()
        assert editor.sync_state is SyncState.SYNCED


@pytest.mark.asyncio
async def test_preview_shows_first_three_and_toggles_mode():
    store = InMemoryRecordStore()
    async with _editor(FEATURES, store) as editor:
        keys = [await editor.add() for _ in range(4)]
        await settle()

        assert editor.mode is EditorMode.EDITING
        assert editor.toggle_preview() is EditorMode.PREVIEWING
        assert [r.key for r in editor.preview()] == keys[:3]
        assert editor.toggle_preview() is EditorMode.EDITING


@pytest.mark.asyncio
async def test_registry_opens_every_domain_and_releases_subscriptions():
    store = InMemoryRecordStore()
    registry = EditorRegistry(store)

    await registry.open(timeout=1)
    assert set(registry.domains) == {
        "features",
        "services",
        "portfolio-graphic",
        "portfolio-video",
        "pricing-monthly",
        "pricing-individual",
        "reviews",
    }
    assert registry.get("features").view.is_open
    with pytest.raises(EntityNotFoundError):
        registry.get("testimonials")

    registry.close()
    assert store.subscription_count == 0


@pytest.mark.asyncio
async def test_reorder_never_shows_an_intermediate_order():
    store = InMemoryRecordStore({"features": {"A": {"order": 0}, "B": {"order": 1}, "C": {"order": 2}}})
    seen: list[list[str]] = []

    async with _editor(FEATURES, store) as editor:
        editor.view.add_listener(lambda records: seen.append([r.key for r in records]))
        await editor.reorder(0, 2)
        await settle()

        assert seen
        assert all(keys == ["B", "C", "A"] for keys in seen)
        assert [r.key for r in editor.records] == ["B", "C", "A"]
        assert not editor.view.has_optimistic_state


@pytest.mark.asyncio
async def test_concurrent_reorders_converge():
    store = InMemoryRecordStore(
        {"features": {"a": {"order": 0}, "b": {"order": 1}, "c": {"order": 2}, "d": {"order": 3}}}
    )

    async with _editor(FEATURES, store) as first, _editor(FEATURES, store) as second:
        await asyncio.gather(first.reorder(0, 3), second.reorder(3, 0))
        await settle()

        first_view = [(r.key, r.order) for r in first.records]
        assert first_view == [(r.key, r.order) for r in second.records]
        assert sorted(key for key, _ in first_view) == ["a", "b", "c", "d"]
        assert [order for _, order in first_view] == [0, 1, 2, 3]
        assert first.sync_state is SyncState.SYNCED
        assert second.sync_state is SyncState.SYNCED

        repeat = await first.reorder(2, 2)
        await settle()

        assert repeat.written_keys == []
        assert [(r.key, r.order) for r in second.records] == first_view
