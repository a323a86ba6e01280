"""Integration tests for the admin API (auth, collections, footer, inbox)."""

import asyncio

import pytest

from api_support import ADMIN_EMAIL, sign_in, start_client


async def settle(turns: int = 5) -> None:
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_wrong_password_gets_generic_401():
    client, container = await start_client()
    async with client:
        response = await client.post("/api/v1/auth/sign-in", json={"email": ADMIN_EMAIL, "password": "nope"})
    await container.stop()

    assert response.status_code == 401
    assert response.json()["detail"] == "Failed to sign in. Please check your credentials."


@pytest.mark.asyncio
async def test_admin_routes_require_a_session():
    client, container = await start_client()
    async with client:
        response = await client.get("/api/v1/admin/collections/features", headers={"Authorization": "Bearer bogus"})
    await container.stop()

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_session_endpoint_and_sign_out():
    client, container = await start_client()
    async with client:
        headers = await sign_in(client)
        session = (await client.get("/api/v1/auth/session", headers=headers)).json()
        await client.post("/api/v1/auth/sign-out", headers=headers)
        after = (await client.get("/api/v1/auth/session", headers=headers)).json()
    await container.stop()

    assert session["authenticated"] is True
    assert session["email"] == ADMIN_EMAIL
    assert after["authenticated"] is False


@pytest.mark.asyncio
async def test_static_backend_reset_reports_failure():
    client, container = await start_client()
    async with client:
        response = await client.post("/api/v1/auth/reset", json={"email": ADMIN_EMAIL})
    await container.stop()

    assert response.status_code == 400
    assert response.json()["detail"] == "Failed to send reset email. Please check your email address."


@pytest.mark.asyncio
async def test_collection_editing_flow():
    client, container = await start_client()
    base = "/api/v1/admin/collections/features"
    async with client:
        headers = await sign_in(client)

        keys = [(await client.post(f"{base}/items", headers=headers)).json()["id"] for _ in range(3)]
        await settle()

        patch = await client.patch(
            f"{base}/items/{keys[0]}", headers=headers, json={"field": "name", "value": "Brand Identity"}
        )
        assert patch.status_code == 200

        reorder = await client.post(f"{base}/reorder", headers=headers, json={"source_index": 0, "destination_index": 2})
        assert reorder.status_code == 200
        assert [item["id"] for item in reorder.json()["items"]] == [keys[1], keys[2], keys[0]]
        await settle()

        collection = (await client.get(base, headers=headers)).json()
        assert [item["id"] for item in collection["items"]] == [keys[1], keys[2], keys[0]]
        assert [item["order"] for item in collection["items"]] == [0, 1, 2]
        assert collection["items"][2]["fields"]["name"] == "Brand Identity"
        assert collection["sync_state"] == "synced"

        unconfirmed = await client.delete(f"{base}/items/{keys[1]}", headers=headers)
        assert unconfirmed.status_code == 400
        deleted = await client.delete(f"{base}/items/{keys[1]}?confirm=true", headers=headers)
        assert deleted.status_code == 204
        await settle()

        activity = (await client.get("/api/v1/admin/activity-logs", headers=headers)).json()
    await container.stop()

    actions = [entry["action"] for entry in activity]
    assert actions.count("Added new feature") == 3
    assert "Reordered features" in actions
    assert "Deleted feature" in actions


@pytest.mark.asyncio
async def test_collection_errors_map_to_http_statuses():
    client, container = await start_client({"reviews": {"r1": {"username": "jane", "rating": 5, "order": 0}}})
    async with client:
        headers = await sign_in(client)

        unknown = await client.get("/api/v1/admin/collections/testimonials", headers=headers)
        no_add = await client.post("/api/v1/admin/collections/reviews/items", headers=headers)
        bad_field = await client.patch(
            "/api/v1/admin/collections/reviews/items/r1", headers=headers, json={"field": "price", "value": 1}
        )
        bad_key = await client.patch(
            "/api/v1/admin/collections/reviews/items/nope", headers=headers, json={"field": "rating", "value": 1}
        )
        bad_move = await client.post(
            "/api/v1/admin/collections/reviews/reorder", headers=headers, json={"source_index": 0, "destination_index": 4}
        )
        cancelled = await client.post(
            "/api/v1/admin/collections/reviews/reorder", headers=headers, json={"source_index": 0}
        )
    await container.stop()

    assert unknown.status_code == 404
    assert no_add.status_code == 405
    assert bad_field.status_code == 422
    assert bad_key.status_code == 404
    assert bad_move.status_code == 400
    assert cancelled.json()["cancelled"] is True


@pytest.mark.asyncio
async def test_preview_toggle_and_first_three():
    initial = {"services": {f"s{i}": {"name": f"S{i}", "order": i} for i in range(5)}}
    client, container = await start_client(initial)
    base = "/api/v1/admin/collections/services"
    async with client:
        headers = await sign_in(client)
        toggled = (await client.post(f"{base}/preview", headers=headers)).json()
        preview = (await client.get(f"{base}/preview", headers=headers)).json()
    await container.stop()

    assert toggled["mode"] == "previewing"
    assert preview["mode"] == "previewing"
    assert [item["id"] for item in preview["items"]] == ["s0", "s1", "s2"]


@pytest.mark.asyncio
async def test_footer_editing():
    client, container = await start_client()
    async with client:
        headers = await sign_in(client)

        text = await client.put("/api/v1/admin/footer/text", headers=headers, json={"text": "© Studio"})
        link_id = (await client.post("/api/v1/admin/footer/links", headers=headers)).json()["id"]
        await client.patch(
            f"/api/v1/admin/footer/links/{link_id}", headers=headers, json={"field": "label", "value": "Home"}
        )
        footer = (await client.get("/api/v1/admin/footer", headers=headers)).json()
        unknown_group = await client.post("/api/v1/admin/footer/newsletter", headers=headers)
    await container.stop()

    assert text.json()["text"] == "© Studio"
    assert footer["links"] == [{"id": link_id, "label": "Home", "url": "#"}]
    assert unknown_group.status_code == 404


@pytest.mark.asyncio
async def test_contact_inbox_lists_and_deletes():
    initial = {
        "contacts": {
            "c1": {"name": "A", "email": "a@x.io", "phone": "1", "description": "x", "timestamp": 1},
            "c2": {"name": "B", "email": "b@x.io", "phone": "2", "description": "y", "timestamp": 2},
        }
    }
    client, container = await start_client(initial)
    async with client:
        headers = await sign_in(client)
        listed = (await client.get("/api/v1/admin/contacts", headers=headers)).json()
        deleted = await client.delete("/api/v1/admin/contacts/c1?confirm=true", headers=headers)
        remaining = (await client.get("/api/v1/admin/contacts", headers=headers)).json()
    await container.stop()

    assert [c["id"] for c in listed] == ["c2", "c1"]
    assert deleted.status_code == 204
    assert [c["id"] for c in remaining] == ["c2"]
