"""Category Routes: slug/url derivation, uniqueness, update and guarded delete.

Invariants:
    - {name:"Tech"} → slug "tech", url "/categories/tech"
    - creating "Tech" twice → 400
    - renaming regenerates the slug; renaming onto an existing name → 400
    - delete refused (409) while posts reference the category
"""

from uuid import uuid4


async def test_create_category_derives_slug_and_url(client, category):
    assert category["name"] == "Tech"
    assert category["slug"] == "tech"
    assert category["url"] == "/categories/tech"
    assert category["description"] == "All things tech"


async def test_duplicate_category_rejected(client, alice, category):
    res = await client.post(
        "/api/v1/categories", json={"name": "Tech"}, headers=alice["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_name_differing_only_by_case_is_a_slug_clash(client, alice, category):
    res = await client.post(
        "/api/v1/categories", json={"name": "tech"}, headers=alice["headers"],
    )
    assert res.status_code == 400


async def test_create_category_requires_token(client):
    res = await client.post("/api/v1/categories", json={"name": "Open"})
    assert res.status_code == 401


async def test_description_too_long(client, alice):
    res = await client.post(
        "/api/v1/categories",
        json={"name": "Long", "description": "d" * 201},
        headers=alice["headers"],
    )
    assert res.status_code == 400


async def test_list_categories_sorted_by_name(client, alice, category):
    await client.post(
        "/api/v1/categories", json={"name": "Art"}, headers=alice["headers"],
    )
    res = await client.get("/api/v1/categories")
    assert res.status_code == 200
    assert [c["name"] for c in res.json()] == ["Art", "Tech"]


async def test_get_category_by_slug(client, category):
    res = await client.get("/api/v1/categories/tech")
    assert res.status_code == 200
    assert res.json()["id"] == category["id"]


async def test_unknown_slug_is_404(client):
    res = await client.get("/api/v1/categories/nope")
    assert res.status_code == 404


async def test_rename_regenerates_slug(client, alice, category):
    res = await client.put(
        f"/api/v1/categories/{category['id']}",
        json={"name": "Web Development"}, headers=alice["headers"],
    )
    assert res.status_code == 200
    body = res.json()
    assert body["slug"] == "web-development"
    assert body["url"] == "/categories/web-development"
    assert body["description"] == "All things tech"


async def test_rename_onto_existing_name_rejected(client, alice, category):
    await client.post(
        "/api/v1/categories", json={"name": "Art"}, headers=alice["headers"],
    )
    res = await client.put(
        f"/api/v1/categories/{category['id']}",
        json={"name": "Art"}, headers=alice["headers"],
    )
    assert res.status_code == 400


async def test_update_unknown_category_is_404(client, alice):
    res = await client.put(
        f"/api/v1/categories/{uuid4()}", json={"name": "Ghost"},
        headers=alice["headers"],
    )
    assert res.status_code == 404


async def test_delete_unused_category(client, alice, category):
    res = await client.delete(
        f"/api/v1/categories/{category['id']}", headers=alice["headers"],
    )
    assert res.status_code == 204
    assert (await client.get("/api/v1/categories/tech")).status_code == 404


async def test_delete_category_in_use_is_409(client, alice, category, make_post):
    await make_post()
    res = await client.delete(
        f"/api/v1/categories/{category['id']}", headers=alice["headers"],
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


async def test_delete_unknown_category_is_404(client, alice):
    res = await client.delete(
        f"/api/v1/categories/{uuid4()}", headers=alice["headers"],
    )
    assert res.status_code == 404
