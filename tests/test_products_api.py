"""
API tests for product routes: CRUD, ownership rules, pagination and caching.
"""

from uuid import uuid4

import pytest_asyncio

from tests.utils import API, bearer, create_product, create_user, login


@pytest_asyncio.fixture
async def alice(client):
    user = await create_user("alice")
    return user, await login(client, "alice")


@pytest_asyncio.fixture
async def bob(client):
    user = await create_user("bob")
    return user, await login(client, "bob")


class TestCreateProduct:

    async def test_owner_is_the_creator(self, client, alice):
        user, token = alice

        response = await client.post(
            f"{API}/products",
            json={"name": "Widget", "description": "A widget", "price": 9.99, "stock": 5, "category": "tools"},
            headers=bearer(token),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["ownerId"] == str(user.id)
        assert data["price"] == 9.99
        assert data["stock"] == 5
        assert data["category"] == "tools"

    async def test_stock_defaults_to_zero(self, client, alice):
        _, token = alice
        data = await create_product(client, token, stock=None)
        assert data["stock"] == 0

    async def test_name_and_price_are_required(self, client, alice):
        _, token = alice
        response = await client.post(f"{API}/products", json={"name": "Widget"}, headers=bearer(token))
        assert response.status_code == 400

    async def test_negative_price(self, client, alice):
        _, token = alice
        response = await client.post(
            f"{API}/products", json={"name": "Widget", "price": -1}, headers=bearer(token)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Price must be a positive number"

    async def test_fractional_stock(self, client, alice):
        _, token = alice
        response = await client.post(
            f"{API}/products", json={"name": "Widget", "price": 1, "stock": 1.5}, headers=bearer(token)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Stock must be a non-negative integer"

    async def test_markup_is_escaped(self, client, alice):
        _, token = alice
        data = await create_product(client, token, name="<b>Widget</b>")
        assert data["name"] == "&lt;b&gt;Widget&lt;&#x2F;b&gt;"

    async def test_requires_authentication(self, client):
        response = await client.post(f"{API}/products", json={"name": "Widget", "price": 1})
        assert response.status_code == 401


class TestReadProducts:

    async def test_list_is_paginated_newest_first(self, client, alice):
        _, token = alice
        for index in range(3):
            await create_product(client, token, name=f"Product {index}")

        response = await client.get(f"{API}/products?page=1&limit=2", headers=bearer(token))

        assert response.status_code == 200
        body = response.json()
        assert [item["name"] for item in body["data"]] == ["Product 2", "Product 1"]
        assert body["pagination"] == {"total": 3, "page": 1, "limit": 2, "pages": 2}

    async def test_list_includes_creator(self, client, alice):
        user, token = alice
        await create_product(client, token)

        response = await client.get(f"{API}/products", headers=bearer(token))

        creator = response.json()["data"][0]["creator"]
        assert creator == {"id": str(user.id), "username": "alice", "email": "alice@example.com"}

    async def test_category_filter(self, client, alice):
        _, token = alice
        await create_product(client, token, name="Hammer", category="tools")
        await create_product(client, token, name="Apple", category="food")

        response = await client.get(f"{API}/products?category=food", headers=bearer(token))

        body = response.json()
        assert [item["name"] for item in body["data"]] == ["Apple"]
        assert body["pagination"]["total"] == 1

    async def test_empty_list_has_no_pages(self, client, alice):
        _, token = alice

        response = await client.get(f"{API}/products?page=3", headers=bearer(token))

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["pagination"] == {"total": 0, "page": 3, "limit": 10, "pages": 0}

    async def test_invalid_pagination(self, client, alice):
        _, token = alice
        assert (await client.get(f"{API}/products?page=0", headers=bearer(token))).status_code == 400
        assert (await client.get(f"{API}/products?limit=101", headers=bearer(token))).status_code == 400

    async def test_list_is_cached(self, client, alice):
        _, token = alice
        await create_product(client, token)

        first = await client.get(f"{API}/products", headers=bearer(token))
        second = await client.get(f"{API}/products", headers=bearer(token))

        assert first.headers["X-Cache"] == "MISS"
        assert second.headers["X-Cache"] == "HIT"
        assert second.json() == first.json()

    async def test_cached_route_still_requires_authentication(self, client, alice):
        _, token = alice
        await client.get(f"{API}/products", headers=bearer(token))

        response = await client.get(f"{API}/products")

        assert response.status_code == 401

    async def test_my_products(self, client, alice, bob):
        _, alice_token = alice
        _, bob_token = bob
        await create_product(client, alice_token, name="Alice item")
        await create_product(client, bob_token, name="Bob item")

        response = await client.get(f"{API}/products/my-products", headers=bearer(alice_token))

        assert response.status_code == 200
        assert [item["name"] for item in response.json()["data"]] == ["Alice item"]

    async def test_get_product(self, client, alice):
        _, token = alice
        product = await create_product(client, token)

        first = await client.get(f"{API}/products/{product['id']}", headers=bearer(token))
        second = await client.get(f"{API}/products/{product['id']}", headers=bearer(token))

        assert first.status_code == 200
        assert first.json()["data"]["creator"]["username"] == "alice"
        assert first.headers["X-Cache"] == "MISS"
        assert second.headers["X-Cache"] == "HIT"

    async def test_get_missing_product(self, client, alice):
        _, token = alice
        response = await client.get(f"{API}/products/{uuid4()}", headers=bearer(token))
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    async def test_get_malformed_id(self, client, alice):
        _, token = alice
        response = await client.get(f"{API}/products/not-a-uuid", headers=bearer(token))
        assert response.status_code == 404


class TestUpdateProduct:

    async def test_owner_updates_partially(self, client, alice):
        _, token = alice
        product = await create_product(client, token, description="old")

        response = await client.put(
            f"{API}/products/{product['id']}", json={"price": 12.5}, headers=bearer(token)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 12.5
        assert data["name"] == "Widget"
        assert data["description"] == "old"
        assert data["stock"] == 5

    async def test_other_user_cannot_update(self, client, alice, bob):
        _, alice_token = alice
        _, bob_token = bob
        product = await create_product(client, alice_token)

        response = await client.put(
            f"{API}/products/{product['id']}", json={"price": 1}, headers=bearer(bob_token)
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to update this product"

    async def test_admin_can_update_any_product(self, client, alice, admin_token):
        _, token = alice
        product = await create_product(client, token)

        response = await client.put(
            f"{API}/products/{product['id']}", json={"stock": 0}, headers=bearer(admin_token)
        )

        assert response.status_code == 200
        assert response.json()["data"]["stock"] == 0

    async def test_owner_cannot_be_reassigned(self, client, alice, bob):
        alice_user, token = alice
        bob_user, _ = bob
        product = await create_product(client, token)

        response = await client.put(
            f"{API}/products/{product['id']}", json={"ownerId": str(bob_user.id)}, headers=bearer(token)
        )

        assert response.json()["data"]["ownerId"] == str(alice_user.id)

    async def test_update_missing_product(self, client, alice):
        _, token = alice
        response = await client.put(f"{API}/products/{uuid4()}", json={"price": 1}, headers=bearer(token))
        assert response.status_code == 404


class TestDeleteProduct:

    async def test_owner_without_admin_role_cannot_delete(self, client, alice):
        _, token = alice
        product = await create_product(client, token)

        response = await client.delete(f"{API}/products/{product['id']}", headers=bearer(token))

        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"

    async def test_admin_deletes_any_product(self, client, alice, admin_token):
        _, token = alice
        product = await create_product(client, token)

        response = await client.delete(f"{API}/products/{product['id']}", headers=bearer(admin_token))

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Product deleted successfully"}
        mine = await client.get(f"{API}/products/my-products", headers=bearer(token))
        assert mine.json()["data"] == []

    async def test_delete_missing_product(self, client, admin_token):
        response = await client.delete(f"{API}/products/{uuid4()}", headers=bearer(admin_token))
        assert response.status_code == 404
