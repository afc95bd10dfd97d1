"""
Tests de integración para clientes y proveedores
"""
from typing import Any, Dict

import pytest
from httpx import AsyncClient

from kontaflow.repositories.third_party import ThirdPartyRepository

RESOURCES = [
    ("/api/customers", "Customer"),
    ("/api/suppliers", "Supplier"),
]


@pytest.mark.integration
@pytest.mark.parametrize("endpoint,label", RESOURCES)
class TestThirdPartyEndpoints:

    @pytest.fixture
    def third_party_data(self, economic_group: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "economicGroupId": economic_group["id"],
            "name": "Distribuidora del Este",
            "rut": "214455660012",
            "email": "ventas@este.com.uy",
            "phone": "+598 2400 1234"
        }

    async def test_create(
        self, client: AsyncClient, owner_headers: Dict[str, str], endpoint, label, third_party_data
    ):
        response = await client.post(endpoint, json=third_party_data, headers=owner_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == f"{label} created successfully"
        assert body["data"]["name"] == "Distribuidora del Este"
        assert body["data"]["email"] == "ventas@este.com.uy"
        assert body["data"]["active"] is True

    async def test_duplicate_name_is_case_insensitive(
        self, client: AsyncClient, owner_headers: Dict[str, str], endpoint, label, third_party_data
    ):
        await client.post(endpoint, json=third_party_data, headers=owner_headers)
        third_party_data["name"] = "DISTRIBUIDORA DEL ESTE"

        response = await client.post(endpoint, json=third_party_data, headers=owner_headers)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["rule"] == f"DUPLICATE_{label.upper()}_NAME"
        assert error["message"] == f"A {label.lower()} with this name already exists in the economic group"

    async def test_concurrent_duplicate_name_keeps_rule(
        self, client: AsyncClient, owner_headers: Dict[str, str], monkeypatch, endpoint, label, third_party_data
    ):
        async def no_duplicate(self, group_id, name, exclude_id=None):
            return False

        monkeypatch.setattr(ThirdPartyRepository, "name_exists_in_group", no_duplicate)
        await client.post(endpoint, json=third_party_data, headers=owner_headers)
        third_party_data["name"] = "DISTRIBUIDORA del este"

        response = await client.post(endpoint, json=third_party_data, headers=owner_headers)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["rule"] == f"DUPLICATE_{label.upper()}_NAME"
        assert error["message"] == f"A {label.lower()} with this name already exists in the economic group"

        listing = await client.get(endpoint, headers=owner_headers)
        assert listing.json()["pagination"]["total"] == 1

    async def test_invalid_email(
        self, client: AsyncClient, owner_headers: Dict[str, str], endpoint, label, third_party_data
    ):
        third_party_data["email"] = "not-an-email"
        response = await client.post(endpoint, json=third_party_data, headers=owner_headers)

        assert response.status_code == 400
        assert "email" in response.json()["error"]["details"]

    async def test_create_in_inactive_group(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        endpoint,
        label,
        economic_group: Dict[str, Any],
        third_party_data
    ):
        await client.delete(f"/api/economic-groups/{economic_group['id']}", headers=owner_headers)

        response = await client.post(endpoint, json=third_party_data, headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "INACTIVE_ECONOMIC_GROUP"

    async def test_create_in_foreign_group(
        self, client: AsyncClient, outsider_headers: Dict[str, str], endpoint, label, third_party_data
    ):
        response = await client.post(endpoint, json=third_party_data, headers=outsider_headers)

        assert response.status_code == 403

    async def test_list_and_search(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        outsider_headers: Dict[str, str],
        endpoint,
        label,
        third_party_data
    ):
        await client.post(endpoint, json=third_party_data, headers=owner_headers)
        third_party_data.update({"name": "Almacén Central", "rut": None, "email": None})
        await client.post(endpoint, json=third_party_data, headers=owner_headers)

        response = await client.get(endpoint, headers=owner_headers)
        assert response.status_code == 200
        assert [i["name"] for i in response.json()["data"]] == ["Almacén Central", "Distribuidora del Este"]
        assert response.json()["pagination"]["total"] == 2

        response = await client.get(endpoint, params={"search": "214455"}, headers=owner_headers)
        assert [i["name"] for i in response.json()["data"]] == ["Distribuidora del Este"]

        response = await client.get(endpoint, headers=outsider_headers)
        assert response.json()["data"] == []

    async def test_update_excludes_self_from_duplicate_check(
        self, client: AsyncClient, owner_headers: Dict[str, str], endpoint, label, third_party_data
    ):
        created = await client.post(endpoint, json=third_party_data, headers=owner_headers)
        item_id = created.json()["data"]["id"]

        response = await client.put(
            f"{endpoint}/{item_id}",
            json={"name": "Distribuidora del Este", "phone": "099 123 456"},
            headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["message"] == f"{label} updated successfully"
        assert response.json()["data"]["phone"] == "099 123 456"

    async def test_get_forbidden_for_outsider(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        outsider_headers: Dict[str, str],
        endpoint,
        label,
        third_party_data
    ):
        created = await client.post(endpoint, json=third_party_data, headers=owner_headers)

        response = await client.get(f"{endpoint}/{created.json()['data']['id']}", headers=outsider_headers)

        assert response.status_code == 403
        assert response.json()["error"]["message"] == f"You do not have access to this {label.lower()}"

    async def test_get_unknown(self, client: AsyncClient, owner_headers: Dict[str, str], endpoint, label, economic_group):
        response = await client.get(f"{endpoint}/9999", headers=owner_headers)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == f"{label} with id 9999 not found"

    async def test_delete_is_soft(
        self, client: AsyncClient, owner_headers: Dict[str, str], endpoint, label, third_party_data
    ):
        created = await client.post(endpoint, json=third_party_data, headers=owner_headers)
        item_id = created.json()["data"]["id"]

        response = await client.delete(f"{endpoint}/{item_id}", headers=owner_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": f"{label} deleted successfully"}

        response = await client.get(f"{endpoint}/{item_id}", headers=owner_headers)
        assert response.json()["data"]["active"] is False

        response = await client.delete(f"{endpoint}/{item_id}", headers=owner_headers)
        assert response.status_code == 200
        response = await client.get(f"{endpoint}/{item_id}", headers=owner_headers)
        assert response.json()["data"]["active"] is False

        response = await client.get(endpoint, params={"active": "true"}, headers=owner_headers)
        assert response.json()["data"] == []
