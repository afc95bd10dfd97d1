"""
Tests de integración para el catálogo de monedas
"""
from typing import Any, Dict

import pytest
from httpx import AsyncClient


@pytest.mark.integration
class TestCurrencyEndpoints:

    @pytest.fixture(autouse=True)
    async def catalog(self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]):
        for code, name, symbol in (("UYU", "Peso uruguayo", "$"), ("USD", "Dólar estadounidense", "US$")):
            response = await client.post(
                "/api/currencies",
                json={"code": code, "name": name, "symbol": symbol},
                headers=owner_headers
            )
            assert response.status_code == 201

    async def test_create_currency(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.post(
            "/api/currencies",
            json={"code": "EUR", "name": "Euro", "symbol": "€", "decimals": 2, "isDefaultFunctional": True},
            headers=owner_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Currency created successfully"
        assert body["data"]["code"] == "EUR"
        assert body["data"]["isDefaultFunctional"] is True
        assert body["data"]["active"] is True

    async def test_lowercase_code_rejected(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.post(
            "/api/currencies", json={"code": "eur", "name": "Euro"}, headers=owner_headers
        )

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "INVALID_CURRENCY_CODE"

    async def test_duplicate_code_conflicts(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.post(
            "/api/currencies", json={"code": "USD", "name": "Dólar"}, headers=owner_headers
        )

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["message"] == "Currency with code USD already exists"
        assert error["field"] == "code"

    async def test_only_one_default_functional(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.put(
            "/api/currencies/UYU", json={"isDefaultFunctional": True}, headers=owner_headers
        )
        assert response.status_code == 200

        # Reenviar el mismo valor no es un segundo default
        response = await client.put(
            "/api/currencies/UYU", json={"isDefaultFunctional": True}, headers=owner_headers
        )
        assert response.status_code == 200

        response = await client.put(
            "/api/currencies/USD", json={"isDefaultFunctional": True}, headers=owner_headers
        )
        assert response.status_code == 422
        error = response.json()["error"]
        assert error["rule"] == "MULTIPLE_DEFAULT_FUNCTIONAL"
        assert error["message"].startswith("Currency UYU is already set as default functional currency.")

    async def test_deactivate_currency_in_use(self, client: AsyncClient, owner_headers: Dict[str, str]):
        # El grupo del fixture usa UYU como moneda base
        response = await client.put("/api/currencies/UYU", json={"active": False}, headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "CURRENCY_IN_USE"

        response = await client.put("/api/currencies/USD", json={"active": False}, headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["data"]["active"] is False

    async def test_delete_default_functional(self, client: AsyncClient, owner_headers: Dict[str, str]):
        await client.put("/api/currencies/USD", json={"isDefaultFunctional": True}, headers=owner_headers)

        response = await client.delete("/api/currencies/USD", headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "DELETE_DEFAULT_FUNCTIONAL"

    async def test_delete_currency_in_use(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.delete("/api/currencies/UYU", headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "CURRENCY_IN_USE"

    async def test_delete_unused_currency(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.delete("/api/currencies/USD", headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Currency deleted successfully"

        response = await client.get("/api/currencies/USD", headers=owner_headers)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Currency with id USD not found"

    async def test_list_and_active(self, client: AsyncClient, owner_headers: Dict[str, str]):
        await client.put("/api/currencies/USD", json={"active": False}, headers=owner_headers)

        response = await client.get("/api/currencies", headers=owner_headers)
        body = response.json()
        assert [c["code"] for c in body["data"]] == ["USD", "UYU"]
        assert body["pagination"]["limit"] == 50

        response = await client.get("/api/currencies", params={"search": "peso"}, headers=owner_headers)
        assert [c["code"] for c in response.json()["data"]] == ["UYU"]

        response = await client.get("/api/currencies/active", headers=owner_headers)
        assert [c["code"] for c in response.json()["data"]] == ["UYU"]
