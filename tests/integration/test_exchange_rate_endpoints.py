"""
Tests de integración para los endpoints de tipos de cambio
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict

import pytest
from httpx import AsyncClient


@pytest.mark.integration
class TestExchangeRateEndpoints:

    @pytest.fixture
    def rate_data(self, economic_group: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "economicGroupId": economic_group["id"],
            "date": "2024-05-02",
            "sourceCurrency": "USD",
            "targetCurrency": "UYU",
            "rate": "39.1250",
            "source": "BCU"
        }

    async def test_create_rate(self, client: AsyncClient, owner_headers: Dict[str, str], rate_data):
        response = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Exchange rate created successfully"
        assert Decimal(str(body["data"]["rate"])) == Decimal("39.125")
        assert body["data"]["sourceCurrency"] == "USD"
        assert body["data"]["date"] == "2024-05-02"

    async def test_target_must_be_base_currency(
        self, client: AsyncClient, owner_headers: Dict[str, str], rate_data
    ):
        rate_data.update({"sourceCurrency": "EUR", "targetCurrency": "USD"})
        response = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["rule"] == "INVALID_TARGET_CURRENCY"
        assert error["message"] == "Target currency must be the economic group's base currency (UYU)"

    async def test_same_currencies(self, client: AsyncClient, owner_headers: Dict[str, str], rate_data):
        rate_data["sourceCurrency"] = "UYU"
        response = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "SAME_CURRENCIES"

    async def test_future_date(self, client: AsyncClient, owner_headers: Dict[str, str], rate_data):
        rate_data["date"] = (date.today() + timedelta(days=2)).isoformat()
        response = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "FUTURE_DATE"

    async def test_duplicate_rate(self, client: AsyncClient, owner_headers: Dict[str, str], rate_data):
        await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)
        rate_data["rate"] = "40"

        response = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "DUPLICATE_EXCHANGE_RATE"

    @pytest.mark.parametrize("field,value", [("rate", "0"), ("rate", "-1"), ("sourceCurrency", "usd")])
    async def test_schema_validation(
        self, client: AsyncClient, owner_headers: Dict[str, str], rate_data, field, value
    ):
        rate_data[field] = value
        response = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)

        assert response.status_code == 400
        assert field in response.json()["error"]["details"]

    async def test_list_rates_filters(self, client: AsyncClient, owner_headers: Dict[str, str], rate_data):
        await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)
        rate_data.update({"date": "2024-05-03", "rate": "39.2"})
        await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)
        rate_data.update({"sourceCurrency": "EUR", "rate": "42.5"})
        await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)

        response = await client.get("/api/exchange-rates", headers=owner_headers)
        assert response.status_code == 200
        assert [(r["date"], r["sourceCurrency"]) for r in response.json()["data"]] == [
            ("2024-05-03", "EUR"),
            ("2024-05-03", "USD"),
            ("2024-05-02", "USD"),
        ]

        response = await client.get(
            "/api/exchange-rates",
            params={"sourceCurrency": "USD", "dateFrom": "2024-05-03"},
            headers=owner_headers
        )
        assert [r["date"] for r in response.json()["data"]] == ["2024-05-03"]

    async def test_update_rate(self, client: AsyncClient, owner_headers: Dict[str, str], rate_data):
        created = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)
        rate_id = created.json()["data"]["id"]

        response = await client.put(
            f"/api/exchange-rates/{rate_id}", json={"rate": "39.5", "source": "Manual"}, headers=owner_headers
        )

        assert response.status_code == 200
        assert Decimal(str(response.json()["data"]["rate"])) == Decimal("39.5")
        assert response.json()["data"]["source"] == "Manual"

    async def test_get_forbidden_for_outsider(
        self, client: AsyncClient, owner_headers: Dict[str, str], outsider_headers: Dict[str, str], rate_data
    ):
        created = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)

        response = await client.get(
            f"/api/exchange-rates/{created.json()['data']['id']}", headers=outsider_headers
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You do not have access to this exchange rate"

    async def test_delete_rate_is_hard_delete(self, client: AsyncClient, owner_headers: Dict[str, str], rate_data):
        created = await client.post("/api/exchange-rates", json=rate_data, headers=owner_headers)
        rate_id = created.json()["data"]["id"]

        response = await client.delete(f"/api/exchange-rates/{rate_id}", headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Exchange rate deleted successfully"

        response = await client.get(f"/api/exchange-rates/{rate_id}", headers=owner_headers)
        assert response.status_code == 404
