"""
Tests de integración para los endpoints de planes de cuentas
"""
from typing import Any, Dict

import pytest
from httpx import AsyncClient


@pytest.mark.integration
class TestChartOfAccountsEndpoints:

    async def test_group_chart_is_provisioned(
        self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
    ):
        response = await client.get(
            f"/api/charts-of-accounts/by-group/{economic_group['id']}", headers=owner_headers
        )

        assert response.status_code == 200
        chart = response.json()["data"]
        assert chart["economicGroupId"] == economic_group["id"]
        assert chart["name"] == "Chart of Accounts - Grupo Test"
        assert chart["_count"] == {"accounts": 0}

    async def test_create_second_chart_conflicts(
        self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
    ):
        response = await client.post(
            "/api/charts-of-accounts",
            json={"economicGroupId": economic_group["id"], "name": "Otro plan"},
            headers=owner_headers
        )

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "CONFLICT"
        assert error["message"] == "Economic Group already has a Chart of Accounts"
        assert error["field"] == "economicGroupId"

    async def test_get_chart_forbidden_for_outsider(
        self, client: AsyncClient, outsider_headers: Dict[str, str], chart: Dict[str, Any]
    ):
        response = await client.get(f"/api/charts-of-accounts/{chart['id']}", headers=outsider_headers)

        assert response.status_code == 403

    async def test_list_charts_counts_accounts(
        self, client: AsyncClient, owner_headers: Dict[str, str], chart: Dict[str, Any], create_account
    ):
        await create_account("5", "Gastos")

        response = await client.get("/api/charts-of-accounts", headers=owner_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["_count"]["accounts"] == 1

    async def test_update_chart(self, client: AsyncClient, owner_headers: Dict[str, str], chart: Dict[str, Any]):
        response = await client.put(
            f"/api/charts-of-accounts/{chart['id']}",
            json={"name": "Plan General", "description": "Plan de cuentas consolidado"},
            headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Plan General"
        assert response.json()["data"]["description"] == "Plan de cuentas consolidado"

    async def test_delete_chart_with_accounts(
        self, client: AsyncClient, owner_headers: Dict[str, str], chart: Dict[str, Any], create_account
    ):
        await create_account("5", "Gastos")

        response = await client.delete(f"/api/charts-of-accounts/{chart['id']}", headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "HAS_ACCOUNTS"

    async def test_delete_empty_chart(self, client: AsyncClient, owner_headers: Dict[str, str], chart: Dict[str, Any]):
        response = await client.delete(f"/api/charts-of-accounts/{chart['id']}", headers=owner_headers)

        assert response.status_code == 200
        response = await client.get(f"/api/charts-of-accounts/{chart['id']}", headers=owner_headers)
        assert response.json()["data"]["active"] is False
