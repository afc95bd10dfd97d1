"""
Tests de integración para los endpoints de grupos económicos
"""
from decimal import Decimal
from typing import Any, Dict

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.models import AccountingConfiguration, ChartOfAccounts, UserGroup, UserRole


@pytest.mark.integration
class TestAuthentication:
    """Resolución del usuario a partir de la cabecera x-user-id"""

    async def test_missing_header_returns_401(self, client: AsyncClient):
        response = await client.get("/api/economic-groups")

        assert response.status_code == 401
        error = response.json()["error"]
        assert error["code"] == "UNAUTHORIZED"
        assert error["message"] == "No authentication provided"

    async def test_unknown_user_returns_401(self, client: AsyncClient, owner):
        response = await client.get("/api/economic-groups", headers={"x-user-id": "9999"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "User not found"

    async def test_non_numeric_user_returns_401(self, client: AsyncClient):
        response = await client.get("/api/economic-groups", headers={"x-user-id": "abc"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "User not found"

    async def test_inactive_user_returns_403(self, client: AsyncClient, inactive_user):
        response = await client.get("/api/economic-groups", headers={"x-user-id": str(inactive_user.id)})

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "User deactivated"

    async def test_user_without_group_returns_403(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.get("/api/economic-groups", headers=owner_headers)

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "User has no economic group assigned"

    async def test_my_groups_allowed_without_membership(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.get("/api/economic-groups/my-groups", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["data"] == []


@pytest.mark.integration
class TestEconomicGroupEndpoints:
    """Tests para alta, consulta, modificación y baja de grupos"""

    async def test_create_group_provisions_defaults(
        self,
        client: AsyncClient,
        owner,
        owner_headers: Dict[str, str],
        db_session: AsyncSession
    ):
        response = await client.post(
            "/api/economic-groups",
            json={"name": "  Holding Sur  ", "mainCountry": "UY", "baseCurrency": "USD"},
            headers=owner_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Economic group created successfully"
        group = body["data"]
        assert group["name"] == "Holding Sur"
        assert group["mainCountry"] == "UY"
        assert group["baseCurrency"] == "USD"
        assert group["active"] is True

        membership = await db_session.scalar(
            select(UserGroup).where(UserGroup.economic_group_id == group["id"])
        )
        assert membership.user_id == owner.id
        assert membership.role == UserRole.ADMIN

        configuration = await db_session.scalar(
            select(AccountingConfiguration).where(AccountingConfiguration.economic_group_id == group["id"])
        )
        assert configuration.allow_entries_in_closed_period is False
        assert configuration.require_global_approval is False
        assert configuration.minimum_approval_amount == Decimal("50000.00")
        assert configuration.allow_unbalanced_entries is False
        assert configuration.amount_decimals == 2
        assert configuration.exchange_rate_decimals == 4

        chart = await db_session.scalar(
            select(ChartOfAccounts).where(ChartOfAccounts.economic_group_id == group["id"])
        )
        assert chart.name == "Chart of Accounts - Holding Sur"
        assert chart.description == "Default chart of accounts"

    async def test_create_group_invalid_currency_for_country(
        self, client: AsyncClient, owner_headers: Dict[str, str]
    ):
        response = await client.post(
            "/api/economic-groups",
            json={"name": "Holding", "mainCountry": "UY", "baseCurrency": "ARS"},
            headers=owner_headers
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "BUSINESS_RULE_VIOLATION"
        assert error["rule"] == "INVALID_CURRENCY_FOR_COUNTRY"
        assert error["message"] == "For UY, functional currency must be one of: UYU, USD"

    async def test_create_group_validation_error(self, client: AsyncClient, owner_headers: Dict[str, str]):
        response = await client.post(
            "/api/economic-groups",
            json={"name": "AB", "mainCountry": "XX", "baseCurrency": "UYU"},
            headers=owner_headers
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["message"] == "Validation error in submitted data"
        assert "name" in error["details"]
        assert "mainCountry" in error["details"]

    async def test_list_groups_only_returns_member_groups(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        outsider_headers: Dict[str, str],
        economic_group: Dict[str, Any],
        company: Dict[str, Any]
    ):
        response = await client.get("/api/economic-groups", headers=owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert [g["id"] for g in body["data"]] == [economic_group["id"]]
        assert body["data"][0]["_count"]["companies"] == 1
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 1, "totalPages": 1}

    async def test_list_groups_search(
        self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
    ):
        response = await client.get(
            "/api/economic-groups", params={"search": "grupo"}, headers=owner_headers
        )
        assert response.json()["pagination"]["total"] == 1

        response = await client.get(
            "/api/economic-groups", params={"search": "nothing"}, headers=owner_headers
        )
        assert response.json()["data"] == []

    async def test_my_groups_includes_role(
        self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
    ):
        response = await client.get("/api/economic-groups/my-groups", headers=owner_headers)

        assert response.status_code == 200
        memberships = response.json()["data"]
        assert len(memberships) == 1
        assert memberships[0]["role"] == "ADMIN"
        assert memberships[0]["economicGroup"]["id"] == economic_group["id"]

    async def test_get_group_not_found(self, client: AsyncClient, owner_headers: Dict[str, str], economic_group):
        response = await client.get("/api/economic-groups/9999", headers=owner_headers)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Economic Group with id 9999 not found"

    async def test_get_group_forbidden_for_outsider(
        self, client: AsyncClient, outsider_headers: Dict[str, str], economic_group: Dict[str, Any]
    ):
        response = await client.get(f"/api/economic-groups/{economic_group['id']}", headers=outsider_headers)

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You do not have access to this economic group"

    async def test_get_group_invalid_id(self, client: AsyncClient, owner_headers: Dict[str, str], economic_group):
        response = await client.get("/api/economic-groups/0", headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_get_group_counts(
        self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
    ):
        await client.post(
            "/api/customers",
            json={"economicGroupId": economic_group["id"], "name": "Cliente Uno"},
            headers=owner_headers
        )

        response = await client.get(f"/api/economic-groups/{economic_group['id']}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["data"]["_count"] == {"companies": 0, "customers": 1, "suppliers": 0}

    async def test_update_group_checks_merged_currency(
        self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
    ):
        # UYU no es válida para Argentina
        response = await client.put(
            f"/api/economic-groups/{economic_group['id']}",
            json={"mainCountry": "AR"},
            headers=owner_headers
        )
        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "INVALID_CURRENCY_FOR_COUNTRY"

        response = await client.put(
            f"/api/economic-groups/{economic_group['id']}",
            json={"mainCountry": "AR", "baseCurrency": "USD", "name": "Grupo Renombrado"},
            headers=owner_headers
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Economic group updated successfully"
        assert body["data"]["mainCountry"] == "AR"
        assert body["data"]["name"] == "Grupo Renombrado"

    async def test_delete_group_with_active_companies(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        economic_group: Dict[str, Any],
        company: Dict[str, Any]
    ):
        response = await client.delete(f"/api/economic-groups/{economic_group['id']}", headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "ACTIVE_COMPANIES"

    async def test_delete_group_soft_deletes(
        self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
    ):
        response = await client.delete(f"/api/economic-groups/{economic_group['id']}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Economic group deleted successfully"}

        response = await client.get(f"/api/economic-groups/{economic_group['id']}", headers=owner_headers)
        assert response.json()["data"]["active"] is False
