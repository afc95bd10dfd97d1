"""
Tests de integración para los endpoints de períodos contables
"""
from datetime import date
from typing import Any, Dict

import pytest
from httpx import AsyncClient

from kontaflow.models import EntryStatus
from kontaflow.repositories.accounting_period import AccountingPeriodRepository


@pytest.mark.integration
class TestAccountingPeriodCreation:

    @pytest.fixture
    def month_period(self, economic_group: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "economicGroupId": economic_group["id"],
            "type": "MONTH",
            "fiscalYear": 2024,
            "month": 3,
            "startDate": "2024-03-01",
            "endDate": "2024-03-31"
        }

    async def test_create_month_period(self, client: AsyncClient, owner_headers: Dict[str, str], month_period):
        response = await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Accounting period created successfully"
        assert body["data"]["closed"] is False
        assert body["data"]["closedAt"] is None
        assert body["data"]["month"] == 3

    async def test_end_date_must_follow_start_date(
        self, client: AsyncClient, owner_headers: Dict[str, str], month_period
    ):
        month_period["endDate"] = "2024-02-15"
        response = await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["rule"] == "INVALID_DATE_RANGE"
        assert error["details"]["endDate"] == ["Start date must be before end date"]

    async def test_month_required_for_month_type(
        self, client: AsyncClient, owner_headers: Dict[str, str], month_period
    ):
        del month_period["month"]
        response = await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["error"]["rule"] == "MISSING_MONTH"
        assert "month" in response.json()["error"]["details"]

    async def test_month_forbidden_for_fiscal_year(
        self, client: AsyncClient, owner_headers: Dict[str, str], month_period
    ):
        month_period.update({"type": "FISCAL_YEAR", "startDate": "2024-01-01", "endDate": "2024-12-31"})
        response = await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["error"]["rule"] == "INVALID_FISCAL_YEAR_MONTH"

    async def test_fiscal_year_out_of_range(
        self, client: AsyncClient, owner_headers: Dict[str, str], month_period
    ):
        month_period["fiscalYear"] = 1999
        response = await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        assert response.status_code == 400
        assert "fiscalYear" in response.json()["error"]["details"]

    async def test_month_out_of_range(self, client: AsyncClient, owner_headers: Dict[str, str], month_period):
        month_period["month"] = 13
        response = await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "month" in error["details"]

    async def test_concurrent_duplicate_fiscal_year_keeps_rule(
        self, client: AsyncClient, owner_headers: Dict[str, str], monkeypatch, economic_group: Dict[str, Any]
    ):
        async def no_duplicate(self, *args, **kwargs):
            return False

        async def no_overlap(self, *args, **kwargs):
            return None

        monkeypatch.setattr(AccountingPeriodRepository, "combination_exists", no_duplicate)
        monkeypatch.setattr(AccountingPeriodRepository, "find_overlapping", no_overlap)
        fiscal_year = {
            "economicGroupId": economic_group["id"],
            "type": "FISCAL_YEAR",
            "fiscalYear": 2024,
            "startDate": "2024-01-01",
            "endDate": "2024-12-31"
        }

        first = await client.post("/api/accounting-periods", json=fiscal_year, headers=owner_headers)
        assert first.status_code == 201
        assert first.json()["data"]["month"] is None

        response = await client.post("/api/accounting-periods", json=fiscal_year, headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "DUPLICATE_PERIOD"

    async def test_duplicate_period(self, client: AsyncClient, owner_headers: Dict[str, str], month_period):
        await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)
        month_period.update({"startDate": "2024-04-01", "endDate": "2024-04-30"})

        response = await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["rule"] == "DUPLICATE_PERIOD"
        assert error["message"] == "An accounting period for 2024-3 already exists in this economic group"

    async def test_overlapping_period(self, client: AsyncClient, owner_headers: Dict[str, str], month_period):
        await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)
        month_period.update({"month": 4, "startDate": "2024-03-15", "endDate": "2024-04-30"})

        response = await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "OVERLAPPING_PERIOD"

    async def test_different_types_may_overlap(
        self, client: AsyncClient, owner_headers: Dict[str, str], month_period, economic_group
    ):
        await client.post("/api/accounting-periods", json=month_period, headers=owner_headers)

        response = await client.post(
            "/api/accounting-periods",
            json={
                "economicGroupId": economic_group["id"],
                "type": "FISCAL_YEAR",
                "fiscalYear": 2024,
                "startDate": "2024-01-01",
                "endDate": "2024-12-31"
            },
            headers=owner_headers
        )

        assert response.status_code == 201

    async def test_create_in_foreign_group_forbidden(
        self, client: AsyncClient, outsider_headers: Dict[str, str], month_period
    ):
        response = await client.post("/api/accounting-periods", json=month_period, headers=outsider_headers)

        assert response.status_code == 403


@pytest.mark.integration
class TestAccountingPeriodClosing:

    @pytest.fixture
    async def period(
        self, client: AsyncClient, owner_headers: Dict[str, str], economic_group: Dict[str, Any]
    ) -> Dict[str, Any]:
        response = await client.post(
            "/api/accounting-periods",
            json={
                "economicGroupId": economic_group["id"],
                "type": "MONTH",
                "fiscalYear": 2024,
                "month": 6,
                "startDate": "2024-06-01",
                "endDate": "2024-06-30"
            },
            headers=owner_headers
        )
        assert response.status_code == 201
        return response.json()["data"]

    async def test_close_and_reopen(
        self, client: AsyncClient, owner, owner_headers: Dict[str, str], period: Dict[str, Any]
    ):
        response = await client.post(f"/api/accounting-periods/{period['id']}/close", headers=owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Accounting period closed successfully"
        assert body["data"]["closed"] is True
        assert body["data"]["closedAt"] is not None
        assert body["data"]["closedBy"] == owner.id

        response = await client.post(f"/api/accounting-periods/{period['id']}/close", headers=owner_headers)
        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "ALREADY_CLOSED"

        response = await client.post(f"/api/accounting-periods/{period['id']}/reopen", headers=owner_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["closed"] is False
        assert data["closedAt"] is None
        assert data["closedBy"] is None

    async def test_reopen_open_period(self, client: AsyncClient, owner_headers: Dict[str, str], period):
        response = await client.post(f"/api/accounting-periods/{period['id']}/reopen", headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "ALREADY_OPEN"

    async def test_close_with_open_entries(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        period: Dict[str, Any],
        company: Dict[str, Any],
        create_journal_entry
    ):
        await create_journal_entry(company, date(2024, 6, 10), EntryStatus.DRAFT)
        await create_journal_entry(company, date(2024, 6, 20), EntryStatus.PENDING_APPROVAL)
        await create_journal_entry(company, date(2024, 6, 25), EntryStatus.CONFIRMED)
        # Fuera del rango del período
        await create_journal_entry(company, date(2024, 7, 1), EntryStatus.DRAFT)

        response = await client.post(f"/api/accounting-periods/{period['id']}/close", headers=owner_headers)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["rule"] == "PERIOD_NOT_CLOSABLE"
        assert error["message"] == (
            "Cannot close period: Period has DRAFT or PENDING_APPROVAL journal entries. "
            "Found 2 problematic entries."
        )

    async def test_close_with_confirmed_entries_only(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        period: Dict[str, Any],
        company: Dict[str, Any],
        create_journal_entry
    ):
        await create_journal_entry(company, date(2024, 6, 25), EntryStatus.CONFIRMED)

        response = await client.post(f"/api/accounting-periods/{period['id']}/close", headers=owner_headers)

        assert response.status_code == 200

    async def test_update_routes_through_close(self, client: AsyncClient, owner_headers: Dict[str, str], period):
        response = await client.put(
            f"/api/accounting-periods/{period['id']}", json={"closed": True}, headers=owner_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["closed"] is True

        response = await client.put(
            f"/api/accounting-periods/{period['id']}", json={"closed": True}, headers=owner_headers
        )
        assert response.json()["error"]["rule"] == "ALREADY_CLOSED"

    async def test_close_forbidden_for_outsider(
        self, client: AsyncClient, outsider_headers: Dict[str, str], period
    ):
        response = await client.post(f"/api/accounting-periods/{period['id']}/close", headers=outsider_headers)

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You do not have access to this accounting period"

    async def test_close_unknown_period(self, client: AsyncClient, owner_headers: Dict[str, str], period):
        response = await client.post("/api/accounting-periods/9999/close", headers=owner_headers)

        assert response.status_code == 404

    async def test_delete_period_with_entries(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        period: Dict[str, Any],
        company: Dict[str, Any],
        create_journal_entry
    ):
        await create_journal_entry(company, date(2024, 6, 25), EntryStatus.CONFIRMED)

        response = await client.delete(f"/api/accounting-periods/{period['id']}", headers=owner_headers)

        assert response.status_code == 422
        assert response.json()["error"]["rule"] == "HAS_JOURNAL_ENTRIES"

    async def test_delete_period_is_hard_delete(self, client: AsyncClient, owner_headers: Dict[str, str], period):
        response = await client.delete(f"/api/accounting-periods/{period['id']}", headers=owner_headers)
        assert response.status_code == 200

        response = await client.get(f"/api/accounting-periods/{period['id']}", headers=owner_headers)
        assert response.status_code == 404

    async def test_list_periods_filters(
        self, client: AsyncClient, owner_headers: Dict[str, str], period: Dict[str, Any], economic_group
    ):
        await client.post(f"/api/accounting-periods/{period['id']}/close", headers=owner_headers)

        response = await client.get(
            "/api/accounting-periods",
            params={"economicGroupId": economic_group["id"], "closed": "true", "fiscalYear": 2024},
            headers=owner_headers
        )

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["data"]] == [period["id"]]

        response = await client.get("/api/accounting-periods", params={"closed": "false"}, headers=owner_headers)
        assert response.json()["data"] == []
