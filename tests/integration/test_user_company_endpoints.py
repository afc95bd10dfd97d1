"""
Tests de integración para permisos de usuarios sobre empresas
"""
from typing import Any, Dict

import pytest
from httpx import AsyncClient


@pytest.mark.integration
class TestUserCompanyEndpoints:

    @pytest.fixture
    async def grant(self, client: AsyncClient, owner_headers: Dict[str, str], outsider, company: Dict[str, Any]):
        async def _grant(can_write: bool = False):
            return await client.post(
                "/api/user-companies",
                json={"userId": outsider.id, "companyId": company["id"], "canWrite": can_write},
                headers=owner_headers
            )
        return _grant

    async def test_grant_access(self, grant, outsider, company: Dict[str, Any]):
        response = await grant(can_write=True)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Company access granted successfully"
        assert body["data"]["canWrite"] is True
        assert body["data"]["user"]["email"] == outsider.email
        assert body["data"]["company"]["rut"] == company["rut"]

    async def test_grant_twice_conflicts(self, grant):
        await grant()

        response = await grant()

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["field"] == "userId_companyId"
        assert error["message"] == "User already has access to this company. Use update to modify permissions."

    async def test_grant_unknown_user(self, client: AsyncClient, owner_headers: Dict[str, str], company):
        response = await client.post(
            "/api/user-companies",
            json={"userId": 9999, "companyId": company["id"]},
            headers=owner_headers
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User with id 9999 not found"

    async def test_grant_on_foreign_company(
        self, client: AsyncClient, outsider_headers: Dict[str, str], owner, company: Dict[str, Any]
    ):
        response = await client.post(
            "/api/user-companies",
            json={"userId": owner.id, "companyId": company["id"]},
            headers=outsider_headers
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You do not have access to this company"

    async def test_update_and_revoke(
        self, client: AsyncClient, owner_headers: Dict[str, str], grant, outsider, company: Dict[str, Any]
    ):
        await grant()
        path = f"/api/user-companies/{outsider.id}/{company['id']}"

        response = await client.put(path, json={"canWrite": True}, headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Company access updated successfully"
        assert response.json()["data"]["canWrite"] is True

        response = await client.delete(path, headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Company access revoked successfully"

        response = await client.get(path, headers=owner_headers)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User-Company permission not found"

    async def test_list_by_company_and_user(
        self, client: AsyncClient, owner_headers: Dict[str, str], grant, outsider, company: Dict[str, Any]
    ):
        await grant()

        response = await client.get(f"/api/user-companies/by-company/{company['id']}", headers=owner_headers)
        assert response.status_code == 200
        assert [p["userId"] for p in response.json()["data"]] == [outsider.id]

        response = await client.get(f"/api/user-companies/by-user/{outsider.id}", headers=owner_headers)
        assert [p["companyId"] for p in response.json()["data"]] == [company["id"]]

        response = await client.get("/api/user-companies/by-user/9999", headers=owner_headers)
        assert response.status_code == 404

    async def test_list_scoped_to_caller_groups(
        self,
        client: AsyncClient,
        owner_headers: Dict[str, str],
        outsider_headers: Dict[str, str],
        grant
    ):
        await grant(can_write=True)

        response = await client.get("/api/user-companies", params={"canWrite": "true"}, headers=owner_headers)
        assert response.json()["pagination"]["total"] == 1

        response = await client.get("/api/user-companies", headers=outsider_headers)
        assert response.json()["data"] == []
