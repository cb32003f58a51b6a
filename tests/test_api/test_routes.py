"""Tests for API routes using httpx AsyncClient."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from oidexplorer.api.dependencies import get_data_service
from oidexplorer.main import app
from oidexplorer.repositories.fakes import FakeDataService, FakeOidRepository


class TestHealthRoutes:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert "version" in data

    async def test_health_detailed_degraded(
        self, client: AsyncClient
    ) -> None:
        app.dependency_overrides[get_data_service] = (
            lambda: FakeDataService(connected=False)
        )
        resp = await client.get("/health/detailed")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "degraded"
        assert data["components"]["database"]["status"] == "disconnected"


class TestGetOid:
    async def test_full_record(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/1.3.6.1")
        assert resp.status_code == 200
        assert resp.json() == {
            "name": "internet",
            "oid": "1.3.6.1",
            "object_type": "OBJECT IDENTIFIER",
            "descriptions": [
                {
                    "mib": "RFC1155-SMI",
                    "description": "internet OBJECT IDENTIFIER",
                },
                {"mib": "SNMPv2-SMI", "description": "the Internet subtree"},
            ],
            "parent": {"name": "dod", "oid": "1.3.6"},
        }

    async def test_root_parent_is_null(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/1")
        assert resp.status_code == 200
        assert resp.json()["parent"] is None

    async def test_unknown_oid_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/9.9")
        assert resp.status_code == 404
        assert "not found" in resp.json()["error"]


class TestRelation:
    async def test_relation_tree(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/1.3.6/relation")
        assert resp.status_code == 200
        assert resp.json() == {
            "oid": {"name": "iso", "oid": "1"},
            "children": [
                {
                    "oid": {"name": "org", "oid": "1.3"},
                    "children": [
                        {
                            "oid": {"name": "dod", "oid": "1.3.6"},
                            "children": [
                                {
                                    "oid": {
                                        "name": "internet",
                                        "oid": "1.3.6.1",
                                    },
                                    "children": [],
                                }
                            ],
                        }
                    ],
                }
            ],
        }

    async def test_relation_store_failure_is_500(
        self, client: AsyncClient, fake_repo: FakeOidRepository
    ) -> None:
        fake_repo.failing.add("1.3")
        resp = await client.get("/oids/1.3.6/relation")
        assert resp.status_code == 500
        assert resp.json() == {"error": "failed to query database"}

    async def test_get_oid_parent_failure_is_500(
        self, client: AsyncClient, fake_repo: FakeOidRepository
    ) -> None:
        fake_repo.failing_parents.add("1.3.6.1")
        resp = await client.get("/oids/1.3.6.1")
        assert resp.status_code == 500
        assert resp.json() == {"error": "failed to query database"}

    async def test_identical_requests_identical_bodies(
        self, client: AsyncClient
    ) -> None:
        first = await client.get("/oids/1.3.6.1.4/relation")
        second = await client.get("/oids/1.3.6.1.4/relation")
        assert first.content == second.content


class TestSingleLevel:
    async def test_parent(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/1.3.6.1.2/parent")
        assert resp.status_code == 200
        assert resp.json() == {"name": "internet", "oid": "1.3.6.1"}

    async def test_parent_of_root_is_404(
        self, client: AsyncClient
    ) -> None:
        resp = await client.get("/oids/2/parent")
        assert resp.status_code == 404

    async def test_children_ordered(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/1.3.6.1/children")
        assert resp.status_code == 200
        assert [c["oid"] for c in resp.json()] == [
            "1.3.6.1.2",
            "1.3.6.1.3",
            "1.3.6.1.4",
            "1.3.6.1.10",
        ]

    async def test_no_children_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/2/children")
        assert resp.status_code == 404
        assert resp.json() == {"error": "no result"}

    async def test_siblings(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/1.3.6.1.10/siblings")
        assert resp.status_code == 200
        assert [s["oid"] for s in resp.json()] == [
            "1.3.6.1.2",
            "1.3.6.1.3",
            "1.3.6.1.4",
        ]

    async def test_no_siblings_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/oids/1.3/siblings")
        assert resp.status_code == 404


class TestSearch:
    async def test_search_all(self, client: AsyncClient) -> None:
        resp = await client.get("/oids")
        assert resp.status_code == 200
        assert len(resp.json()) == 9

    async def test_search_by_name_with_limit(
        self, client: AsyncClient
    ) -> None:
        resp = await client.get(
            "/oids", params={"keyword": "t", "type": "name", "limit": "2"}
        )
        assert resp.status_code == 200
        assert [o["name"] for o in resp.json()] == ["tenth", "internet"]

    async def test_search_results_are_bare(
        self, client: AsyncClient
    ) -> None:
        resp = await client.get("/oids", params={"keyword": "internet"})
        assert resp.json() == [{"name": "internet", "oid": "1.3.6.1"}]

    async def test_search_no_match_is_404(
        self, client: AsyncClient
    ) -> None:
        resp = await client.get("/oids", params={"keyword": "zzz"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "no result"}

    @pytest.mark.parametrize(
        "params",
        [
            {"limit": "abc"},
            {"limit": "-1"},
            {"keyword": "1.3", "type": "bogus"},
        ],
    )
    async def test_malformed_search_is_400(
        self,
        client: AsyncClient,
        fake_repo: FakeOidRepository,
        params: dict[str, str],
    ) -> None:
        resp = await client.get("/oids", params=params)
        assert resp.status_code == 400
        assert set(resp.json()) == {"error"}
        assert fake_repo.calls == []
