"""Tests for the read-only dashboard API."""

import uuid

import pytest


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client):
        r = await client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}


class TestDashboard:
    """Tests for the dashboard overview endpoints."""

    @pytest.mark.asyncio
    async def test_revenue_in_calendar_order(self, client):
        r = await client.get("/dashboard/revenue")
        assert r.status_code == 200
        body = r.json()
        assert [row["month"] for row in body][:3] == ["Jan", "Feb", "Mar"]
        assert body[0] == {"month": "Jan", "revenue": 2000}
        assert len(body) == 12

    @pytest.mark.asyncio
    async def test_latest_invoices(self, client):
        r = await client.get("/dashboard/latest-invoices")
        assert r.status_code == 200
        body = r.json()
        assert len(body) == 5
        assert body[0]["name"] == "Delba de Oliveira"
        assert body[0]["amount"] == "$89.45"
        assert body[1]["name"] == "Steven Tey"
        assert body[1]["image_url"] == "/customers/steven-tey.png"

    @pytest.mark.asyncio
    async def test_card_totals(self, client):
        r = await client.get("/dashboard/cards")
        assert r.status_code == 200
        assert r.json() == {
            "number_of_invoices": 15,
            "number_of_customers": 10,
            "total_paid_invoices": "$1,421.16",
            "total_pending_invoices": "$1,256.32",
        }

    @pytest.mark.asyncio
    async def test_reads_are_repeatable(self, client):
        first = (await client.get("/dashboard/cards")).json()
        second = (await client.get("/dashboard/cards")).json()
        assert first == second


class TestInvoices:
    """Tests for invoice search, paging and lookup."""

    @pytest.mark.asyncio
    async def test_first_page(self, client):
        r = await client.get("/invoices/")
        assert r.status_code == 200
        body = r.json()
        assert len(body["items"]) == 6
        assert body["page"] == 1
        assert body["total_pages"] == 3
        dates = [item["date"] for item in body["items"]]
        assert dates == sorted(dates, reverse=True)

    @pytest.mark.asyncio
    async def test_last_page(self, client):
        body = (await client.get("/invoices/", params={"page": 3})).json()
        assert len(body["items"]) == 3

    @pytest.mark.asyncio
    async def test_search_by_status(self, client):
        r = await client.get("/invoices/pages", params={"query": "paid"})
        assert r.json() == {"total_pages": 2}

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, client):
        body = (await client.get("/invoices/", params={"query": "DELBA"})).json()
        assert len(body["items"]) == 2
        assert {item["name"] for item in body["items"]} == {"Delba de Oliveira"}

    @pytest.mark.asyncio
    async def test_search_by_date(self, client):
        body = (await client.get("/invoices/", params={"query": "2023-10"})).json()
        assert [item["amount"] for item in body["items"]] == [8945]

    @pytest.mark.asyncio
    async def test_page_must_be_positive(self, client):
        r = await client.get("/invoices/", params={"page": 0})
        assert r.status_code == 422

    @pytest.mark.asyncio
    async def test_get_invoice(self, client):
        latest = (await client.get("/dashboard/latest-invoices")).json()
        r = await client.get(f"/invoices/{latest[0]['id']}")
        assert r.status_code == 200
        body = r.json()
        assert body["amount"] == 89.45
        assert body["status"] == "paid"
        assert body["customer_id"] == "3958dc9e-712f-4377-85e9-fec4b6a6442a"

    @pytest.mark.asyncio
    async def test_get_invoice_not_found(self, client):
        r = await client.get(f"/invoices/{uuid.uuid4()}")
        assert r.status_code == 404

    @pytest.mark.asyncio
    async def test_get_invoice_bad_id(self, client):
        r = await client.get("/invoices/not-a-uuid")
        assert r.status_code == 422


class TestCustomers:
    """Tests for customer listings."""

    @pytest.mark.asyncio
    async def test_list_ordered_by_name(self, client):
        body = (await client.get("/customers/")).json()
        names = [c["name"] for c in body]
        assert len(names) == 10
        assert names == sorted(names)
        assert names[0] == "Amy Burns"

    @pytest.mark.asyncio
    async def test_filtered_totals(self, client):
        body = (await client.get("/customers/filtered", params={"query": "evil"})).json()
        assert body["total"] == 1
        assert body["items"][0] == {
            "id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
            "name": "Evil Rabbit",
            "email": "evil@rabbit.com",
            "image_url": "/customers/evil-rabbit.png",
            "total_invoices": 1,
            "total_pending": "$6.66",
            "total_paid": "$0.00",
        }

    @pytest.mark.asyncio
    async def test_customer_without_invoices(self, client):
        body = (await client.get("/customers/filtered", params={"query": "burns.com"})).json()
        assert body["items"][0]["total_invoices"] == 0
        assert body["items"][0]["total_paid"] == "$0.00"


class TestAuth:
    """Tests for credential checks against the seeded user."""

    @pytest.mark.asyncio
    async def test_login(self, client):
        r = await client.post(
            "/auth/login", json={"email": "user@nextmail.com", "password": "123456"}
        )
        assert r.status_code == 200
        assert r.json() == {
            "id": "410544b2-4001-4271-9855-fec4b6a6442a",
            "name": "User",
            "email": "user@nextmail.com",
        }

    @pytest.mark.asyncio
    async def test_wrong_password(self, client):
        r = await client.post(
            "/auth/login", json={"email": "user@nextmail.com", "password": "654321"}
        )
        assert r.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email(self, client):
        r = await client.post(
            "/auth/login", json={"email": "nobody@nextmail.com", "password": "123456"}
        )
        assert r.status_code == 401
