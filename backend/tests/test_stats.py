"""Dashboard counters: service aggregation and the /api/stats route."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from influencer_network.models.invoice import Invoice
from influencer_network.models.payment import Payment
from influencer_network.models.person import Person
from influencer_network.models.project import Project
from influencer_network.models.rate_card import RateCard
from influencer_network.services.stats_service import month_bounds, stats_service

NOW = datetime(2026, 3, 15, 12, 30, tzinfo=timezone.utc)


def project(status: str) -> Project:
    return Project(
        campaign_name=f"Campaign {status}",
        client_id=uuid.uuid4(),
        project_agreed_budget=1000.0,
        start_date=NOW,
        end_date=NOW + timedelta(days=30),
        campaign_type="UGC",
        status=status,
        created_by=uuid.uuid4(),
    )


def payment(number: str, amount: float, status: str, paid_on: datetime) -> Payment:
    return Payment(
        payment_number=number,
        amount=amount,
        payment_method="UPI",
        status=status,
        payment_date=paid_on,
        recorded_by=uuid.uuid4(),
    )


def invoice(number: str, status: str) -> Invoice:
    return Invoice(
        invoice_number=number,
        issue_date=NOW,
        due_date=NOW + timedelta(days=15),
        status=status,
        client_id=uuid.uuid4(),
        client_name="Acme Apparel",
        contact_person="Riya Shah",
        client_email="riya@acmeapparel.in",
        payment_terms="Net 15",
    )


def rate_card(visibility: str) -> RateCard:
    return RateCard(
        rate_card_name=f"{visibility} reel",
        category="Instagram",
        service_type="Reel",
        pricing_type="Per Post",
        applicable_for="Brand",
        base_rate=10000.0,
        final_rate=10000.0,
        inclusions="One reel",
        delivery_time="5 days",
        linked_influencer="Kavya",
        visibility=visibility,
    )


class TestMonthBounds:

    def test_mid_month(self):
        start, end = month_bounds(NOW)
        assert start == datetime(2026, 3, 1, tzinfo=timezone.utc)
        assert end == datetime(2026, 4, 1, tzinfo=timezone.utc)

    def test_december_rolls_year(self):
        start, end = month_bounds(datetime(2026, 12, 31, 23, 59, tzinfo=timezone.utc))
        assert start == datetime(2026, 12, 1, tzinfo=timezone.utc)
        assert end == datetime(2027, 1, 1, tzinfo=timezone.utc)


class TestDashboard:

    @pytest.mark.asyncio
    async def test_empty_database(self, db_session):
        stats = await stats_service.dashboard(db_session, now=NOW)

        assert stats.active_campaigns == 0
        assert stats.monthly_revenue == 0.0
        assert stats.payments_pending == 0.0

    @pytest.mark.asyncio
    async def test_counters(self, db_session):
        db_session.add_all([
            project("active"),
            project("active"),
            project("draft"),
            payment("AC1230001", 1500.0, "Completed", NOW - timedelta(days=3)),
            payment("AC1230002", 999.5, "Completed", datetime(2026, 2, 27, tzinfo=timezone.utc)),
            payment("AC1230003", 400.0, "Pending", NOW),
            payment("AC1230004", 250.0, "Failed", NOW),
            Person(full_name="Kavya Rao"),
            Person(full_name="Dev Mehta", status="Archived"),
            invoice("INV-1", "Draft"),
            invoice("INV-2", "Sent"),
            invoice("INV-3", "Paid"),
            invoice("INV-4", "Cancelled"),
            rate_card("Public"),
            rate_card("Private"),
        ])
        await db_session.flush()

        stats = await stats_service.dashboard(db_session, now=NOW)

        assert stats.active_campaigns == 2
        assert stats.monthly_revenue == 1500.0
        assert stats.payments_received == 2499.5
        assert stats.payments_pending == 400.0
        assert stats.active_clients == 1
        assert stats.invoices_sent == 2
        assert stats.services_listed == 1


class TestDashboardRoute:

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.get("/api/stats/dashboard")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_shape(self, client, staff_headers):
        response = await client.get("/api/stats/dashboard", headers=staff_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Dashboard statistics retrieved successfully"
        assert set(body["data"]["stats"]) == {
            "activeCampaigns",
            "monthlyRevenue",
            "activeClients",
            "invoicesSent",
            "paymentsReceived",
            "paymentsPending",
            "servicesListed",
        }
