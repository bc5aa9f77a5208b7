"""
Influencer Network Backend: Resource Route Tests
=================================================

What:  HTTP-level tests for the staff-facing resource routers: clients,
       leads, people, rate cards, invoices, payments, payment terms,
       projects and uploads.
How:   Each test authenticates as a manager via `staff_headers` and talks to
       the app through HTTPX; payloads use the camelCase wire format.
"""

import uuid
from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from starlette.datastructures import UploadFile

from influencer_network.database import utcnow


def iso(delta: timedelta = timedelta()) -> str:
    return (utcnow() + delta).isoformat()


async def create(client, headers, path, body):
    response = await client.post(path, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ══════════════════════════════════════════════════════════════════════════
# Clients
# ══════════════════════════════════════════════════════════════════════════


class TestClientRoutes:

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.get("/api/clients")
        assert response.status_code == 401
        assert response.json()["error"] == "authentication_error"

    @pytest.mark.asyncio
    async def test_crud(self, client, staff_headers, staff_user):
        data = await create(client, staff_headers, "/api/clients", {
            "businessName": "Acme Apparel",
            "category": "Fashion",
            "isGstRegistered": True,
            "gstNumber": "27AAEPM1234C1ZQ",
            "businessAddress": {"line1": "12 MG Road", "city": "Pune", "state": "Maharashtra"},
            "website": "https://acme.example",
        })
        created = data["client"]
        assert created["createdBy"] == str(staff_user.id)
        assert created["businessAddress"]["city"] == "Pune"

        response = await client.get("/api/clients", params={"search": "pune"}, headers=staff_headers)
        assert response.json()["pagination"]["totalCount"] == 1

        response = await client.patch(
            f"/api/clients/{created['id']}", json={"notes": "Prefers reels"}, headers=staff_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["client"]["notes"] == "Prefers reels"
        assert response.json()["data"]["client"]["businessName"] == "Acme Apparel"

        response = await client.delete(f"/api/clients/{created['id']}", headers=staff_headers)
        assert response.status_code == 200
        response = await client.get(f"/api/clients/{created['id']}", headers=staff_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_website(self, client, staff_headers):
        response = await client.post(
            "/api/clients", json={"businessName": "Acme", "website": "acme.example"}, headers=staff_headers
        )
        assert response.status_code == 400
        assert response.json()["details"]["errors"][0]["field"] == "website"


# ══════════════════════════════════════════════════════════════════════════
# Leads & people
# ══════════════════════════════════════════════════════════════════════════


class TestLeadRoutes:

    def lead_body(self, **overrides):
        body = {
            "businessName": "Nimbus Tech",
            "contactPerson": "Arjun Kapoor",
            "email": "arjun@nimbustech.io",
            "leadType": "Tech",
            "leadSource": "Inbound",
            "budgetRange": "₹25,000 – ₹50,000",
            "nextFollowUp": iso(timedelta(days=3)),
            "assignedTo": "Ritika (Manager)",
        }
        body.update(overrides)
        return body

    @pytest.mark.asyncio
    async def test_create_and_move_through_pipeline(self, client, staff_headers):
        lead = (await create(client, staff_headers, "/api/leads", self.lead_body()))["lead"]
        assert lead["status"] == "New"
        assert lead["daysUntilFollowUp"] == 3

        response = await client.post(
            f"/api/leads/{lead['id']}/status", json={"status": "Proposal Sent"}, headers=staff_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["lead"]["status"] == "Proposal Sent"

        response = await client.post(
            f"/api/leads/{lead['id']}/status", json={"status": "Ghosted"}, headers=staff_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_past_follow_up_rejected(self, client, staff_headers):
        response = await client.post(
            "/api/leads", json=self.lead_body(nextFollowUp=iso(-timedelta(days=1))), headers=staff_headers
        )
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "nextFollowUp"

    @pytest.mark.asyncio
    async def test_follow_ups_and_stats(self, client, staff_headers):
        await create(client, staff_headers, "/api/leads", self.lead_body(conversionProbability=60))
        await create(client, staff_headers, "/api/leads", self.lead_body(nextFollowUp=iso(timedelta(days=30))))

        response = await client.get("/api/leads/follow-ups", params={"days": 7}, headers=staff_headers)
        assert response.status_code == 200
        assert len(response.json()["data"]) == 1

        response = await client.get("/api/leads/stats", headers=staff_headers)
        assert response.json()["data"]["stats"] == [{"status": "New", "count": 2, "avgProbability": 60.0}]

    @pytest.mark.asyncio
    async def test_filter_by_status(self, client, staff_headers):
        await create(client, staff_headers, "/api/leads", self.lead_body())
        await create(client, staff_headers, "/api/leads", self.lead_body(status="Won"))

        response = await client.get("/api/leads", params={"status": "Won"}, headers=staff_headers)
        assert response.headers["X-Total-Count"] == "1"

    @pytest.mark.asyncio
    async def test_dashboard_form_payload(self, client, staff_headers):
        lead = (await create(client, staff_headers, "/api/leads", self.lead_body(
            contactNumber="+91 98765-43210",
            website="nimbustech.io",
            lastContacted=iso(-timedelta(days=2)),
            attachments="https://cdn.nimbustech.io/brief.pdf",
            hasReminders=True,
            conversionProbability=35,
        )))["lead"]

        assert lead["businessName"] == "Nimbus Tech"
        assert lead["contactNumber"] == "+91 98765-43210"
        assert lead["website"] == "nimbustech.io"
        assert lead["assignedTo"] == "Ritika (Manager)"
        assert lead["attachments"] == "https://cdn.nimbustech.io/brief.pdf"
        assert lead["hasReminders"] is True
        assert lead["lastContacted"] is not None

    @pytest.mark.asyncio
    async def test_last_contacted_defaults_to_now(self, client, staff_headers):
        lead = (await create(client, staff_headers, "/api/leads", self.lead_body()))["lead"]
        assert lead["lastContacted"] is not None
        assert lead["hasReminders"] is False

    @pytest.mark.asyncio
    async def test_search_covers_website_and_filters_owner(self, client, staff_headers):
        await create(client, staff_headers, "/api/leads", self.lead_body(website="https://glowcosmetics.in"))
        await create(client, staff_headers, "/api/leads", self.lead_body(assignedTo="Arav (Sales)"))

        response = await client.get("/api/leads", params={"search": "glowcosmetics"}, headers=staff_headers)
        assert response.headers["X-Total-Count"] == "1"

        response = await client.get("/api/leads", params={"assignedTo": "Arav (Sales)"}, headers=staff_headers)
        assert [row["assignedTo"] for row in response.json()["data"]] == ["Arav (Sales)"]

    @pytest.mark.asyncio
    async def test_invalid_contact_number(self, client, staff_headers):
        response = await client.post(
            "/api/leads", json=self.lead_body(contactNumber="call me"), headers=staff_headers
        )
        assert response.status_code == 400
        assert response.json()["details"]["errors"][0]["field"] == "contactNumber"


class TestPeopleRoutes:

    @pytest.mark.asyncio
    async def test_create_and_filter_by_tags(self, client, staff_headers, staff_user):
        person = (await create(client, staff_headers, "/api/people", {
            "fullName": "Kabir Rao",
            "email": "Kabir@Example.com",
            "roles": ["Creator"],
            "tags": [" Fashion ", "TRAVEL"],
            "platformMetrics": {"instagram": {"followers": 120000, "engagement": 4.2}},
        }))["person"]
        await create(client, staff_headers, "/api/people", {"fullName": "Meera Iyer", "tags": ["tech"]})

        assert person["email"] == "kabir@example.com"
        assert person["tags"] == ["fashion", "travel"]
        assert person["assignedTo"] == str(staff_user.id)

        response = await client.get("/api/people", params={"tags": "travel,food"}, headers=staff_headers)
        assert [p["fullName"] for p in response.json()["data"]] == ["Kabir Rao"]

    @pytest.mark.asyncio
    async def test_engagement_bounds(self, client, staff_headers):
        response = await client.post(
            "/api/people",
            json={"fullName": "Too Engaged", "platformMetrics": {"instagram": {"engagement": 140}}},
            headers=staff_headers,
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_portfolio_files(self, client, staff_headers):
        showreel = {
            "id": "pf-1",
            "fileName": "showreel.mp4",
            "fileUrl": "https://cdn.example.com/kabir/showreel.mp4",
            "fileType": "video",
            "fileSize": 52428800,
            "uploadedAt": "2026-09-01T10:00:00Z",
            "tags": [" travel ", "reel"],
            "description": "Goa tourism campaign",
        }
        person = (await create(client, staff_headers, "/api/people", {
            "fullName": "Kabir Rao",
            "portfolioFiles": [showreel],
        }))["person"]

        stored = person["portfolioFiles"][0]
        assert stored["id"] == "pf-1"
        assert stored["fileType"] == "video"
        assert stored["fileSize"] == 52428800
        assert stored["tags"] == ["travel", "reel"]
        assert stored["uploadedAt"].startswith("2026-09-01T10:00:00")

        media_kit = {
            "fileName": "media-kit.pdf",
            "fileUrl": "2026/10/19/media-kit.pdf",
            "fileType": "document",
            "fileSize": 2048,
        }
        response = await client.patch(
            f"/api/people/{person['id']}",
            json={"portfolioFiles": [showreel, media_kit]},
            headers=staff_headers,
        )
        assert response.status_code == 200
        files = response.json()["data"]["person"]["portfolioFiles"]
        assert [f["fileName"] for f in files] == ["showreel.mp4", "media-kit.pdf"]
        assert files[1]["id"]
        assert files[1]["uploadedAt"]

    @pytest.mark.asyncio
    async def test_portfolio_file_type_is_checked(self, client, staff_headers):
        response = await client.post(
            "/api/people",
            json={
                "fullName": "Meera Iyer",
                "portfolioFiles": [{"fileName": "a.gif", "fileUrl": "a.gif", "fileType": "gif", "fileSize": 1}],
            },
            headers=staff_headers,
        )
        assert response.status_code == 400


# ══════════════════════════════════════════════════════════════════════════
# Rate cards
# ══════════════════════════════════════════════════════════════════════════


class TestRateCardRoutes:

    @pytest.mark.asyncio
    async def test_final_rate_is_server_side(self, client, staff_headers):
        card = (await create(client, staff_headers, "/api/rate-cards", {
            "rateCardName": "YouTube integration",
            "category": "YouTube",
            "serviceType": "Integration",
            "pricingType": "Per Post",
            "applicableFor": "All",
            "baseRate": 80000,
            "discountPercentage": 12.5,
            "finalRate": 1,
            "inclusions": "60-90s integration, pinned comment",
            "deliveryTime": "14 days",
            "linkedInfluencer": "Meera Iyer",
        }))["rateCard"]
        assert card["finalRate"] == 70000.0

        response = await client.post(f"/api/rate-cards/{card['id']}/toggle-visibility", headers=staff_headers)
        assert response.status_code == 200
        assert response.json()["data"]["rateCard"]["visibility"] == "Public"


# ══════════════════════════════════════════════════════════════════════════
# Invoices & payments
# ══════════════════════════════════════════════════════════════════════════


def invoice_body(**overrides):
    body = {
        "invoiceNumber": "INV-2026-100",
        "issueDate": iso(),
        "dueDate": iso(timedelta(days=15)),
        "clientId": str(uuid.uuid4()),
        "clientName": "Acme Apparel",
        "contactPerson": "Riya Shah",
        "clientEmail": "riya@acmeapparel.in",
        "lineItems": [
            {"description": "Reel", "quantity": 2, "unitPrice": 1000, "taxPercentage": 18},
            {"description": "Story", "quantity": 1, "unitPrice": 500},
        ],
        "discountType": "percentage",
        "discountValue": 10,
        "paymentTerms": "Net 15",
    }
    body.update(overrides)
    return body


class TestInvoiceRoutes:

    @pytest.mark.asyncio
    async def test_create_send_and_pay(self, client, staff_headers):
        invoice = (await create(client, staff_headers, "/api/invoices", invoice_body()))["invoice"]
        assert invoice["subtotal"] == 2500.0
        assert invoice["totalAmount"] == 2610.0
        assert invoice["lineItems"][0]["totalWithTax"] == 2360.0

        response = await client.post(f"/api/invoices/{invoice['id']}/send", headers=staff_headers)
        assert response.json()["data"]["invoice"]["status"] == "Sent"

        response = await client.post(
            f"/api/invoices/{invoice['id']}/payments",
            json={
                "amount": 2610,
                "paymentMethod": "Bank Transfer",
                "transactionReference": "UTR123456",
                "receiptAttachment": "2026/10/19/receipt.pdf",
            },
            headers=staff_headers,
        )
        assert response.status_code == 200
        paid = response.json()["data"]["invoice"]
        assert paid["status"] == "Paid"
        assert paid["balanceDue"] == 0.0
        payment = paid["payments"][0]
        assert payment["transactionReference"] == "UTR123456"
        assert payment["receiptAttachment"] == "2026/10/19/receipt.pdf"
        assert payment["invoiceId"] == invoice["id"]
        assert [a["type"] for a in paid["activities"]] == ["created", "sent", "payment_recorded"]

    @pytest.mark.asyncio
    async def test_duplicate_number(self, client, staff_headers):
        await create(client, staff_headers, "/api/invoices", invoice_body())
        response = await client.post("/api/invoices", json=invoice_body(), headers=staff_headers)

        assert response.status_code == 409
        assert response.json()["message"] == "Invoice number already exists"

    @pytest.mark.asyncio
    async def test_overpayment_rejected(self, client, staff_headers):
        invoice = (await create(client, staff_headers, "/api/invoices", invoice_body()))["invoice"]
        response = await client.post(
            f"/api/invoices/{invoice['id']}/payments",
            json={"amount": 9999, "paymentMethod": "UPI"},
            headers=staff_headers,
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_line_items(self, client, staff_headers):
        response = await client.post("/api/invoices", json=invoice_body(lineItems=[]), headers=staff_headers)
        assert response.status_code == 400


class TestPaymentRoutes:

    @pytest.mark.asyncio
    async def test_generated_number_and_stats(self, client, staff_headers):
        payment = (await create(client, staff_headers, "/api/payments", {
            "amount": 1500,
            "paymentMethod": "UPI",
            "status": "Completed",
            "invoiceIds": ["inv-1", "inv-2"],
            "allocations": [
                {"invoiceId": "inv-1", "allocatedAmount": 1000},
                {"invoiceId": "inv-2", "allocatedAmount": 500},
            ],
        }))["payment"]
        assert payment["paymentNumber"].startswith("PAY-")
        assert payment["paymentNumber"].endswith("-0001")
        assert payment["totalAllocated"] == 1500.0
        assert payment["unallocatedAmount"] == 0.0

        response = await client.get("/api/payments", params={"invoiceId": "inv-2"}, headers=staff_headers)
        assert response.json()["pagination"]["totalCount"] == 1

        response = await client.get("/api/payments/stats", headers=staff_headers)
        stats = response.json()["data"]["stats"]
        assert stats["byStatus"] == [{"status": "Completed", "count": 1, "totalAmount": 1500.0}]

    @pytest.mark.asyncio
    async def test_malformed_payment_number(self, client, staff_headers):
        response = await client.post(
            "/api/payments",
            json={"amount": 10, "paymentMethod": "Cash", "paymentNumber": "PAY-1"},
            headers=staff_headers,
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_allocation_mismatch(self, client, staff_headers):
        response = await client.post(
            "/api/payments",
            json={
                "amount": 1000,
                "paymentMethod": "Cash",
                "allocations": [{"invoiceId": "inv-1", "allocatedAmount": 10}],
            },
            headers=staff_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Total allocated amount must equal payment amount"


# ══════════════════════════════════════════════════════════════════════════
# Payment terms & projects
# ══════════════════════════════════════════════════════════════════════════


class TestPaymentTermsRoutes:

    @pytest.mark.asyncio
    async def test_active_seeds_standard_terms(self, client, staff_headers, staff_user):
        response = await client.get("/api/payment-terms/active", headers=staff_headers)

        assert response.status_code == 200
        [template] = response.json()["data"]
        assert template["name"] == "Standard Payment Terms"
        assert template["isDefault"] is True
        assert template["createdBy"] == str(staff_user.id)

        response = await client.post("/api/payment-terms/init-defaults", headers=staff_headers)
        assert [t["id"] for t in response.json()["data"]] == [template["id"]]

    @pytest.mark.asyncio
    async def test_rejects_bad_percentages(self, client, staff_headers):
        response = await client.post(
            "/api/payment-terms",
            json={"name": "Broken", "milestones": [{"description": "Only half", "percentage": 50}]},
            headers=staff_headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Milestone percentages must total 100%"


class TestProjectRoutes:

    def project_body(self, client_id, **overrides):
        body = {
            "campaignName": "Monsoon Sale",
            "clientId": client_id,
            "projectAgreedBudget": 120000,
            "startDate": iso(),
            "endDate": iso(timedelta(days=30)),
            "campaignType": "UGC",
            "targetPlatform": ["Instagram"],
            "status": "active",
        }
        body.update(overrides)
        return body

    @pytest.mark.asyncio
    async def test_default_terms_and_milestone_update(self, client, staff_headers):
        await client.get("/api/payment-terms/active", headers=staff_headers)
        acme = (await create(client, staff_headers, "/api/clients", {"businessName": "Acme"}))["client"]

        project = (await create(client, staff_headers, "/api/projects", self.project_body(acme["id"])))["project"]
        assert project["client"]["businessName"] == "Acme"
        assert project["paymentTermsTemplate"]["name"] == "Standard Payment Terms"
        assert [m["id"] for m in project["milestones"]] == ["milestone-1", "milestone-2"]
        assert project["creator"]["email"] == "manager@example.com"

        response = await client.patch(
            f"/api/projects/{project['id']}/milestones/milestone-1",
            json={"status": "completed"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        milestone = response.json()["data"]["project"]["milestones"][0]
        assert milestone["status"] == "completed"
        assert milestone["completedAt"] is not None

        response = await client.patch(
            f"/api/projects/{project['id']}/milestones/milestone-9",
            json={"status": "completed"},
            headers=staff_headers,
        )
        assert response.status_code == 404

        response = await client.get(f"/api/projects/client/{acme['id']}", headers=staff_headers)
        assert [p["id"] for p in response.json()["data"]["projects"]] == [project["id"]]

    @pytest.mark.asyncio
    async def test_put_updates_and_validates(self, client, staff_headers):
        milestones = [{"milestoneName": "Full", "payment": {"type": "percentage", "value": 100}, "collectIn": 0}]
        project = (await create(
            client, staff_headers, "/api/projects",
            self.project_body(str(uuid.uuid4()), paymentTerms="customised", milestones=milestones),
        ))["project"]

        response = await client.put(
            f"/api/projects/{project['id']}", json={"campaignName": "Monsoon Mega Sale"}, headers=staff_headers
        )
        assert response.json()["data"]["project"]["campaignName"] == "Monsoon Mega Sale"

        response = await client.put(
            f"/api/projects/{project['id']}", json={"endDate": iso(-timedelta(days=5))}, headers=staff_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_list_sorting_and_stats(self, client, staff_headers):
        milestones = [{"milestoneName": "Full", "payment": {"type": "amount", "value": 5000}, "collectIn": 10}]
        for name, budget in (("Alpha", 300), ("Beta", 100)):
            await create(client, staff_headers, "/api/projects", self.project_body(
                str(uuid.uuid4()), campaignName=name, projectAgreedBudget=budget,
                paymentTerms="customised", milestones=milestones,
            ))

        response = await client.get(
            "/api/projects", params={"sortBy": "projectAgreedBudget", "sortOrder": "asc"}, headers=staff_headers
        )
        assert [p["campaignName"] for p in response.json()["data"]] == ["Beta", "Alpha"]

        response = await client.get("/api/projects", params={"sortBy": "password"}, headers=staff_headers)
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "sortBy"

        response = await client.get("/api/projects/stats", headers=staff_headers)
        stats = response.json()["data"]["stats"]
        assert stats["statusStats"] == [{"status": "active", "count": 2, "totalBudget": 400.0}]


# ══════════════════════════════════════════════════════════════════════════
# Uploads
# ══════════════════════════════════════════════════════════════════════════


class TestUploadRoutes:

    @pytest.mark.asyncio
    async def test_upload_serve_delete(self, client, staff_headers, sample_image_bytes):
        response = await client.post(
            "/api/uploads",
            files={"file": ("logo.png", sample_image_bytes, "image/png")},
            headers=staff_headers,
        )
        assert response.status_code == 201
        stored = response.json()["data"]["file"]
        assert stored["contentType"] == "image/png"
        assert stored["originalName"] == "logo.png"

        response = await client.get(stored["url"])
        assert response.status_code == 200
        assert response.content == sample_image_bytes
        assert response.headers["content-type"] == "image/png"

        response = await client.delete(stored["url"], headers=staff_headers)
        assert response.status_code == 200
        response = await client.get(stored["url"])
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_upload_requires_auth(self, client, sample_image_bytes):
        response = await client.post(
            "/api/uploads", files={"file": ("logo.png", sample_image_bytes, "image/png")}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unsupported_type(self, client, staff_headers):
        response = await client.post(
            "/api/uploads", files={"file": ("script.sh", b"echo hi", "text/plain")}, headers=staff_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_oversized_upload_rejected_before_read(self, client, staff_headers, sample_image_bytes):
        with patch("influencer_network.services.file_service.settings") as mock_settings, patch.object(
            UploadFile, "read", new_callable=AsyncMock
        ) as mock_read:
            mock_settings.max_file_size = 16
            response = await client.post(
                "/api/uploads",
                files={"file": ("logo.png", sample_image_bytes, "image/png")},
                headers=staff_headers,
            )

        assert response.status_code == 400
        body = response.json()
        assert body["message"].endswith("Please upload a smaller file.")
        assert body["details"]["reported_size"] == len(sample_image_bytes)
        mock_read.assert_not_awaited()
