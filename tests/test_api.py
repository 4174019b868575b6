# =============================================================================
# tests/test_api.py - HTTP Endpoint Tests
# =============================================================================
# Exercises the routers through FastAPI's TestClient with the in-memory
# datastore on app.state:
# - fish round trip, validation (400) and not-found (404)
# - admin/user/judge role gates (401 / 403)
# - orders, contest registration (multipart), spin and judging
# - error masking and health checks
#
# Run with: pytest tests/test_api.py -v
# =============================================================================

import pytest
from fastapi.testclient import TestClient

from core.models.user import UserRole
from core.services.contest_service import REGISTRATIONS_TABLE

CONTEST = "Medan Betta Show 2025"


# =============================================================================
# Fish
# =============================================================================

class TestFishEndpoints:
    """Tests for /api/fish."""

    def test_create_then_get_returns_same_fields(self, client, admin_headers, sample_fish_payload):
        response = client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)
        assert response.status_code == 201

        fetched = client.get("/api/fish/FISH-AB12CD")

        assert fetched.status_code == 200
        data = fetched.json()
        for key, value in sample_fish_payload.items():
            assert data[key] == value
        assert data["status"] == "available"
        assert data["importDate"] is None
        assert data["isPremium"] is False

    def test_delete_then_get_is_404(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)

        deleted = client.delete("/api/fish/FISH-AB12CD", headers=admin_headers)
        assert deleted.status_code == 200

        response = client.get("/api/fish/FISH-AB12CD")
        assert response.status_code == 404
        assert response.json()["code"] == "FISH_NOT_FOUND"

    def test_missing_catch_date_is_400(self, client, admin_headers):
        response = client.post(
            "/api/fish",
            json={"species": "Betta", "method": "Ternak sendiri"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"]

    def test_duplicate_is_409(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)

        response = client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)

        assert response.status_code == 409

    def test_list_is_public_and_filters(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)
        client.put("/api/fish/FISH-AB12CD/status", json={"status": "sold"}, headers=admin_headers)

        assert len(client.get("/api/fish").json()) == 1
        assert client.get("/api/fish", params={"status": "available"}).json() == []

    def test_status_is_idempotent(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)

        for _ in range(2):
            response = client.put(
                "/api/fish/FISH-AB12CD/status", json={"status": "sold"}, headers=admin_headers
            )
            assert response.status_code == 200
            assert response.json()["status"] == "sold"

    def test_partial_update(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)

        response = client.put(
            "/api/fish/FISH-AB12CD",
            json={"origin": "Bangkok, Thailand"},
            headers=admin_headers,
        )

        data = response.json()
        assert data["origin"] == "Bangkok, Thailand"
        assert data["species"] == "Betta"
        assert data["isPremium"] is True

    def test_null_species_or_method_is_400(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)

        response = client.put(
            "/api/fish/FISH-AB12CD",
            json={"species": None, "method": None},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert client.get("/api/fish/FISH-AB12CD").json()["species"] == "Betta"

    def test_stats(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)

        assert client.get("/api/stats").json() == {"total": 1, "available": 1, "sold": 0, "premium": 0}


# =============================================================================
# Auth
# =============================================================================

class TestAuth:
    """Tests for login, tokens and role gates."""

    def test_write_without_token_is_401(self, client, sample_fish_payload):
        response = client.post("/api/fish", json=sample_fish_payload)

        assert response.status_code == 401
        assert response.json()["code"] == "NOT_AUTHENTICATED"

    def test_garbage_token_is_401(self, client, sample_fish_payload):
        response = client.post(
            "/api/fish",
            json=sample_fish_payload,
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert response.status_code == 401

    def test_user_token_on_admin_route_is_403(self, client, create_account, sample_fish_payload):
        _, headers = create_account("budi")

        response = client.post("/api/fish", json=sample_fish_payload, headers=headers)

        assert response.status_code == 403

    def test_admin_login(self, client):
        response = client.post(
            "/api/admin/login",
            json={"username": "admin", "password": "test-admin-pass"},
        )

        assert response.status_code == 200
        token = response.json()["access_token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["role"] == "admin"

    def test_admin_login_wrong_password(self, client):
        response = client.post("/api/admin/login", json={"username": "admin", "password": "nope"})
        assert response.status_code == 401

    def test_register_login_me(self, client):
        registered = client.post(
            "/api/auth/register",
            json={"username": "Budi", "password": "secret-pass", "full_name": "Budi Santoso"},
        )
        assert registered.status_code == 201
        assert registered.json()["username"] == "budi"
        assert "password_hash" not in registered.json()

        login = client.post("/api/auth/login", json={"username": "budi", "password": "secret-pass"})
        assert login.status_code == 200
        assert login.json()["role"] == "user"

        me = client.get(
            "/api/auth/me",
            headers={"Authorization": f"Bearer {login.json()['access_token']}"},
        )
        assert me.json()["full_name"] == "Budi Santoso"

    def test_duplicate_username_is_409(self, client, create_account):
        create_account("budi")

        response = client.post(
            "/api/auth/register",
            json={"username": "budi", "password": "secret-pass", "full_name": "Other"},
        )
        assert response.status_code == 409

    def test_wrong_password_is_401(self, client, create_account):
        create_account("budi")

        response = client.post("/api/auth/login", json={"username": "budi", "password": "wrong-pass"})
        assert response.status_code == 401


# =============================================================================
# Orders
# =============================================================================

class TestOrderEndpoints:
    """Tests for /api/orders."""

    def test_scenario_paid_order_then_delete(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)

        order = client.post(
            "/api/orders",
            json={"fish_id": "FISH-AB12CD", "buyer_name": "Budi", "amount": 350000},
            headers=admin_headers,
        )
        assert order.status_code == 201
        assert client.get("/api/fish/FISH-AB12CD").json()["status"] == "sold"

        deleted = client.delete(f"/api/orders/{order.json()['id']}", headers=admin_headers)

        assert deleted.json()["fish_restored"] is True
        assert client.get("/api/fish/FISH-AB12CD").json()["status"] == "available"

    def test_selling_sold_fish_is_409(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)
        payload = {"fish_id": "FISH-AB12CD", "buyer_name": "Budi", "amount": 1}
        client.post("/api/orders", json=payload, headers=admin_headers)

        response = client.post("/api/orders", json=payload, headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "FISH_UNAVAILABLE"

    def test_pay_pending_order(self, client, admin_headers, sample_fish_payload):
        client.post("/api/fish", json=sample_fish_payload, headers=admin_headers)
        order = client.post(
            "/api/orders",
            json={"fish_id": "FISH-AB12CD", "buyer_name": "Budi", "amount": 1, "status": "pending"},
            headers=admin_headers,
        ).json()

        paid = client.post(f"/api/orders/{order['id']}/pay", headers=admin_headers)

        assert paid.json()["status"] == "paid"
        assert client.get("/api/fish/FISH-AB12CD").json()["status"] == "sold"

    def test_orders_require_admin(self, client):
        assert client.get("/api/orders").status_code == 401


# =============================================================================
# Contest & Judging
# =============================================================================

@pytest.fixture
def participant(create_account):
    return create_account("participant")


def _register(client, headers, tier="Diamond"):
    return client.post(
        "/api/contest/register",
        data={"contest_name": CONTEST, "fish_name": "Blue Rim", "tier": tier},
        files={"fishPhoto": ("fish.jpg", b"\xff\xd8\xff", "image/jpeg")},
        headers=headers,
    )


class TestContestEndpoints:
    """Tests for /api/contest and the admin review."""

    def test_register_multipart(self, client, participant):
        _, headers = participant

        response = _register(client, headers)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["payment_amount"] == 250_000
        assert data["owner_name"] == "participant"

        mine = client.get("/api/contest/my-registrations", headers=headers)
        assert len(mine.json()) == 1

    def test_register_rejects_pdf(self, client, participant):
        _, headers = participant

        response = client.post(
            "/api/contest/register",
            data={"contest_name": CONTEST, "fish_name": "Blue Rim"},
            files={"fishPhoto": ("doc.pdf", b"%PDF", "application/pdf")},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FILE_TYPE"

    def test_register_without_photo_is_400(self, client, participant):
        _, headers = participant

        response = client.post(
            "/api/contest/register",
            data={"contest_name": CONTEST, "fish_name": "Blue Rim"},
            headers=headers,
        )

        assert response.status_code == 400

    def test_spin_flow(self, client, participant, admin_headers):
        _, headers = participant
        registration = _register(client, headers).json()

        # Not approved yet
        assert client.post(
            f"/api/contest/registrations/{registration['id']}/spin", headers=headers
        ).status_code == 400

        approved = client.put(
            f"/api/admin/registrations/{registration['id']}/status",
            json={"status": "approved"},
            headers=admin_headers,
        )
        assert approved.json()["status"] == "approved"

        spin = client.post(f"/api/contest/registrations/{registration['id']}/spin", headers=headers)
        assert spin.status_code == 200
        assert spin.json()["prize"]

        again = client.post(f"/api/contest/registrations/{registration['id']}/spin", headers=headers)
        assert again.status_code == 409

        redeem = client.post(f"/api/contest/registrations/{registration['id']}/redeem", headers=headers)
        assert redeem.json()["prize_redeemed"] is True
        assert client.post(
            f"/api/contest/registrations/{registration['id']}/redeem", headers=headers
        ).status_code == 409

    def test_admin_delete_registration(self, client, participant, admin_headers, fake_db):
        _, headers = participant
        registration = _register(client, headers).json()

        response = client.delete(f"/api/admin/registrations/{registration['id']}", headers=admin_headers)

        assert response.json()["media_deleted"] is True
        assert fake_db.rows(REGISTRATIONS_TABLE) == []

    def test_judging_flow(self, client, participant, admin_headers, create_account):
        _, user_headers = participant
        judge, judge_headers = create_account("judge_one", role=UserRole.JUDGE)
        registration = _register(client, user_headers).json()
        client.put(
            f"/api/admin/registrations/{registration['id']}/status",
            json={"status": "approved"},
            headers=admin_headers,
        )

        score = {"body": 80, "form": 90, "color": 70}

        # Unassigned judge
        response = client.post(
            f"/api/judge/entries/{registration['id']}/score", json=score, headers=judge_headers
        )
        assert response.status_code == 403
        assert response.json()["code"] == "JUDGE_NOT_ASSIGNED"

        event = client.post("/api/admin/events", json={"title": CONTEST}, headers=admin_headers).json()
        assigned = client.put(
            f"/api/admin/events/{event['id']}/judges",
            json={"judge_ids": [judge["id"]]},
            headers=admin_headers,
        )
        assert assigned.json()["judge_ids"] == [judge["id"]]

        assert len(client.get("/api/judge/entries", headers=judge_headers).json()) == 1

        response = client.post(
            f"/api/judge/entries/{registration['id']}/score", json=score, headers=judge_headers
        )
        assert response.status_code == 200
        assert response.json()["total_score"] == 80

        results = client.get("/api/contest/results", params={"contest_name": CONTEST}).json()
        assert results[0]["rank"] == 1
        assert results[0]["total_score"] == 80

    def test_participant_cannot_score(self, client, participant):
        _, headers = participant

        response = client.post(
            "/api/judge/entries/any/score", json={"body": 1, "form": 1, "color": 1}, headers=headers
        )
        assert response.status_code == 403

    def test_public_events(self, client, admin_headers):
        client.post("/api/admin/events", json={"title": CONTEST}, headers=admin_headers)

        events = client.get("/api/events").json()

        assert [e["title"] for e in events] == [CONTEST]


class TestJudgeAdministration:
    """Tests for /api/admin/judges."""

    def test_judge_lifecycle(self, client, admin_headers):
        created = client.post(
            "/api/admin/judges",
            json={"username": "judge_two", "password": "judge-pass", "full_name": "Judge Two"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        judge = created.json()
        assert judge["role"] == "judge"

        updated = client.put(
            f"/api/admin/judges/{judge['id']}",
            json={"phone": "0812"},
            headers=admin_headers,
        )
        assert updated.json()["phone"] == "0812"

        login = client.post("/api/auth/login", json={"username": "judge_two", "password": "judge-pass"})
        assert login.json()["role"] == "judge"

        assert [j["id"] for j in client.get("/api/admin/judges", headers=admin_headers).json()] == [judge["id"]]

        client.delete(f"/api/admin/judges/{judge['id']}", headers=admin_headers)
        assert client.get("/api/admin/judges", headers=admin_headers).json() == []

    def test_assigning_unknown_judge_is_404(self, client, admin_headers):
        event = client.post("/api/admin/events", json={"title": CONTEST}, headers=admin_headers).json()

        response = client.put(
            f"/api/admin/events/{event['id']}/judges",
            json={"judge_ids": ["nope"]},
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "JUDGE_NOT_FOUND"


# =============================================================================
# Errors & Health
# =============================================================================

class TestErrorPolicy:
    """5xx detail is shown in development and masked in production."""

    def test_internal_error_masked_in_production(self, app, fake_db, monkeypatch):
        from app import exceptions
        from app.config import Settings

        fake_db.failing_tables.add("fish")
        monkeypatch.setattr(exceptions, "settings", Settings(ENVIRONMENT="production"))
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/fish")

        assert response.status_code == 500
        assert response.json() == {"detail": exceptions.GENERIC_SERVER_ERROR, "code": "INTERNAL_ERROR"}

    def test_internal_error_detailed_in_development(self, app, fake_db):
        fake_db.failing_tables.add("fish")
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/fish")

        assert response.status_code == 500
        assert "simulated failure" in response.json()["detail"]


class TestHealth:
    """Tests for the health endpoints."""

    def test_health(self, client):
        assert client.get("/api/health").json()["status"] == "healthy"

    def test_ready(self, client):
        data = client.get("/api/health/ready").json()
        assert data["status"] == "ready"
        assert data["checks"] == {"database": "healthy", "storage": "healthy"}

    def test_live(self, client):
        assert client.get("/api/health/live").json()["status"] == "alive"
