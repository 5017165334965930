import json

import httpx
import pytest

from api.order_submit import get_webhook_transport
from config import Settings, get_settings
from main import app

VALID_ORDER = {
    "name": "A",
    "email": "a@b.com",
    "size": "100",
    "pieces": 100,
    "total": 38,
    "imageUrl": "http://x/y.jpg",
    "imageWidth": 2000,
    "imageHeight": 2000,
}


def test_valid_order_is_forwarded(client, webhook, settings):
    response = client.post("/api/order-submit", json=VALID_ORDER)
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    assert len(webhook.requests) == 1
    sent = webhook.requests[0]
    assert sent.method == "POST"
    assert sent.url.params["token"] == settings.order_webhook_token
    assert str(sent.url).startswith(settings.order_webhook_url)
    assert "authorization" not in sent.headers
    assert json.loads(sent.content) == {
        "name": "A",
        "email": "a@b.com",
        "phone": "",
        "size": "100",
        "pieces": 100,
        "addons": {},
        "total": 38,
        "imageUrl": "http://x/y.jpg",
        "imageWidth": 2000,
        "imageHeight": 2000,
        "imageFormat": "",
        "notes": "",
    }


def test_optional_fields_pass_through(client, webhook):
    order = {
        **VALID_ORDER,
        "phone": "555-0100",
        "addons": {"rush": True},
        "imageFormat": "png",
        "notes": "gift",
    }
    client.post("/api/order-submit", json=order)
    sent = json.loads(webhook.requests[0].content)
    assert sent["phone"] == "555-0100"
    assert sent["addons"] == {"rush": True}
    assert sent["imageFormat"] == "png"
    assert sent["notes"] == "gift"


def test_honeypot_short_circuits(client, webhook):
    response = client.post("/api/order-submit", json={"company": "spam"})
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert webhook.requests == []


def test_blank_honeypot_is_ignored(client, webhook):
    response = client.post("/api/order-submit", json={**VALID_ORDER, "company": "   "})
    assert response.status_code == 200
    assert len(webhook.requests) == 1


def test_missing_email(client, webhook):
    order = {key: value for key, value in VALID_ORDER.items() if key != "email"}
    response = client.post("/api/order-submit", json=order)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing field: email"}
    assert webhook.requests == []


def test_blank_field_counts_as_missing(client):
    response = client.post("/api/order-submit", json={**VALID_ORDER, "name": "  "})
    assert response.json() == {"error": "Missing field: name"}


def test_malformed_body_is_treated_as_empty(client, webhook):
    response = client.post(
        "/api/order-submit",
        content="{broken",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Missing field: name"}
    assert webhook.requests == []


def test_low_resolution_is_rejected(client, webhook):
    response = client.post(
        "/api/order-submit", json={**VALID_ORDER, "imageWidth": 1199, "imageHeight": 4000}
    )
    assert response.status_code == 400
    assert response.json() == {
        "error": "Image too small. Minimum shortest side is 1200px."
    }
    assert webhook.requests == []


def test_resolution_check_skipped_without_both_dimensions(client, webhook):
    order = {**VALID_ORDER, "imageWidth": 800, "imageHeight": ""}
    response = client.post("/api/order-submit", json=order)
    assert response.status_code == 200


@pytest.mark.parametrize("body", ["OK", "status: ok", "Ok - row 12"])
def test_ok_marker_in_any_case_succeeds(client, webhook, body):
    webhook.text = body
    response = client.post("/api/order-submit", json=VALID_ORDER)
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_missing_ok_marker_is_upstream_failure(client, webhook):
    webhook.text = "status: FAIL"
    response = client.post("/api/order-submit", json=VALID_ORDER)
    assert response.status_code == 502
    assert response.json() == {
        "error": "Sheets webhook returned unexpected response",
        "body": "status: FAIL",
    }


def test_non_2xx_surfaces_status_and_body(client, webhook):
    webhook.status_code = 403
    webhook.text = "Unauthorized token"
    response = client.post("/api/order-submit", json=VALID_ORDER)
    assert response.status_code == 502
    assert response.json() == {
        "error": "Sheets webhook failed",
        "status": 403,
        "body": "Unauthorized token",
    }


def test_unreachable_webhook_is_server_error(client):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    app.dependency_overrides[get_webhook_transport] = lambda: httpx.MockTransport(refuse)
    response = client.post("/api/order-submit", json=VALID_ORDER)
    assert response.status_code == 500
    assert response.json() == {"error": "connection refused"}


def test_missing_config(client, webhook):
    app.dependency_overrides[get_settings] = lambda: Settings(
        order_webhook_url="https://script.example.com/exec"
    )
    response = client.post("/api/order-submit", json=VALID_ORDER)
    assert response.status_code == 500
    assert response.json() == {
        "error": "Missing SHEETS_WEBHOOK_URL/APPS_SCRIPT_URL or SHEETS_TOKEN/PUZZLE_REQUEST_TOKEN"
    }
    assert webhook.requests == []


def test_other_methods_are_rejected(client):
    response = client.get("/api/order-submit")
    assert response.status_code == 405
    assert response.text == "Method Not Allowed"


def test_huge_dimension_is_forwarded(client, webhook):
    response = client.post(
        "/api/order-submit", json={**VALID_ORDER, "imageWidth": 10**400}
    )
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert json.loads(webhook.requests[0].content)["imageWidth"] == 10**400


def test_non_standard_json_literal_is_treated_as_empty(client, webhook):
    response = client.post(
        "/api/order-submit",
        content='{"name": "A", "imageWidth": NaN}',
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Missing field: name"}
    assert webhook.requests == []
