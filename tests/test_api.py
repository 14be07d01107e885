"""
Tests for the HTTP API.
"""
import pytest
from fastapi.testclient import TestClient

from app import api
from services.report_service import ReportService


@pytest.fixture()
def client(monkeypatch, fake_client):
    monkeypatch.setattr(api, "report_service", ReportService(client=fake_client))
    return TestClient(api.app)


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "timestamp" in body


def test_index(client):
    """Test the endpoint listing."""
    response = client.get("/")
    assert response.status_code == 200
    assert "GET /api/report/{date}" in response.json()["endpoints"]


def test_favicon(client):
    """Test favicon returns no content."""
    assert client.get("/favicon.ico").status_code == 204


def test_daily_report(client):
    """Test a daily report response."""
    response = client.get("/api/report/2025-08-05")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["date"] == "2025-08-05"
    assert data["sheet"] == "AUG25"
    assert data["cargo"]["totalAWB"] == 1
    assert data["cargo"]["totalAWBOnline"] == ["Shopee-882"]
    assert data["express"]["totalAWBExpress"] == 2
    assert data["pengeluaran"]["totalPengeluaran"] == 25000


@pytest.mark.parametrize("value", ["05-08-2025", "2025-8-5", "today-ish", "2025-02-30"])
def test_invalid_date(client, value):
    """Test malformed and impossible dates are rejected."""
    response = client.get(f"/api/report/{value}")
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid request"
    assert body["details"]["date"] == value


def test_unreadable_day(client):
    """Test a day from a missing sheet maps to a gateway error."""
    response = client.get("/api/report/2025-06-01")
    assert response.status_code == 502
    body = response.json()
    assert body["success"] is False
    assert body["details"]["sheet"] == "JUN25"


def test_daily_report_text(client):
    """Test the plain-text rendering."""
    response = client.get("/api/report/2025-08-05/text")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "2.1 Total AWB: 1 pcs" in response.text
    assert "- fuel" in response.text


def test_range_report(client):
    """Test a range report response."""
    response = client.get("/api/report/range", params={"start": "2025-08-05", "end": "2025-08-06"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalDays"] == 2
    assert data["dateRange"]["start"] == "2025-08-05"
    assert data["aggregated"]["cargo"]["totalAWB"] == 2
    assert data["aggregated"]["attendance"]["averageAttendancePerDay"] == 1.5


def test_range_missing_parameter(client):
    """Test a range without an end date."""
    response = client.get("/api/report/range", params={"start": "2025-08-05"})
    assert response.status_code == 400
    assert response.json()["details"] == {"end": ""}


def test_range_reversed(client):
    """Test a range ending before it starts."""
    response = client.get("/api/report/range", params={"start": "2025-08-06", "end": "2025-08-05"})
    assert response.status_code == 400


def test_range_without_data(client):
    """Test a range with no readable day."""
    response = client.get("/api/report/range", params={"start": "2025-07-01", "end": "2025-07-02"})
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "No data"


def test_list_sheets(client):
    """Test the sheets listing."""
    response = client.get("/api/sheets")
    assert response.status_code == 200
    assert response.json()["data"]["sheets"] == ["AUG25"]


def test_unknown_endpoint(client):
    """Test unknown routes use the error envelope."""
    response = client.get("/api/unknown")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Endpoint not found"
