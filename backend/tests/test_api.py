import pytest
from fastapi.testclient import TestClient

from conftest import COMPETITORS_MARKER, RISKS_MARKER, ROADMAP_MARKER
from valuator.domains.insights.services.insight_orchestration_service import get_insight_orchestration_service
from valuator.domains.reporting.services.report_assembler import ReportService, get_report_service
from valuator.domains.valuation.services.valuation import format_currency
from valuator.main import app
from valuator.shared.exceptions import GenerationException

FORM_PAYLOAD = {
    "companyStage": "seed",
    "industryVertical": "defi",
    "mrr": 10000,
    "userCount": 5000,
    "retentionRate": 40,
    "growthRate": 15,
    "teamSize": 4,
    "previousRaised": 200000,
    "tokenLaunch": "no",
    "productStage": "beta",
}


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def override_insights(make_insight_service):
    """Route every insight request through a fake generator."""

    def _override(responses):
        service, generator = make_insight_service(responses)
        app.dependency_overrides[get_insight_orchestration_service] = lambda: service
        app.dependency_overrides[get_report_service] = lambda: ReportService(insight_service=service)
        return generator

    return _override


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_valuation_endpoint(client):
    response = client.post("/api/v1/valuation", json=FORM_PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["estimated_valuation"] == 15_015_000
    assert body["data"]["formatted_valuation"] == format_currency(15_015_000)
    assert body["valuation_type"] == "Scorecard"
    assert body["data"]["breakdown"]["Base Valuation"] == pytest.approx(7_500_000)
    assert body["data"]["breakdown_shares"][0]["label"] == "Base Valuation"
    assert "$15,015,000" in body["data"]["summary"]


def test_valuation_endpoint_rejects_negative_numbers(client):
    response = client.post("/api/v1/valuation", json={**FORM_PAYLOAD, "mrr": -1})

    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "INVALID_VALUATION_INPUT"


def test_risk_endpoint(client, override_insights, all_responses):
    generator = override_insights(all_responses)

    response = client.post("/api/v1/insights/risk", json={**FORM_PAYLOAD, "valuation": 15015000})

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "risks"
    assert body["data"]["riskScore"] == 72
    assert '"valuation": 15015000' in generator.calls[0][0]


def test_risk_endpoint_rejects_negative_valuation(client, override_insights, all_responses):
    generator = override_insights(all_responses)

    response = client.post("/api/v1/insights/risk", json={**FORM_PAYLOAD, "valuation": -5})

    assert response.status_code == 400
    assert response.json()["detail"]["details"]["errors"][0]["loc"] == ["valuation"]
    assert generator.calls == []


def test_report_narrative_includes_structured_analysis(client, override_insights, all_responses):
    override_insights(all_responses)

    summary = client.post("/api/v1/report", json=FORM_PAYLOAD).json()["summary"]

    assert "Early and unaudited." in summary
    assert "Suggestions:\n• Audit first" in summary


def test_competitors_endpoint(client, override_insights, all_responses):
    override_insights(all_responses)

    response = client.post(
        "/api/v1/insights/competitors",
        json={"projectName": "Vaultly", "vertical": "defi", "keyFeatures": ["No token"]},
    )

    assert response.status_code == 200
    assert [c["name"] for c in response.json()["data"]["competitors"]] == ["Aave", "Uniswap"]


def test_unstructured_answer_is_partial(client, override_insights):
    override_insights({ROADMAP_MARKER: "Looks fine overall."})

    response = client.post("/api/v1/insights/roadmap", json={})

    assert response.status_code == 200
    assert response.json()["status"] == "partial"
    assert response.json()["data"]["text"] == "Looks fine overall."


def test_generation_failure_maps_to_bad_gateway(client, override_insights):
    override_insights({ROADMAP_MARKER: GenerationException(source="fake", reason="HTTP 503")})

    response = client.post(
        "/api/v1/insights/roadmap",
        json={"roadmapMilestones": [{"date": "2025-07", "name": "MVP Launch", "description": "Testnet"}]},
    )

    assert response.status_code == 502
    assert response.json()["detail"]["error_code"] == "GENERATION_ERROR"


def test_report_endpoint_with_partial_insights(client, override_insights, all_responses):
    responses = dict(all_responses)
    responses[RISKS_MARKER] = GenerationException(source="fake", reason="timeout")
    override_insights(responses)

    response = client.post("/api/v1/report", json=FORM_PAYLOAD)

    assert response.status_code == 200
    assert "web3-valuation-estimate.json" in response.headers["content-disposition"]
    body = response.json()
    assert set(body) == {"estimatedValuation", "breakdown", "calculatedAt", "summary", "aiInsights"}
    assert body["estimatedValuation"] == 15_015_000
    assert set(body["aiInsights"]) == {"competitors", "roadmap"}


def test_report_endpoint_rejects_bad_milestones(client, override_insights, all_responses):
    override_insights(all_responses)

    response = client.post("/api/v1/report", json={**FORM_PAYLOAD, "roadmapMilestones": [{"name": "No date"}]})

    assert response.status_code == 400
    assert response.json()["detail"]["details"]["errors"][0]["loc"][0] == "roadmapMilestones"
