"""
End-to-end wizard flow over HTTP, fully offline
"""

import pytest


PROFILE = {
    "capital_amount": 50000,
    "investment_period": 5,
    "sectors": ["Technology", "Banking"],
    "risk_tolerance": "moderate",
    "target_growth": 100000,
    "preferences": "",
}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_health(client):
    assert (await client.get("/health")).json() == {"status": "ok"}
    assert (await client.get("/ready")).json()["status"] == "ready"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_analyze(client):
    resp = await client.post("/api/v1/advisor/analyze", json=PROFILE)
    assert resp.status_code == 200
    data = resp.json()

    assert data["exchange_rate"] == 83.0
    rec = data["recommendation"]
    assert [a["name"] for a in rec["asset_allocation"]][0] == "Indian Index Funds"
    assert rec["asset_allocation"][0]["amount"] == pytest.approx(1452500)
    assert len(rec["specific_recommendations"]) == 5
    assert rec["strategy"]["type"] == "sip"
    assert rec["strategy"]["monthly_amount"] == 69167
    assert rec["risk_assessment"]["score"] == 6
    assert len(rec["process_guide"]) == 10


@pytest.mark.asyncio
@pytest.mark.integration
async def test_analyze_lump_sum_has_no_monthly_amount(client):
    resp = await client.post("/api/v1/advisor/analyze", json={**PROFILE, "target_growth": 75000})
    assert resp.status_code == 200
    assert resp.json()["recommendation"]["strategy"].get("monthly_amount") is None


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "override",
    [
        {"capital_amount": 0},
        {"investment_period": 0},
        {"risk_tolerance": "reckless"},
        {"target_growth": -5},
    ],
)
async def test_analyze_rejects_invalid_profile(client, override):
    resp = await client.post("/api/v1/advisor/analyze", json={**PROFILE, **override})
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_history(client):
    resp = await client.post(
        "/api/v1/advisor/history",
        json={"asset_allocation": [{"name": "Gold", "percentage": 100, "color": "#EF4444", "amount": 10.0}]},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["labels"][0] == "Jan"
    assert len(data["data"]) == 12


@pytest.mark.asyncio
@pytest.mark.integration
async def test_session_flow(client):
    created = await client.post("/api/v1/sessions")
    assert created.status_code == 201
    session = created.json()
    session_id = session["session_id"]
    assert session["current_step"] == 0

    # Nothing to analyse or show yet
    assert (await client.post(f"/api/v1/sessions/{session_id}/analyze")).status_code == 409
    assert (await client.get(f"/api/v1/sessions/{session_id}/report")).status_code == 409

    resp = await client.post(f"/api/v1/sessions/{session_id}/profile", json=PROFILE)
    assert resp.json()["current_step"] == 1
    assert (
        await client.post(f"/api/v1/sessions/{session_id}/step", json={"step": 2})
    ).status_code == 409

    resp = await client.post(f"/api/v1/sessions/{session_id}/analyze")
    assert resp.status_code == 200
    state = resp.json()
    assert state["current_step"] == 2
    assert state["is_loading"] is False
    assert state["recommendation"]["strategy"]["monthly_amount"] == 69167

    report = await client.get(f"/api/v1/sessions/{session_id}/report")
    assert report.status_code == 200
    assert report.text.startswith("INVESTMENT RECOMMENDATION")
    assert "SIP of ₹69,167 per month" in report.text

    resp = await client.post(f"/api/v1/sessions/{session_id}/step", json={"step": 0})
    assert resp.json()["current_step"] == 0

    resp = await client.post(f"/api/v1/sessions/{session_id}/reset")
    assert resp.json()["recommendation"] is None
    assert resp.json()["exchange_rate"] == 83.0

    assert (await client.delete(f"/api/v1/sessions/{session_id}")).status_code == 204
    assert (await client.get(f"/api/v1/sessions/{session_id}")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unknown_session(client):
    assert (await client.get("/api/v1/sessions/nope")).status_code == 404
    assert (await client.post("/api/v1/sessions/nope/profile", json=PROFILE)).status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_market_data_routes(client):
    rate = (await client.get("/api/v1/market-data/exchange-rate")).json()
    assert rate == {"base_currency": "USD", "target_currency": "INR", "rate": 83.0}

    quote = (await client.get("/api/v1/market-data/quote/gld")).json()
    assert quote["symbol"] == "GLD"
    assert quote["source"] == "synthetic"
    assert quote["price"] > 0

    status = (await client.get("/api/v1/market-data/status")).json()
    assert status["providers"][-1] == "synthetic"
    assert status["fallback_rate"] == 83.0


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize("step", [-1, 3, 7])
async def test_out_of_range_step_is_rejected(client, step):
    session_id = (await client.post("/api/v1/sessions")).json()["session_id"]
    resp = await client.post(f"/api/v1/sessions/{session_id}/step", json={"step": step})
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_report_after_reset_is_conflict(client):
    session_id = (await client.post("/api/v1/sessions")).json()["session_id"]
    await client.post(f"/api/v1/sessions/{session_id}/profile", json=PROFILE)
    await client.post(f"/api/v1/sessions/{session_id}/analyze")
    await client.post(f"/api/v1/sessions/{session_id}/reset")

    assert (await client.get(f"/api/v1/sessions/{session_id}/report")).status_code == 409
