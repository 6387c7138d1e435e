from fastapi.testclient import TestClient


def _client() -> TestClient:
    # Import lazily so the app is built with the default in-memory store.
    from promptsmith.api.main import app

    return TestClient(app)


def test_api_process_evaluate_compare_validate() -> None:
    client = _client()

    health = client.get("/health")
    assert health.status_code == 200
    assert len(health.json()["domains"]) == 17

    process_resp = client.post(
        "/process",
        json={"raw": "create a table for customers", "domain": "sql", "variables": {"entity": "customers"}},
    )
    assert process_resp.status_code == 200
    payload = process_resp.json()
    assert payload["refined"].startswith("Design a database table for {{entity}}.")
    assert payload["variables"] == {"entity": "customers"}
    assert payload["metadata"]["domain"] == "sql"
    assert 0.0 <= payload["score"]["overall"] <= 1.0

    evaluate_resp = client.post("/evaluate", json={"text": "Make it nice", "criteria": ["clarity"]})
    assert evaluate_resp.status_code == 200
    assert list(evaluate_resp.json()["breakdown"]) == ["clarity"]

    compare_resp = client.post(
        "/compare",
        json={"variants": ["a", "a much more detailed and specific instruction with concrete steps and deliverables"]},
    )
    assert compare_resp.status_code == 200
    assert compare_resp.json()["winner"] == "variant_1"

    validate_resp = client.post("/validate", json={"text": "Fix"})
    assert validate_resp.status_code == 200
    assert validate_resp.json()["is_valid"] is False


def test_api_rejects_invalid_input() -> None:
    client = _client()

    assert client.post("/process", json={"raw": ""}).status_code == 422
    assert client.post("/process", json={"raw": "   "}).status_code == 400
    assert client.post("/process", json={"raw": "write a poem", "domain": "astrology"}).status_code == 422
    assert client.get("/prompts", params={"domain": "astrology"}).status_code == 400


def test_api_prompt_store_round_trip() -> None:
    client = _client()

    save_resp = client.post(
        "/prompts",
        json={"text": "draft a retention campaign for lapsed customers", "name": "Retention campaign", "tags": ["crm"]},
    )
    assert save_resp.status_code == 200
    record = save_resp.json()

    detail_resp = client.get(f"/prompts/{record['id']}")
    assert detail_resp.status_code == 200
    assert detail_resp.json()["name"] == "Retention campaign"

    search_resp = client.get("/prompts", params={"query": "retention"})
    assert search_resp.status_code == 200
    assert record["id"] in [item["id"] for item in search_resp.json()["items"]]

    assert client.get("/prompts/does-not-exist").status_code == 404

    metrics_resp = client.get("/metrics")
    assert metrics_resp.status_code == 200
    assert metrics_resp.json()["total_prompts"] >= 1
    assert metrics_resp.json()["telemetry"]["total_requests"] >= 1


def test_api_tool_dispatch() -> None:
    client = _client()

    tools_resp = client.get("/tools")
    assert tools_resp.status_code == 200
    names = [item["name"] for item in tools_resp.json()["items"]]
    assert "process_prompt" in names
    store_tools = client.get("/tools", params={"tag": "store"}).json()["items"]
    assert [item["name"] for item in store_tools] == ["save_prompt", "search_prompts", "get_prompt"]

    call_resp = client.post("/tools/validate_prompt", json={"payload": {"text": "Write a summary of the report"}})
    assert call_resp.status_code == 200
    assert call_resp.json()["result"]["is_valid"] is True

    assert client.post("/tools/missing_tool", json={"payload": {}}).status_code == 404
    assert client.post("/tools/compare_prompts", json={"payload": {"variants": ["one"]}}).status_code == 422

    metrics_resp = client.get("/metrics")
    assert metrics_resp.json()["telemetry"]["tool_calls"] >= 1
    assert metrics_resp.json()["telemetry"]["tool_errors"] >= 1
