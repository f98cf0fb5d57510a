from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import auth_header

INSIGHT = {"type": "favorite_role", "data_json": '{"title": "Data Scientist"}', "name": "Dream job"}


def test_insights_require_bearer_token(client: TestClient) -> None:
    assert client.get("/api/insights").status_code == 401


def test_create_and_list_insights(client: TestClient, register_user) -> None:
    token = register_user("ivy")

    created = client.post("/api/insights", json=INSIGHT, headers=auth_header(token))
    assert created.status_code == 201
    assert created.json()["name"] == "Dream job"

    listed = client.get("/api/insights", headers=auth_header(token))
    assert [insight["id"] for insight in listed.json()] == [created.json()["id"]]


def test_create_insight_with_missing_fields(client: TestClient, register_user) -> None:
    token = register_user("ivy")
    response = client.post("/api/insights", json={"type": "favorite_role"}, headers=auth_header(token))
    assert response.status_code == 400
    assert response.json() == {"message": "Missing required fields"}


def test_insights_are_scoped_to_their_owner(client: TestClient, register_user) -> None:
    owner = register_user("ivy")
    other = register_user("jack")
    insight_id = client.post("/api/insights", json=INSIGHT, headers=auth_header(owner)).json()["id"]

    assert client.get("/api/insights", headers=auth_header(other)).json() == []
    assert client.delete(f"/api/insights/{insight_id}", headers=auth_header(other)).status_code == 403
    assert client.delete(f"/api/insights/{insight_id}", headers=auth_header(owner)).status_code == 204
    assert client.get("/api/insights", headers=auth_header(owner)).json() == []


def test_delete_missing_insight(client: TestClient, register_user) -> None:
    token = register_user("ivy")
    response = client.delete("/api/insights/404", headers=auth_header(token))
    assert response.status_code == 404
