from fastapi.testclient import TestClient

from eventradar.models import Category


def test_read_categories_sorted_by_name(client: TestClient, seed):
    seed(
        Category(id="c2", name="Sport", slug="sport"),
        Category(id="c1", name="Art", slug="art"),
        Category(id="c3", name="Music", slug="music"),
    )

    response = client.get("/api/v1/categories")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Art", "Music", "Sport"]
    assert response.json()[0] == {"id": "c1", "name": "Art", "slug": "art"}


def test_read_categories_empty(client: TestClient):
    response = client.get("/api/v1/categories")

    assert response.status_code == 200
    assert response.json() == []
