"""Tests for review endpoints."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select

from benchmap.db.models import BenchReview, Notification


def test_my_review_anonymous_is_null(client: TestClient, create_bench):
    bench = create_bench()
    response = client.get(f"/entities/{bench['id']}/reviews")
    assert response.status_code == 200
    assert response.json() == {"myReview": None}


def test_my_review_before_rating_is_null(client: TestClient, auth, create_bench):
    bench = create_bench()
    response = client.get(f"/entities/{bench['id']}/reviews", headers=auth("guest"))
    assert response.json() == {"myReview": None}


@pytest.mark.parametrize("raw,expected", [(0, 1), (6, 5), (3.6, 4), (2, 2)])
def test_rating_is_normalized(client: TestClient, auth, create_bench, raw, expected):
    bench = create_bench()

    response = client.post(f"/entities/{bench['id']}/reviews", json={"rating": raw}, headers=auth("guest"))

    assert response.status_code == 200
    assert response.json() == {"ok": True, "rating": expected}


@pytest.mark.parametrize("payload", [{"rating": "five"}, {"rating": None}, {"rating": True}, {}])
def test_non_numeric_rating_rejected(client: TestClient, auth, create_bench, db, payload):
    bench = create_bench()

    response = client.post(f"/entities/{bench['id']}/reviews", json=payload, headers=auth("guest"))

    assert response.status_code == 400
    assert "error" in response.json()
    assert db.execute(select(BenchReview)).scalars().all() == []


def test_review_requires_auth(client: TestClient, create_bench):
    bench = create_bench()
    response = client.post(f"/entities/{bench['id']}/reviews", json={"rating": 3})
    assert response.status_code == 401


def test_resubmitting_overwrites(client: TestClient, auth, create_bench, db):
    bench = create_bench()
    url = f"/entities/{bench['id']}/reviews"

    client.post(url, json={"rating": 2}, headers=auth("guest"))
    client.post(url, json={"rating": 5}, headers=auth("guest"))

    mine = client.get(url, headers=auth("guest")).json()["myReview"]
    assert mine["rating"] == 5
    assert mine["created_at"]
    assert len(db.execute(select(BenchReview)).scalars().all()) == 1

    (listed,) = client.get("/entities").json()
    assert listed["community_rating"] == 5.0


def test_review_notifies_owner_each_time(client: TestClient, auth, create_bench, db):
    bench = create_bench(owner="owner")
    url = f"/entities/{bench['id']}/reviews"

    client.post(url, json={"rating": 4}, headers=auth("guest"))
    client.post(url, json={"rating": 3}, headers=auth("guest"))

    rows = db.execute(select(Notification)).scalars().all()
    assert [(n.user_id, n.type, n.comment_id) for n in rows] == [("owner", "review", None)] * 2


def test_reviewing_own_bench_notifies_nobody(client: TestClient, auth, create_bench, db):
    bench = create_bench(owner="owner")

    client.post(f"/entities/{bench['id']}/reviews", json={"rating": 5}, headers=auth("owner"))

    assert db.execute(select(Notification)).scalars().all() == []


def test_huge_integer_rating_clamps_to_five(client: TestClient, auth, create_bench):
    bench = create_bench()
    body = '{"rating": 1' + "0" * 400 + "}"

    response = client.post(
        f"/entities/{bench['id']}/reviews",
        content=body.encode(),
        headers={**auth("guest"), "Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True, "rating": 5}
    mine = client.get(f"/entities/{bench['id']}/reviews", headers=auth("guest")).json()["myReview"]
    assert mine["rating"] == 5
