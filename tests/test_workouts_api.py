import uuid
from datetime import date, timedelta

from fastapi.testclient import TestClient

from fittrack.main import app
from fittrack.schemas.identity import IdentityMode
from fittrack.security import create_access_token

client = TestClient(app)

def uniq(): return f"user-{uuid.uuid4().hex[:10]}"

def auth(owner, mode=IdentityMode.real, converted_from=None):
    extra = {"converted_from": converted_from} if converted_from else None
    return {"Authorization": f"Bearer {create_access_token(owner, mode=mode, extra=extra)}"}

def payload(**overrides):
    body = {
        "date": date.today().isoformat(),
        "duration_minutes": 50,
        "name": "Upper body",
        "exercises": [{"name": "Bench press", "sets": 4, "reps": "8-12", "weight": 70, "completed": True}],
        "completed": True,
    }
    body.update(overrides)
    return body


def test_requires_identity():
    r = client.post("/workouts", json=payload())
    assert r.status_code == 401
    assert client.get("/workouts").status_code == 401
    assert client.get("/workouts/statistics").status_code == 401

def test_garbage_token_is_no_identity():
    r = client.get("/workouts", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

def test_expired_token_is_no_identity():
    expired = create_access_token(uniq(), expires_minutes=-1)
    r = client.get("/workouts", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401

def test_track_and_list_for_registered_user():
    H = auth(uniq())
    r = client.post("/workouts", headers=H, json=payload())
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["id"] and created["created_at"]

    r = client.get("/workouts", headers=H, params={"page": 1, "page_size": 10})
    assert r.status_code == 200
    body = r.json()
    assert body["total_count"] == 1
    assert body["items"][0]["id"] == created["id"]

def test_validation_error_names_the_field():
    H = auth(uniq())
    r = client.post("/workouts", headers=H, json=payload(duration_minutes=0))
    assert r.status_code == 422
    assert r.json()["detail"]["field"] == "duration_minutes"

    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    r = client.post("/workouts", headers=H, json=payload(date=tomorrow))
    assert r.json()["detail"]["kind"] == "future_date"

def test_pagination_over_http():
    H = auth(uniq())
    for n in range(15):
        d = (date.today() - timedelta(days=n)).isoformat()
        assert client.post("/workouts", headers=H, json=payload(date=d)).status_code == 201
    body = client.get("/workouts", headers=H, params={"page": 2, "page_size": 10}).json()
    assert len(body["items"]) == 5
    assert body["total_count"] == 15
    assert client.get("/workouts", headers=H, params={"page": 0}).status_code == 422

def test_delete_is_owner_scoped():
    owner, other = auth(uniq()), auth(uniq())
    sid = client.post("/workouts", headers=owner, json=payload()).json()["id"]
    assert client.delete(f"/workouts/{sid}", headers=other).status_code == 404
    assert client.delete(f"/workouts/{sid}", headers=owner).status_code == 204
    assert client.delete(f"/workouts/{sid}", headers=owner).status_code == 404

def test_statistics_and_achievements():
    H = auth(uniq())
    for n in range(3):
        d = (date.today() - timedelta(days=n)).isoformat()
        client.post("/workouts", headers=H, json=payload(date=d, duration_minutes=40))
    stats = client.get("/workouts/statistics", headers=H).json()
    assert stats["total_workouts"] == 3
    assert stats["current_streak"] == 3
    assert stats["favorite_name"] == "Upper body"
    achievements = client.get("/workouts/achievements", headers=H).json()
    assert any(a["id"] == "first-workout" and a["achieved"] for a in achievements)

def test_demo_user_then_sign_up():
    demo_id, real_id = uniq(), uniq()
    demo = auth(demo_id, IdentityMode.demo)
    assert client.post("/workouts", headers=demo, json=payload()).status_code == 201
    assert client.post("/workouts", headers=demo, json=payload()).status_code == 201
    assert client.get("/workouts", headers=demo).json()["total_count"] == 2

    real = auth(real_id, converted_from=demo_id)
    assert client.post("/workouts/transfer-demo-data", headers=demo).status_code == 401
    r = client.post("/workouts/transfer-demo-data", headers=real)
    assert r.status_code == 200
    assert r.json() == {"transferred": True}

    assert client.get("/workouts", headers=real).json()["total_count"] == 2
    assert client.get("/workouts", headers=demo).json()["total_count"] == 0

def test_unrelated_account_transfers_nothing():
    alice, mallory = uniq(), uniq()
    alice_h = auth(alice, IdentityMode.demo)
    assert client.post("/workouts", headers=alice_h, json=payload(name="alice")).status_code == 201

    mallory_h = auth(mallory)
    assert client.post("/workouts/transfer-demo-data", headers=mallory_h).status_code == 200
    assert client.get("/workouts", headers=mallory_h).json()["total_count"] == 0

    mine = client.get("/workouts", headers=alice_h).json()
    assert [s["name"] for s in mine["items"]] == ["alice"]

def test_demo_users_do_not_see_each_other():
    a, b = auth(uniq(), IdentityMode.demo), auth(uniq(), IdentityMode.demo)
    assert client.post("/workouts", headers=a, json=payload()).status_code == 201
    assert client.get("/workouts", headers=b).json()["total_count"] == 0

def test_conversion_only_moves_its_own_demo_data():
    first, second = uniq(), uniq()
    client.post("/workouts", headers=auth(first, IdentityMode.demo), json=payload(name="first"))
    client.post("/workouts", headers=auth(second, IdentityMode.demo), json=payload(name="second"))

    real = auth(uniq(), converted_from=first)
    assert client.post("/workouts/transfer-demo-data", headers=real).status_code == 200
    names = [s["name"] for s in client.get("/workouts", headers=real).json()["items"]]
    assert names == ["first"]
    assert client.get("/workouts", headers=auth(second, IdentityMode.demo)).json()["total_count"] == 1
