from datetime import date

from httpx import AsyncClient
from sqlalchemy import select

from sowplan.core.errors import MissingFrostDate
from sowplan.models import User


async def _register_and_login(client: AsyncClient, db, email="grower@example.com"):
    await client.post("/api/v1/auth/register", json={
        "first_name": "Grower",
        "email": email,
        "password": "secret123",
    })
    res = await client.post("/api/v1/auth/login", data={"username": email, "password": "secret123"})
    headers = {"Authorization": f"Bearer {res.json()['access_token']}"}
    user = await db.scalar(select(User).where(User.email == email))
    return headers, user


async def test_create_plan_generates_tasks(client: AsyncClient, db, make_season):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user)

    res = await client.post("/api/v1/crop-plans", json={
        "garden_season_id": season.id,
        "label": "Tomato",
        "planting_method": "transplant",
        "quantity_planned": 6,
    }, headers=headers)

    assert res.status_code == 201
    data = res.json()
    assert data["generation"]["success"] is True
    assert data["generation"]["tasks_created"] > 0
    assert data["plan"]["status"] == "scheduled"
    assert data["plan"]["quantity_scheduled"] == 6


async def test_create_plan_reports_missing_frost_date(client: AsyncClient, db, make_season):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user, last_frost_date=None)

    res = await client.post("/api/v1/crop-plans", json={
        "garden_season_id": season.id, "label": "Tomato",
    }, headers=headers)

    # The plan is kept even though no tasks could be generated
    assert res.status_code == 201
    data = res.json()
    assert data["generation"]["success"] is False
    assert data["generation"]["tasks_created"] == 0
    assert data["generation"]["error"] == MissingFrostDate.default_message
    assert data["plan"]["status"] == "planned"

    res = await client.get(f"/api/v1/crop-plans/{data['plan']['id']}", headers=headers)
    assert res.status_code == 200


async def test_create_plan_validation(client: AsyncClient, db, make_season):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user)

    res = await client.post("/api/v1/crop-plans", json={
        "garden_season_id": season.id, "color_hex": "red",
    }, headers=headers)
    assert res.status_code == 422

    res = await client.post("/api/v1/crop-plans", json={"garden_season_id": 9999}, headers=headers)
    assert res.status_code == 404

    res = await client.post("/api/v1/crop-plans", json={
        "garden_season_id": season.id, "variety_id": 9999,
    }, headers=headers)
    assert res.status_code == 404
    assert res.json()["detail"] == "Variety not found"


async def test_generate_tasks(client: AsyncClient, db, make_season, make_crop_plan):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user)
    plan = await make_crop_plan(user, season)

    res = await client.post(f"/api/v1/crop-plans/{plan.id}/generate-tasks", headers=headers)

    assert res.status_code == 200
    data = res.json()
    assert data["success"] is True
    assert data["crop_plan_id"] == plan.id
    assert data["tasks_created"] > 0

    # Regenerating replaces rather than appends
    res = await client.post(f"/api/v1/crop-plans/{plan.id}/generate-tasks", headers=headers)
    tasks = (await client.get(f"/api/v1/crop-plans/{plan.id}/tasks", headers=headers)).json()
    assert len(tasks) == res.json()["tasks_created"] == data["tasks_created"]


async def test_generate_tasks_requires_auth(client: AsyncClient, db, make_season, make_crop_plan):
    _, user = await _register_and_login(client, db)
    season = await make_season(user)
    plan = await make_crop_plan(user, season)

    res = await client.post(f"/api/v1/crop-plans/{plan.id}/generate-tasks")
    assert res.status_code == 401


async def test_generate_tasks_missing_frost_date(client: AsyncClient, db, make_season, make_crop_plan):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user, last_frost_date=None)
    plan = await make_crop_plan(user, season)

    res = await client.post(f"/api/v1/crop-plans/{plan.id}/generate-tasks", headers=headers)

    assert res.status_code == 400
    assert res.json()["detail"] == MissingFrostDate.default_message


async def test_generate_tasks_uses_profile_frost_date(client: AsyncClient, db, make_season, make_crop_plan):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user, year=2025, last_frost_date=None)
    plan = await make_crop_plan(user, season, planting_method="direct_seed")

    res = await client.patch("/api/v1/users/me", json={"last_frost_date": "2019-04-20"}, headers=headers)
    assert res.status_code == 200

    res = await client.post(f"/api/v1/crop-plans/{plan.id}/generate-tasks", headers=headers)
    assert res.status_code == 200

    tasks = (await client.get(f"/api/v1/crop-plans/{plan.id}/tasks", headers=headers)).json()
    sow = next(t for t in tasks if t["subtype"] == "direct_sow")
    assert sow["start_date"] == "2025-04-20"


async def test_other_users_plan_is_hidden(client: AsyncClient, db, make_season, make_crop_plan):
    _, owner = await _register_and_login(client, db, email="owner@example.com")
    season = await make_season(owner)
    plan = await make_crop_plan(owner, season)
    headers, _ = await _register_and_login(client, db, email="other@example.com")

    res = await client.post(f"/api/v1/crop-plans/{plan.id}/generate-tasks", headers=headers)
    assert res.status_code == 404
    res = await client.get(f"/api/v1/crop-plans/{plan.id}/tasks", headers=headers)
    assert res.status_code == 404
    res = await client.get(f"/api/v1/crop-plans/{plan.id}", headers=headers)
    assert res.status_code == 404


async def test_list_tasks_ordered_by_start(client: AsyncClient, db, make_season, make_crop_plan):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user)
    plan = await make_crop_plan(user, season, label="Pepper", color_hex="#aa0000")
    await client.post(f"/api/v1/crop-plans/{plan.id}/generate-tasks", headers=headers)

    res = await client.get(f"/api/v1/crop-plans/{plan.id}/tasks", headers=headers)

    assert res.status_code == 200
    tasks = res.json()
    starts = [t["start_date"] for t in tasks]
    assert starts == sorted(starts)
    assert tasks[0]["title"] == "Start Pepper Seeds"
    assert tasks[0]["start_date"] == "2025-03-29"
    assert all(t["color_hex"] == "#aa0000" for t in tasks)
    assert all(t["start_date"] <= t["end_date"] for t in tasks)


async def test_patch_plan_regenerates(client: AsyncClient, db, make_season, make_crop_plan):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user)
    plan = await make_crop_plan(user, season)
    await client.post(f"/api/v1/crop-plans/{plan.id}/generate-tasks", headers=headers)

    res = await client.patch(f"/api/v1/crop-plans/{plan.id}", json={
        "planting_method": "direct_seed", "dtm_days": 50,
    }, headers=headers)

    assert res.status_code == 200
    data = res.json()
    assert data["plan"]["planting_method"] == "direct_seed"
    assert data["generation"]["success"] is True

    tasks = (await client.get(f"/api/v1/crop-plans/{plan.id}/tasks", headers=headers)).json()
    subtypes = {t["subtype"] for t in tasks}
    assert "seed_start" not in subtypes
    harvest = next(t for t in tasks if t["subtype"] == "harvest")
    assert date.fromisoformat(harvest["start_date"]) == date(2025, 6, 29)


async def test_season_generate_tasks(client: AsyncClient, db, make_season, make_crop_plan):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user)
    first = await make_crop_plan(user, season, label="Tomato")
    second = await make_crop_plan(user, season, label="Bean", planting_method="direct_seed")

    res = await client.post(f"/api/v1/seasons/{season.id}/generate-tasks", headers=headers)

    assert res.status_code == 200
    data = res.json()
    assert data["season_id"] == season.id
    assert [r["crop_plan_id"] for r in data["results"]] == [first.id, second.id]
    assert all(r["success"] for r in data["results"])
    assert data["tasks_created"] == sum(r["tasks_created"] for r in data["results"])


async def test_season_generate_tasks_not_found(client: AsyncClient, db):
    headers, _ = await _register_and_login(client, db)
    res = await client.post("/api/v1/seasons/9999/generate-tasks", headers=headers)
    assert res.status_code == 404


async def test_patch_rejects_null_for_required_fields(client: AsyncClient, db, make_season, make_crop_plan):
    headers, user = await _register_and_login(client, db)
    season = await make_season(user)
    plan = await make_crop_plan(user, season)

    res = await client.patch(f"/api/v1/crop-plans/{plan.id}", json={"planting_method": None}, headers=headers)
    assert res.status_code == 422
    res = await client.patch(f"/api/v1/crop-plans/{plan.id}", json={"quantity_planned": None}, headers=headers)
    assert res.status_code == 422

    # Nullable fields can still be cleared
    res = await client.patch(f"/api/v1/crop-plans/{plan.id}", json={"label": None}, headers=headers)
    assert res.status_code == 200
    assert res.json()["plan"]["planting_method"] == "transplant"
    assert res.json()["plan"]["label"] is None
