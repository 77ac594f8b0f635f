"""
Registration, profiles, role probes and admin user management
"""
from conftest import run


def test_register_twice_keeps_one_record(client, db):
    first = client.post("/users", json={"email": "ana@example.com", "name": "Ana"})
    second = client.post("/users", json={"email": "ana@example.com", "name": "Ana Again"})

    assert first.status_code == 201
    assert first.json()["data"]["inserted_id"]

    assert second.status_code == 200
    assert second.json()["message"] == "User already exists"
    assert second.json()["data"]["inserted_id"] is None

    assert run(db.users.count_documents({"email": "ana@example.com"})) == 1
    assert run(db.users.find_one({"email": "ana@example.com"}))["name"] == "Ana"


def test_register_ignores_client_role(client, db):
    client.post("/users", json={"email": "sneaky@example.com", "role": "Admin"})

    user = run(db.users.find_one({"email": "sneaky@example.com"}))
    assert user["role"] == "User"


def test_get_user(client, make_user):
    make_user("ana@example.com", role="Creator", name="Ana")

    response = client.get("/users/ana@example.com")

    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["name"] == "Ana"
    assert user["role"] == "Creator"
    assert "_id" not in user


def test_get_unknown_user_is_404(client):
    assert client.get("/users/nobody@example.com").status_code == 404


def test_list_users_is_paginated(client, make_user, headers_for):
    make_user("admin@example.com", role="Admin")
    for i in range(4):
        make_user(f"user{i}@example.com")

    response = client.get("/users?page=2&limit=2", headers=headers_for("admin@example.com"))

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["users"]) == 2
    assert data["pagination"] == {"total": 5, "page": 2, "limit": 2, "total_pages": 3}


def test_list_users_bad_paging_falls_back_to_defaults(client, make_user, headers_for):
    make_user("admin@example.com", role="Admin")

    response = client.get("/users?page=abc&limit=-3", headers=headers_for("admin@example.com"))

    assert response.status_code == 200
    pagination = response.json()["data"]["pagination"]
    assert pagination["page"] == 1
    assert pagination["limit"] == 10


def test_update_own_profile(client, db, make_user, headers_for):
    make_user("ana@example.com")

    response = client.patch(
        "/users/profile/ana@example.com",
        json={"name": "Ana Maria", "image": "https://img.example.com/ana.png"},
        headers=headers_for("ana@example.com")
    )

    assert response.status_code == 200
    assert response.json()["data"]["modified_count"] == 1
    user = run(db.users.find_one({"email": "ana@example.com"}))
    assert user["name"] == "Ana Maria"
    assert user["role"] == "User"


def test_update_someone_elses_profile_is_403(client, make_user, headers_for):
    make_user("ana@example.com")
    make_user("bob@example.com")

    response = client.patch(
        "/users/profile/ana@example.com",
        json={"name": "Hacked"},
        headers=headers_for("bob@example.com")
    )

    assert response.status_code == 403


def test_role_update_rejects_unknown_role(client, make_user, headers_for):
    make_user("admin@example.com", role="Admin")
    user = make_user("ana@example.com")

    response = client.patch(
        f"/users/role/{user['_id']}",
        json={"role": "Superuser"},
        headers=headers_for("admin@example.com")
    )

    assert response.status_code == 400
    assert response.json()["errors"]


def test_role_update_malformed_and_missing_ids(client, make_user, headers_for):
    make_user("admin@example.com", role="Admin")
    headers = headers_for("admin@example.com")

    malformed = client.patch("/users/role/not-an-id", json={"role": "Creator"}, headers=headers)
    missing = client.patch("/users/role/507f1f77bcf86cd799439011", json={"role": "Creator"}, headers=headers)

    assert malformed.status_code == 400
    assert missing.status_code == 404


def test_role_probes(client, make_user, headers_for):
    make_user("admin@example.com", role="Admin")
    make_user("creator@example.com", role="Creator")

    admin = client.get("/users/admin/admin@example.com", headers=headers_for("admin@example.com"))
    creator = client.get("/users/creator/creator@example.com", headers=headers_for("creator@example.com"))
    not_admin = client.get("/users/admin/creator@example.com", headers=headers_for("creator@example.com"))

    assert admin.json()["data"] == {"admin": True}
    assert creator.json()["data"] == {"creator": True}
    assert not_admin.json()["data"] == {"admin": False}


def test_role_probe_for_other_email_is_403(client, make_user, headers_for):
    make_user("ana@example.com")

    response = client.get("/users/admin/admin@example.com", headers=headers_for("ana@example.com"))

    assert response.status_code == 403
