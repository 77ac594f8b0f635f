"""
Popular contests, best creators and admin statistics
"""
from conftest import run


def test_popular_contests_top_five_accepted_by_participation(client, make_contest):
    for count in (3, 40, 12, 7, 25, 1):
        make_contest("creator@example.com", status="Accepted", participation_count=count)
    make_contest("creator@example.com", status="Completed", participation_count=500)
    make_contest("creator@example.com", status="Pending", participation_count=300)

    response = client.get("/popular-contests")

    contests = response.json()["data"]["contests"]
    counts = [c["participation_count"] for c in contests]
    assert len(contests) == 5
    assert all(c["status"] == "Accepted" for c in contests)
    assert counts == sorted(counts, reverse=True)
    assert counts == [40, 25, 12, 7, 3]


def test_best_creators_ranked_by_participants(client, make_user, make_contest):
    make_user("ana@example.com", role="Creator", name="Ana", image="https://img.example.com/ana.png")
    make_contest("ana@example.com", status="Accepted", participation_count=10)
    make_contest("ana@example.com", status="Accepted", participation_count=15)
    make_contest("ghost@example.com", status="Accepted", participation_count=30)
    make_contest("bob@example.com", status="Accepted", participation_count=2)
    make_contest("bob@example.com", status="Pending", participation_count=1000)

    creators = client.get("/creators/best").json()["data"]["creators"]

    assert [c["email"] for c in creators] == ["ghost@example.com", "ana@example.com", "bob@example.com"]
    assert creators[0]["name"] == "Unknown Creator"
    assert creators[0]["image"].startswith("https://")
    assert creators[1]["name"] == "Ana"
    assert creators[1]["total_participants"] == 25
    assert creators[1]["contest_count"] == 2


def test_best_creators_limit(client, make_contest):
    for i in range(5):
        make_contest(f"c{i}@example.com", status="Accepted", participation_count=i)

    creators = client.get("/creators/best?limit=2").json()["data"]["creators"]

    assert [c["email"] for c in creators] == ["c4@example.com", "c3@example.com"]


def test_admin_stats_on_empty_store(client, make_user, headers_for):
    make_user("admin@example.com", role="Admin")

    stats = client.get("/admin-stats", headers=headers_for("admin@example.com")).json()["data"]

    assert stats["user_count"] == 1
    assert stats["contest_count"] == 0
    assert stats["total_revenue"] == 0
    assert stats["total_participation"] == 0
    assert stats["contests_by_status"] == {"Pending": 0, "Accepted": 0, "Rejected": 0, "Completed": 0}


def test_admin_stats_totals(client, db, make_user, make_contest, headers_for):
    make_user("admin@example.com", role="Admin")
    make_contest("creator@example.com", status="Accepted", participation_count=2)
    make_contest("creator@example.com", status="Pending")
    run(db.payments.insert_many([
        {"email": "a@example.com", "contest_id": "x", "amount": 10},
        {"email": "b@example.com", "contest_id": "x", "amount": 15.5}
    ]))

    stats = client.get("/admin-stats", headers=headers_for("admin@example.com")).json()["data"]

    assert stats["contest_count"] == 2
    assert stats["payment_count"] == 2
    assert stats["total_revenue"] == 25.5
    assert stats["total_participation"] == 2
    assert stats["contests_by_status"]["Accepted"] == 1
    assert stats["contests_by_status"]["Pending"] == 1


def test_admin_stats_requires_admin(client, make_user, headers_for):
    make_user("creator@example.com", role="Creator")

    assert client.get("/admin-stats").status_code == 401
    assert client.get("/admin-stats", headers=headers_for("creator@example.com")).status_code == 403


def test_best_creators_large_limit_is_capped(client, make_contest):
    for i in range(12):
        make_contest(f"c{i}@example.com", status="Accepted", participation_count=i)

    response = client.get("/creators/best?limit=50")

    assert response.status_code == 200
    assert len(response.json()["data"]["creators"]) == 10


def test_best_creators_unparsable_limit_uses_default(client, make_contest):
    for i in range(5):
        make_contest(f"c{i}@example.com", status="Accepted", participation_count=i)

    response = client.get("/creators/best?limit=lots")

    assert response.status_code == 200
    assert len(response.json()["data"]["creators"]) == 3
