import pytest


@pytest.fixture
def seeded(client):
    for group in ({"group_id": "g1", "name": "Team EEG"}, {"group_id": "g2", "name": "Team Eye-Track"}):
        assert client.post("/api/v1/groups", json=group).status_code == 201
    students = [
        {"student_id": "s1", "display_name": "Alex", "email": "alex@student.nhlstenden.com", "group_id": "g1"},
        {"student_id": "s2", "display_name": "Bo", "email": "bo@student.nhlstenden.com", "group_id": "g1"},
        {"student_id": "s3", "display_name": "Casey", "email": "casey@student.nhlstenden.com", "group_id": "g2"},
    ]
    for student in students:
        assert client.post("/api/v1/students", json=student).status_code == 201
    for student_id, amount in (("s1", 10), ("s2", 5), ("s3", 12)):
        response = client.post("/api/v1/awards/students", json={"target_id": student_id, "amount": amount})
        assert response.status_code == 201
    for group_id, amount in (("g1", 20), ("g2", 8)):
        response = client.post("/api/v1/awards/groups", json={"target_id": group_id, "amount": amount})
        assert response.status_code == 201
    return client


def test_healthcheck(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_individual_leaderboard(seeded):
    response = seeded.get("/api/v1/leaderboard/students")

    assert response.status_code == 200
    rows = response.json()
    assert [(row["student_id"], row["rank"]) for row in rows] == [("s3", 1), ("s1", 2), ("s2", 3)]

    podium = seeded.get("/api/v1/leaderboard/students", params={"limit": 2}).json()
    assert len(podium) == 2


def test_group_leaderboard(seeded):
    rows = seeded.get("/api/v1/leaderboard/groups").json()

    assert [row["group_id"] for row in rows] == ["g1", "g2"]
    first = rows[0]
    assert first["size"] == 2
    assert first["avg_indiv"] == 7.5
    assert first["bonus"] == 20
    assert first["total"] == 27.5


def test_standing_lookups(seeded):
    assert seeded.get("/api/v1/leaderboard/students/s2").json()["rank"] == 3
    assert seeded.get("/api/v1/leaderboard/groups/g2").json()["total"] == 20
    assert seeded.get("/api/v1/leaderboard/students/ghost").status_code == 404


def test_negative_award_lowers_rank(seeded):
    response = seeded.post("/api/v1/awards/students", json={"target_id": "s3", "amount": -20, "reason": "Penalty"})
    assert response.status_code == 201
    assert response.json()["kind"] == "student"

    standing = seeded.get("/api/v1/leaderboard/students/s3").json()
    assert standing["points"] == -8
    assert standing["rank"] == 3


def test_award_log_newest_first(seeded):
    awards = seeded.get("/api/v1/awards", params={"limit": 2}).json()

    assert [(a["kind"], a["target_id"]) for a in awards] == [("group", "g2"), ("group", "g1")]


def test_student_awards_include_group(seeded):
    awards = seeded.get("/api/v1/students/s1/awards").json()

    assert {(a["kind"], a["target_id"]) for a in awards} == {("student", "s1"), ("group", "g1")}


def test_create_student_errors(client):
    bad_email = client.post("/api/v1/students", json={"display_name": "Alex", "email": "alex@gmail.com"})
    assert bad_email.status_code == 400

    client.post("/api/v1/students", json={"display_name": "Alex", "email": "alex@student.nhlstenden.com"})
    duplicate = client.post("/api/v1/students", json={"display_name": "Al", "email": "alex@student.nhlstenden.com"})
    assert duplicate.status_code == 409

    assert client.post("/api/v1/awards/students", json={"target_id": "ghost", "amount": 1}).status_code == 404


def test_delete_student(seeded):
    assert seeded.delete("/api/v1/students/s1").status_code == 204
    assert seeded.get("/api/v1/students/s1").status_code == 404
    assert seeded.delete("/api/v1/students/s1").status_code == 404


def test_group_assignment_and_removal(seeded):
    response = seeded.put("/api/v1/students/s3/group", json={"group_id": "g1"})
    assert response.status_code == 200
    assert response.json()["group_id"] == "g1"

    assert seeded.delete("/api/v1/groups/g2").status_code == 204
    rows = seeded.get("/api/v1/leaderboard/groups").json()
    assert [row["group_id"] for row in rows] == ["g1"]
    assert rows[0]["size"] == 3


def test_badge_toggle(seeded):
    badge = seeded.post("/api/v1/badges", json={"title": "Helper", "image": "helper.png"}).json()

    response = seeded.put(f"/api/v1/students/s2/badges/{badge['badge_id']}", json={"has_badge": True})
    assert response.status_code == 200
    assert response.json()["points"] == 55
    assert response.json()["badge_ids"] == [badge["badge_id"]]

    earned = seeded.get("/api/v1/students/s2/badges").json()
    assert [b["title"] for b in earned] == ["Helper"]

    assert seeded.delete(f"/api/v1/badges/{badge['badge_id']}").status_code == 204
    assert seeded.get("/api/v1/students/s2/badges").json() == []


def test_bingo_match_and_patterns(seeded):
    seeded.put("/api/v1/students/s1/bingo", json={"Q1": ["Drake", "Adele", "Kendrick Lamar"], "Q2": ["Dark"]})
    seeded.put("/api/v1/students/s2/bingo", json={"Q1": ["adele", "Beyoncé"], "Q2": ["Lupin"]})

    first = seeded.post("/api/v1/bingo/match", json={"active_id": "s1", "question": "Q1", "other_id": "s2"})
    assert first.status_code == 200
    assert first.json() == {"question": "Q1", "result": {"other_id": "s2", "matched_answer": "Adele"}}

    second = seeded.post("/api/v1/bingo/match", json={"active_id": "s1", "question": "Q2", "other_id": "s2"}).json()
    assert second["result"]["matched_answer"] is None

    none_chosen = seeded.post("/api/v1/bingo/match", json={"active_id": "s1", "question": "Q2", "other_id": ""})
    assert none_chosen.json()["result"] is None

    flags = seeded.post(
        "/api/v1/bingo/patterns",
        json={"matches": {"Q1": first.json()["result"], "Q2": {"other_id": "s3", "matched_answer": "Dark"}}},
    ).json()
    assert flags == {
        "row1": True,
        "row2": False,
        "col1": False,
        "col2": False,
        "diag1": False,
        "diag2": False,
        "full": False,
    }


def test_bingo_errors(seeded):
    unknown_question = seeded.post("/api/v1/bingo/match", json={"active_id": "s1", "question": "Q7", "other_id": "s2"})
    assert unknown_question.status_code == 400

    unknown_student = seeded.post("/api/v1/bingo/match", json={"active_id": "s1", "question": "Q1", "other_id": "ghost"})
    assert unknown_student.status_code == 404

    assert len(seeded.get("/api/v1/bingo/questions").json()) == 4


def test_backup_round_trip(seeded):
    backup = seeded.get("/api/v1/backup").json()
    assert len(backup["students"]) == 3

    seeded.delete("/api/v1/students/s1")
    restored = seeded.post("/api/v1/backup/restore", json=backup)
    assert restored.status_code == 200
    assert restored.json()["restored"]["students"] == 3
    assert seeded.get("/api/v1/students/s1").status_code == 200

    assert seeded.post("/api/v1/backup/restore", json=["not", "an", "object"]).status_code == 400


def test_mirror_requires_configuration(client):
    assert client.post("/api/v1/mirror").status_code == 503
    assert client.post("/api/v1/mirror/students", json=[]).status_code == 503


def test_restore_rejects_duplicate_emails(seeded):
    backup = {
        "students": [
            {"id": "s8", "name": "Alex", "email": "a@student.nhlstenden.com"},
            {"id": "s9", "name": "Also Alex", "email": "a@student.nhlstenden.com"},
        ]
    }

    response = seeded.post("/api/v1/backup/restore", json=backup)

    assert response.status_code == 400
    assert len(seeded.get("/api/v1/students").json()) == 3


def test_create_student_in_unknown_group(client):
    response = client.post("/api/v1/students", json={"display_name": "Alex", "group_id": "ghost"})

    assert response.status_code == 404
