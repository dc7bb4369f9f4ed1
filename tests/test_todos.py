import pytest


@pytest.fixture
def milk(client, alice, alice_project):
    resp = client.post(
        "/todo/alice",
        json={
            "title": "Buy milk",
            "description": "2%",
            "projectId": alice_project,
            "priority": 2,
            "ending": "2026-10-20T15:00:00",
        },
        headers=alice,
    )
    assert resp.status_code == 201
    return resp.get_json()


def test_create_and_list(client, alice, milk, alice_project):
    assert milk["t_done"] is False
    assert milk["t_beginning"] is not None

    resp = client.get("/todos/alice", headers=alice)
    assert resp.status_code == 200
    todos = resp.get_json()
    assert len(todos) == 1
    assert todos[0]["t_title"] == "Buy milk"
    assert todos[0]["t_done"] is False
    assert todos[0]["t_p_project"] == alice_project


def test_round_trip(client, alice, milk):
    resp = client.get(f"/todo/{milk['t_id']}/user/alice", headers=alice)
    assert resp.status_code == 200
    assert resp.get_json() == milk
    assert milk["t_description"] == "2%"
    assert milk["t_pr_priority"] == 2
    assert milk["t_ending"] == "2026-10-20T15:00:00"
    assert milk["t_reminder"] is None

    assert client.get(f"/todo/{milk['t_id']}").get_json() == milk
    assert client.get("/todo").get_json() == [milk]


def test_create_requires_fields(client, alice, alice_project):
    resp = client.post("/todo/alice", json={"title": "x", "priority": 1}, headers=alice)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Missing required fields: projectId"}


def test_create_with_bad_priority_is_rejected(client, alice, alice_project):
    resp = client.post(
        "/todo/alice", json={"title": "x", "projectId": alice_project, "priority": 99}, headers=alice
    )
    assert resp.status_code == 400


def test_create_in_someone_elses_project(client, alice, bob, alice_project):
    resp = client.post(
        "/todo/bob", json={"title": "x", "projectId": alice_project, "priority": 1}, headers=bob
    )
    assert resp.status_code == 404
    assert client.get(f"/project/{alice_project}/todo").get_json() == []


def test_bad_timestamp_is_rejected(client, alice, alice_project):
    resp = client.post(
        "/todo/alice",
        json={"title": "x", "projectId": alice_project, "priority": 1, "ending": "tomorrow"},
        headers=alice,
    )
    assert resp.status_code == 400


def test_partial_update_keeps_other_fields(client, alice, milk):
    resp = client.put(f"/todo/{milk['t_id']}/user/alice", json={"done": True}, headers=alice)
    assert resp.status_code == 200
    updated = resp.get_json()
    assert updated["t_done"] is True
    for key in ("t_title", "t_description", "t_pr_priority", "t_ending", "t_beginning", "t_p_project"):
        assert updated[key] == milk[key]


def test_update_requires_a_field(client, alice, milk):
    resp = client.put(f"/todo/{milk['t_id']}/user/alice", json={"colour": "red"}, headers=alice)
    assert resp.status_code == 400


def test_move_to_foreign_project_is_refused(client, alice, bob, milk):
    bob_project = client.post("/project/bob", json={"title": "Work"}, headers=bob).get_json()["p_id"]

    resp = client.put(f"/todo/{milk['t_id']}/user/alice", json={"projectId": bob_project}, headers=alice)
    assert resp.status_code == 404


def test_other_user_cannot_see_or_change_todo(client, alice, bob, milk):
    todo_id = milk["t_id"]
    assert client.get(f"/todo/{todo_id}/user/bob", headers=bob).status_code == 404
    assert client.put(f"/todo/{todo_id}/user/bob", json={"title": "x"}, headers=bob).status_code == 404
    assert client.delete(f"/todo/{todo_id}/user/bob", headers=bob).status_code == 404
    assert client.get("/todos/bob", headers=bob).get_json() == []

    assert client.get(f"/todo/{todo_id}/user/alice", headers=alice).get_json()["t_title"] == "Buy milk"


def test_delete(client, alice, milk):
    resp = client.delete(f"/todo/{milk['t_id']}/user/alice", headers=alice)
    assert resp.status_code == 200
    assert client.get(f"/todo/{milk['t_id']}").status_code == 404
    assert client.delete(f"/todo/{milk['t_id']}/user/alice", headers=alice).status_code == 404


def test_search(client, alice, milk):
    resp = client.get("/todo/search?term=milk&user=alice", headers=alice)
    assert resp.status_code == 200
    assert [t["t_id"] for t in resp.get_json()] == [milk["t_id"]]

    resp = client.get("/todo/search?term=bread&user=alice", headers=alice)
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_search_description_and_wildcards(client, alice, milk):
    assert client.get("/todo/search?term=2%25&user=alice", headers=alice).get_json() == []
    resp = client.get("/todo/search?term=2%25&user=alice&searchDescription=true", headers=alice)
    assert len(resp.get_json()) == 1

    # % in the term is matched literally
    resp = client.get("/todo/search?term=%25&user=alice", headers=alice)
    assert resp.get_json() == []


def test_search_requires_term_and_user(client, alice):
    assert client.get("/todo/search?user=alice", headers=alice).status_code == 400
    assert client.get("/todo/search?term=milk", headers=alice).status_code == 400


def test_filter_by_date(client, alice, milk):
    resp = client.get("/todo/date/2026-10-20?user=alice", headers=alice)
    assert [t["t_id"] for t in resp.get_json()] == [milk["t_id"]]
    assert client.get("/todo/date/2026-10-21?user=alice", headers=alice).get_json() == []
    assert client.get("/todo/date/not-a-date?user=alice", headers=alice).status_code == 400


def test_filter_by_range_and_priority(client, alice, milk):
    url = "/todo/filter?user=alice&start=2026-10-20&end=2026-10-21"
    assert len(client.get(url, headers=alice).get_json()) == 1
    assert len(client.get(url + "&priority=2", headers=alice).get_json()) == 1
    assert client.get(url + "&priority=3", headers=alice).get_json() == []
    assert client.get("/todo/filter?user=alice&start=2026-10-21", headers=alice).get_json() == []
    assert len(client.get("/todo/filter?user=alice", headers=alice).get_json()) == 1


def test_filter_done(client, alice, milk):
    assert client.get("/todo/filter/done?user=alice", headers=alice).get_json() == []
    assert len(client.get("/todo/filter/done?user=alice&done=false", headers=alice).get_json()) == 1

    client.put(f"/todo/{milk['t_id']}/user/alice", json={"done": True}, headers=alice)
    assert len(client.get("/todo/filter/done?user=alice", headers=alice).get_json()) == 1


def test_filters_are_scoped(client, alice, bob, milk):
    assert client.get("/todo/filter?user=bob", headers=bob).get_json() == []
    assert client.get("/todo/filter?user=bob", headers=alice).status_code == 403


def test_filter_range_end_date_covers_whole_day(client, alice, milk):
    resp = client.get("/todo/filter?user=alice&start=2026-10-20&end=2026-10-20", headers=alice)
    assert resp.status_code == 200
    assert [t["t_id"] for t in resp.get_json()] == [milk["t_id"]]

    # an explicit time stays an exact bound
    resp = client.get("/todo/filter?user=alice&end=2026-10-20T12:00:00", headers=alice)
    assert resp.get_json() == []


def test_fractional_ids_are_rejected(client, alice, alice_project):
    resp = client.post(
        "/todo/alice", json={"title": "x", "projectId": alice_project, "priority": 1.7}, headers=alice
    )
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "priority must be an integer"}

    resp = client.post(
        "/todo/alice", json={"title": "x", "projectId": alice_project, "priority": 2.0}, headers=alice
    )
    assert resp.status_code == 201
    assert resp.get_json()["t_pr_priority"] == 2
