from datetime import timedelta

from boardroom.models import Resolution
from boardroom.timeutils import utcnow


def test_non_admin_is_forbidden(client, login, board_members):
    login(board_members[0])

    response = client.post("/admin/resolutions/new", json={"title": "Sneaky"})

    assert response.status_code == 403


def test_create_resolution_assigns_number_and_defaults(auth_client, db_session):
    response = auth_client.post(
        "/admin/resolutions/new",
        json={"title": "Adopt new bylaws", "content": "Text", "minimum_quorum": "150"},
    )
    data = response.get_json()

    assert response.status_code == 200
    resolution = data["resolution"]
    assert resolution["status"] == "draft"
    assert resolution["resolution_number"] == f"RES-{utcnow().year}-001"
    assert resolution["minimum_quorum"] == 100

    second = auth_client.post("/admin/resolutions/new", json={"title": "Second"}).get_json()
    assert second["resolution"]["resolution_number"] == f"RES-{utcnow().year}-002"


def test_create_resolution_requires_title(auth_client):
    response = auth_client.post("/admin/resolutions/new", json={"title": "  "})

    assert response.status_code == 400


def test_invalid_deadline_is_rejected(auth_client):
    response = auth_client.post(
        "/admin/minutes/new", json={"title": "April", "voting_deadline": "next week"}
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid voting deadline."


def test_open_then_complete_resolution(auth_client, db_session, board_members):
    created = auth_client.post(
        "/admin/resolutions/new",
        json={"title": "Approve auditor", "requires_majority": "false"},
    ).get_json()["resolution"]
    deadline = (utcnow() + timedelta(days=1)).isoformat() + "Z"

    opened = auth_client.post(
        f"/admin/resolutions/{created['id']}/open", json={"voting_deadline": deadline}
    )
    assert opened.status_code == 200
    assert opened.get_json()["resolutions"]["status"] == "voting"
    assert opened.get_json()["resolutions"]["total_eligible_voters"] == 4

    again = auth_client.post(f"/admin/resolutions/{created['id']}/open")
    assert again.status_code == 400

    completed = auth_client.post(f"/admin/resolutions/{created['id']}/complete").get_json()
    assert completed["reason"] == "manual_completion"
    assert completed["status"] == "rejected"
    assert completed["statistics"]["quorum_status"] == "not_met"


def test_update_blocked_once_voting(auth_client, voting_resolution):
    response = auth_client.post(
        f"/admin/resolutions/{voting_resolution.id}/update", json={"title": "Changed"}
    )

    assert response.status_code == 400


def test_update_and_delete_draft(auth_client, db_session):
    created = auth_client.post(
        "/admin/minutes/new", json={"title": "May minutes"}
    ).get_json()["minutes"]

    updated = auth_client.post(
        f"/admin/minutes/{created['id']}/update",
        json={"title": "May minutes (rev 2)", "minimum_quorum": "60"},
    ).get_json()
    assert updated["minutes"]["title"] == "May minutes (rev 2)"
    assert updated["minutes"]["minimum_quorum"] == 60

    deleted = auth_client.post(f"/admin/minutes/{created['id']}/delete")
    assert deleted.status_code == 200


def test_summary_and_vote_listing(client, login, admin_user, voting_resolution, board_members):
    login(board_members[0])
    client.post(
        f"/api/resolutions/{voting_resolution.id}/vote",
        json={"vote": "reject", "comment": "Too risky"},
    )
    login(admin_user)

    summary = client.get(f"/admin/resolutions/{voting_resolution.id}/summary").get_json()
    assert summary["statistics"]["reject_votes"] == 1
    assert summary["statistics"]["comment_analysis"]["has_significant_concerns"] is True
    assert "Reject: 1 (100%)" in summary["report"]
    assert summary["item"]["resolution_number"] == "RES-2026-001"

    votes = client.get(f"/admin/resolutions/{voting_resolution.id}/votes").get_json()
    assert votes["num_voters_voted"] == 1
    assert votes["num_possible_voters"] == 4
    assert votes["votes"][0]["voter_name"] == "Member1"


def test_withdraw(auth_client, db_session, voting_resolution):
    response = auth_client.post(f"/admin/resolutions/{voting_resolution.id}/withdraw")

    assert response.status_code == 200
    assert db_session.get(Resolution, voting_resolution.id).status == "withdrawn"


def test_create_board_member(auth_client):
    response = auth_client.post(
        "/admin/users/new",
        json={
            "username": "treasurer",
            "email": "Treasurer@Example.com",
            "password": "long-enough",
            "position": "Treasurer",
        },
    )

    assert response.status_code == 200
    assert response.get_json()["user"]["email"] == "treasurer@example.com"

    duplicate = auth_client.post(
        "/admin/users/new",
        json={"username": "treasurer", "email": "t2@example.com", "password": "long-enough"},
    )
    assert duplicate.status_code == 400

    users = auth_client.get("/admin/users").get_json()
    assert users["eligible_voters"] == 2


def test_unrepresentable_quorum_falls_back_to_default(auth_client):
    response = auth_client.post(
        "/admin/minutes/new", json={"title": "June minutes", "minimum_quorum": "inf"}
    )

    assert response.status_code == 200
    assert response.get_json()["minutes"]["minimum_quorum"] is None

    huge = auth_client.post(
        "/admin/minutes/new", json={"title": "July minutes", "minimum_quorum": "1e999"}
    )
    assert huge.status_code == 200


def test_create_meeting_with_schedule(auth_client):
    response = auth_client.post(
        "/admin/meetings/new",
        json={
            "title": "Q2 board meeting",
            "meeting_date": "2026-06-15",
            "start_time": "09:30",
            "end_time": "11:00",
            "location": "Boardroom A",
        },
    )

    assert response.status_code == 200
    meeting = response.get_json()["meeting"]
    assert meeting["meeting_date"] == "2026-06-15"
    assert meeting["start_time"] == "09:30:00"
    assert meeting["end_time"] == "11:00:00"

    listing = auth_client.get("/admin/meetings").get_json()["meetings"]
    assert listing[0]["meeting_date"] == "2026-06-15"


def test_create_meeting_rejects_bad_schedule(auth_client):
    bad_date = auth_client.post(
        "/admin/meetings/new", json={"title": "Q3", "meeting_date": "someday"}
    )
    assert bad_date.status_code == 400

    backwards = auth_client.post(
        "/admin/meetings/new",
        json={"title": "Q3", "start_time": "11:00", "end_time": "10:00"},
    )
    assert backwards.status_code == 400
