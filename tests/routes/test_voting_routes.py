from datetime import timedelta

from boardroom.models import Minutes, Resolution
from boardroom.timeutils import utcnow


def test_api_requires_login(client, voting_resolution):
    response = client.get(f"/api/resolutions/{voting_resolution.id}")

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}


def test_member_casts_vote_and_reads_it_back(client, login, voting_resolution, board_members):
    login(board_members[0])

    response = client.post(
        f"/api/resolutions/{voting_resolution.id}/vote",
        json={"vote": "approve", "comment": "Agreed"},
    )
    data = response.get_json()

    assert response.status_code == 200
    assert data["success"] is True
    assert data["vote"]["vote"] == "approve"
    assert data["voting_complete"] is False
    assert data["status"] == "voting"

    mine = client.get(f"/api/resolutions/{voting_resolution.id}/vote").get_json()
    assert mine["vote"]["comment"] == "Agreed"

    detail = client.get(f"/api/resolutions/{voting_resolution.id}").get_json()
    assert detail["votes_for"] == 1
    assert detail["can_vote"] is False


def test_invalid_vote_value(client, login, voting_resolution, board_members):
    login(board_members[0])

    response = client.post(
        f"/api/resolutions/{voting_resolution.id}/vote", json={"vote": "yes"}
    )

    assert response.status_code == 400
    assert "Invalid vote value" in response.get_json()["error"]


def test_second_vote_is_refused(client, login, voting_resolution, board_members):
    login(board_members[0])
    client.post(f"/api/resolutions/{voting_resolution.id}/vote", json={"vote": "approve"})

    response = client.post(
        f"/api/resolutions/{voting_resolution.id}/vote", json={"vote": "reject"}
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "You have already voted on this resolution."


def test_viewer_gets_forbidden(client, login, voting_resolution, user_factory):
    login(user_factory("observer", role="viewer"))

    response = client.post(
        f"/api/resolutions/{voting_resolution.id}/vote", json={"vote": "approve"}
    )

    assert response.status_code == 403


def test_final_vote_completes_resolution(
    client, login, db_session, voting_resolution, admin_user, board_members
):
    voters = [admin_user, *board_members]
    for voter, choice in zip(voters, ["approve", "reject", "reject", "abstain"]):
        login(voter)
        response = client.post(
            f"/api/resolutions/{voting_resolution.id}/vote", json={"vote": choice}
        )

    data = response.get_json()
    assert data["voting_complete"] is True
    assert data["status"] == "rejected"
    assert db_session.get(Resolution, voting_resolution.id).status == "rejected"


def test_live_statistics(client, login, voting_resolution, board_members):
    login(board_members[0])
    client.post(f"/api/resolutions/{voting_resolution.id}/vote", json={"vote": "approve"})
    login(board_members[1])
    client.post(f"/api/resolutions/{voting_resolution.id}/vote", json={"vote": "approve"})

    stats = client.get(f"/api/resolutions/{voting_resolution.id}/statistics").get_json()[
        "statistics"
    ]

    assert stats["total_votes"] == 2
    assert stats["participation_rate"] == 50
    assert stats["quorum_status"] == "met"
    assert stats["passed"] is True


def test_minutes_voting_uses_the_same_endpoints(
    client, login, db_session, board_members
):
    minutes = Minutes(
        title="January minutes",
        status="voting",
        voting_deadline=utcnow() + timedelta(days=3),
    )
    db_session.add(minutes)
    db_session.commit()
    login(board_members[0])

    response = client.post(f"/api/minutes/{minutes.id}/vote", json={"vote": "reject"})

    assert response.status_code == 200
    assert minutes.votes[0].vote == "reject"

    listing = client.get("/api/minutes").get_json()["minutes"]
    assert listing[0]["has_voted"] is True


def test_members_do_not_see_drafts(client, login, db_session, board_members):
    draft = Resolution(resolution_number="RES-D", title="Draft idea", content="")
    db_session.add(draft)
    db_session.commit()
    login(board_members[0])

    assert client.get("/api/resolutions").get_json()["resolutions"] == []
    assert client.get(f"/api/resolutions/{draft.id}").status_code == 404


def test_cron_sweep_requires_secret(client, db_session, voting_resolution):
    voting_resolution.voting_deadline = utcnow() - timedelta(minutes=1)
    db_session.commit()

    assert client.post("/api/cron/voting-deadlines").status_code == 401

    response = client.post(
        "/api/cron/voting-deadlines", headers={"X-Cron-Secret": "cron-secret"}
    )
    processed = response.get_json()["processed"]

    assert response.status_code == 200
    assert processed[0]["reason"] == "deadline_expired"
    assert processed[0]["status"] == "rejected"
