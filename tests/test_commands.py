from datetime import timedelta

from boardroom.timeutils import utcnow


def test_check_voting_deadlines_command(app, db_session, voting_resolution):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["check-voting-deadlines"])
    assert result.exit_code == 0
    assert "No expired votes." in result.output

    voting_resolution.voting_deadline = utcnow() - timedelta(minutes=5)
    db_session.commit()

    result = runner.invoke(args=["check-voting-deadlines"])
    assert result.exit_code == 0
    assert f"resolution {voting_resolution.id}: deadline_expired -> rejected" in result.output
