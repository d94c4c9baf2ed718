import smtplib

from flask import current_app

from boardroom.extensions import db
from boardroom.models import Minutes, Resolution
from boardroom.services.ballots import (
    ballots_for,
    context_for,
    count_eligible_voters,
    statistics_for,
)
from boardroom.services.mail import send_voting_summary_email
from boardroom.services.votes import VotingClosed, VotingError
from boardroom.services.voting import (
    analyze_voting_timeline,
    determine_completion_status,
    outcome_status,
    render_voting_summary,
)
from boardroom.timeutils import utcnow

VOTABLE_MODELS = (Resolution, Minutes)


def open_voting(item, deadline=None, now=None):
    now = now or utcnow()
    if item.status not in item.OPENABLE_STATUSES:
        raise VotingError(
            f"Cannot open voting on a {item.KIND} with status '{item.status}'."
        )

    deadline = deadline or item.voting_deadline
    if deadline is not None and deadline <= now:
        raise VotingError("Voting deadline must be in the future.")

    item.status = "voting"
    item.voting_deadline = deadline
    item.voting_started_at = now
    if not item.total_eligible_voters:
        item.total_eligible_voters = count_eligible_voters()
    db.session.commit()

    current_app.logger.info(
        "Voting opened on %s %s (%s eligible voters, deadline %s)",
        item.KIND,
        item.id,
        item.total_eligible_voters,
        item.voting_deadline,
    )


def withdraw(item):
    if item.status in (item.PASSED_STATUS, item.FAILED_STATUS):
        raise VotingError(f"A completed {item.KIND} cannot be withdrawn.")

    item.status = "withdrawn"
    db.session.commit()
    current_app.logger.info("%s %s withdrawn", item.KIND, item.id)


def send_summary(item, stats, timeline=None):
    try:
        return send_voting_summary_email(item, stats, timeline)
    except (RuntimeError, smtplib.SMTPException, OSError):
        current_app.logger.exception(
            "Failed to send voting summary email for %s %s", item.KIND, item.id
        )
        return 0


def complete_voting(item, reason, now=None, completed_at=None):
    if not item.is_voting:
        raise VotingClosed(f"This {item.KIND} is not open for voting.")

    now = now or utcnow()
    stats = statistics_for(item)

    item.status = outcome_status(type(item), stats["passed"])
    item.is_unanimous = stats["is_unanimous"]
    completed_at = completed_at or now
    item.voting_completed_at = completed_at
    item.passed_at = completed_at if stats["passed"] else None
    db.session.commit()

    current_app.logger.info(
        "Voting on %s %s completed (%s): %s - %s",
        item.KIND,
        item.id,
        reason,
        item.status,
        stats["passed_reason"],
    )

    timeline = analyze_voting_timeline(
        ballots_for(item), item.voting_started_at, item.voting_completed_at
    )
    send_summary(item, stats, timeline)
    return stats


def check_completion(item, now=None):
    now = now or utcnow()
    eligible = context_for(item).total_eligible_voters
    status = determine_completion_status(
        len(item.votes), eligible, item.voting_deadline, now
    )

    if not item.is_voting:
        status.update(is_complete=False, reason="not_complete", completed_at=None)
        return status

    if status["is_complete"]:
        complete_voting(item, status["reason"], now=now, completed_at=status["completed_at"])
    return status


def check_expired_deadlines(now=None):
    now = now or utcnow()
    processed = []

    for model in VOTABLE_MODELS:
        expired = (
            model.query.filter(
                model.status == "voting",
                model.voting_deadline.isnot(None),
                model.voting_deadline <= now,
            )
            .order_by(model.id)
            .all()
        )
        for item in expired:
            status = check_completion(item, now=now)
            processed.append(
                {
                    "kind": item.KIND,
                    "id": item.id,
                    "reason": status["reason"],
                    "status": item.status,
                }
            )

    current_app.logger.info("Deadline sweep completed %d item(s)", len(processed))
    return processed


def voting_summary(item):
    stats = statistics_for(item)
    ended_at = item.voting_completed_at or item.voting_deadline
    timeline = analyze_voting_timeline(ballots_for(item), item.voting_started_at, ended_at)
    return {
        "statistics": stats,
        "timeline": timeline,
        "report": render_voting_summary(item.display_title, stats, timeline),
    }
