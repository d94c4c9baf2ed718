from flask import current_app
from sqlalchemy.exc import IntegrityError

from boardroom.extensions import db
from boardroom.services.voting import VoteChoice
from boardroom.timeutils import utcnow


class VotingError(Exception):
    status_code = 400


class NotEligible(VotingError):
    status_code = 403


class VotingClosed(VotingError):
    pass


class DeadlinePassed(VotingError):
    pass


class AlreadyVoted(VotingError):
    pass


def refresh_vote_counts(item):
    if not hasattr(item, "votes_for"):
        return

    counts = {choice: 0 for choice in VoteChoice}
    for vote in item.votes:
        counts[VoteChoice.parse(vote.vote)] += 1

    item.votes_for = counts[VoteChoice.APPROVE]
    item.votes_against = counts[VoteChoice.REJECT]
    item.votes_abstain = counts[VoteChoice.ABSTAIN]


def cast_vote(item, user, choice, comment=None, now=None):
    now = now or utcnow()
    choice = VoteChoice.parse(choice)

    if not user.can_vote:
        raise NotEligible("Only active board members can vote.")
    if not item.is_voting:
        raise VotingClosed(f"This {item.KIND} is not open for voting.")
    if item.deadline_passed(now):
        raise DeadlinePassed("Voting deadline has passed.")
    if item.vote_by(user.id) is not None:
        raise AlreadyVoted(f"You have already voted on this {item.KIND}.")

    comment = (comment or "").strip() or None
    max_length = current_app.config["VOTE_COMMENT_MAX_LENGTH"]
    if comment and len(comment) > max_length:
        raise VotingError(
            f"Comment too long. Maximum {max_length} characters allowed."
        )

    vote = item.vote_model(
        voter_id=user.id,
        vote=choice.to_storage(item.VOTE_VOCABULARY),
        comment=comment,
        voted_at=now,
    )
    item.votes.append(vote)
    refresh_vote_counts(item)

    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise AlreadyVoted(f"You have already voted on this {item.KIND}.") from exc

    current_app.logger.info(
        "User %s voted %s on %s %s", user.id, choice.value, item.KIND, item.id
    )
    return vote
