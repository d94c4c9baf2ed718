"""Translation between stored vote rows and evaluator inputs.

This is the only place the storage vocabularies (``for``/``against`` on
resolutions, ``approve``/``reject`` on minutes) are read.
"""

from flask import current_app

from boardroom.models import User
from boardroom.services.voting import (
    Ballot,
    InvalidVotingInput,
    VoteChoice,
    VotingContext,
    calculate_voting_statistics,
)


def ballot_from_vote(vote):
    try:
        choice = VoteChoice.parse(vote.vote)
    except ValueError as exc:
        raise InvalidVotingInput(
            f"Stored vote {vote.id} has an invalid choice: {vote.vote!r}"
        ) from exc
    return Ballot(
        voter_id=vote.voter_id,
        choice=choice,
        comment=vote.comment,
        cast_at=vote.voted_at,
    )


def ballots_for(item):
    return [ballot_from_vote(vote) for vote in item.votes]


def count_eligible_voters():
    return User.query.filter(
        User.active.is_(True), User.role.in_(User.VOTING_ROLES)
    ).count()


def context_for(item):
    eligible = item.total_eligible_voters
    if not eligible:
        eligible = count_eligible_voters()

    minimum_quorum = item.minimum_quorum
    if minimum_quorum is None:
        minimum_quorum = current_app.config["DEFAULT_MINIMUM_QUORUM"]

    requires_majority = item.requires_majority
    if requires_majority is None:
        requires_majority = current_app.config["DEFAULT_REQUIRES_MAJORITY"]

    return VotingContext(
        total_eligible_voters=max(eligible, 1),
        minimum_quorum_percent=minimum_quorum,
        requires_majority=requires_majority,
        voting_deadline=item.voting_deadline,
        status=item.status,
    )


def statistics_for(item):
    return calculate_voting_statistics(ballots_for(item), context_for(item))
