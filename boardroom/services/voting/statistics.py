"""Vote tally and outcome evaluation for board resolutions and minutes.

Everything here is a pure function of the ballots and the voting context
handed in by the caller. Nothing reads the database, the clock or the
application config, so the live standings shown while voting is open and
the summary mailed at completion always come out of the same arithmetic.

Percentages are whole numbers rounded half-up. Participation is clamped to
100 when more ballots arrive than the caller's eligible-voter count.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from boardroom.services.voting.choices import VoteChoice

CONCERN_KEYWORDS = (
    "concern",
    "worried",
    "issue",
    "problem",
    "disagree",
    "oppose",
    "against",
    "risk",
)

KNOWN_STATUSES = (
    "draft",
    "under_review",
    "voting",
    "approved",
    "rejected",
    "withdrawn",
    "passed",
    "failed",
)

STRONG_CONSENSUS_DISTANCE = 40
MODERATE_CONSENSUS_DISTANCE = 15

PARTICIPATION_WEIGHT = 7
COMMENT_WEIGHT = 3


class InvalidVotingInput(ValueError):
    pass


@dataclass(frozen=True)
class Ballot:
    voter_id: object
    choice: VoteChoice
    comment: Optional[str] = None
    cast_at: Optional[datetime] = None

    @property
    def has_comment(self):
        return bool(self.comment and self.comment.strip())


@dataclass(frozen=True)
class VotingContext:
    total_eligible_voters: int
    minimum_quorum_percent: int = 50
    requires_majority: bool = True
    voting_deadline: Optional[datetime] = None
    status: str = "voting"


def percent_of(part, whole):
    """Whole-number percentage of ``part`` in ``whole``, rounded half-up.

    A zero (or negative) ``whole`` yields 0 instead of dividing by zero.
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def calculate_participation_rate(total_votes, total_eligible_voters):
    return min(percent_of(total_votes, total_eligible_voters), 100)


def required_quorum_votes(minimum_quorum_percent, total_eligible_voters):
    """Smallest vote count whose rounded participation reaches the quorum."""
    for votes in range(total_eligible_voters + 1):
        if percent_of(votes, total_eligible_voters) >= minimum_quorum_percent:
            return votes
    return total_eligible_voters


def consensus_level(approval_percentage, total_votes):
    if total_votes == 0:
        return "none"

    distance = abs(approval_percentage - 50)
    if distance >= STRONG_CONSENSUS_DISTANCE:
        return "strong"
    if distance >= MODERATE_CONSENSUS_DISTANCE:
        return "moderate"
    return "contested"


def engagement_score(participation_rate, comment_density):
    comment_component = min(comment_density * 2, 100)
    weighted = PARTICIPATION_WEIGHT * participation_rate + COMMENT_WEIGHT * comment_component
    return (weighted + 5) // 10


def describe_margin(approve_votes, reject_votes):
    margin = approve_votes - reject_votes
    absolute = abs(margin)
    margin_percentage = percent_of(absolute, approve_votes + reject_votes)
    plural = "" if absolute == 1 else "s"

    if margin > 0:
        margin_type = "victory"
        description = f"Approve ahead by {absolute} vote{plural} ({margin_percentage}% margin)"
    elif margin < 0:
        margin_type = "defeat"
        description = f"Reject ahead by {absolute} vote{plural} ({margin_percentage}% margin)"
    else:
        margin_type = "tie"
        description = "Tied vote - no margin"

    return {
        "voting_margin": margin,
        "margin_type": margin_type,
        "margin_percentage": margin_percentage,
        "margin_description": description,
    }


def analyze_comments(ballots, choices):
    commented = [
        (ballot, choice) for ballot, choice in zip(ballots, choices) if ballot.has_comment
    ]
    comments_by_choice = {choice.value: 0 for choice in VoteChoice}
    for _, choice in commented:
        comments_by_choice[choice.value] += 1

    total_comments = len(commented)
    total_length = sum(len(ballot.comment.strip()) for ballot, _ in commented)
    average_length = (
        (2 * total_length + total_comments) // (2 * total_comments)
        if total_comments
        else 0
    )

    text = " ".join(ballot.comment.lower() for ballot, _ in commented)
    found_keywords = [keyword for keyword in CONCERN_KEYWORDS if keyword in text]

    return {
        "total_comments": total_comments,
        "comments_by_choice": comments_by_choice,
        "comment_density": percent_of(total_comments, len(ballots)),
        "average_comment_length": average_length,
        "concern_keywords": found_keywords,
        "has_significant_concerns": bool(found_keywords)
        or comments_by_choice[VoteChoice.REJECT.value] > 0,
    }


def decide_outcome(
    quorum_met,
    requires_majority,
    approve_votes,
    reject_votes,
    total_votes,
    participation_rate,
    minimum_quorum_percent,
):
    margin = approve_votes - reject_votes

    if not quorum_met:
        return False, (
            f"Quorum not met ({participation_rate}% participation, "
            f"{minimum_quorum_percent}% required)"
        )

    if requires_majority:
        if approve_votes * 2 > total_votes:
            return True, (
                f"Majority approval: {approve_votes} of {total_votes} votes in favour "
                f"(margin {margin:+d})"
            )
        return False, (
            f"No majority: {approve_votes} of {total_votes} votes in favour, "
            f"more than {total_votes / 2:g} needed (margin {margin:+d})"
        )

    if approve_votes > 0 and approve_votes >= reject_votes:
        return True, (
            f"Approve votes ({approve_votes}) meet or exceed "
            f"reject votes ({reject_votes})"
        )
    if approve_votes == 0:
        return False, "No approve votes cast"
    return False, (
        f"Reject votes ({reject_votes}) exceed approve votes ({approve_votes})"
    )


def _validate_context(context):
    eligible = context.total_eligible_voters
    if isinstance(eligible, bool) or not isinstance(eligible, int) or eligible < 0:
        raise InvalidVotingInput(
            f"total_eligible_voters must be a non-negative integer, got {eligible!r}"
        )

    quorum = context.minimum_quorum_percent
    if isinstance(quorum, bool) or not isinstance(quorum, int) or not 0 <= quorum <= 100:
        raise InvalidVotingInput(
            f"minimum_quorum_percent must be an integer between 0 and 100, got {quorum!r}"
        )

    if context.status not in KNOWN_STATUSES:
        raise InvalidVotingInput(f"Unknown voting status: {context.status!r}")


def _choice_of(ballot):
    try:
        return VoteChoice.parse(ballot.choice)
    except ValueError as exc:
        raise InvalidVotingInput(
            f"Ballot from voter {ballot.voter_id!r} has an invalid choice: {ballot.choice!r}"
        ) from exc


def calculate_voting_statistics(ballots, context):
    """Build the statistics-and-outcome report for one votable item.

    Raises ``InvalidVotingInput`` for a negative eligible-voter count, a
    quorum outside 0-100, an unknown status or any ballot whose choice is
    not a recognised vote. No ballots and zero eligible voters are valid
    and produce zero percentages and ``passed=False``.
    """
    _validate_context(context)
    ballots = list(ballots)
    choices = [_choice_of(ballot) for ballot in ballots]

    counts = {choice: 0 for choice in VoteChoice}
    for choice in choices:
        counts[choice] += 1

    total_votes = len(ballots)
    approve_votes = counts[VoteChoice.APPROVE]
    reject_votes = counts[VoteChoice.REJECT]
    abstain_votes = counts[VoteChoice.ABSTAIN]
    eligible = context.total_eligible_voters

    participation_rate = calculate_participation_rate(total_votes, eligible)
    approval_percentage = percent_of(approve_votes, total_votes)

    is_unanimous = total_votes > 0 and len(set(choices)) == 1
    unanimous_type = choices[0].value if is_unanimous else None

    quorum_met = participation_rate >= context.minimum_quorum_percent
    quorum_required = required_quorum_votes(context.minimum_quorum_percent, eligible)

    comment_analysis = analyze_comments(ballots, choices)

    passed, passed_reason = decide_outcome(
        quorum_met,
        bool(context.requires_majority),
        approve_votes,
        reject_votes,
        total_votes,
        participation_rate,
        context.minimum_quorum_percent,
    )

    report = {
        "total_votes": total_votes,
        "total_eligible_voters": eligible,
        "approve_votes": approve_votes,
        "reject_votes": reject_votes,
        "abstain_votes": abstain_votes,
        "participation_rate": participation_rate,
        "approval_percentage": approval_percentage,
        "rejection_percentage": percent_of(reject_votes, total_votes),
        "abstention_percentage": percent_of(abstain_votes, total_votes),
        "is_unanimous": is_unanimous,
        "unanimous_type": unanimous_type,
        "minimum_quorum_percent": context.minimum_quorum_percent,
        "requires_majority": bool(context.requires_majority),
        "quorum_status": "met" if quorum_met else "not_met",
        "quorum_required_votes": quorum_required,
        "quorum_shortfall": 0 if quorum_met else max(quorum_required - total_votes, 0),
        "consensus_level": consensus_level(approval_percentage, total_votes),
        "engagement_score": engagement_score(
            participation_rate, comment_analysis["comment_density"]
        ),
        "comment_analysis": comment_analysis,
        "non_voters": max(eligible - total_votes, 0),
        "passed": passed,
        "passed_reason": passed_reason,
    }
    report.update(describe_margin(approve_votes, reject_votes))
    return report
