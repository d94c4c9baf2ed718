COMPLETION_REASONS = ("all_voted", "deadline_expired", "manual_completion", "not_complete")


def determine_completion_status(total_votes, total_eligible_voters, voting_deadline, now):
    deadline_expired = voting_deadline is not None and now >= voting_deadline
    all_voted = total_eligible_voters > 0 and total_votes >= total_eligible_voters

    if all_voted:
        reason = "all_voted"
        completed_at = now
    elif deadline_expired:
        reason = "deadline_expired"
        completed_at = voting_deadline
    else:
        reason = "not_complete"
        completed_at = None

    return {
        "is_complete": reason != "not_complete",
        "reason": reason,
        "completed_at": completed_at,
        "total_votes": total_votes,
        "total_eligible_voters": total_eligible_voters,
        "deadline_expired": deadline_expired,
    }


def outcome_status(item_cls, passed):
    return item_cls.PASSED_STATUS if passed else item_cls.FAILED_STATUS
