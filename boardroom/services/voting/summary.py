def render_voting_summary(title, stats, timeline=None):
    """Plain-text voting summary used in completion emails.

    Reads the statistics report as-is; no figure is recomputed here.
    """
    lines = [
        f"Voting Summary: {title}",
        "=" * (len("Voting Summary: ") + len(title)),
        "",
        (
            f"Participation: {stats['total_votes']}/{stats['total_eligible_voters']} "
            f"eligible voters ({stats['participation_rate']}%)"
        ),
        (
            f"Quorum: {'MET' if stats['quorum_status'] == 'met' else 'NOT MET'} "
            f"({stats['minimum_quorum_percent']}% required, "
            f"{stats['quorum_required_votes']} votes)"
        ),
        "",
        f"Result: {'PASSED' if stats['passed'] else 'FAILED'}",
        f"Reason: {stats['passed_reason']}",
        "",
        "Vote Breakdown:",
        f"  Approve: {stats['approve_votes']} ({stats['approval_percentage']}%)",
        f"  Reject: {stats['reject_votes']} ({stats['rejection_percentage']}%)",
        f"  Abstain: {stats['abstain_votes']} ({stats['abstention_percentage']}%)",
        "",
    ]

    if stats["is_unanimous"]:
        lines.append(f"Unanimous {stats['unanimous_type']} vote")
    else:
        lines.append(f"Margin: {stats['margin_description']}")
    lines.append(f"Consensus Level: {stats['consensus_level'].upper()}")
    lines.append(f"Engagement Score: {stats['engagement_score']}/100")
    if stats["non_voters"]:
        lines.append(f"Did not vote: {stats['non_voters']}")
    lines.append("")

    comments = stats["comment_analysis"]
    if comments["total_comments"]:
        lines.append(
            f"Comments: {comments['total_comments']} voters provided comments "
            f"({comments['comment_density']}%)"
        )
        if comments["has_significant_concerns"]:
            lines.append("Significant concerns were raised in comments.")
    else:
        lines.append("No comments provided by voters")

    if timeline and timeline["voting_pattern"] != "unknown":
        lines.append("")
        lines.append(
            f"Voting window: {timeline['voting_duration_hours']} hours, "
            f"{timeline['last_minute_votes']} last-minute votes "
            f"({timeline['voting_pattern']})"
        )

    return "\n".join(lines)
