LAST_MINUTE_FRACTION = 0.1


def analyze_voting_timeline(ballots, voting_started_at=None, voting_ended_at=None):
    if voting_started_at is None or voting_ended_at is None:
        return {"voting_duration_hours": None, "last_minute_votes": None, "voting_pattern": "unknown"}

    duration = voting_ended_at - voting_started_at
    if duration.total_seconds() <= 0:
        return {"voting_duration_hours": 0.0, "last_minute_votes": None, "voting_pattern": "unknown"}

    # Votes landing in the final tenth of the window count as last-minute.
    cutoff = voting_ended_at - duration * LAST_MINUTE_FRACTION
    ballots = list(ballots)
    last_minute_votes = sum(
        1 for ballot in ballots if ballot.cast_at is not None and ballot.cast_at >= cutoff
    )

    share, whole = 100 * last_minute_votes, len(ballots)
    if not ballots:
        pattern = "unknown"
    elif share >= 50 * whole:
        pattern = "last-minute"
    elif share <= 20 * whole:
        pattern = "early"
    else:
        pattern = "steady"

    return {
        "voting_duration_hours": round(duration.total_seconds() / 3600, 2),
        "last_minute_votes": last_minute_votes,
        "voting_pattern": pattern,
    }
