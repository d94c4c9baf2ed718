from datetime import date, datetime, time
from functools import wraps

from flask import abort, request
from flask_login import current_user, login_required

from boardroom.models import Minutes, Resolution
from boardroom.services.voting import VoteChoice
from boardroom.timeutils import to_naive_utc

VOTABLE_KINDS = {"resolutions": Resolution, "minutes": Minutes}


def payload():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_user.is_admin:
            abort(403)
        return view(*args, **kwargs)

    return wrapped


def get_votable_or_404(kind, item_id):
    model = VOTABLE_KINDS.get(kind)
    if model is None:
        abort(404)
    return model.query.get_or_404(item_id)


def parse_deadline(raw):
    """Parse an ISO-8601 deadline into naive UTC; blank means no deadline."""
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValueError(f"Invalid deadline: {raw!r}")
    raw = raw.strip()
    if not raw:
        return None
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return to_naive_utc(datetime.fromisoformat(raw))


def parse_quorum(raw):
    raw = str(raw).strip() if raw is not None else ""
    if not raw:
        return None
    try:
        parsed = int(float(raw))
    except (ValueError, OverflowError):
        return None
    return min(max(parsed, 0), 100)


def parse_bool(raw):
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def parse_positive_int(raw):
    raw = str(raw).strip() if raw is not None else ""
    if not raw:
        return None
    try:
        parsed = int(raw)
    except ValueError:
        return None
    return parsed if parsed >= 1 else None


def parse_meeting_date(raw):
    raw = str(raw).strip() if raw is not None else ""
    return date.fromisoformat(raw) if raw else None


def parse_meeting_time(raw):
    raw = str(raw).strip() if raw is not None else ""
    return time.fromisoformat(raw) if raw else None


def isoformat(value):
    return value.isoformat() if value is not None else None


def serialize_meeting(meeting):
    return {
        "id": meeting.id,
        "title": meeting.title,
        "description": meeting.description,
        "meeting_date": isoformat(meeting.meeting_date),
        "start_time": isoformat(meeting.start_time),
        "end_time": isoformat(meeting.end_time),
        "location": meeting.location,
        "resolution_count": len(meeting.resolutions),
        "minutes_count": len(meeting.minutes),
    }


def serialize_vote(vote):
    return {
        "id": vote.id,
        "voter_id": vote.voter_id,
        "voter_name": vote.voter.display_name if vote.voter else None,
        "vote": VoteChoice.parse(vote.vote).value,
        "comment": vote.comment,
        "voted_at": isoformat(vote.voted_at),
    }


def serialize_votable(item):
    data = {
        "id": item.id,
        "kind": item.KIND,
        "title": item.title,
        "status": item.status,
        "meeting_id": item.meeting_id,
        "voting_deadline": isoformat(item.voting_deadline),
        "minimum_quorum": item.minimum_quorum,
        "requires_majority": item.requires_majority,
        "total_eligible_voters": item.total_eligible_voters,
        "is_unanimous": item.is_unanimous,
        "passed_at": isoformat(item.passed_at),
        "vote_count": len(item.votes),
    }
    if isinstance(item, Resolution):
        data.update(
            resolution_number=item.resolution_number,
            description=item.description,
            content=item.content,
            votes_for=item.votes_for,
            votes_against=item.votes_against,
            votes_abstain=item.votes_abstain,
        )
    else:
        data.update(content=item.content, notes=item.notes)
    return data
