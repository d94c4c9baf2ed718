from flask import current_app, jsonify
from flask_login import current_user
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from boardroom.extensions import db
from boardroom.models import Meeting, Minutes, Resolution, User
from boardroom.routes.auth import serialize_user
from boardroom.routes.helpers import (
    admin_required,
    get_votable_or_404,
    parse_bool,
    parse_deadline,
    parse_meeting_date,
    parse_meeting_time,
    parse_positive_int,
    parse_quorum,
    payload,
    serialize_meeting,
    serialize_votable,
    serialize_vote,
)
from boardroom.services.ballots import count_eligible_voters
from boardroom.services.lifecycle import (
    check_completion,
    complete_voting,
    open_voting,
    voting_summary,
    withdraw,
)
from boardroom.services.votes import VotingError
from boardroom.timeutils import utcnow

KIND_PATH = "/admin/<any(resolutions, minutes):kind>/<int:item_id>"


def next_resolution_number():
    prefix = f"RES-{utcnow().year}-"
    sequence = Resolution.query.filter(
        Resolution.resolution_number.like(f"{prefix}%")
    ).count()
    while True:
        sequence += 1
        number = f"{prefix}{sequence:03d}"
        if not Resolution.query.filter_by(resolution_number=number).first():
            return number


def apply_voting_fields(item, data):
    """Copy the voting parameters present in ``data`` onto ``item``."""
    if "minimum_quorum" in data:
        item.minimum_quorum = parse_quorum(data.get("minimum_quorum"))
    if "requires_majority" in data:
        item.requires_majority = parse_bool(data.get("requires_majority"))
    if "total_eligible_voters" in data:
        item.total_eligible_voters = parse_positive_int(data.get("total_eligible_voters"))
    if "voting_deadline" in data:
        item.voting_deadline = parse_deadline(data.get("voting_deadline"))
    if "meeting_id" in data:
        item.meeting_id = parse_positive_int(data.get("meeting_id"))


def register_admin_routes(app):
    @app.route("/admin/meetings")
    @admin_required
    def admin_meetings():
        meetings = Meeting.query.order_by(Meeting.id.desc()).all()
        return jsonify({"meetings": [serialize_meeting(meeting) for meeting in meetings]})

    @app.route("/admin/meetings/new", methods=["POST"])
    @admin_required
    def create_meeting():
        data = payload()
        title = (data.get("title") or "").strip()
        description = (data.get("description") or "").strip() or None
        location = (data.get("location") or "").strip() or None

        if not title:
            return jsonify({"ok": False, "error": "Title is required."}), 400

        try:
            meeting_date = parse_meeting_date(data.get("meeting_date"))
            start_time = parse_meeting_time(data.get("start_time"))
            end_time = parse_meeting_time(data.get("end_time"))
        except ValueError:
            return jsonify({"ok": False, "error": "Invalid meeting date or time."}), 400

        if start_time and end_time and end_time <= start_time:
            return jsonify({"ok": False, "error": "End time must be after start time."}), 400

        meeting = Meeting(
            title=title,
            description=description,
            location=location,
            meeting_date=meeting_date,
            start_time=start_time,
            end_time=end_time,
            created_by=current_user.id,
        )
        db.session.add(meeting)
        db.session.commit()
        return jsonify({"ok": True, "meeting": serialize_meeting(meeting)})

    @app.route("/admin/users")
    @admin_required
    def admin_users():
        users = User.query.order_by(User.username).all()
        return jsonify(
            {
                "users": [serialize_user(user) for user in users],
                "eligible_voters": count_eligible_voters(),
            }
        )

    @app.route("/admin/users/new", methods=["POST"])
    @admin_required
    def create_user():
        data = payload()
        username = (data.get("username") or "").strip()
        email = (data.get("email") or "").strip().lower()
        password = data.get("password") or ""
        role = (data.get("role") or "board_member").strip()

        if not username or not email:
            return jsonify({"ok": False, "error": "Username and email are required."}), 400
        if len(password) < 8:
            return (
                jsonify({"ok": False, "error": "Password must be at least 8 characters long."}),
                400,
            )
        if role not in User.ROLES:
            return jsonify({"ok": False, "error": "Invalid role."}), 400

        user = User(
            username=username,
            email=email,
            full_name=(data.get("full_name") or "").strip() or None,
            position=(data.get("position") or "").strip() or None,
            role=role,
            password_hash=generate_password_hash(password, method="pbkdf2:sha256"),
        )
        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return jsonify({"ok": False, "error": "Username or email already exists."}), 400

        current_app.logger.info("User %s created with role %s", user.id, user.role)
        return jsonify({"ok": True, "user": serialize_user(user)})

    @app.route("/admin/resolutions/new", methods=["POST"])
    @admin_required
    def create_resolution():
        data = payload()
        title = (data.get("title") or "").strip()
        if not title:
            return jsonify({"ok": False, "error": "Resolution title is required."}), 400

        resolution = Resolution(
            title=title,
            description=(data.get("description") or "").strip() or None,
            content=(data.get("content") or "").strip(),
            resolution_type=(data.get("resolution_type") or "").strip() or None,
            resolution_number=(data.get("resolution_number") or "").strip()
            or next_resolution_number(),
            status="draft",
            created_by=current_user.id,
        )
        try:
            apply_voting_fields(resolution, data)
        except ValueError:
            return jsonify({"ok": False, "error": "Invalid voting deadline."}), 400

        try:
            db.session.add(resolution)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return jsonify({"ok": False, "error": "Resolution number already exists."}), 400

        return jsonify({"ok": True, "resolution": serialize_votable(resolution)})

    @app.route("/admin/minutes/new", methods=["POST"])
    @admin_required
    def create_minutes():
        data = payload()
        title = (data.get("title") or "").strip()
        if not title:
            return jsonify({"ok": False, "error": "Minutes title is required."}), 400

        minutes = Minutes(
            title=title,
            content=(data.get("content") or "").strip(),
            notes=(data.get("notes") or "").strip() or None,
            status="draft",
            created_by=current_user.id,
        )
        try:
            apply_voting_fields(minutes, data)
        except ValueError:
            return jsonify({"ok": False, "error": "Invalid voting deadline."}), 400

        db.session.add(minutes)
        db.session.commit()
        return jsonify({"ok": True, "minutes": serialize_votable(minutes)})

    @app.route(f"{KIND_PATH}/update", methods=["POST"])
    @admin_required
    def update_votable(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        if item.status not in item.OPENABLE_STATUSES:
            return jsonify({"error": "Only items that are not yet voting can be edited."}), 400

        data = payload()
        if "title" in data:
            title = (data.get("title") or "").strip()
            if not title:
                return jsonify({"error": "Title is required."}), 400
            item.title = title
        if "content" in data:
            item.content = (data.get("content") or "").strip()
        if isinstance(item, Resolution) and "description" in data:
            item.description = (data.get("description") or "").strip() or None
        if isinstance(item, Resolution) and data.get("status") in item.OPENABLE_STATUSES:
            item.status = data.get("status")

        try:
            apply_voting_fields(item, data)
        except ValueError:
            return jsonify({"error": "Invalid voting deadline."}), 400

        try:
            db.session.commit()
            return jsonify({"success": True, kind: serialize_votable(item)}), 200
        except Exception:
            db.session.rollback()
            return jsonify({"error": f"Database error: Could not update {item.KIND}"}), 500

    @app.route(f"{KIND_PATH}/delete", methods=["POST"])
    @admin_required
    def delete_votable(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        if item.status == "voting":
            return jsonify({"error": "Withdraw the item before deleting it."}), 400

        try:
            db.session.delete(item)
            db.session.commit()
            return jsonify({"success": True}), 200
        except Exception:
            db.session.rollback()
            return jsonify({"error": f"Database error: Could not delete {item.KIND}"}), 500

    @app.route(f"{KIND_PATH}/open", methods=["POST"])
    @admin_required
    def open_votable(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        try:
            deadline = parse_deadline(payload().get("voting_deadline"))
        except ValueError:
            return jsonify({"error": "Invalid voting deadline."}), 400

        try:
            open_voting(item, deadline=deadline)
        except VotingError as exc:
            return jsonify({"error": str(exc)}), exc.status_code
        return jsonify({"success": True, kind: serialize_votable(item)})

    @app.route(f"{KIND_PATH}/withdraw", methods=["POST"])
    @admin_required
    def withdraw_votable(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        try:
            withdraw(item)
        except VotingError as exc:
            return jsonify({"error": str(exc)}), exc.status_code
        return jsonify({"success": True, kind: serialize_votable(item)})

    @app.route(f"{KIND_PATH}/complete", methods=["POST"])
    @admin_required
    def complete_votable(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        try:
            stats = complete_voting(item, "manual_completion")
        except VotingError as exc:
            return jsonify({"error": str(exc)}), exc.status_code
        return jsonify(
            {
                "success": True,
                "reason": "manual_completion",
                "status": item.status,
                "statistics": stats,
            }
        )

    @app.route(f"{KIND_PATH}/check-completion", methods=["POST"])
    @admin_required
    def check_votable_completion(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        status = check_completion(item)
        return jsonify(
            {
                "is_complete": status["is_complete"],
                "reason": status["reason"],
                "total_votes": status["total_votes"],
                "total_eligible_voters": status["total_eligible_voters"],
                "deadline_expired": status["deadline_expired"],
                "status": item.status,
            }
        )

    @app.route(f"{KIND_PATH}/summary")
    @admin_required
    def votable_summary(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        summary = voting_summary(item)
        summary["item"] = serialize_votable(item)
        return jsonify(summary)

    @app.route(f"{KIND_PATH}/votes")
    @admin_required
    def votable_votes(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        rows = [serialize_vote(vote) for vote in item.votes]
        return jsonify(
            {
                "votes": rows,
                "num_voters_voted": len(rows),
                "num_possible_voters": item.total_eligible_voters or count_eligible_voters(),
            }
        )
