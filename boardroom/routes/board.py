from flask import current_app, jsonify
from flask_login import current_user, login_required

from boardroom.extensions import db
from boardroom.routes.helpers import (
    VOTABLE_KINDS,
    get_votable_or_404,
    payload,
    serialize_votable,
    serialize_vote,
)
from boardroom.services.ballots import statistics_for
from boardroom.services.lifecycle import check_completion
from boardroom.services.votes import VotingError, cast_vote
from boardroom.services.voting import VoteChoice

KIND_PATH = "/api/<any(resolutions, minutes):kind>"


def register_board_routes(app):
    @app.route(KIND_PATH)
    @login_required
    def list_votables(kind):
        model = VOTABLE_KINDS[kind]
        query = model.query
        if not current_user.is_admin:
            query = query.filter(model.status != "draft")

        items = []
        for item in query.order_by(model.id.desc()).all():
            data = serialize_votable(item)
            data["has_voted"] = item.vote_by(current_user.id) is not None
            items.append(data)
        return jsonify({kind: items})

    @app.route(f"{KIND_PATH}/<int:item_id>")
    @login_required
    def votable_detail(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        if item.status == "draft" and not current_user.is_admin:
            return jsonify({"error": "Not found"}), 404

        my_vote = item.vote_by(current_user.id)
        data = serialize_votable(item)
        data["my_vote"] = serialize_vote(my_vote) if my_vote else None
        data["can_vote"] = (
            current_user.can_vote
            and item.is_voting
            and not item.deadline_passed()
            and my_vote is None
        )
        return jsonify(data)

    @app.route(f"{KIND_PATH}/<int:item_id>/vote", methods=["POST"])
    @login_required
    def vote_on_item(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        data = payload()

        try:
            choice = VoteChoice.parse(data.get("vote"))
        except ValueError:
            return (
                jsonify({"error": "Invalid vote value. Must be approve, reject, or abstain"}),
                400,
            )

        try:
            vote = cast_vote(item, current_user, choice, data.get("comment"))
        except VotingError as exc:
            return jsonify({"error": str(exc)}), exc.status_code

        completion = None
        try:
            completion = check_completion(item)
        except Exception:
            db.session.rollback()
            current_app.logger.exception(
                "Completion check failed after vote on %s %s", item.KIND, item.id
            )

        return jsonify(
            {
                "success": True,
                "vote": serialize_vote(vote),
                "message": f"Your {choice.value} vote has been recorded",
                "voting_complete": bool(completion and completion["is_complete"]),
                "status": item.status,
            }
        )

    @app.route(f"{KIND_PATH}/<int:item_id>/vote")
    @login_required
    def get_my_vote(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        vote = item.vote_by(current_user.id)
        return jsonify({"vote": serialize_vote(vote) if vote else None})

    @app.route(f"{KIND_PATH}/<int:item_id>/statistics")
    @login_required
    def live_statistics(kind, item_id):
        item = get_votable_or_404(kind, item_id)
        if item.status == "draft":
            return jsonify({"error": "Voting has not started."}), 400
        return jsonify({"status": item.status, "statistics": statistics_for(item)})
