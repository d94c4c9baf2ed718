import hmac

from flask import current_app, jsonify, request

from boardroom.services.lifecycle import check_expired_deadlines


def register_cron_routes(app):
    @app.route("/api/cron/voting-deadlines", methods=["POST"])
    def voting_deadlines():
        secret = current_app.config["CRON_SECRET"]
        provided = request.headers.get("X-Cron-Secret", "")
        if not secret or not hmac.compare_digest(secret, provided):
            current_app.logger.warning("Rejected deadline sweep with a bad cron secret")
            return jsonify({"error": "Unauthorized"}), 401

        processed = check_expired_deadlines()
        return jsonify({"success": True, "processed": processed})
