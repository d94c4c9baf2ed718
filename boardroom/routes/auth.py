import smtplib

from flask import current_app, jsonify, url_for
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import check_password_hash, generate_password_hash

from boardroom.extensions import db
from boardroom.models import User
from boardroom.routes.helpers import payload
from boardroom.services.security import (
    generate_reset_token,
    send_reset_email,
    verify_reset_token,
)


def serialize_user(user):
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "full_name": user.full_name,
        "position": user.position,
        "role": user.role,
        "active": user.is_active,
    }


def register_auth_routes(app):
    @app.route("/login", methods=["POST"])
    def login():
        data = payload()
        username = (data.get("username") or "").strip()
        password = data.get("password") or ""
        remember = bool(data.get("remember"))

        user = User.query.filter_by(username=username).first()
        if not user or not check_password_hash(user.password_hash, password):
            return jsonify({"error": "Invalid username or password."}), 401
        if not user.is_active:
            return jsonify({"error": "This account has been deactivated."}), 403

        login_user(user, remember=remember)
        current_app.logger.info("User %s logged in", user.id)
        return jsonify({"ok": True, "user": serialize_user(user)})

    @app.route("/me")
    @login_required
    def me():
        return jsonify({"user": serialize_user(current_user)})

    @app.route("/forgot-password", methods=["POST"])
    def forgot_password():
        email = (payload().get("email") or "").strip().lower()
        if not email:
            return jsonify({"error": "Please enter your email address."}), 400

        user = User.query.filter_by(email=email).first()
        if user:
            reset_token = generate_reset_token(user.email)
            reset_url = url_for("reset_password", token=reset_token, _external=True)
            try:
                send_reset_email(user.email, reset_url)
            except (RuntimeError, smtplib.SMTPException, OSError):
                current_app.logger.exception("Could not send reset email to %s", email)
                return (
                    jsonify(
                        {
                            "error": "Email service is not configured. "
                            "Please contact the administrator."
                        }
                    ),
                    503,
                )
        else:
            current_app.logger.warning(
                "Password reset requested for unknown email: %s", email
            )

        return jsonify({"ok": True, "message": "A reset link has been sent."})

    @app.route("/reset-password/<token>", methods=["POST"])
    def reset_password(token):
        email = verify_reset_token(token, max_age=1800)
        user = User.query.filter_by(email=email).first() if email else None
        if not user:
            return jsonify({"error": "This reset link is invalid or has expired."}), 400

        data = payload()
        new_password = data.get("password")
        confirm_password = data.get("confirm_password")

        if not new_password or not confirm_password:
            return jsonify({"error": "Please provide a new password and confirm it."}), 400
        if new_password != confirm_password:
            return jsonify({"error": "Passwords do not match."}), 400
        if len(new_password) < 8:
            return jsonify({"error": "Password must be at least 8 characters long."}), 400

        user.password_hash = generate_password_hash(new_password, method="pbkdf2:sha256")
        db.session.commit()
        return jsonify({"ok": True, "message": "Password reset successfully!"})

    @app.route("/logout", methods=["POST"])
    @login_required
    def logout():
        logout_user()
        return jsonify({"ok": True})
