from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from boardroom.services import mail


def _reset_serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"])


def generate_reset_token(email):
    return _reset_serializer().dumps(email, salt="password-reset")


def verify_reset_token(token, max_age=1800):
    try:
        return _reset_serializer().loads(token, salt="password-reset", max_age=max_age)
    except (BadSignature, SignatureExpired):
        return None


def send_reset_email(to_email, reset_url):
    mail.send_email(
        [to_email],
        "Reset your board portal password",
        "You requested a password reset for the board portal.\n\n"
        f"Reset your password here: {reset_url}\n\n"
        "This link will expire in 30 minutes. If you did not request this, ignore this email.",
    )
    current_app.logger.info("Password reset email sent to %s", to_email)
