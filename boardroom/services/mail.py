import smtplib
from email.message import EmailMessage

from flask import current_app

from boardroom.models import User
from boardroom.services.voting import render_voting_summary


def send_email(recipients, subject, body):
    config = current_app.config
    if not config["MAIL_USERNAME"] or not config["MAIL_PASSWORD"]:
        raise RuntimeError("Email credentials are not configured.")

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = config["MAIL_DEFAULT_SENDER"] or config["MAIL_USERNAME"]
    msg["To"] = ", ".join(recipients)
    msg.set_content(body)

    with smtplib.SMTP(config["MAIL_SERVER"], config["MAIL_PORT"]) as server:
        if config["MAIL_USE_TLS"]:
            server.starttls()
        server.login(config["MAIL_USERNAME"], config["MAIL_PASSWORD"])
        server.send_message(msg)
        current_app.logger.info(
            "Email '%s' sent to %d recipient(s)", subject, len(recipients)
        )


def summary_recipients():
    users = (
        User.query.filter(User.active.is_(True), User.role.in_(User.VOTING_ROLES))
        .order_by(User.id)
        .all()
    )
    return [user.email for user in users if user.email]


def send_voting_summary_email(item, stats, timeline=None):
    recipients = summary_recipients()
    if not recipients:
        current_app.logger.warning(
            "No recipients for voting summary of %s %s", item.KIND, item.id
        )
        return 0

    outcome = "PASSED" if stats["passed"] else "FAILED"
    subject = f"Voting complete: {item.display_title} ({outcome})"
    send_email(recipients, subject, render_voting_summary(item.display_title, stats, timeline))
    return len(recipients)
