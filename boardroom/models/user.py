from flask_login import UserMixin

from boardroom.extensions import db
from boardroom.timeutils import utcnow


class User(UserMixin, db.Model):
    __tablename__ = "users"

    ROLES = ("admin", "board_member", "viewer")
    VOTING_ROLES = ("admin", "board_member")

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    full_name = db.Column(db.String(200), nullable=True)
    position = db.Column(db.String(120), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="board_member")
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def is_active(self):
        return bool(self.active)

    @property
    def is_admin(self):
        return self.role == "admin"

    @property
    def can_vote(self):
        return self.is_active and self.role in self.VOTING_ROLES

    @property
    def display_name(self):
        return self.full_name or self.username
