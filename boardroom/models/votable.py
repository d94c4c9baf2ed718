from sqlalchemy.orm import declared_attr

from boardroom.extensions import db
from boardroom.timeutils import utcnow


class VotableMixin:
    """Columns and status helpers shared by items the board votes on."""

    KIND = None
    VOTE_VOCABULARY = None
    STATUSES = ()
    OPENABLE_STATUSES = ()
    PASSED_STATUS = None
    FAILED_STATUS = None

    status = db.Column(db.String(20), nullable=False, default="draft")
    voting_deadline = db.Column(db.DateTime, nullable=True)
    minimum_quorum = db.Column(db.Integer, nullable=True)
    requires_majority = db.Column(db.Boolean, nullable=True)
    total_eligible_voters = db.Column(db.Integer, nullable=True)
    is_unanimous = db.Column(db.Boolean, nullable=True)
    passed_at = db.Column(db.DateTime, nullable=True)
    voting_started_at = db.Column(db.DateTime, nullable=True)
    voting_completed_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @declared_attr
    def created_by(cls):
        return db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    @property
    def is_voting(self):
        return self.status == "voting"

    def deadline_passed(self, now=None):
        if self.voting_deadline is None:
            return False
        return (now or utcnow()) >= self.voting_deadline

    def vote_by(self, user_id):
        return next((vote for vote in self.votes if vote.voter_id == user_id), None)


class VoteMixin:
    vote = db.Column(db.String(10), nullable=False)
    comment = db.Column(db.Text, nullable=True)
    voted_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=True, onupdate=utcnow)

    @declared_attr
    def voter_id(cls):
        return db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    @declared_attr
    def voter(cls):
        return db.relationship("User")
