from boardroom.extensions import db
from boardroom.models.votable import VotableMixin, VoteMixin


class Resolution(VotableMixin, db.Model):
    __tablename__ = "resolutions"

    KIND = "resolution"
    VOTE_VOCABULARY = "resolution"
    STATUSES = ("draft", "under_review", "voting", "approved", "rejected", "withdrawn")
    OPENABLE_STATUSES = ("draft", "under_review")
    PASSED_STATUS = "approved"
    FAILED_STATUS = "rejected"

    id = db.Column(db.Integer, primary_key=True)
    resolution_number = db.Column(db.String(50), unique=True, nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    content = db.Column(db.Text, nullable=False, default="")
    resolution_type = db.Column(db.String(50), nullable=True)
    meeting_id = db.Column(db.Integer, db.ForeignKey("meetings.id"), nullable=True)
    effective_date = db.Column(db.Date, nullable=True)

    votes_for = db.Column(db.Integer, nullable=False, default=0)
    votes_against = db.Column(db.Integer, nullable=False, default=0)
    votes_abstain = db.Column(db.Integer, nullable=False, default=0)

    votes = db.relationship(
        "ResolutionVote",
        backref="resolution",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="ResolutionVote.id",
    )

    @property
    def display_title(self):
        return f"Resolution {self.resolution_number}: {self.title}"


class ResolutionVote(VoteMixin, db.Model):
    __tablename__ = "resolution_votes"
    __table_args__ = (
        db.UniqueConstraint("resolution_id", "voter_id", name="uq_resolution_voter"),
    )

    id = db.Column(db.Integer, primary_key=True)
    resolution_id = db.Column(
        db.Integer, db.ForeignKey("resolutions.id"), nullable=False
    )


Resolution.vote_model = ResolutionVote
