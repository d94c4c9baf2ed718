from boardroom.extensions import db
from boardroom.models.votable import VotableMixin, VoteMixin


class Minutes(VotableMixin, db.Model):
    __tablename__ = "minutes"

    KIND = "minutes"
    VOTE_VOCABULARY = "minutes"
    STATUSES = ("draft", "voting", "passed", "failed", "withdrawn")
    OPENABLE_STATUSES = ("draft",)
    PASSED_STATUS = "passed"
    FAILED_STATUS = "failed"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False, default="")
    notes = db.Column(db.Text, nullable=True)
    meeting_id = db.Column(db.Integer, db.ForeignKey("meetings.id"), nullable=True)

    votes = db.relationship(
        "MinutesVote",
        backref="minutes",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="MinutesVote.id",
    )

    @property
    def display_title(self):
        return f"Minutes: {self.title}"


class MinutesVote(VoteMixin, db.Model):
    __tablename__ = "minutes_votes"
    __table_args__ = (
        db.UniqueConstraint("minutes_id", "voter_id", name="uq_minutes_voter"),
    )

    id = db.Column(db.Integer, primary_key=True)
    minutes_id = db.Column(db.Integer, db.ForeignKey("minutes.id"), nullable=False)


Minutes.vote_model = MinutesVote
