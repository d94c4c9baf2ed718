from boardroom.models.meeting import Meeting
from boardroom.models.minutes import Minutes, MinutesVote
from boardroom.models.resolution import Resolution, ResolutionVote
from boardroom.models.user import User

__all__ = [
    "User",
    "Meeting",
    "Resolution",
    "ResolutionVote",
    "Minutes",
    "MinutesVote",
]
