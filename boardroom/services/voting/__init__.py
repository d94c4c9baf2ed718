from boardroom.services.voting.choices import VoteChoice
from boardroom.services.voting.completion import (
    determine_completion_status,
    outcome_status,
)
from boardroom.services.voting.statistics import (
    Ballot,
    InvalidVotingInput,
    VotingContext,
    calculate_voting_statistics,
)
from boardroom.services.voting.summary import render_voting_summary
from boardroom.services.voting.timeline import analyze_voting_timeline

__all__ = [
    "Ballot",
    "InvalidVotingInput",
    "VoteChoice",
    "VotingContext",
    "analyze_voting_timeline",
    "calculate_voting_statistics",
    "determine_completion_status",
    "outcome_status",
    "render_voting_summary",
]
