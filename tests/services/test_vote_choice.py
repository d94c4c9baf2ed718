import pytest

from boardroom.services.voting import VoteChoice


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("approve", VoteChoice.APPROVE),
        ("for", VoteChoice.APPROVE),
        ("Reject", VoteChoice.REJECT),
        (" against ", VoteChoice.REJECT),
        ("abstain", VoteChoice.ABSTAIN),
        (VoteChoice.ABSTAIN, VoteChoice.ABSTAIN),
    ],
)
def test_parse_accepts_both_vocabularies(raw, expected):
    assert VoteChoice.parse(raw) is expected


@pytest.mark.parametrize("raw", ["", None, "yes", "maybe", 1])
def test_parse_rejects_unknown_values(raw):
    with pytest.raises(ValueError):
        VoteChoice.parse(raw)


def test_storage_vocabularies():
    assert VoteChoice.APPROVE.to_storage("resolution") == "for"
    assert VoteChoice.REJECT.to_storage("resolution") == "against"
    assert VoteChoice.ABSTAIN.to_storage("resolution") == "abstain"
    assert VoteChoice.REJECT.to_storage("minutes") == "reject"

    with pytest.raises(ValueError):
        VoteChoice.APPROVE.to_storage("documents")
