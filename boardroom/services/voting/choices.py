from enum import Enum


class VoteChoice(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    ABSTAIN = "abstain"

    @classmethod
    def parse(cls, value):
        """Return the canonical choice for either storage vocabulary.

        Resolution votes are stored as ``for``/``against``/``abstain`` and
        minutes votes as ``approve``/``reject``/``abstain``. Anything else
        raises ``ValueError``.
        """
        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower() if isinstance(value, str) else None
        choice = _ALIASES.get(key)
        if choice is None:
            raise ValueError(f"Unknown vote choice: {value!r}")
        return choice

    def to_storage(self, vocabulary):
        if vocabulary == "resolution":
            return _RESOLUTION_STORAGE[self]
        if vocabulary == "minutes":
            return self.value
        raise ValueError(f"Unknown vote vocabulary: {vocabulary!r}")


_ALIASES = {
    "approve": VoteChoice.APPROVE,
    "for": VoteChoice.APPROVE,
    "reject": VoteChoice.REJECT,
    "against": VoteChoice.REJECT,
    "abstain": VoteChoice.ABSTAIN,
}

_RESOLUTION_STORAGE = {
    VoteChoice.APPROVE: "for",
    VoteChoice.REJECT: "against",
    VoteChoice.ABSTAIN: "abstain",
}
