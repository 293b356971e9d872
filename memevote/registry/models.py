"""
Registry Data Model

Records and the two notification shapes the registry emits.
All of them are immutable; a vote replaces the stored record with a copy
carrying the incremented like counter.
"""

from dataclasses import dataclass, replace
from typing import Hashable


@dataclass(frozen=True)
class Record:
    """
    A submitted meme.

    Attributes:
        id: Positive integer id, assigned sequentially and never reused
        creator: Identity of the caller that created the record
        title: Free text, at most MAX_TITLE_LENGTH characters
        url: Non-empty text, not otherwise validated
        likes: Number of distinct identities that up-voted the record
    """
    id: int
    creator: Hashable
    title: str
    url: str
    likes: int = 0

    def with_vote(self) -> "Record":
        """Return a copy of this record with one more like."""
        return replace(self, likes=self.likes + 1)


@dataclass(frozen=True)
class RecordCreated:
    """Emitted after a record has been stored."""
    id: int
    creator: Hashable
    title: str
    url: str


@dataclass(frozen=True)
class VoteCast:
    """Emitted after a vote has been counted."""
    record_id: int
    voter: Hashable
