"""
Meme Registry Module

This module implements the registry that owns every record, the vote
ledger and the id counter.

Operations:
- create: store a new record for a caller
- vote_up: count one up-vote per (identity, record) pair
- get_one / list_range / list_top_ranked: read records
- has_voted / total_count: query the ledger and the counter

The registry assumes a single writer: each call runs to completion before
the next one starts. Threaded hosts wrap it in SynchronizedRegistry.
"""

import logging
from typing import Any, Dict, Hashable, List, Optional

from ..config.settings import settings
from ..events.sinks import EventSink, NullSink
from .errors import AlreadyVoted, EmptyUrl, RecordNotFound, TitleTooLong
from .models import Record, RecordCreated, VoteCast
from .storage import InMemoryStorage, Storage

logger = logging.getLogger(__name__)

# Record store key holding the next id to assign
NEXT_ID_KEY = "next_id"


class Registry:
    """
    Persistent meme registry with per-identity vote deduplication.

    Internal Storage:
        records: record id -> Record, and NEXT_ID_KEY -> next id to assign
        votes:   (identity, record id) -> True

    The id counter lives in the record store, so a registry rebuilt on the
    same storages continues numbering where the previous one stopped.
    Both mutations restore what they already wrote when a later write fails.

    Invariants:
        - next_id only grows, by exactly one per successful create
        - every stored record id lies in [FIRST_ID, next_id)
        - a record's likes equals the number of ledger entries for its id
        - records never change except for likes

    Attributes:
        max_title_length: Longest accepted title, in characters
    """

    def __init__(
            self,
            storage: Storage = None,
            ledger: Storage = None,
            sink: EventSink = None,
            max_title_length: int = None,
    ):
        """
        Initialize an empty registry.

        Args:
            storage: Record store (creates an InMemoryStorage if not provided)
            ledger: Vote ledger store (creates an InMemoryStorage if not provided)
            sink: Callable receiving RecordCreated / VoteCast events
            max_title_length: Title limit (default from settings.MAX_TITLE_LENGTH)
        """
        self.records = storage if storage is not None else InMemoryStorage()
        self.votes = ledger if ledger is not None else InMemoryStorage()
        self.sink = sink if sink is not None else NullSink()
        self.max_title_length = (
            max_title_length if max_title_length is not None else settings.MAX_TITLE_LENGTH
        )

        self._first_id = settings.FIRST_ID
        stored_next_id = self.records.get(NEXT_ID_KEY)
        self._next_id = stored_next_id if stored_next_id is not None else self._first_id

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, caller: Hashable, title: str, url: str) -> int:
        """
        Store a new record created by caller.

        Args:
            caller: Identity of the creator
            title: Record title (at most max_title_length characters)
            url: Record url (must not be empty)

        Returns:
            The id assigned to the new record

        Raises:
            TitleTooLong: title is longer than max_title_length
            EmptyUrl: url is empty

        The title is checked before the url. Nothing is stored and no id is
        consumed when either check fails.
        """
        if len(title) > self.max_title_length:
            logger.debug(f"Rejected create by {caller!r}: title length {len(title)}")
            raise TitleTooLong(len(title), self.max_title_length)

        if not url:
            logger.debug(f"Rejected create by {caller!r}: empty url")
            raise EmptyUrl()

        record_id = self._next_id
        self.records.put(NEXT_ID_KEY, record_id + 1)
        try:
            self.records.put(record_id, Record(id=record_id, creator=caller, title=title, url=url))
        except Exception:
            self.records.put(NEXT_ID_KEY, record_id)
            raise
        self._next_id = record_id + 1

        logger.debug(f"Record {record_id} created by {caller!r}")
        self._emit(RecordCreated(id=record_id, creator=caller, title=title, url=url))
        return record_id

    def vote_up(self, caller: Hashable, record_id: int) -> None:
        """
        Count one up-vote from caller on a record.

        Args:
            caller: Identity of the voter
            record_id: Id of the record being voted on

        Raises:
            RecordNotFound: no record has this id
            AlreadyVoted: caller already voted on this record
        """
        record = self.records.get(record_id)
        if record is None:
            logger.debug(f"Rejected vote by {caller!r}: record {record_id} not found")
            raise RecordNotFound(record_id)

        vote_key = (caller, record_id)
        if self.votes.exists(vote_key):
            logger.debug(f"Rejected vote by {caller!r}: already voted for {record_id}")
            raise AlreadyVoted(caller, record_id)

        self.records.put(record_id, record.with_vote())
        try:
            self.votes.put(vote_key, True)
        except Exception:
            self.records.put(record_id, record)
            raise

        logger.debug(f"Vote by {caller!r} counted for record {record_id}")
        self._emit(VoteCast(record_id=record_id, voter=caller))

    def _emit(self, event: Any) -> None:
        """Deliver an event; sink failures never reach the caller."""
        try:
            self.sink(event)
        except Exception as exc:
            logger.exception(f"Failed to deliver {type(event).__name__}: {exc}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_one(self, record_id: int) -> Optional[Record]:
        """Return the record with this id, or None if it was never created."""
        return self.records.get(record_id)

    def list_range(self, from_id: int, limit: int) -> List[Record]:
        """
        List up to limit records in increasing id order, starting at from_id.

        Ids without a record are skipped. Ids below the first id never hold
        a record, so scanning starts at the first id at the earliest.

        Args:
            from_id: First id to consider
            limit: Maximum number of records returned (<= 0 gives [])

        Returns:
            Records ordered by ascending id
        """
        result: List[Record] = []
        if limit <= 0:
            return result

        for record_id in range(max(from_id, self._first_id), self._next_id):
            record = self.records.get(record_id)
            if record is None:
                continue
            result.append(record)
            if len(result) >= limit:
                break

        return result

    def list_top_ranked(self, limit: int) -> List[Record]:
        """
        List the most liked records.

        Every record is collected and sorted by likes descending, then by
        id ascending, so ties always resolve the same way. This rescans the
        whole registry on each call.

        Args:
            limit: Maximum number of records returned (<= 0 gives [])

        Returns:
            At most limit records, most liked first
        """
        if limit <= 0:
            return []

        records = self.list_range(self._first_id, self.total_count())
        records.sort(key=lambda r: (-r.likes, r.id))
        return records[:limit]

    def has_voted(self, identity: Hashable, record_id: int) -> bool:
        """Check whether identity has up-voted record_id."""
        return self.votes.exists((identity, record_id))

    def total_count(self) -> int:
        """Number of records ever created."""
        return self._next_id - self._first_id

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the registry.

        Returns:
            Dictionary containing:
            - total_records: Records created so far
            - total_votes: Entries in the vote ledger
            - next_id: Id the next successful create will receive
        """
        return {
            "total_records": self.total_count(),
            "total_votes": self.votes.size(),
            "next_id": self._next_id,
        }
