"""Registry module for MemeVote."""

from .errors import AlreadyVoted, EmptyUrl, RecordNotFound, RegistryError, TitleTooLong
from .locking import SynchronizedRegistry
from .models import Record, RecordCreated, VoteCast
from .registry import Registry
from .storage import InMemoryStorage, Storage

__all__ = [
    "AlreadyVoted",
    "EmptyUrl",
    "InMemoryStorage",
    "Record",
    "RecordCreated",
    "RecordNotFound",
    "Registry",
    "RegistryError",
    "Storage",
    "SynchronizedRegistry",
    "TitleTooLong",
    "VoteCast",
]
