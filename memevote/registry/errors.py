"""
Registry Errors

Every rejection the registry can produce. All of them are detected before
any state is touched, so a rejected call leaves the registry unchanged.
None of them is transient; retrying with the same arguments fails again.
"""

from typing import Hashable


class RegistryError(Exception):
    """Base class for rejected registry calls."""

    reason = "registry error"

    def __init__(self, message: str = None):
        super().__init__(message or self.reason)


class TitleTooLong(RegistryError):
    """Title exceeds the maximum length at creation."""

    reason = "title too long"

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"title has {length} characters, limit is {limit}")


class EmptyUrl(RegistryError):
    """Url is empty at creation."""

    reason = "empty url"


class RecordNotFound(RegistryError):
    """Vote references an unknown record id."""

    reason = "record not found"

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"record {record_id} not found")


class AlreadyVoted(RegistryError):
    """The identity has already up-voted this record."""

    reason = "already voted"

    def __init__(self, identity: Hashable, record_id: int):
        self.identity = identity
        self.record_id = record_id
        super().__init__(f"{identity!r} already voted for record {record_id}")
