"""
Console Command and Response Definitions

This module defines the data structures for console commands and responses.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ..registry.models import Record


class CommandType(Enum):
    """Enumeration of supported command types."""
    USE = auto()
    WHOAMI = auto()
    CREATE = auto()
    VOTE = auto()
    VOTED = auto()
    GET = auto()
    LIST = auto()
    TOP = auto()
    COUNT = auto()
    STATS = auto()
    QUIT = auto()
    UNKNOWN = auto()


class ResponseStatus(Enum):
    """Enumeration of response statuses."""
    OK = "OK"
    ERROR = "ERROR"


@dataclass
class Command:
    """
    Represents a parsed console command.

    Attributes:
        type: The type of command
        identity: Identity for USE, or the optional identity of VOTED
        record_id: Target record for VOTE, VOTED and GET
        from_id: First id for LIST (None = first record)
        limit: Page size for LIST and TOP (None = default page size)
        url: Url for CREATE
        title: Title for CREATE (rest of the line, may contain spaces)
        raw: The original raw command string
    """
    type: CommandType
    identity: str = ""
    record_id: Optional[int] = None
    from_id: Optional[int] = None
    limit: Optional[int] = None
    url: str = ""
    title: str = ""
    raw: str = ""

    @property
    def is_valid(self) -> bool:
        """Check if the command carries the arguments its type needs."""
        if self.type == CommandType.UNKNOWN:
            return False
        if self.type == CommandType.USE:
            return bool(self.identity)
        if self.type in (CommandType.VOTE, CommandType.VOTED, CommandType.GET):
            return self.record_id is not None
        if self.type == CommandType.CREATE:
            return bool(self.url)
        return True


@dataclass
class Response:
    """
    Represents a console response.

    Attributes:
        status: OK or ERROR
        message: Response message or error description
        records: Records listed after the status line
    """
    status: ResponseStatus
    message: str = ""
    records: List[Record] = field(default_factory=list)

    @classmethod
    def ok(cls, message: str = "", records: List[Record] = None) -> "Response":
        """Create a successful response."""
        return cls(status=ResponseStatus.OK, message=message, records=list(records or []))

    @classmethod
    def error(cls, message: str) -> "Response":
        """Create an error response."""
        return cls(status=ResponseStatus.ERROR, message=message)

    @classmethod
    def created(cls, record_id: int) -> "Response":
        """Create the response for a successful CREATE."""
        return cls.ok(message=str(record_id))

    @classmethod
    def voted(cls) -> "Response":
        """Create the response for a successful VOTE."""
        return cls.ok(message="voted")

    @classmethod
    def record_not_found(cls) -> "Response":
        """Create a 'record not found' error response."""
        return cls.error(message="record not found")

    @classmethod
    def flag(cls, value: bool) -> "Response":
        """Create a 1/0 response, as used by VOTED."""
        return cls.ok(message="1" if value else "0")

    @classmethod
    def listing(cls, records: List[Record]) -> "Response":
        """Create a LIST/TOP response: the count, then one line per record."""
        return cls.ok(message=str(len(records)), records=records)
