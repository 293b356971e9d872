"""Console module for MemeVote."""

from .commands import Command, CommandType, Response, ResponseStatus
from .parser import ConsoleParser
from .session import ConsoleSession

__all__ = [
    "Command",
    "CommandType",
    "ConsoleParser",
    "ConsoleSession",
    "Response",
    "ResponseStatus",
]
