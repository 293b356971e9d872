"""
Console Session Module

A session binds a registry to a current caller identity and executes
console commands against it, one line at a time.
"""

import logging
from typing import Callable, Iterable, Optional

from ..config.settings import settings
from ..registry.errors import RegistryError
from ..registry.registry import Registry
from .commands import Command, CommandType, Response
from .parser import ConsoleParser

logger = logging.getLogger(__name__)


class ConsoleSession:
    """
    Executes console commands against one registry.

    Usage:
        session = ConsoleSession(Registry(), identity="alice")
        session.handle_line("CREATE https://example.com/cat.jpg Funny Cat")  # 'OK 1\\n'
        session.handle_line("VOTE 1")                                         # 'OK voted\\n'

    Attributes:
        registry: The Registry (or SynchronizedRegistry) commands run against
        identity: Caller identity used by CREATE and VOTE
        page_size: Limit used by LIST and TOP when none is given
        parser: The ConsoleParser for parsing lines
    """

    def __init__(
            self,
            registry: Registry = None,
            identity: str = None,
            page_size: int = None,
    ):
        self.registry = registry if registry is not None else Registry()
        self.identity = identity if identity is not None else settings.DEFAULT_IDENTITY
        self.page_size = page_size if page_size is not None else settings.DEFAULT_PAGE_SIZE
        self.parser = ConsoleParser()

        self._total_commands = 0

    def handle_line(self, line: str) -> Optional[str]:
        """
        Parse and execute one line.

        Returns:
            Formatted response, or None when the line is QUIT
        """
        command = self.parser.parse_request(line)

        if command.type == CommandType.QUIT:
            return None

        if not command.is_valid:
            response = Response.error("invalid command")
        else:
            self._total_commands += 1
            response = self.execute(command)

        return self.parser.format_response(response)

    def run(self, lines: Iterable[str], write: Callable[[str], None]) -> int:
        """
        Execute lines until QUIT or until the input is exhausted.

        Blank lines are ignored.

        Returns:
            Number of commands executed
        """
        for line in lines:
            if not line.strip():
                continue
            output = self.handle_line(line)
            if output is None:
                logger.debug("Session ended by QUIT")
                break
            write(output)
        return self._total_commands

    def execute(self, command: Command) -> Response:
        """
        Execute a parsed command on the registry.

        Registry rejections become ERROR responses carrying the reason.

        Args:
            command: The Command object to execute

        Returns:
            Response object with the result
        """
        try:
            return self._execute(command)
        except RegistryError as exc:
            logger.debug(f"{command.type.name} rejected: {exc}")
            return Response.error(exc.reason)

    def _execute(self, command: Command) -> Response:
        if command.type == CommandType.USE:
            self.identity = command.identity
            return Response.ok(message=f"using {self.identity}")

        if command.type == CommandType.WHOAMI:
            return Response.ok(message=self.identity)

        if command.type == CommandType.CREATE:
            record_id = self.registry.create(self.identity, command.title, command.url)
            return Response.created(record_id)

        if command.type == CommandType.VOTE:
            self.registry.vote_up(self.identity, command.record_id)
            return Response.voted()

        if command.type == CommandType.VOTED:
            identity = command.identity or self.identity
            return Response.flag(self.registry.has_voted(identity, command.record_id))

        if command.type == CommandType.GET:
            record = self.registry.get_one(command.record_id)
            return Response.ok(records=[record]) if record is not None else Response.record_not_found()

        if command.type == CommandType.LIST:
            from_id = command.from_id if command.from_id is not None else settings.FIRST_ID
            limit = command.limit if command.limit is not None else self.page_size
            return Response.listing(self.registry.list_range(from_id, limit))

        if command.type == CommandType.TOP:
            limit = command.limit if command.limit is not None else self.page_size
            return Response.listing(self.registry.list_top_ranked(limit))

        if command.type == CommandType.COUNT:
            return Response.ok(message=str(self.registry.total_count()))

        if command.type == CommandType.STATS:
            stats = self.registry.get_stats()
            return Response.ok(message=" ".join(f"{k}={v}" for k, v in stats.items()))

        return Response.error("invalid command")
