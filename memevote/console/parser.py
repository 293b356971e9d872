"""
Console Parser Module

This module handles parsing of console command lines and formatting of
responses.
"""

import re
from typing import List, Optional

from ..registry.models import Record
from .commands import Command, CommandType, Response


class ConsoleParser:
    """
    Parser for the MemeVote console.

    Format:
        Request:  <COMMAND> [ARGS...]\n
        Response: <STATUS> [DATA]\n followed by one line per listed record

    Commands:
        USE <identity>          -> OK using <identity>
        WHOAMI                  -> OK <identity>
        CREATE <url> <title...> -> OK <id> | ERROR title too long | ERROR empty url
        VOTE <id>               -> OK voted | ERROR record not found | ERROR already voted
        VOTED <id> [identity]   -> OK 1 | OK 0
        GET <id>                -> OK + record | ERROR record not found
        LIST [from] [limit]     -> OK <n> + records
        TOP [limit]             -> OK <n> + records
        COUNT                   -> OK <n>
        STATS                   -> OK key=value ...
        QUIT                    -> (session closed)

    Identities and urls contain no whitespace. The title is the rest of the
    line after the url, kept as typed (surrounding spaces included), and may
    be empty.
    """

    NO_ARGS = {
        "WHOAMI": CommandType.WHOAMI,
        "COUNT": CommandType.COUNT,
        "STATS": CommandType.STATS,
        "QUIT": CommandType.QUIT,
    }

    # CREATE <url>, then one separator, then the title as typed
    CREATE_PATTERN = re.compile(r"\S+\s+(\S+)(?:\s(.*))?", re.DOTALL)

    def parse_request(self, data: str) -> Command:
        """
        Parse a raw command line into a Command object.

        Args:
            data: Raw command line (may include trailing newline)

        Returns:
            Command object representing the parsed request.
            Returns Command with type=UNKNOWN for invalid/malformed lines.

        Examples:
            >>> parser = ConsoleParser()
            >>> cmd = parser.parse_request("CREATE https://x.io/cat.jpg Funny Cat")
            >>> cmd.type == CommandType.CREATE
            True
            >>> cmd.title
            'Funny Cat'
        """
        raw = data.strip()
        if not raw:
            return Command(type=CommandType.UNKNOWN, raw=raw)

        parts = raw.split()
        command_name = parts[0].upper()

        if command_name in self.NO_ARGS:
            if len(parts) == 1:
                return Command(type=self.NO_ARGS[command_name], raw=raw)
            return Command(type=CommandType.UNKNOWN, raw=raw)
        if command_name == "USE":
            return self._parse_use(parts, raw)
        if command_name == "CREATE":
            return self._parse_create(data, raw)
        if command_name in ("VOTE", "GET"):
            return self._parse_record_ref(CommandType[command_name], parts, raw)
        if command_name == "VOTED":
            return self._parse_voted(parts, raw)
        if command_name == "LIST":
            return self._parse_list(parts, raw)
        if command_name == "TOP":
            return self._parse_top(parts, raw)

        return Command(type=CommandType.UNKNOWN, raw=raw)

    @staticmethod
    def _to_int(text: str) -> Optional[int]:
        try:
            return int(text)
        except ValueError:
            return None

    def _parse_use(self, parts: list, raw: str) -> Command:
        """
        Parse a USE command.

        Format: USE <identity>
        """
        if len(parts) != 2:
            return Command(type=CommandType.UNKNOWN, raw=raw)
        return Command(type=CommandType.USE, identity=parts[1], raw=raw)

    def _parse_create(self, data: str, raw: str) -> Command:
        """
        Parse a CREATE command.

        Format: CREATE <url> <title...>

        The title is kept exactly as typed, leading and trailing spaces
        included. Only the line terminator and the single whitespace
        character separating it from the url are removed.
        """
        match = self.CREATE_PATTERN.fullmatch(data.rstrip("\r\n").lstrip())
        if match is None:
            return Command(type=CommandType.UNKNOWN, raw=raw)

        title = match.group(2) or ""
        return Command(type=CommandType.CREATE, url=match.group(1), title=title, raw=raw)

    def _parse_record_ref(self, command_type: CommandType, parts: list, raw: str) -> Command:
        """
        Parse a VOTE or GET command.

        Format: VOTE <id> / GET <id>
        """
        if len(parts) != 2:
            return Command(type=CommandType.UNKNOWN, raw=raw)

        record_id = self._to_int(parts[1])
        if record_id is None:
            return Command(type=CommandType.UNKNOWN, raw=raw)

        return Command(type=command_type, record_id=record_id, raw=raw)

    def _parse_voted(self, parts: list, raw: str) -> Command:
        """
        Parse a VOTED command.

        Format: VOTED <id> [identity]
        """
        if len(parts) not in (2, 3):
            return Command(type=CommandType.UNKNOWN, raw=raw)

        record_id = self._to_int(parts[1])
        if record_id is None:
            return Command(type=CommandType.UNKNOWN, raw=raw)

        identity = parts[2] if len(parts) == 3 else ""
        return Command(type=CommandType.VOTED, record_id=record_id, identity=identity, raw=raw)

    def _parse_list(self, parts: list, raw: str) -> Command:
        """
        Parse a LIST command.

        Format: LIST [from] [limit]
        """
        if len(parts) > 3:
            return Command(type=CommandType.UNKNOWN, raw=raw)

        numbers = [self._to_int(p) for p in parts[1:]]
        if None in numbers or any(n < 0 for n in numbers[1:]):
            return Command(type=CommandType.UNKNOWN, raw=raw)

        from_id = numbers[0] if len(numbers) >= 1 else None
        limit = numbers[1] if len(numbers) == 2 else None
        return Command(type=CommandType.LIST, from_id=from_id, limit=limit, raw=raw)

    def _parse_top(self, parts: list, raw: str) -> Command:
        """
        Parse a TOP command.

        Format: TOP [limit]
        """
        if len(parts) > 2:
            return Command(type=CommandType.UNKNOWN, raw=raw)

        limit = None
        if len(parts) == 2:
            limit = self._to_int(parts[1])
            if limit is None or limit < 0:
                return Command(type=CommandType.UNKNOWN, raw=raw)

        return Command(type=CommandType.TOP, limit=limit, raw=raw)

    @staticmethod
    def format_record(record: Record) -> str:
        """
        Format one record as a single line.

        Examples:
            >>> ConsoleParser.format_record(Record(2, "bob", "Pepe", "https://x.io/p.png", 3))
            '2 likes=3 by=bob https://x.io/p.png Pepe'
        """
        line = f"{record.id} likes={record.likes} by={record.creator} {record.url}"
        if record.title:
            line += f" {record.title}"
        return line

    def format_response(self, response: Response) -> str:
        """
        Format a Response object into console output.

        Args:
            response: Response object to format

        Returns:
            Status line followed by one line per record, every line
            newline-terminated.

        Examples:
            >>> parser = ConsoleParser()
            >>> parser.format_response(Response.voted())
            'OK voted\\n'
            >>> parser.format_response(Response.record_not_found())
            'ERROR record not found\\n'
        """
        prefix = response.status.value
        lines: List[str] = [f"{prefix} {response.message}" if response.message else prefix]
        lines.extend(self.format_record(record) for record in response.records)
        return "\n".join(lines) + "\n"
