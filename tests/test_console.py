"""
Tests for the Console Parser and Session

These tests verify:
- parse_request(): Parse raw lines into Command objects
- format_response(): Format Response objects into console output
- ConsoleSession: execute commands against a registry

Run with: python -m pytest tests/test_console.py -v
"""

import pytest

from memevote.console.commands import Command, CommandType, Response, ResponseStatus
from memevote.console.parser import ConsoleParser
from memevote.console.session import ConsoleSession
from memevote.registry.models import Record
from memevote.registry.registry import Registry


class TestParseCreate:
    """Test parsing CREATE commands."""

    def test_parse_create_basic(self, parser: ConsoleParser):
        cmd = parser.parse_request("CREATE https://example.com/cat.jpg Funny Cat")

        assert cmd.type == CommandType.CREATE
        assert cmd.url == "https://example.com/cat.jpg"
        assert cmd.title == "Funny Cat"

    def test_parse_create_keeps_inner_spacing(self, parser: ConsoleParser):
        cmd = parser.parse_request("CREATE u two  spaces\n")
        assert cmd.title == "two  spaces"

    def test_parse_create_keeps_title_as_typed(self, parser: ConsoleParser):
        """Test surrounding spaces stay; only the newline and one separator go."""
        cmd = parser.parse_request("CREATE u  Doge \r\n")

        assert cmd.url == "u"
        assert cmd.title == " Doge "

    def test_parse_create_trailing_separator_only(self, parser: ConsoleParser):
        cmd = parser.parse_request("CREATE u \n")
        assert cmd.type == CommandType.CREATE
        assert cmd.title == ""

    def test_parse_create_without_title(self, parser: ConsoleParser):
        cmd = parser.parse_request("CREATE https://example.com/x.jpg")

        assert cmd.type == CommandType.CREATE
        assert cmd.title == ""
        assert cmd.is_valid

    def test_parse_create_missing_url(self, parser: ConsoleParser):
        assert parser.parse_request("CREATE").type == CommandType.UNKNOWN

    def test_parse_case_insensitive(self, parser: ConsoleParser):
        for variant in ["create", "CREATE", "Create"]:
            cmd = parser.parse_request(f"{variant} u t")
            assert cmd.type == CommandType.CREATE, f"Failed for '{variant}'"


class TestParseRecordCommands:
    """Test parsing commands that take a record id."""

    @pytest.mark.parametrize("name", ["VOTE", "GET"])
    def test_parse_id(self, parser: ConsoleParser, name: str):
        cmd = parser.parse_request(f"{name} 7")
        assert cmd.type == CommandType[name]
        assert cmd.record_id == 7

    @pytest.mark.parametrize("line", ["VOTE", "VOTE x", "GET 1 2", "VOTE 1.5"])
    def test_parse_bad_id(self, parser: ConsoleParser, line: str):
        assert parser.parse_request(line).type == CommandType.UNKNOWN

    def test_parse_voted_default_identity(self, parser: ConsoleParser):
        cmd = parser.parse_request("VOTED 3")
        assert cmd.type == CommandType.VOTED
        assert cmd.record_id == 3
        assert cmd.identity == ""

    def test_parse_voted_with_identity(self, parser: ConsoleParser):
        cmd = parser.parse_request("VOTED 3 bob")
        assert cmd.identity == "bob"


class TestParseListing:
    """Test parsing LIST and TOP."""

    def test_parse_list_defaults(self, parser: ConsoleParser):
        cmd = parser.parse_request("LIST")
        assert cmd.type == CommandType.LIST
        assert cmd.from_id is None
        assert cmd.limit is None

    def test_parse_list_full(self, parser: ConsoleParser):
        cmd = parser.parse_request("LIST 4 2")
        assert (cmd.from_id, cmd.limit) == (4, 2)

    def test_parse_list_negative_from_allowed(self, parser: ConsoleParser):
        assert parser.parse_request("LIST -3 2").from_id == -3

    @pytest.mark.parametrize("line", ["LIST 1 -1", "LIST a", "LIST 1 2 3"])
    def test_parse_list_invalid(self, parser: ConsoleParser, line: str):
        assert parser.parse_request(line).type == CommandType.UNKNOWN

    def test_parse_top(self, parser: ConsoleParser):
        assert parser.parse_request("TOP").limit is None
        assert parser.parse_request("top 5").limit == 5

    @pytest.mark.parametrize("line", ["TOP -1", "TOP x", "TOP 1 2"])
    def test_parse_top_invalid(self, parser: ConsoleParser, line: str):
        assert parser.parse_request(line).type == CommandType.UNKNOWN


class TestParseOther:
    """Test parsing the remaining commands."""

    @pytest.mark.parametrize("name", ["WHOAMI", "COUNT", "STATS", "QUIT"])
    def test_no_arg_commands(self, parser: ConsoleParser, name: str):
        assert parser.parse_request(name).type == CommandType[name]
        assert parser.parse_request(f"{name} extra").type == CommandType.UNKNOWN

    def test_parse_use(self, parser: ConsoleParser):
        cmd = parser.parse_request("USE bob")
        assert cmd.type == CommandType.USE
        assert cmd.identity == "bob"

    @pytest.mark.parametrize("line", ["", "   ", "FOO", "USE", "USE a b"])
    def test_unknown(self, parser: ConsoleParser, line: str):
        cmd = parser.parse_request(line)
        assert cmd.type == CommandType.UNKNOWN
        assert not cmd.is_valid


class TestFormatResponse:
    """Test format_response()."""

    def test_format_ok_message(self, parser: ConsoleParser):
        assert parser.format_response(Response.created(4)) == "OK 4\n"

    def test_format_error(self, parser: ConsoleParser):
        assert parser.format_response(Response.error("already voted")) == "ERROR already voted\n"

    def test_format_bare_ok(self, parser: ConsoleParser):
        assert parser.format_response(Response(status=ResponseStatus.OK)) == "OK\n"

    def test_format_listing(self, parser: ConsoleParser):
        records = [
            Record(2, "bob", "Pepe", "https://x.io/p.png", 3),
            Record(1, "alice", "", "https://x.io/d.png", 0),
        ]
        assert parser.format_response(Response.listing(records)) == (
            "OK 2\n"
            "2 likes=3 by=bob https://x.io/p.png Pepe\n"
            "1 likes=0 by=alice https://x.io/d.png\n"
        )

    def test_flag(self):
        assert Response.flag(True).message == "1"
        assert Response.flag(False).message == "0"


class TestConsoleSession:
    """Test ConsoleSession against a real registry."""

    def test_create_and_get(self, session: ConsoleSession):
        assert session.handle_line("CREATE https://example.com/cat.jpg Funny Cat") == "OK 1\n"
        assert session.handle_line("GET 1") == (
            "OK\n1 likes=0 by=alice https://example.com/cat.jpg Funny Cat\n"
        )

    def test_create_stores_title_as_typed(self, session: ConsoleSession, registry: Registry):
        session.handle_line("CREATE https://example.com/doge.jpg  Doge \n")
        assert registry.get_one(1).title == " Doge "

    def test_get_missing(self, session: ConsoleSession):
        assert session.handle_line("GET 9") == "ERROR record not found\n"

    def test_create_errors(self, session: ConsoleSession):
        long_title = "a" * 101
        assert session.handle_line(f"CREATE u {long_title}") == "ERROR title too long\n"
        assert session.handle_line("COUNT") == "OK 0\n"

    def test_vote_flow(self, session: ConsoleSession):
        session.handle_line("CREATE u Doge")

        assert session.handle_line("VOTED 1") == "OK 0\n"
        assert session.handle_line("VOTE 1") == "OK voted\n"
        assert session.handle_line("VOTE 1") == "ERROR already voted\n"
        assert session.handle_line("VOTED 1") == "OK 1\n"
        assert session.handle_line("VOTED 1 bob") == "OK 0\n"
        assert session.handle_line("VOTE 2") == "ERROR record not found\n"

    def test_use_switches_identity(self, session: ConsoleSession, registry: Registry):
        session.handle_line("CREATE u Doge")
        session.handle_line("VOTE 1")

        assert session.handle_line("USE bob") == "OK using bob\n"
        assert session.handle_line("WHOAMI") == "OK bob\n"
        assert session.handle_line("VOTE 1") == "OK voted\n"
        assert registry.get_one(1).likes == 2
        assert registry.get_one(1).creator == "alice"

    def test_list_and_top(self, session: ConsoleSession):
        for i in range(1, 4):
            session.handle_line(f"CREATE https://example.com/{i}.jpg Meme {i}")
        session.handle_line("VOTE 2")

        assert session.handle_line("LIST 1 2").splitlines() == [
            "OK 2",
            "1 likes=0 by=alice https://example.com/1.jpg Meme 1",
            "2 likes=1 by=alice https://example.com/2.jpg Meme 2",
        ]
        assert session.handle_line("TOP 2").splitlines() == [
            "OK 2",
            "2 likes=1 by=alice https://example.com/2.jpg Meme 2",
            "1 likes=0 by=alice https://example.com/1.jpg Meme 1",
        ]
        assert session.handle_line("LIST 10 5") == "OK 0\n"

    def test_default_page_size(self, registry: Registry):
        session = ConsoleSession(registry, identity="alice", page_size=2)
        for i in range(5):
            session.handle_line(f"CREATE u Meme {i}")

        assert session.handle_line("LIST").startswith("OK 2\n")
        assert session.handle_line("TOP").startswith("OK 2\n")

    def test_stats(self, session: ConsoleSession):
        session.handle_line("CREATE u Doge")
        session.handle_line("VOTE 1")

        assert session.handle_line("STATS") == "OK total_records=1 total_votes=1 next_id=2\n"

    def test_invalid_command(self, session: ConsoleSession):
        assert session.handle_line("DANCE") == "ERROR invalid command\n"

    def test_quit_returns_none(self, session: ConsoleSession):
        assert session.handle_line("QUIT") is None

    def test_run_stops_at_quit(self, session: ConsoleSession):
        output = []
        executed = session.run(
            ["CREATE u Doge\n", "\n", "COUNT\n", "QUIT\n", "CREATE u Never\n"],
            output.append,
        )

        assert output == ["OK 1\n", "OK 1\n"]
        assert executed == 2
        assert session.registry.total_count() == 1

    def test_execute_unknown_type(self, session: ConsoleSession):
        response = session.execute(Command(type=CommandType.UNKNOWN))
        assert response.status == ResponseStatus.ERROR
