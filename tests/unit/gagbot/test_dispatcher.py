"""Tests for prefix matching and command dispatch."""

from unittest.mock import AsyncMock

import pytest

from gagbot.commands import Command, CommandError, CommandTable, ErrorKind
from gagbot.commands.arguments import number, string
from gagbot.core.dispatcher import USAGE_ERROR_MESSAGE, CommandDispatcher, match_prefix, split_command


class TestMatchPrefix:
    def test_no_match(self):
        assert match_prefix("hello", ["gb!"]) is None

    def test_longest_match_wins(self):
        assert match_prefix("gb!!ping", ["gb!", "gb!!"]) == "gb!!"
        assert match_prefix("gb!!ping", ["gb!!", "gb!"]) == "gb!!"

    def test_empty_prefix_ignored(self):
        assert match_prefix("ping", ["", "gb!"]) is None


class TestSplitCommand:
    def test_name_and_tail(self):
        assert split_command("repeat   hello 3") == ("repeat", "hello 3")

    def test_name_only(self):
        assert split_command("ping") == ("ping", "")

    def test_leading_whitespace_gives_empty_name(self):
        assert split_command(" ping") == ("", "ping")


class TestCommandDispatcher:
    @pytest.fixture
    def calls(self):
        return []

    @pytest.fixture
    def commands(self, calls):
        table = CommandTable()

        async def ping(ctx, args):
            calls.append(("ping", dict(args)))
            return True

        async def repeat(ctx, args):
            calls.append(("repeat", dict(args)))
            return True

        async def bang(ctx, args):
            calls.append(("!ping", dict(args)))
            return True

        table.add(Command(name="ping", callback=ping, description="Ping!"))
        table.add(Command(name="repeat", callback=repeat, arguments={"str": string, "num": number}))
        table.add(Command(name="!ping", callback=bang))
        return table

    @pytest.fixture
    def dispatcher(self, commands, mock_permission_manager):
        return CommandDispatcher(commands, mock_permission_manager, ["gb!"])

    @pytest.mark.asyncio
    async def test_dispatches_matching_command(self, dispatcher, mock_context, calls):
        assert await dispatcher.dispatch(mock_context, "gb!repeat hello 3") is None
        assert calls == [("repeat", {"str": "hello", "num": 3})]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["hello there", "gb!", "gb!   ", "gb!unknown", "ping"])
    async def test_silent_skips(self, dispatcher, mock_context, calls, content):
        assert await dispatcher.dispatch(mock_context, content) is None
        assert calls == []

    @pytest.mark.asyncio
    async def test_longest_prefix_selected(self, commands, mock_permission_manager, mock_context, calls):
        dispatcher = CommandDispatcher(commands, mock_permission_manager, ["gb!", "gb!!"])

        await dispatcher.dispatch(mock_context, "gb!!ping")

        assert calls == [("ping", {})]

    @pytest.mark.asyncio
    async def test_shorter_prefix_leaves_rest_in_name(self, dispatcher, mock_context, calls):
        await dispatcher.dispatch(mock_context, "gb!!ping")

        assert calls == [("!ping", {})]

    @pytest.mark.asyncio
    async def test_prefix_override(self, dispatcher, mock_context, calls):
        assert await dispatcher.dispatch(mock_context, "!!ping", prefixes=["!!"]) is None
        assert calls == [("ping", {})]

    @pytest.mark.asyncio
    async def test_leading_whitespace_allowed(self, dispatcher, mock_context, calls):
        await dispatcher.dispatch(mock_context, "gb!   ping")

        assert calls == [("ping", {})]

    @pytest.mark.asyncio
    async def test_leading_whitespace_disallowed(self, commands, mock_permission_manager, mock_context, calls):
        dispatcher = CommandDispatcher(commands, mock_permission_manager, ["gb!"], allow_leading_whitespace=False)

        assert await dispatcher.dispatch(mock_context, "gb! ping") is None
        assert calls == []

    @pytest.mark.asyncio
    async def test_oversized_number_is_argument_error(self, dispatcher, mock_context, calls):
        error = await dispatcher.dispatch(mock_context, "gb!repeat hello " + "9" * 4400)

        assert isinstance(error, CommandError)
        assert error.kind is ErrorKind.ARGUMENT
        assert calls == []

    @pytest.mark.asyncio
    async def test_permission_denied_is_silent(self, dispatcher, mock_context, mock_permission_manager, calls):
        mock_permission_manager.check_user_can_execute.return_value = False

        assert await dispatcher.dispatch(mock_context, "gb!repeat oops") is None
        assert calls == []

    @pytest.mark.asyncio
    async def test_permission_checked_with_guild_and_member(
        self, dispatcher, commands, mock_context, mock_permission_manager, mock_guild, mock_member
    ):
        await dispatcher.dispatch(mock_context, "gb!ping")

        mock_permission_manager.check_user_can_execute.assert_awaited_once_with(
            mock_guild, mock_member, commands.get("ping")
        )

    @pytest.mark.asyncio
    async def test_parse_error(self, dispatcher, mock_context, calls):
        error = await dispatcher.dispatch(mock_context, "gb!repeat hello")

        assert error == CommandError(
            kind=ErrorKind.ARGUMENT,
            command_name="repeat",
            message="Expected `num`:`Number`, found 'END'",
            usage="repeat str:String num:Number",
        )
        assert calls == []

    @pytest.mark.asyncio
    async def test_too_many_arguments(self, dispatcher, mock_context):
        error = await dispatcher.dispatch(mock_context, "gb!repeat hello 3 4")

        assert error.kind is ErrorKind.TOO_MANY_ARGUMENTS
        assert error.message == "Too many arguments, found '4'"

    @pytest.mark.asyncio
    async def test_falsy_result_is_usage_error(self, commands, mock_permission_manager, mock_context):
        commands.add(Command(name="fail", callback=AsyncMock(return_value=False), description="Always fails"))
        dispatcher = CommandDispatcher(commands, mock_permission_manager, ["gb!"])

        error = await dispatcher.dispatch(mock_context, "gb!fail")

        assert error.kind is ErrorKind.USAGE
        assert error.message == USAGE_ERROR_MESSAGE
        assert error.usage == "fail"
        assert error.description == "Always fails"

    @pytest.mark.asyncio
    async def test_none_result_is_usage_error(self, commands, mock_permission_manager, mock_context):
        commands.add(Command(name="quiet", callback=AsyncMock(return_value=None)))
        dispatcher = CommandDispatcher(commands, mock_permission_manager, ["gb!"])

        error = await dispatcher.dispatch(mock_context, "gb!quiet")

        assert error.kind is ErrorKind.USAGE

    @pytest.mark.asyncio
    async def test_exception_is_execution_error(self, commands, mock_permission_manager, mock_context):
        commands.add(Command(name="boom", callback=AsyncMock(side_effect=RuntimeError("kaboom"))))
        dispatcher = CommandDispatcher(commands, mock_permission_manager, ["gb!"])

        error = await dispatcher.dispatch(mock_context, "gb!boom")

        assert error.kind is ErrorKind.EXECUTION
        assert error.message == "Command failed: kaboom"

    @pytest.mark.asyncio
    async def test_command_error_result_passed_through(self, commands, mock_permission_manager, mock_context):
        custom = CommandError(ErrorKind.EXECUTION, "custom", "Not here", "custom")
        commands.add(Command(name="custom", callback=AsyncMock(return_value=custom)))
        dispatcher = CommandDispatcher(commands, mock_permission_manager, ["gb!"])

        assert await dispatcher.dispatch(mock_context, "gb!custom") is custom
